from sqlalchemy import Column, Integer, ForeignKey, String, Numeric
from sqlalchemy.orm import relationship

from app.data.database import Base


class BillboardModel(Base):
    __tablename__ = "billboards"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    location_address = Column(String, nullable=True)
    # brak ceny = nie da sie dodac do koszyka bez podania ceny recznie
    price_per_day = Column(Numeric(12, 2), nullable=True)

    sides = relationship(
        "BillboardSideModel",
        back_populates="billboard",
        cascade="all, delete-orphan",
    )
    images = relationship(
        "BillboardImageModel",
        back_populates="billboard",
        cascade="all, delete-orphan",
        order_by="BillboardImageModel.position",
    )


class BillboardSideModel(Base):
    __tablename__ = "billboard_sides"

    id = Column(Integer, primary_key=True)
    billboard_id = Column(Integer, ForeignKey("billboards.id", ondelete="CASCADE"), nullable=False, index=True)
    side_identifier = Column(String(10), nullable=False)  # A, B, SINGLE
    side_name = Column(String, nullable=True)

    billboard = relationship("BillboardModel", back_populates="sides")


class BillboardImageModel(Base):
    __tablename__ = "billboard_images"

    id = Column(Integer, primary_key=True)
    billboard_id = Column(Integer, ForeignKey("billboards.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    billboard = relationship("BillboardModel", back_populates="images")
