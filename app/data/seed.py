# app/data/seed.py
from decimal import Decimal

from app.data.database import Base, SessionLocal, engine
from app.data.models import BillboardModel, BillboardSideModel, BillboardImageModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

BILLBOARDS = [
    {
        "title": "MG Road Unipole",
        "location_address": "MG Road, Bengaluru",
        "price_per_day": Decimal("1000.00"),
        "sides": [],
        "images": ["https://images.pexels.com/photos/2227774/pexels-photo-2227774.jpeg"],
    },
    {
        "title": "Marine Drive Twin Face",
        "location_address": "Marine Drive, Mumbai",
        "price_per_day": Decimal("2500.00"),
        "sides": [("A", "North facing"), ("B", "South facing")],
        "images": [],
    },
]


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(BillboardModel).first():
            logger.info("Billboards already present, skipping seed")
            return
        for data in BILLBOARDS:
            billboard = BillboardModel(
                title=data["title"],
                location_address=data["location_address"],
                price_per_day=data["price_per_day"],
                sides=[BillboardSideModel(side_identifier=s, side_name=n) for s, n in data["sides"]],
                images=[BillboardImageModel(image_url=url, position=i) for i, url in enumerate(data["images"])],
            )
            db.add(billboard)
        db.commit()
        logger.info(f"Seeded {len(BILLBOARDS)} billboards")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
