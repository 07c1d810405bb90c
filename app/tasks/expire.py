# app/tasks/expire.py
from datetime import datetime, timezone

from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.repos.cart_repo import CartRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


def expire_cart_sessions(db) -> int:
    """Dezaktywuje wygasle sesje koszyka. Sesji nie usuwamy."""
    repo = CartRepo(db)
    now = datetime.now(timezone.utc)
    expired = repo.deactivate_expired_sessions(now)
    repo.commit()
    logger.info(f"Deactivated {expired} expired cart sessions")
    return expired


@celery_app.task(name="app.tasks.expire.expire_cart_sessions_task")
def expire_cart_sessions_task():
    logger.info("Expire cart sessions task started")

    db = SessionLocal()
    try:
        return expire_cart_sessions(db)
    finally:
        db.close()
