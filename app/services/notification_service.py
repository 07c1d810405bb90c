# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_booking_notification(user_id: str, booking_ids: list[int]):
        """
        Wysyła powiadomienie o utworzeniu rezerwacji po checkoucie.
        """
        send_booking_notification_task.delay(user_id, booking_ids)


@celery_app.task(name="app.services.notification_service.send_booking_notification_task")
def send_booking_notification_task(user_id: str, booking_ids: list[int]):
    """
    Celery task - w prawdziwym systemie wysłałby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: bookings {booking_ids} are pending approval")

    return {"user_id": user_id, "booking_ids": booking_ids, "status": "sent"}
