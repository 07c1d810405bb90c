# app/celery_worker.py
from celery import Celery

from app.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
    CART_EXPIRY_SWEEP_SECONDS,
)

celery_app = Celery(
    "billboard_cart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "app.tasks.expire",
    "app.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "expire-cart-sessions": {
        "task": "app.tasks.expire.expire_cart_sessions_task",
        "schedule": CART_EXPIRY_SWEEP_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
