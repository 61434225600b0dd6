# app/celery_worker.py
from celery import Celery

from app.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "shop",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "app.services.notification_service",
)

celery_app.conf.timezone = "UTC"
# lokalnie/testy: taski wykonywane od razu w procesie, bez brokera
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
