# app/services/notification_service.py
from decimal import Decimal

from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o sprzedazy.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_sale_notification(user_id: int, sale_id: int, total_price: Decimal, line_count: int):
        """
        Wysyla potwierdzenie zakupu (paragon) po udanym checkout.
        """
        # celery serializuje do JSON - Decimal jako string
        send_sale_notification_task.delay(user_id, sale_id, str(total_price), line_count)


@celery_app.task(name="app.services.notification_service.send_sale_notification_task")
def send_sale_notification_task(user_id: int, sale_id: int, total_price: str, line_count: int):
    """
    Celery task - w prawdziwym systemie wyslalby email z paragonem.
    Teraz tylko loguje.
    """
    logger.info(
        f"[NOTIFICATION] User {user_id}: sale {sale_id} completed, "
        f"{line_count} line(s), total {total_price}"
    )

    return {
        "user_id": user_id,
        "sale_id": sale_id,
        "total_price": total_price,
        "line_count": line_count,
        "status": "sent",
    }
