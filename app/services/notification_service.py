# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o zamowieniach.
    Uzywa Celery do asynchronicznego przetwarzania.
    Wywolywany dopiero po commicie - blad kolejki nie cofa zamowienia.
    """

    @staticmethod
    def send_order_placed(user_id: int, order_id: int) -> bool:
        try:
            send_order_placed_notification.delay(user_id, order_id)
            return True
        except Exception as e:
            logger.error(f"Could not enqueue order placed notification for order {order_id}: {e}")
            return False

    @staticmethod
    def send_status_changed(user_id: int, order_id: int, status: str) -> bool:
        try:
            send_order_status_notification.delay(user_id, order_id, status)
            return True
        except Exception as e:
            logger.error(f"Could not enqueue status notification for order {order_id}: {e}")
            return False


@celery_app.task(name="app.services.notification_service.send_order_placed_notification")
def send_order_placed_notification(user_id: int, order_id: int):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} has been placed")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="app.services.notification_service.send_order_status_notification")
def send_order_status_notification(user_id: int, order_id: int, status: str):
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is now {status}")
    return {"user_id": user_id, "order_id": order_id, "order_status": status, "status": "sent"}
