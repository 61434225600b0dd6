from decimal import Decimal

from app.services.notification_service import NotificationService, send_sale_notification_task


def test_task_reports_sent_with_receipt():
    assert send_sale_notification_task(7, 11, "45.50", 2) == {
        "user_id": 7,
        "sale_id": 11,
        "total_price": "45.50",
        "line_count": 2,
        "status": "sent",
    }


def test_service_enqueues_task_eagerly(monkeypatch):
    # CELERY_TASK_ALWAYS_EAGER is on in tests, no broker needed
    calls = []
    monkeypatch.setattr(send_sale_notification_task, "delay", lambda *args: calls.append(args))

    NotificationService.send_sale_notification(7, 11, Decimal("45.50"), 2)

    # Decimal goes over the wire as a string
    assert calls == [(7, 11, "45.50", 2)]


def test_eager_task_runs_without_broker():
    result = send_sale_notification_task.delay(7, 11, "3.00", 1)

    assert result.get()["line_count"] == 1


def test_checkout_uses_default_notifier(db, cart_service, make_user, make_product):
    from app.services.checkout_service import CheckoutService

    user_id = make_user("alice")
    product_id = make_product("1.00")
    cart_id = cart_service.add_to_cart(user_id, product_id, 1)["cart_id"]

    sale = CheckoutService(db).checkout(cart_id, user_id)

    assert sale["cart_id"] == cart_id
