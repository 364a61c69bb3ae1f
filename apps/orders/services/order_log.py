import logging

from django.utils import timezone

order_log = logging.getLogger('cafe_pos.order_log')


def format_log_line(order, items) -> str:
    """
    One CSV-style line per order:

        12, "19/10/2026, 14:05:11", "Cappuccino x 2 + Sandwich x 1", 160.00, Cash
    """
    timestamp = timezone.localtime(order.created_at).strftime('%d/%m/%Y, %H:%M:%S')
    items_text = ' + '.join(f"{item.item_name} x {item.quantity}" for item in items)
    return f'{order.order_number}, "{timestamp}", "{items_text}", {order.total_amount}, {order.payment_mode}'


def write_order_log(order, items) -> None:
    order_log.info(format_log_line(order, items))
