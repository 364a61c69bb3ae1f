import logging
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError, transaction
from django.db.models import Max
from django.utils import timezone

from apps.cafes.models import Cafe
from apps.menu.models import MenuItem
from ..exceptions import OrderSubmissionError
from ..models import Order, OrderItem, PaymentMode
from .order_log import write_order_log

logger = logging.getLogger(__name__)


def _to_decimal(value, field):
    try:
        return Decimal(str(value)).quantize(Decimal('0.01'))
    except (InvalidOperation, TypeError, ValueError):
        raise OrderSubmissionError(f"Invalid {field}: {value!r}")


def _clean_items(items):
    cleaned = []
    for raw in items:
        name = (raw.get('name') or '').strip()
        if not name:
            raise OrderSubmissionError("Every order item needs a name")

        try:
            quantity = int(raw.get('quantity'))
        except (TypeError, ValueError):
            raise OrderSubmissionError(f"Invalid quantity for {name}")
        if quantity < 1:
            raise OrderSubmissionError(f"Quantity for {name} must be at least 1")

        unit_price = _to_decimal(raw.get('unit_price'), f"price for {name}")
        if unit_price < 0:
            raise OrderSubmissionError(f"Price for {name} cannot be negative")

        cleaned.append({
            'menu_item_id': raw.get('menu_item_id'),
            'name': name,
            'quantity': quantity,
            'unit_price': unit_price,
        })
    return cleaned


def submit_order(*, cafe_id, items, payment_mode, total_amount, submitted_by=None) -> Order:
    """
    Persist a finalized order.

    The order total is taken as given. For a split payment the POS sends
    the primary row with all items but only the primary amount, so the
    total is not recomputed from the items.

    Args:
        cafe_id: Café the order belongs to.
        items (list[dict]): ``{menu_item_id, name, quantity, unit_price}``;
            ``menu_item_id`` is None for custom items.
        payment_mode (str): ``Cash`` or ``UPI``.
        total_amount: Amount charged on this order row.
        submitted_by (User, optional): Operator submitting the order.

    Returns:
        Order: The persisted order with its daily order number.

    Raises:
        OrderSubmissionError: Order rejected; ``reason`` is user-facing.
    """
    items = list(items or [])
    if not items:
        raise OrderSubmissionError("Cannot submit an order without items")

    if payment_mode not in PaymentMode.values:
        raise OrderSubmissionError(f"Unsupported payment mode: {payment_mode}")

    total = _to_decimal(total_amount, 'order total')
    if total <= 0:
        raise OrderSubmissionError("Order total must be greater than zero")

    cleaned = _clean_items(items)

    try:
        with transaction.atomic():
            # Lock the café row so concurrent tills get distinct numbers
            cafe = Cafe.objects.select_for_update().filter(id=cafe_id).first()
            if cafe is None:
                raise OrderSubmissionError("Café not found")

            business_date = timezone.localdate()
            last_number = (
                Order.objects
                .filter(cafe=cafe, business_date=business_date)
                .aggregate(last=Max('order_number'))['last']
            ) or 0

            order = Order.objects.create(
                cafe=cafe,
                order_number=last_number + 1,
                business_date=business_date,
                payment_mode=payment_mode,
                total_amount=total,
                submitted_by=submitted_by,
            )

            menu_ids = {
                str(item['menu_item_id']) for item in cleaned if item['menu_item_id']
            }
            known_ids = {
                str(pk) for pk in MenuItem.objects.filter(
                    cafe=cafe, id__in=menu_ids
                ).values_list('id', flat=True)
            } if menu_ids else set()

            order_items = []
            for item in cleaned:
                menu_item_id = item['menu_item_id']
                if menu_item_id and str(menu_item_id) not in known_ids:
                    # Removed from the menu while sitting in a cart
                    logger.warning(
                        "Menu item %s not found for café %s, storing %s by name",
                        menu_item_id, cafe.id, item['name'],
                    )
                    menu_item_id = None
                order_items.append(OrderItem(
                    order=order,
                    menu_item_id=menu_item_id,
                    item_name=item['name'],
                    quantity=item['quantity'],
                    price=item['unit_price'],
                ))
            OrderItem.objects.bulk_create(order_items)
    except DatabaseError as e:
        logger.exception("Failed to save order for café %s", cafe_id)
        raise OrderSubmissionError(f"Could not save the order: {e}")

    logger.info(
        "Order #%s saved for café %s: %s %s",
        order.order_number, order.cafe_id, order.payment_mode, order.total_amount,
    )
    write_order_log(order, order_items)

    return order
