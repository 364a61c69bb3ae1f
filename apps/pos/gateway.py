from apps.orders.services import submit_order


class OrderGateway:
    """Submission gateway bound to one café and the operator at the till."""

    def __init__(self, *, cafe_id, submitted_by=None):
        self.cafe_id = cafe_id
        self.submitted_by = submitted_by

    def submit(self, *, items, payment_mode, total_amount):
        return submit_order(
            cafe_id=self.cafe_id,
            items=items,
            payment_mode=payment_mode,
            total_amount=total_amount,
            submitted_by=self.submitted_by,
        )
