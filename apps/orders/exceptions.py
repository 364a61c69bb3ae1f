"""
Domain exceptions for orders app.

OrderSubmissionError carries a user-facing reason which the POS shows
verbatim when a submission is rejected.
"""


class OrdersServiceError(Exception):
    """Base exception for order service errors."""
    pass


class OrderSubmissionError(OrdersServiceError):
    """Raised when an order cannot be persisted."""

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason
