"""
Order services.

    submit_order      - persist a finalized order (POS submission gateway)
    format_log_line   - render an order as one order-log line
"""

from ..exceptions import (
    OrdersServiceError,
    OrderSubmissionError,
)

from .submission import submit_order
from .order_log import format_log_line, write_order_log

__all__ = [
    'OrdersServiceError',
    'OrderSubmissionError',
    'submit_order',
    'format_log_line',
    'write_order_log',
]
