"""
Domain exceptions for the POS app.

Exception Hierarchy:
    PosServiceError (base)
    ├── InvalidSplitPaymentError
    ├── ConfirmationRequiredError
    └── UpiPaymentError
    MenuItemUnavailableError (HTTP 400)
"""
from rest_framework.exceptions import APIException


class PosServiceError(Exception):
    """Base exception for POS errors."""
    pass


class InvalidSplitPaymentError(PosServiceError):
    """Cash&UPI amounts missing, not positive, or not adding up to the total."""
    pass


class ConfirmationRequiredError(PosServiceError):
    """
    Deleting a tab that still has items needs an explicit confirmation.

    The message is the prompt to show to the operator.
    """

    def __init__(self, prompt, tab_id):
        super().__init__(prompt)
        self.prompt = prompt
        self.tab_id = tab_id


class UpiPaymentError(PosServiceError):
    """No UPI QR can be produced for the tab."""
    pass


class MenuItemUnavailableError(APIException):
    status_code = 400
    default_detail = 'This menu item is not available.'
    default_code = 'menu_item_unavailable'
