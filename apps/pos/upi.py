"""
UPI payment QR codes.

A UPI deep link encodes the payee and amount; any UPI app scanning the
QR code opens a pre-filled payment::

    upi://pay?pa=cafe@okbank&pn=Cafe&am=160.00&cu=INR&tn=Order%201

Fields:
    - pa: Payee VPA (virtual payment address)
    - pn: Payee name
    - am: Amount, two decimals
    - cu: Currency (INR)
    - tn: Transaction note (optional)
"""

import base64
from io import BytesIO
from urllib.parse import urlencode, quote

import qrcode
from django.conf import settings

from .exceptions import UpiPaymentError
from .money import to_money
from .payments import TabPaymentMode


class UPIPaymentGenerator:
    """Generate UPI payment links and their QR codes."""

    @staticmethod
    def generate_upi_uri(vpa, amount, payee_name='', note=''):
        params = {'pa': vpa}
        if payee_name:
            params['pn'] = payee_name
        params['am'] = f"{to_money(amount):.2f}"
        params['cu'] = 'INR'
        if note:
            params['tn'] = note
        return 'upi://pay?' + urlencode(params, quote_via=quote, safe='@')

    @staticmethod
    def generate_qr_image(uri):
        """
        QR code for a UPI link as a PIL image.

        Error correction level M, same as printed payment stickers.
        """
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(uri)
        qr.make(fit=True)
        return qr.make_image(fill_color="black", back_color="white")

    @staticmethod
    def generate_png_base64(uri):
        buffer = BytesIO()
        UPIPaymentGenerator.generate_qr_image(uri).save(buffer, format='PNG')
        return base64.b64encode(buffer.getvalue()).decode('ascii')


def upi_amount_due(tab):
    """
    UPI share of the tab: the whole total in UPI mode, the UPI amount
    in Cash&UPI mode.

    Raises:
        UpiPaymentError: Cash tab, empty cart or no positive UPI share.
    """
    if tab.cart.is_empty():
        raise UpiPaymentError(f"{tab.name} has no items")

    if tab.payment_mode == TabPaymentMode.UPI:
        return tab.cart.total()
    if tab.payment_mode == TabPaymentMode.SPLIT:
        if tab.upi_amount is None or tab.upi_amount <= 0:
            raise UpiPaymentError("Enter the UPI amount first")
        return tab.upi_amount
    raise UpiPaymentError(f"{tab.name} is paid in cash")


def payment_qr_for_tab(tab):
    """UPI link and base64 PNG QR for the tab's UPI share."""
    vpa = settings.PAYMENT_UPI_VPA
    if not vpa:
        raise UpiPaymentError("UPI payments are not configured")

    amount = upi_amount_due(tab)
    uri = UPIPaymentGenerator.generate_upi_uri(
        vpa=vpa,
        amount=amount,
        payee_name=settings.PAYMENT_UPI_PAYEE_NAME,
        note=tab.name,
    )
    return {
        'tab_id': tab.id,
        'amount': amount,
        'upi_uri': uri,
        'qr_png_base64': UPIPaymentGenerator.generate_png_base64(uri),
    }
