"""Email and password login of café operators."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check email and password and record the login.

    Emails are matched case-insensitively. Unknown email and wrong password
    give the same error so the login form does not reveal which accounts
    exist.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password.
        InactiveAccountError: Account has been deactivated.
    """
    email = (email or '').strip()
    user = User.objects.select_related('cafe').filter(email__iexact=email).first()

    if user is None or not user.check_password(password):
        logger.info("Login failed for %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, user)
    logger.info(
        "%s logged in (%s, café %s)",
        user.email, user.role, user.cafe.name if user.cafe_id else '-',
    )
    return user
