import logging
from decimal import InvalidOperation

from .models import PosTabState
from .registry import TabRegistry

logger = logging.getLogger(__name__)


def load_registry(user, lock=False) -> TabRegistry:
    """
    Open tabs of user at their café; a fresh registry if none are saved.

    With ``lock`` the saved row is locked until the surrounding transaction
    ends, so a second request of the same operator waits for the first and
    then sees its outcome. Must be called inside ``transaction.atomic()``.
    """
    if lock:
        state, _ = PosTabState.objects.select_for_update().get_or_create(
            user=user,
            cafe_id=user.cafe_id,
        )
    else:
        state = PosTabState.objects.filter(user=user, cafe_id=user.cafe_id).first()

    if state is None or not state.data:
        return TabRegistry()

    try:
        return TabRegistry.from_dict(state.data)
    except (KeyError, TypeError, ValueError, InvalidOperation):
        # Unreadable state cannot be repaired, start over with one empty tab
        logger.exception("Discarding unreadable POS tabs of user %s", user.id)
        return TabRegistry()


def save_registry(user, registry) -> None:
    PosTabState.objects.update_or_create(
        user=user,
        cafe_id=user.cafe_id,
        defaults={'data': registry.to_dict()},
    )
