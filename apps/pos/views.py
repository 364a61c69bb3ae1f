from django.conf import settings
from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsCafeOperator
from apps.menu.models import MenuItem
from .cart import SellableItem
from .exceptions import ConfirmationRequiredError, MenuItemUnavailableError, UpiPaymentError
from .gateway import OrderGateway
from .registry import SubmissionStatus
from .serializers import (
    # Input serializers
    AddToCartSerializer,
    PaymentSelectionSerializer,
    DeleteTabQuerySerializer,
    # Response serializers
    PosStateSerializer,
    PosResponseSerializer,
    SubmissionSerializer,
    UpiQrSerializer,
    ErrorSerializer,
)
from .store import load_registry, save_registry
from .upi import payment_qr_for_tab

SUBMISSION_HTTP_STATUS = {
    SubmissionStatus.SUBMITTED: status.HTTP_201_CREATED,
    SubmissionStatus.INVALID: status.HTTP_400_BAD_REQUEST,
    SubmissionStatus.FAILED: status.HTTP_400_BAD_REQUEST,
    SubmissionStatus.PARTIAL_FAILURE: status.HTTP_409_CONFLICT,
}


def _state_response(request, registry, status_code=status.HTTP_200_OK, **extra):
    """Save the tabs and answer with the new state and pending messages."""
    save_registry(request.user, registry)

    data = dict(PosStateSerializer(registry).data)
    data.update(extra)
    data['messages'] = registry.notifier.drain()
    data['notification_ttl'] = settings.POS_NOTIFICATION_TTL_SECONDS
    return Response(data, status=status_code)


@extend_schema(
    methods=['GET'],
    responses={200: PosResponseSerializer},
    description='Open tabs of the current operator and the active tab id.',
    tags=['pos'],
)
@extend_schema(
    methods=['POST'],
    request=None,
    responses={201: PosResponseSerializer},
    description='Open a new empty tab ("Order N", lowest free N) and make it active.',
    tags=['pos'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsCafeOperator])
def tabs(request):
    registry = load_registry(request.user)

    if request.method == 'POST':
        registry.add_new_order()
        return _state_response(request, registry, status.HTTP_201_CREATED)

    return _state_response(request, registry)


@extend_schema(
    request=None,
    responses={200: PosResponseSerializer},
    description='Make a tab active. Unknown tab ids leave the active tab unchanged.',
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsCafeOperator])
def switch_tab(request, tab_id):
    registry = load_registry(request.user)
    registry.switch_order(tab_id)
    return _state_response(request, registry)


@extend_schema(
    parameters=[
        OpenApiParameter('confirm', OpenApiTypes.BOOL, description='Confirm deleting a tab that has items'),
    ],
    responses={200: PosResponseSerializer, 409: ErrorSerializer},
    description=(
        'Close a tab without charging it. A tab with items needs ?confirm=true; '
        'without it the answer is 409 with the confirmation prompt.'
    ),
    tags=['pos'],
)
@api_view(['DELETE'])
@permission_classes([IsCafeOperator])
def delete_tab(request, tab_id):
    query_serializer = DeleteTabQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    registry = load_registry(request.user)
    try:
        registry.delete_order(tab_id, confirmed=query_serializer.validated_data['confirm'])
    except ConfirmationRequiredError as e:
        return Response(
            {'error': e.prompt, 'confirmation_required': True, 'tab_id': e.tab_id},
            status=status.HTTP_409_CONFLICT
        )

    return _state_response(request, registry)


@extend_schema(
    request=None,
    responses={
        200: PosResponseSerializer,
        201: PosResponseSerializer,
        400: PosResponseSerializer,
        409: PosResponseSerializer,
    },
    description=(
        'Charge a tab and save it as order(s). Cash&UPI tabs become two orders. '
        '201 submitted, 400 invalid split or rejected, 409 only the first of the '
        'two split orders was saved. Empty or unknown tabs are ignored (200).'
    ),
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsCafeOperator])
def submit_tab(request, tab_id):
    gateway = OrderGateway(cafe_id=request.user.cafe_id, submitted_by=request.user)

    # Repeated submits of one tab queue on the lock; only the first one charges it
    with transaction.atomic():
        registry = load_registry(request.user, lock=True)
        result = registry.submit_order(tab_id, gateway)
        save_registry(request.user, registry)

    if result is None:
        return _state_response(request, registry, submission=None)

    submission = SubmissionSerializer(result).data
    return _state_response(
        request,
        registry,
        SUBMISSION_HTTP_STATUS[result.status],
        submission=submission,
    )


@extend_schema(
    request=AddToCartSerializer,
    responses={200: PosResponseSerializer, 400: ErrorSerializer},
    description='Add one unit of a menu item or a custom item to the active tab.',
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsCafeOperator])
def add_to_cart(request):
    serializer = AddToCartSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if data.get('menu_item'):
        menu_item = get_object_or_404(MenuItem, id=data['menu_item'], cafe_id=request.user.cafe_id)
        if not menu_item.is_available:
            raise MenuItemUnavailableError(f"{menu_item.name} is not available")
        item = SellableItem.from_menu_item(menu_item)
    else:
        item = SellableItem.custom(data['name'], data['price'], data.get('category', ''))

    registry = load_registry(request.user)
    registry.add_to_cart(item)
    return _state_response(request, registry)


@extend_schema(
    request=None,
    responses={200: PosResponseSerializer},
    description='Add one unit to a line of the active tab.',
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsCafeOperator])
def increment_line(request, identifier):
    registry = load_registry(request.user)
    registry.increment_line(identifier)
    return _state_response(request, registry)


@extend_schema(
    request=None,
    responses={200: PosResponseSerializer},
    description='Remove one unit from a line of the active tab; the line goes at zero.',
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsCafeOperator])
def decrement_line(request, identifier):
    registry = load_registry(request.user)
    registry.decrement_line(identifier)
    return _state_response(request, registry)


@extend_schema(
    request=PaymentSelectionSerializer,
    responses={200: PosResponseSerializer},
    description='Set payment mode (Cash, UPI, Cash&UPI) and split amounts of the active tab.',
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsCafeOperator])
def set_payment(request):
    serializer = PaymentSelectionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    registry = load_registry(request.user)
    tab = registry.active_tab
    tab.set_payment_mode(data['payment_mode'])
    if 'cash_amount' in data or 'upi_amount' in data:
        tab.set_split_amounts(
            data.get('cash_amount', tab.cash_amount),
            data.get('upi_amount', tab.upi_amount),
        )
    return _state_response(request, registry)


@extend_schema(
    responses={200: UpiQrSerializer, 400: ErrorSerializer},
    description="UPI payment link and QR code (base64 PNG) for the active tab's UPI share.",
    tags=['pos'],
)
@api_view(['GET'])
@permission_classes([IsCafeOperator])
def upi_qr(request):
    registry = load_registry(request.user)
    try:
        payload = payment_qr_for_tab(registry.active_tab)
    except UpiPaymentError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UpiQrSerializer(payload).data)
