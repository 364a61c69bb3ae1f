from rest_framework import viewsets
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsCafeMember
from .models import Order
from .serializers import OrderSerializer, OrderListSerializer, OrderFilterSerializer


class OrderPagination(PageNumberPagination):
    """Custom pagination for past orders."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


@extend_schema(tags=['orders'])
class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Past orders of the user's café. Orders are created only through the POS.

    list: Orders in a period (?period=today|week|month|year|range...)
    retrieve: One order with its items
    """

    permission_classes = [IsCafeMember]
    pagination_class = OrderPagination

    def get_serializer_class(self):
        if self.action == 'list':
            return OrderListSerializer
        return OrderSerializer

    def get_queryset(self):
        queryset = (
            Order.objects
            .filter(cafe_id=self.request.user.cafe_id)
            .select_related('submitted_by')
            .prefetch_related('items')
        )

        if self.action != 'list':
            return queryset

        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params['start_date'] and params['end_date']:
            queryset = queryset.filter(
                created_at__date__gte=params['start_date'],
                created_at__date__lte=params['end_date'],
            )
        if params.get('payment_mode'):
            queryset = queryset.filter(payment_mode=params['payment_mode'])

        return queryset

    @extend_schema(parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Period preset', default='today'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Range start (period=range)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='Range end (period=range)'),
        OpenApiParameter('payment_mode', OpenApiTypes.STR, description='Cash or UPI'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)
