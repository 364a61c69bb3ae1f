from decimal import Decimal

from django.conf import settings
from django.db.models import Sum
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsCafeOperatorOrReadOnly
from .exports import write_expenditures_csv, render_expenditures_pdf
from .models import Expenditure
from .serializers import (
    ExpenditureSerializer,
    ExpenditureFilterSerializer,
    ExpenditureListResponseSerializer,
)

FILTER_PARAMETERS = [
    OpenApiParameter('period', OpenApiTypes.STR, description='today, week, month, year, range, 7days, 30days, quarter, ytd'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Range start (period=range)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='Range end (period=range)'),
    OpenApiParameter('category', OpenApiTypes.STR, description='Exact category'),
    OpenApiParameter('payment_mode', OpenApiTypes.STR, description='Cash or UPI'),
]


@extend_schema(tags=['expenditures'])
class ExpenditureViewSet(viewsets.ModelViewSet):
    """
    ViewSet for café expenditures.

    list: Expenditures in a period with their total (default today)
    create: Record an expenditure (café admin/staff)
    retrieve: Get an expenditure
    update: Edit an expenditure (café admin/staff)
    destroy: Delete an expenditure (café admin/staff)
    export_csv: Filtered list as CSV
    export_pdf: Filtered list as PDF
    """

    serializer_class = ExpenditureSerializer
    permission_classes = [IsCafeOperatorOrReadOnly]

    def get_queryset(self):
        return (
            Expenditure.objects
            .filter(cafe_id=self.request.user.cafe_id)
            .select_related('created_by')
        )

    def _filtered(self):
        """Queryset narrowed by the query parameters, with the validated params."""
        filter_serializer = ExpenditureFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        queryset = self.get_queryset()
        if params['start_date'] and params['end_date']:
            queryset = queryset.filter(date__gte=params['start_date'], date__lte=params['end_date'])
        if params.get('category'):
            queryset = queryset.filter(category=params['category'])
        if params.get('payment_mode'):
            queryset = queryset.filter(payment_mode=params['payment_mode'])
        return queryset, params

    def perform_create(self, serializer):
        serializer.save(cafe_id=self.request.user.cafe_id, created_by=self.request.user)

    @extend_schema(parameters=FILTER_PARAMETERS, responses={200: ExpenditureListResponseSerializer})
    def list(self, request, *args, **kwargs):
        queryset, params = self._filtered()
        total = queryset.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')

        return Response({
            'start_date': params['start_date'],
            'end_date': params['end_date'],
            'count': queryset.count(),
            'total': f"{total:.2f}",
            'results': self.get_serializer(queryset, many=True).data,
        })

    @extend_schema(parameters=FILTER_PARAMETERS, responses={(200, 'text/csv'): OpenApiTypes.BINARY})
    @action(detail=False, methods=['get'], url_path='export/csv')
    def export_csv(self, request):
        queryset, params = self._filtered()

        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = (
            f'attachment; filename="expenditure_report_{params["period"]}_{timezone.localdate().isoformat()}.csv"'
        )
        write_expenditures_csv(queryset, response)
        return response

    @extend_schema(parameters=FILTER_PARAMETERS, responses={(200, 'application/pdf'): OpenApiTypes.BINARY})
    @action(detail=False, methods=['get'], url_path='export/pdf')
    def export_pdf(self, request):
        queryset, params = self._filtered()
        total = queryset.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')
        today = timezone.localdate()

        content = render_expenditures_pdf(
            queryset,
            total=f"{total:.2f}",
            cafe_name=request.user.cafe.name,
            period=params['period'],
            start_date=params['start_date'],
            end_date=params['end_date'],
            generated_on=today,
            currency=settings.CAFE_CURRENCY,
        )
        response = HttpResponse(content, content_type='application/pdf')
        response['Content-Disposition'] = (
            f'attachment; filename="expenditure_report_{params["period"]}_{today.isoformat()}.pdf"'
        )
        return response
