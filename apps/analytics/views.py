from django.conf import settings
from django.http import HttpResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsCafeMember
from .analytics import SalesQueries
from .exports import write_sales_report_csv, render_sales_report_pdf
from .serializers import (
    # Input serializers
    PeriodQuerySerializer,
    AnalyticsQuerySerializer,
    DrilldownQuerySerializer,
    # Response serializers
    SalesReportSerializer,
    DashboardResponseSerializer,
    DrilldownResponseSerializer,
)

PERIOD_PARAMETERS = [
    OpenApiParameter('period', OpenApiTypes.STR, description='today, week, month, year, range, 7days, 30days, quarter, ytd'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Range start (period=range)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='Range end (period=range)'),
    OpenApiParameter('anchor', OpenApiTypes.DATE, description='Day treated as today'),
]


def _sales_report(request):
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    report = SalesQueries.sales_report(
        cafe_id=request.user.cafe_id,
        start_date=params['start_date'],
        end_date=params['end_date'],
    )
    report['period'] = params['period']
    return report


def _export_filename(report, extension):
    suffix = report['period']
    if report['start_date'] and report['end_date']:
        suffix = f"{report['start_date'].isoformat()}_{report['end_date'].isoformat()}"
    return f"sales_report_{suffix}.{extension}"


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: SalesReportSerializer},
    description='Item-wise sales, revenue, expenses and profit of the café for a period (default today).',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsCafeMember])
def sales_report(request):
    """Sales report - thin HTTP handler."""
    return Response(SalesReportSerializer(_sales_report(request)).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={(200, 'text/csv'): OpenApiTypes.BINARY},
    description='Sales report as CSV: items, expenditures, totals.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsCafeMember])
def sales_report_csv(request):
    report = _sales_report(request)

    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{_export_filename(report, "csv")}"'
    write_sales_report_csv(report, response)
    return response


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={(200, 'application/pdf'): OpenApiTypes.BINARY},
    description='Sales report as PDF.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsCafeMember])
def sales_report_pdf(request):
    report = _sales_report(request)

    content = render_sales_report_pdf(
        report,
        cafe_name=request.user.cafe.name,
        currency=settings.CAFE_CURRENCY,
    )
    response = HttpResponse(content, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{_export_filename(report, "pdf")}"'
    return response


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: DashboardResponseSerializer},
    description=(
        'Analytics for a period (default this week): KPIs, daily trend with 7-day '
        'moving average, top 10 items, payment mode split, expenditure breakdown.'
    ),
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsCafeMember])
def dashboard(request):
    """Analytics dashboard - thin HTTP handler."""
    query_serializer = AnalyticsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = SalesQueries.dashboard(
        cafe_id=request.user.cafe_id,
        start_date=params['start_date'],
        end_date=params['end_date'],
    )
    data['period'] = params['period']
    return Response(DashboardResponseSerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS + [
        OpenApiParameter('item', OpenApiTypes.STR, required=True, description='Item name as sold'),
    ],
    responses={200: DrilldownResponseSerializer},
    description='Daily quantity of one item over the days of the trend.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsCafeMember])
def item_drilldown(request):
    query_serializer = DrilldownQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = SalesQueries.item_drilldown(
        cafe_id=request.user.cafe_id,
        item_name=params['item'],
        start_date=params['start_date'],
        end_date=params['end_date'],
    )
    return Response(DrilldownResponseSerializer(data).data)
