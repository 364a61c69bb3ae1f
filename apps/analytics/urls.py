from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Sales report
    path('sales-report/', views.sales_report, name='sales-report'),
    path('sales-report/csv/', views.sales_report_csv, name='sales-report-csv'),
    path('sales-report/pdf/', views.sales_report_pdf, name='sales-report-pdf'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
    path('items/drilldown/', views.item_drilldown, name='item-drilldown'),
]
