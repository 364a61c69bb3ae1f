from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'expenditures'

router = SimpleRouter()
router.register(r'', views.ExpenditureViewSet, basename='expenditure')

urlpatterns = [
    # GET    /api/expenditures/              - List with total (?period=&start_date=&end_date=&category=&payment_mode=)
    # POST   /api/expenditures/              - Record expenditure (café admin/staff)
    # GET    /api/expenditures/export/csv/   - Filtered list as CSV
    # GET    /api/expenditures/export/pdf/   - Filtered list as PDF
    # GET    /api/expenditures/{id}/         - Details
    # PATCH  /api/expenditures/{id}/         - Update
    # DELETE /api/expenditures/{id}/         - Delete
    path('', include(router.urls)),
]
