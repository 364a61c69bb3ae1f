from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET /api/orders/        - Past orders (?period=&start_date=&end_date=&payment_mode=)
    # GET /api/orders/{id}/   - Order details with items
    path('', include(router.urls)),
]
