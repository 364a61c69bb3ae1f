from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'cafes'

router = SimpleRouter()
router.register(r'', views.CafeViewSet, basename='cafe')

urlpatterns = [
    # GET    /api/cafes/         - List cafés visible to the user
    # POST   /api/cafes/         - Create café (platform staff)
    # GET    /api/cafes/{id}/    - Café details
    path('', include(router.urls)),
]
