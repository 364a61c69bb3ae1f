from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'menu'

router = DefaultRouter()
router.register(r'items', views.MenuItemViewSet, basename='menu-item')

urlpatterns = [
    # GET    /api/menu/items/         - List menu items (?category=&search=&available=)
    # POST   /api/menu/items/         - Create item (café admin)
    # GET    /api/menu/items/{id}/    - Item details
    # PATCH  /api/menu/items/{id}/    - Update item (café admin)
    # DELETE /api/menu/items/{id}/    - Delete item (café admin)
    path('categories/', views.categories, name='categories'),
    path('', include(router.urls)),
]
