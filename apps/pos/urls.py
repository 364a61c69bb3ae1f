from django.urls import path
from . import views

app_name = 'pos'

urlpatterns = [
    # Tabs
    path('tabs/', views.tabs, name='tabs'),
    path('tabs/<int:tab_id>/', views.delete_tab, name='tab-delete'),
    path('tabs/<int:tab_id>/switch/', views.switch_tab, name='tab-switch'),
    path('tabs/<int:tab_id>/submit/', views.submit_tab, name='tab-submit'),

    # Cart of the active tab
    path('cart/items/', views.add_to_cart, name='cart-add'),
    path('cart/items/<str:identifier>/increment/', views.increment_line, name='cart-increment'),
    path('cart/items/<str:identifier>/decrement/', views.decrement_line, name='cart-decrement'),

    # Payment of the active tab
    path('payment/', views.set_payment, name='payment'),
    path('payment/upi-qr/', views.upi_qr, name='upi-qr'),
]
