from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['menu_item', 'item_name', 'quantity', 'price']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'business_date', 'cafe', 'payment_mode', 'total_amount', 'submitted_by', 'created_at']
    list_filter = ['cafe', 'payment_mode', 'business_date']
    search_fields = ['items__item_name']
    date_hierarchy = 'created_at'
    inlines = [OrderItemInline]
