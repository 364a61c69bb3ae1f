from django.contrib import admin
from .models import Expenditure


@admin.register(Expenditure)
class ExpenditureAdmin(admin.ModelAdmin):
    list_display = ['item', 'cafe', 'category', 'amount', 'payment_mode', 'date', 'created_by']
    list_filter = ['cafe', 'payment_mode', 'category', 'date']
    search_fields = ['item', 'category', 'notes']
    date_hierarchy = 'date'
