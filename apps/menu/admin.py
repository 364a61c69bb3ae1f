from django.contrib import admin
from .models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'cafe', 'category', 'price', 'is_available', 'updated_at']
    list_filter = ['cafe', 'category', 'is_available']
    search_fields = ['name', 'category']
    list_editable = ['price', 'is_available']
