from django.contrib import admin
from .models import PosTabState


@admin.register(PosTabState)
class PosTabStateAdmin(admin.ModelAdmin):
    list_display = ['user', 'cafe', 'updated_at']
    list_filter = ['cafe']
    readonly_fields = ['data', 'updated_at']
