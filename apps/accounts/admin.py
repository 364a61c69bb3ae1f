from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for café users and their profile (café, role)."""

    list_display = ['email', 'display_name', 'cafe', 'role', 'is_active', 'is_staff', 'created_at']
    list_filter = ['role', 'cafe', 'is_active', 'is_staff']
    search_fields = ['email', 'display_name']
    ordering = ['email']
    readonly_fields = ['created_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('display_name', 'cafe', 'role')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Dates', {'fields': ('created_at', 'last_login')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'cafe', 'role', 'password1', 'password2'),
        }),
    )
