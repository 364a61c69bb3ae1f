"""
Role based permission classes shared by the café apps.

Every café-scoped endpoint requires the user to belong to a café.
Write access depends on the profile role:

    admin  - everything, including menu management
    staff  - POS operation and expenditures
    viewer - read only (orders, reports)
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsCafeMember(BasePermission):
    """Permission: user must belong to a café."""

    message = 'Your profile is not linked to a café.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.cafe_id)

    def has_object_permission(self, request, view, obj):
        return getattr(obj, 'cafe_id', None) == request.user.cafe_id


class IsCafeOperator(IsCafeMember):
    """Permission: café admin or staff (POS, expenditures)."""

    message = 'Only café admins and staff can perform this action.'

    def has_permission(self, request, view):
        return super().has_permission(request, view) and request.user.can_operate_pos()


class IsCafeOperatorOrReadOnly(IsCafeMember):
    """Permission: members read, admin/staff write."""

    message = 'Only café admins and staff can modify these records.'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.can_operate_pos()


class IsCafeAdminOrReadOnly(IsCafeMember):
    """Permission: members read, only café admins write (menu)."""

    message = 'Only café admins can modify the menu.'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.is_cafe_admin()
