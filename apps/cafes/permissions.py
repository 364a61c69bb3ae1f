from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsPlatformStaffOrReadOnly(BasePermission):
    """
    Permission: anyone authenticated may read, only platform staff may write.
    """

    message = 'Only platform staff can manage cafés.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_staff)
