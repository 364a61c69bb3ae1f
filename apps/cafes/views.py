from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .models import Cafe
from .permissions import IsPlatformStaffOrReadOnly
from .serializers import CafeSerializer


class CafeViewSet(viewsets.ModelViewSet):
    """
    ViewSet for cafés.

    Platform staff see and manage every café, other users only see
    the café their profile belongs to.
    """

    serializer_class = CafeSerializer
    permission_classes = [IsAuthenticated, IsPlatformStaffOrReadOnly]

    def get_queryset(self):
        user = self.request.user
        if user.is_staff:
            return Cafe.objects.all()
        return Cafe.objects.filter(id=user.cafe_id)
