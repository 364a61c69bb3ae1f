from rest_framework import viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers as drf_serializers

from apps.accounts.permissions import IsCafeAdminOrReadOnly, IsCafeMember
from .models import MenuItem
from .serializers import MenuItemSerializer, MenuFilterSerializer


class MenuItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the café's menu.

    list: Menu items of the user's café (filterable by category, search)
    create: Add an item (café admin)
    retrieve: Get an item
    update: Edit name, price, category, availability (café admin)
    destroy: Remove an item (café admin)
    """

    serializer_class = MenuItemSerializer
    permission_classes = [IsCafeAdminOrReadOnly]

    def get_queryset(self):
        queryset = MenuItem.objects.filter(cafe_id=self.request.user.cafe_id)

        if self.action != 'list':
            return queryset

        filter_serializer = MenuFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('category'):
            queryset = queryset.filter(category=params['category'])
        if params.get('search'):
            queryset = queryset.filter(name__icontains=params['search'])
        if params.get('available') is not None:
            queryset = queryset.filter(is_available=params['available'])

        return queryset

    def perform_create(self, serializer):
        serializer.save(cafe_id=self.request.user.cafe_id)


@extend_schema(
    responses={200: inline_serializer(
        name='MenuCategoriesResponse',
        fields={'categories': drf_serializers.ListField(child=drf_serializers.CharField())},
    )},
    description="List the distinct menu categories of the user's café.",
    tags=['menu'],
)
@api_view(['GET'])
@permission_classes([IsCafeMember])
def categories(request):
    """Distinct, sorted category labels."""
    labels = (
        MenuItem.objects
        .filter(cafe_id=request.user.cafe_id)
        .exclude(category='')
        .values_list('category', flat=True)
        .distinct()
        .order_by('category')
    )
    return Response({'categories': list(labels)})
