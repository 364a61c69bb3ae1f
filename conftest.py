import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, CafeRole
from apps.cafes.models import Cafe
from apps.menu.models import MenuItem


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def cafe(db):
    return Cafe.objects.create(name='Brew Corner', location='MG Road')


@pytest.fixture
def other_cafe(db):
    return Cafe.objects.create(name='Bean There', location='Park Street')


@pytest.fixture
def admin_user(cafe):
    """Café admin: manages the menu, operates the POS."""
    return User.objects.create_user(
        email='admin@brewcorner.example',
        password='TestPass123!',
        display_name='Asha Admin',
        cafe=cafe,
        role=CafeRole.ADMIN,
    )


@pytest.fixture
def staff_user(cafe):
    """Café staff: operates the POS and records expenditures."""
    return User.objects.create_user(
        email='staff@brewcorner.example',
        password='TestPass123!',
        display_name='Sam Staff',
        cafe=cafe,
        role=CafeRole.STAFF,
    )


@pytest.fixture
def viewer_user(cafe):
    """Café viewer: read-only reports."""
    return User.objects.create_user(
        email='viewer@brewcorner.example',
        password='TestPass123!',
        display_name='Vik Viewer',
        cafe=cafe,
        role=CafeRole.VIEWER,
    )


@pytest.fixture
def other_cafe_user(other_cafe):
    return User.objects.create_user(
        email='staff@beanthere.example',
        password='TestPass123!',
        display_name='Other Staff',
        cafe=other_cafe,
        role=CafeRole.ADMIN,
    )


@pytest.fixture
def cafeless_user(db):
    """User whose profile is not linked to any café."""
    return User.objects.create_user(
        email='nocafe@example.com',
        password='TestPass123!',
        display_name='No Cafe',
    )


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def staff_client(staff_user):
    return _client_for(staff_user)


@pytest.fixture
def viewer_client(viewer_user):
    return _client_for(viewer_user)


@pytest.fixture
def other_cafe_client(other_cafe_user):
    return _client_for(other_cafe_user)


@pytest.fixture
def cafeless_client(cafeless_user):
    return _client_for(cafeless_user)


@pytest.fixture
def cappuccino(cafe):
    return MenuItem.objects.create(
        cafe=cafe,
        name='Cappuccino',
        price=Decimal('50.00'),
        category='Coffee',
    )


@pytest.fixture
def sandwich(cafe):
    return MenuItem.objects.create(
        cafe=cafe,
        name='Sandwich',
        price=Decimal('60.00'),
        category='Food',
    )


@pytest.fixture
def sold_out_item(cafe):
    return MenuItem.objects.create(
        cafe=cafe,
        name='Blueberry Muffin',
        price=Decimal('45.00'),
        category='Food',
        is_available=False,
    )
