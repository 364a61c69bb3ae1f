import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, CafeRole


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, staff_user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'email': staff_user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['email'] == staff_user.email
        assert response.data['user']['role'] == CafeRole.STAFF
        assert response.data['user']['cafe_name'] == 'Brew Corner'

    def test_login_email_is_case_insensitive(self, api_client, staff_user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': staff_user.email.upper(),
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, staff_user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'email': staff_user.email,
            'password': 'WrongPassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_login_nonexistent_user(self, api_client):
        """Login fails for non-existent user."""
        url = reverse('users:login')
        data = {
            'email': 'nonexistent@example.com',
            'password': 'SomePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, staff_user):
        """Login fails for a deactivated account."""
        staff_user.is_active = False
        staff_user.save()

        url = reverse('users:login')
        response = api_client.post(url, {
            'email': staff_user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_missing_password(self, api_client, staff_user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': staff_user.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_login_updates_last_login(self, api_client, staff_user):
        """Login updates last_login timestamp."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': staff_user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        staff_user.refresh_from_db()
        assert staff_user.last_login is not None


# =============================================================================
# Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout_success(self, staff_client):
        url = reverse('users:logout')
        response = staff_client.post(url, {})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logout successful'

    def test_logout_invalid_refresh_token(self, staff_client):
        url = reverse('users:logout')
        response = staff_client.post(url, {'refresh': 'not-a-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_logout_unauthenticated(self, api_client):
        url = reverse('users:logout')
        response = api_client.post(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, admin_client, admin_user):
        url = reverse('users:current-user')
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == admin_user.email
        assert response.data['role'] == CafeRole.ADMIN
        assert response.data['cafe'] == admin_user.cafe_id

    def test_current_user_without_cafe(self, cafeless_client):
        url = reverse('users:current-user')
        response = cafeless_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cafe'] is None
        assert response.data['cafe_name'] is None

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUpdateProfile:
    """Tests for PATCH /api/auth/user/update/"""

    def test_update_display_name(self, staff_client, staff_user):
        url = reverse('users:update-profile')
        response = staff_client.patch(url, {'display_name': 'Sam S.'})

        assert response.status_code == status.HTTP_200_OK
        staff_user.refresh_from_db()
        assert staff_user.display_name == 'Sam S.'

    def test_cannot_promote_self(self, staff_client, staff_user):
        """Role and café are read-only on the profile endpoint."""
        url = reverse('users:update-profile')
        staff_client.patch(url, {'role': CafeRole.ADMIN})

        staff_user.refresh_from_db()
        assert staff_user.role == CafeRole.STAFF


# =============================================================================
# Model Tests
# =============================================================================

class TestUserModel:
    """Tests for User model methods."""

    def test_create_user_defaults_to_staff(self, db):
        user = User.objects.create_user(
            email='model@example.com',
            password='TestPass123!',
        )

        assert user.check_password('TestPass123!')
        assert user.role == CafeRole.STAFF
        assert user.is_staff is False

    def test_create_superuser_is_admin(self, db):
        user = User.objects.create_superuser(
            email='root@example.com',
            password='AdminPass123!',
        )

        assert user.is_staff is True
        assert user.is_superuser is True
        assert user.role == CafeRole.ADMIN

    def test_roles(self, admin_user, staff_user, viewer_user, cafeless_user):
        assert admin_user.is_cafe_admin() and admin_user.can_operate_pos()
        assert not staff_user.is_cafe_admin() and staff_user.can_operate_pos()
        assert not viewer_user.is_cafe_admin() and not viewer_user.can_operate_pos()
        # A role without a café grants nothing
        assert not cafeless_user.can_operate_pos()

    def test_get_display_name(self, staff_user):
        assert staff_user.get_display_name() == 'Sam Staff'

        staff_user.display_name = ''
        assert staff_user.get_display_name() == 'staff'
