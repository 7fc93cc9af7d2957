import pytest
from unittest.mock import patch
from django.db import DatabaseError, IntegrityError, transaction
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.models import User, UserRole
from accounts.services import (
    AdminUserError,
    create_admin_user,
    delete_admin_user,
    has_role,
    is_site_admin,
    list_admin_users,
)


# ============================================
# USER MODEL TESTS
# ============================================

@pytest.mark.django_db
class TestUserModel:
    """Test User and UserRole models"""

    def test_create_user_with_email(self):
        """Verify users log in with their email"""
        user = User.objects.create_user(email='Someone@Test.com', password='securepass123')

        assert user.pk is not None
        assert user.email == 'Someone@test.com'
        assert user.check_password('securepass123')
        assert str(user) == 'Someone@test.com'

    def test_create_user_requires_email(self):
        """Verify email is mandatory"""
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='x')

    def test_create_superuser_gets_admin_role(self):
        """Verify createsuperuser users can reach the admin panel"""
        admin = User.objects.create_superuser(email='root@test.com', password='securepass123')

        assert admin.is_superuser
        assert admin.is_staff
        assert UserRole.objects.filter(user=admin, role=UserRole.ADMIN).exists()

    def test_role_unique_per_user(self, admin_user):
        """Verify the same role can't be granted twice"""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                UserRole.objects.create(user=admin_user, role=UserRole.ADMIN)


# ============================================
# ROLE CHECK TESTS
# ============================================

@pytest.mark.django_db
class TestHasRole:
    """Test the admin role check"""

    def test_admin_has_role(self, admin_user):
        assert has_role(admin_user.pk, 'admin') is True

    def test_plain_user_has_no_role(self, plain_user):
        assert has_role(plain_user.pk, 'admin') is False

    def test_missing_user_id(self):
        assert has_role(None, 'admin') is False

    def test_database_error_counts_as_no_role(self, admin_user):
        """Verify the check fails closed when the lookup errors"""
        with patch('accounts.services.UserRole.objects.filter', side_effect=DatabaseError('down')):
            assert has_role(admin_user.pk, 'admin') is False

    def test_is_site_admin_anonymous(self):
        """Verify anonymous users are never admins"""
        from django.contrib.auth.models import AnonymousUser

        assert is_site_admin(AnonymousUser()) is False
        assert is_site_admin(None) is False


# ============================================
# ADMIN USER SERVICE TESTS
# ============================================

@pytest.mark.django_db
class TestAdminUserServices:
    """Test admin user management functions"""

    def test_list_marks_caller(self, admin_user, second_admin_user, plain_user):
        """Verify only admins are listed and the caller is flagged"""
        users = list_admin_users(admin_user)
        emails = {u['email']: u for u in users}

        assert set(emails) == {'admin@test.com', 'admin2@test.com'}
        assert emails['admin@test.com']['is_caller'] is True
        assert emails['admin2@test.com']['is_caller'] is False

    def test_create_admin_user(self):
        """Verify user and admin role are created together"""
        user = create_admin_user('New@Test.com', 'securepass123')

        assert user.email == 'new@test.com'
        assert user.check_password('securepass123')
        assert has_role(user.pk, 'admin')

    def test_create_requires_email_and_password(self):
        with pytest.raises(AdminUserError) as exc:
            create_admin_user('', 'securepass123')
        assert exc.value.status_code == 400

        with pytest.raises(AdminUserError):
            create_admin_user('new@test.com', '')

    def test_create_rejects_invalid_email(self):
        with pytest.raises(AdminUserError) as exc:
            create_admin_user('not-an-email', 'securepass123')
        assert exc.value.message == 'Email inválido'

    def test_create_rejects_duplicate(self, admin_user):
        with pytest.raises(AdminUserError) as exc:
            create_admin_user('admin@test.com', 'securepass123')
        assert exc.value.status_code == 400

    def test_create_rolls_back_user_when_role_fails(self):
        """Verify a failed role insert leaves no orphan user"""
        with patch('accounts.services.UserRole.objects.create', side_effect=IntegrityError('role')):
            with pytest.raises(AdminUserError):
                create_admin_user('orphan@test.com', 'securepass123')

        assert not User.objects.filter(email='orphan@test.com').exists()

    def test_delete_admin_user(self, admin_user, second_admin_user):
        delete_admin_user(admin_user, second_admin_user.pk)

        assert not User.objects.filter(pk=second_admin_user.pk).exists()
        assert not UserRole.objects.filter(user_id=second_admin_user.pk).exists()

    def test_delete_self_rejected(self, admin_user):
        with pytest.raises(AdminUserError) as exc:
            delete_admin_user(admin_user, admin_user.pk)

        assert exc.value.status_code == 400
        assert User.objects.filter(pk=admin_user.pk).exists()

    def test_delete_requires_user_id(self, admin_user):
        with pytest.raises(AdminUserError) as exc:
            delete_admin_user(admin_user, None)
        assert exc.value.status_code == 400

    def test_delete_unknown_user(self, admin_user):
        with pytest.raises(AdminUserError) as exc:
            delete_admin_user(admin_user, 999999)
        assert exc.value.status_code == 404


# ============================================
# ADMIN USERS API TESTS
# ============================================

@pytest.mark.django_db
class TestAdminUsersAPI:
    """Test /api/admin-users/?action=..."""

    def url(self, action):
        return f"{reverse('accounts:admin-users')}?action={action}"

    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get(self.url('list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_non_admin_returns_403(self, authenticated_user):
        response = authenticated_user.get(self.url('list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list(self, authenticated_admin, second_admin_user):
        response = authenticated_admin.get(self.url('list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['users']) == 2
        caller = [u for u in response.data['users'] if u['is_caller']]
        assert caller[0]['email'] == 'admin@test.com'

    def test_create(self, authenticated_admin):
        response = authenticated_admin.post(
            self.url('create'),
            {'email': 'novo@test.com', 'password': 'securepass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == 'novo@test.com'
        assert has_role(response.data['user']['id'], 'admin')

    def test_create_missing_fields(self, authenticated_admin):
        response = authenticated_admin.post(self.url('create'), {'email': 'novo@test.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Email e senha são obrigatórios'

    def test_create_duplicate(self, authenticated_admin):
        response = authenticated_admin.post(
            self.url('create'),
            {'email': 'admin@test.com', 'password': 'securepass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_delete(self, authenticated_admin, second_admin_user):
        response = authenticated_admin.delete(
            self.url('delete'), {'user_id': second_admin_user.pk}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        assert not User.objects.filter(pk=second_admin_user.pk).exists()

    def test_delete_missing_user_id(self, authenticated_admin):
        response = authenticated_admin.delete(self.url('delete'), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_self(self, authenticated_admin, admin_user):
        response = authenticated_admin.delete(self.url('delete'), {'user_id': admin_user.pk}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Você não pode remover seu próprio acesso'

    def test_delete_unknown_user(self, authenticated_admin):
        response = authenticated_admin.delete(self.url('delete'), {'user_id': 999999}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_action(self, authenticated_admin):
        response = authenticated_admin.get(self.url('explode'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Ação não encontrada'

    def test_method_mismatch_is_unknown_action(self, authenticated_admin):
        """Verify list via POST is not accepted"""
        response = authenticated_admin.post(self.url('list'), {}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unexpected_error_returns_500(self, authenticated_admin):
        with patch('accounts.views.list_admin_users', side_effect=RuntimeError('boom')):
            response = authenticated_admin.get(self.url('list'))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'boom'

    def test_bearer_token_access(self, api_client, admin_user):
        """Verify JWT bearer tokens are accepted"""
        token = RefreshToken.for_user(admin_user).access_token
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = api_client.get(self.url('list'))

        assert response.status_code == status.HTTP_200_OK


# ============================================
# TOKEN ENDPOINT TESTS
# ============================================

@pytest.mark.django_db
class TestTokenEndpoint:
    """Test JWT login"""

    def test_obtain_token(self, api_client, admin_user):
        response = api_client.post(
            reverse('accounts:token'),
            {'email': 'admin@test.com', 'password': 'testpass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data
        assert response.data['user']['is_admin'] is True

    def test_obtain_token_plain_user(self, api_client, plain_user):
        response = api_client.post(
            reverse('accounts:token'),
            {'email': 'user@test.com', 'password': 'testpass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['is_admin'] is False

    def test_wrong_password(self, api_client, admin_user):
        response = api_client.post(
            reverse('accounts:token'),
            {'email': 'admin@test.com', 'password': 'wrong'},
            format='json',
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token(self, api_client, admin_user):
        refresh = RefreshToken.for_user(admin_user)

        response = api_client.post(reverse('accounts:token-refresh'), {'refresh': str(refresh)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
