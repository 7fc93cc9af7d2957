import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError, transaction

from .models import UserRole

logger = logging.getLogger(__name__)

User = get_user_model()


class AdminUserError(Exception):
    """Admin user management failure that maps to an HTTP status."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def has_role(user_id, role):
    """
    Return True if the user holds the role.

    Any lookup failure counts as "role absent": callers cannot tell a
    database error from a missing role.
    """
    if not user_id:
        return False
    try:
        return UserRole.objects.filter(user_id=user_id, role=role).exists()
    except DatabaseError:
        logger.warning("Role check failed for user %s (role=%s)", user_id, role, exc_info=True)
        return False


def is_site_admin(user):
    return bool(user and user.is_authenticated and has_role(user.pk, UserRole.ADMIN))


def list_admin_users(caller):
    roles = UserRole.objects.filter(role=UserRole.ADMIN).select_related('user')
    return [
        {
            'id': role.user.pk,
            'email': role.user.email,
            'created_at': role.user.created_at,
            'role_created_at': role.created_at,
            'is_caller': role.user.pk == caller.pk,
        }
        for role in roles
    ]


def create_admin_user(email, password):
    """Create a user holding the admin role. Both rows are written or neither."""
    email = (email or '').strip().lower()
    if not email or not password:
        raise AdminUserError('Email e senha são obrigatórios')

    try:
        validate_email(email)
    except ValidationError:
        raise AdminUserError('Email inválido')

    if User.objects.filter(email=email).exists():
        raise AdminUserError('Já existe um usuário com este email')

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password)
            UserRole.objects.create(user=user, role=UserRole.ADMIN)
    except IntegrityError as e:
        raise AdminUserError(str(e))

    logger.info("Admin user created: %s", user.email)
    return user


def delete_admin_user(caller, user_id):
    if not user_id:
        raise AdminUserError('user_id é obrigatório')

    if str(user_id) == str(caller.pk):
        raise AdminUserError('Você não pode remover seu próprio acesso')

    try:
        user = User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        raise AdminUserError('Usuário não encontrado', status_code=404)

    with transaction.atomic():
        UserRole.objects.filter(user=user, role=UserRole.ADMIN).delete()
        user.delete()

    logger.info("Admin user %s removed by %s", user_id, caller.email)
