import io

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def clear_content_cache():
    """Site content is cached between requests; start every test cold."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    from accounts.models import User, UserRole

    user = User.objects.create_user(
        email='admin@test.com',
        password='testpass123',
        first_name='Site',
        last_name='Admin',
    )
    UserRole.objects.create(user=user, role=UserRole.ADMIN)
    return user


@pytest.fixture
def second_admin_user(db):
    from accounts.models import User, UserRole

    user = User.objects.create_user(email='admin2@test.com', password='testpass123')
    UserRole.objects.create(user=user, role=UserRole.ADMIN)
    return user


@pytest.fixture
def plain_user(db):
    """Signed-up user without the admin role"""
    from accounts.models import User

    return User.objects.create_user(email='user@test.com', password='testpass123')


@pytest.fixture
def authenticated_admin(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def authenticated_user(api_client, plain_user):
    api_client.force_authenticate(user=plain_user)
    return api_client


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


@pytest.fixture
def institute(db):
    from doctors.models import Institute

    return Institute.objects.create(
        name='Instituto de Cardiologia',
        slug='cardiologia',
        category='Excelência em Cuidado',
        description='Diagnóstico e tratamento de doenças cardiovasculares.',
        icon='Heart',
        services=['Ecocardiograma', 'Holter 24h'],
        display_order=0,
    )


@pytest.fixture
def second_institute(db):
    from doctors.models import Institute

    return Institute.objects.create(
        name='Instituto de Ortopedia',
        slug='ortopedia',
        category='Estrutura Completa',
        icon='Bone',
        services=['Artroscopia'],
        display_order=1,
    )


@pytest.fixture
def doctor(db, institute):
    from doctors.models import Doctor

    doctor = Doctor.objects.create(
        name='Dr. Carlos Mendes',
        slug='dr-carlos-mendes',
        specialty='Cardiologista',
        license='CRM/SP 123456',
        bio='Formado pela USP com residência no InCor.',
        display_order=0,
    )
    doctor.institutes.add(institute)
    return doctor


@pytest.fixture
def testimonial(db):
    from landing.models import Testimonial

    return Testimonial.objects.create(
        quote='Atendimento excelente e muito humanizado.',
        patient_initials='M.S.',
        specialty='Cardiologia',
        rating=5,
        is_published=True,
        display_order=0,
    )


@pytest.fixture
def site_content(db):
    from content.models import SiteContent

    return SiteContent.objects.create(key='hero_title', value='Cuidando de você')


def make_image(size=(320, 180), color=(200, 30, 30), fmt='PNG', mode='RGB'):
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    buffer.seek(0)
    return buffer


@pytest.fixture
def image_file():
    """A small uploaded PNG"""
    return SimpleUploadedFile('photo.png', make_image().getvalue(), content_type='image/png')


@pytest.fixture
def image_factory():
    """Build in-memory images: image_factory(size=(w, h), fmt='PNG') -> BytesIO"""
    return make_image
