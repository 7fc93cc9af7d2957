import pytest
from django.db import IntegrityError, transaction
from django.urls import reverse
from rest_framework import status

from doctors.models import Doctor, DoctorInstitute, Institute
from doctors.serializers import DoctorSerializer, InstituteSerializer


# ============================================
# INSTITUTE MODEL TESTS
# ============================================

@pytest.mark.django_db
class TestInstituteModel:
    """Test Institute model"""

    def test_create_institute(self, institute):
        """Verify institute can be created with a services list"""
        assert institute.pk is not None
        assert institute.services == ['Ecocardiograma', 'Holter 24h']
        assert str(institute) == 'Instituto de Cardiologia'

    def test_slug_must_be_unique(self, institute):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Institute.objects.create(name='Outro', slug='cardiologia')

    def test_ordering_by_display_order(self):
        Institute.objects.create(name='B', slug='b', display_order=2)
        Institute.objects.create(name='A', slug='a', display_order=1)
        Institute.objects.create(name='C', slug='c', display_order=0)

        assert list(Institute.objects.values_list('slug', flat=True)) == ['c', 'a', 'b']

    def test_services_default_empty(self):
        institute = Institute.objects.create(name='Lab', slug='lab')
        assert institute.services == []


# ============================================
# DOCTOR MODEL TESTS
# ============================================

@pytest.mark.django_db
class TestDoctorModel:
    """Test Doctor model and its institute links"""

    def test_create_doctor(self, doctor, institute):
        assert doctor.pk is not None
        assert str(doctor) == 'Dr. Carlos Mendes'
        assert list(doctor.institutes.all()) == [institute]
        assert list(institute.doctors.all()) == [doctor]

    def test_link_unique(self, doctor, institute):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                DoctorInstitute.objects.create(doctor=doctor, institute=institute)

    def test_deleting_institute_removes_links(self, doctor, institute):
        institute.delete()

        doctor.refresh_from_db()
        assert doctor.institutes.count() == 0
        assert not DoctorInstitute.objects.exists()

    def test_photo_is_optional(self, doctor):
        assert doctor.photo_url == ''


# ============================================
# SERIALIZER TESTS
# ============================================

@pytest.mark.django_db
class TestSerializers:

    def test_doctor_serializer(self, doctor):
        data = DoctorSerializer(doctor).data

        assert data['slug'] == 'dr-carlos-mendes'
        assert data['license'] == 'CRM/SP 123456'
        assert data['institutes'] == [{'id': doctor.institutes.get().id, 'name': 'Instituto de Cardiologia', 'slug': 'cardiologia'}]

    def test_institute_serializer(self, institute):
        data = InstituteSerializer(institute).data

        assert data['services'] == ['Ecocardiograma', 'Holter 24h']
        assert data['icon'] == 'Heart'


# ============================================
# API TESTS
# ============================================

@pytest.mark.django_db
class TestDoctorAPI:
    """Read-only doctor and institute endpoints"""

    def test_list_doctors_is_public(self, api_client, doctor):
        response = api_client.get(reverse('doctor-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [d['slug'] for d in response.data] == ['dr-carlos-mendes']

    def test_filter_by_institute(self, api_client, doctor, second_institute):
        other = Doctor.objects.create(name='Dr. Roberto Silva', slug='dr-roberto-silva', specialty='Ortopedista')
        other.institutes.add(second_institute)

        response = api_client.get(reverse('doctor-list'), {'institute': 'ortopedia'})

        assert [d['slug'] for d in response.data] == ['dr-roberto-silva']

    def test_filter_by_specialty(self, api_client, doctor):
        Doctor.objects.create(name='Dra. Juliana Santos', slug='dra-juliana-santos', specialty='Dermatologista')

        response = api_client.get(reverse('doctor-list'), {'specialty': 'cardio'})

        assert [d['slug'] for d in response.data] == ['dr-carlos-mendes']

    def test_doctor_detail_by_slug(self, api_client, doctor):
        response = api_client.get(reverse('doctor-detail', kwargs={'slug': 'dr-carlos-mendes'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Dr. Carlos Mendes'

    def test_doctor_detail_not_found(self, api_client):
        response = api_client.get(reverse('doctor-detail', kwargs={'slug': 'ninguem'}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['success'] is False

    def test_list_institutes(self, api_client, institute, second_institute):
        response = api_client.get(reverse('institute-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [i['slug'] for i in response.data] == ['cardiologia', 'ortopedia']

    def test_institute_detail_lists_doctors(self, api_client, doctor, institute):
        response = api_client.get(reverse('institute-detail', kwargs={'slug': 'cardiologia'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['doctors'][0]['slug'] == 'dr-carlos-mendes'

    def test_write_not_allowed(self, authenticated_admin):
        response = authenticated_admin.post(reverse('doctor-list'), {'name': 'X'}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
