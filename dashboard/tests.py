import json

import pytest
from unittest.mock import patch
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from accounts.models import User
from accounts.services import has_role
from config.storage_backends import get_bucket_storage
from content.images import CONVENIOS, SITE_IMAGES
from content.models import SiteContent
from doctors.models import Doctor, Institute
from landing import defaults
from landing.models import Testimonial


def messages_of(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


# ============================================
# AUTH TESTS
# ============================================

@pytest.mark.django_db
class TestDashboardAuth:
    """Only signed-in admins reach the panel"""

    def test_anonymous_redirected_to_login(self, client):
        response = client.get(reverse('dashboard:home'))

        assert response.status_code == 302
        assert response.url == '/admin/login/?next=%2Fadmin%2F'

    def test_non_admin_redirected_with_message(self, client, plain_user):
        client.force_login(plain_user)

        response = client.get(reverse('dashboard:doctor_list'))

        assert response.status_code == 302
        assert response.url == reverse('dashboard:login')
        assert 'Acesso negado. Apenas administradores.' in messages_of(response)

    def test_login_page_loads(self, client):
        response = client.get(reverse('dashboard:login'))

        assert response.status_code == 200

    def test_login_success(self, client, admin_user):
        response = client.post(reverse('dashboard:login'), {
            'email': 'admin@test.com',
            'password': 'testpass123',
        })

        assert response.status_code == 302
        assert response.url == reverse('dashboard:home')

    def test_login_follows_next(self, client, admin_user):
        response = client.post(reverse('dashboard:login'), {
            'email': 'admin@test.com',
            'password': 'testpass123',
            'next': '/admin/faq/',
        })

        assert response.url == '/admin/faq/'

    def test_login_ignores_external_next(self, client, admin_user):
        response = client.post(reverse('dashboard:login'), {
            'email': 'admin@test.com',
            'password': 'testpass123',
            'next': 'https://evil.example.com/',
        })

        assert response.url == reverse('dashboard:home')

    def test_login_invalid_credentials(self, client, admin_user):
        response = client.post(reverse('dashboard:login'), {
            'email': 'admin@test.com',
            'password': 'wrong',
        })

        assert response.status_code == 200
        assert 'Email ou senha inválidos.' in messages_of(response)
        assert '_auth_user_id' not in client.session

    def test_login_non_admin_refused(self, client, plain_user):
        response = client.post(reverse('dashboard:login'), {
            'email': 'user@test.com',
            'password': 'testpass123',
        })

        assert response.status_code == 200
        assert 'Acesso negado. Apenas administradores.' in messages_of(response)
        assert '_auth_user_id' not in client.session

    def test_signed_in_admin_skips_login(self, admin_client):
        response = admin_client.get(reverse('dashboard:login'))

        assert response.url == reverse('dashboard:home')

    def test_logout(self, admin_client):
        response = admin_client.get(reverse('dashboard:logout'))

        assert response.url == reverse('dashboard:login')
        assert '_auth_user_id' not in admin_client.session

    def test_home_counts(self, admin_client, doctor, testimonial, site_content):
        response = admin_client.get(reverse('dashboard:home'))

        assert response.status_code == 200
        assert response.context['doctor_count'] == 1
        assert response.context['institute_count'] == 1
        assert response.context['testimonial_count'] == 1
        assert response.context['content_count'] == 1


# ============================================
# SITE CONTENT TESTS
# ============================================

@pytest.mark.django_db
class TestContentViews:

    def test_list(self, admin_client, site_content):
        response = admin_client.get(reverse('dashboard:content_list'))

        assert response.status_code == 200
        assert list(response.context['entries']) == [site_content]

    def test_create(self, admin_client):
        response = admin_client.post(reverse('dashboard:content_list'), {
            'key': 'cta_title',
            'value': 'Agende já',
        })

        assert response.status_code == 302
        assert SiteContent.objects.get(key='cta_title').value == 'Agende já'

    def test_create_duplicate_key(self, admin_client, site_content):
        response = admin_client.post(reverse('dashboard:content_list'), {
            'key': 'hero_title',
            'value': 'Outro',
        })

        assert response.status_code == 200
        assert SiteContent.objects.get(key='hero_title').value == 'Cuidando de você'

    def test_edit_keeps_key(self, admin_client, site_content):
        """Verify the key of an existing entry can't be renamed"""
        admin_client.post(reverse('dashboard:content_edit', args=[site_content.pk]), {
            'key': 'renamed',
            'value': 'Novo título',
        })

        site_content.refresh_from_db()
        assert site_content.key == 'hero_title'
        assert site_content.value == 'Novo título'

    def test_edit_shows_on_public_page(self, admin_client, client, site_content):
        admin_client.post(reverse('dashboard:content_edit', args=[site_content.pk]), {
            'value': 'Título atualizado',
        })

        response = client.get(reverse('landing:home'))

        assert 'Título atualizado' in response.content.decode()

    def test_delete(self, admin_client, site_content):
        response = admin_client.post(reverse('dashboard:content_delete', args=[site_content.pk]))

        assert response.status_code == 302
        assert not SiteContent.objects.exists()

    def test_delete_requires_post(self, admin_client, site_content):
        response = admin_client.get(reverse('dashboard:content_delete', args=[site_content.pk]))

        assert response.status_code == 405


# ============================================
# DOCTOR TESTS
# ============================================

@pytest.mark.django_db
class TestDoctorViews:

    def doctor_data(self, **overrides):
        data = {
            'name': 'Dra. Nova Silva',
            'slug': '',
            'specialty': 'Pediatra',
            'license': 'CRM/SP 999999',
            'bio': '',
            'display_order': 0,
        }
        data.update(overrides)
        return data

    def test_list(self, admin_client, doctor):
        response = admin_client.get(reverse('dashboard:doctor_list'))

        assert response.status_code == 200
        assert list(response.context['doctors']) == [doctor]

    def test_create_fills_slug_and_institutes(self, admin_client, institute):
        response = admin_client.post(
            reverse('dashboard:doctor_create'),
            self.doctor_data(institutes=[institute.pk]),
        )

        assert response.status_code == 302
        doctor = Doctor.objects.get(slug='dra-nova-silva')
        assert list(doctor.institutes.all()) == [institute]

    def test_create_duplicate_slug(self, admin_client, doctor):
        response = admin_client.post(
            reverse('dashboard:doctor_create'),
            self.doctor_data(name='Dr. Carlos Mendes'),
        )

        assert response.status_code == 200
        assert 'slug' in response.context['form'].errors
        assert Doctor.objects.count() == 1

    def test_edit_replaces_institutes(self, admin_client, doctor, second_institute):
        admin_client.post(
            reverse('dashboard:doctor_edit', args=[doctor.pk]),
            self.doctor_data(name=doctor.name, slug=doctor.slug, institutes=[second_institute.pk]),
        )

        doctor.refresh_from_db()
        assert list(doctor.institutes.all()) == [second_institute]

    def test_edit_keeps_uploaded_photo(self, admin_client, doctor):
        doctor.photo_url = '/media/site-images/photo.jpg'
        doctor.save()

        admin_client.post(
            reverse('dashboard:doctor_edit', args=[doctor.pk]),
            self.doctor_data(name=doctor.name, slug=doctor.slug),
        )

        doctor.refresh_from_db()
        assert doctor.photo_url == '/media/site-images/photo.jpg'

    def test_delete_removes_photo(self, admin_client, doctor):
        doctor.photo_url = '/media/site-images/photo.jpg'
        doctor.save()

        with patch('dashboard.views.delete_image') as mock_delete:
            admin_client.post(reverse('dashboard:doctor_delete', args=[doctor.pk]))

        assert not Doctor.objects.exists()
        mock_delete.assert_called_once_with(SITE_IMAGES, '/media/site-images/photo.jpg')

    def test_move_down(self, admin_client, doctor):
        other = Doctor.objects.create(name='Dra. Ana Lima', slug='dra-ana-lima', display_order=5)

        admin_client.post(reverse('dashboard:doctor_move', args=[doctor.pk]), {'direction': 'down'})

        assert list(Doctor.objects.order_by('display_order').values_list('pk', 'display_order')) == [
            (other.pk, 0), (doctor.pk, 1),
        ]

    def test_move_past_top(self, admin_client, doctor):
        response = admin_client.post(reverse('dashboard:doctor_move', args=[doctor.pk]), {'direction': 'up'})

        assert 'Não é possível mover este item.' in messages_of(response)

    def test_photo_upload(self, admin_client, doctor, image_file):
        response = admin_client.post(reverse('dashboard:doctor_photo', args=[doctor.pk]), {
            'action': 'upload',
            'image': image_file,
            'aspect': '1:1',
            'x': 0,
            'y': 0,
        })

        assert response.url == reverse('dashboard:doctor_edit', args=[doctor.pk])
        doctor.refresh_from_db()
        assert doctor.photo_url.startswith('/media/site-images/')
        assert doctor.photo_url.endswith('.jpg')

    def test_photo_upload_replaces_old(self, admin_client, doctor, image_file):
        doctor.photo_url = '/media/site-images/old.jpg'
        doctor.save()

        with patch('content.images.delete_image') as mock_delete:
            admin_client.post(reverse('dashboard:doctor_photo', args=[doctor.pk]), {
                'image': image_file,
                'aspect': '1:1',
                'x': 0,
                'y': 0,
            })

        mock_delete.assert_called_once_with(SITE_IMAGES, '/media/site-images/old.jpg')

    def test_photo_upload_rejects_non_image(self, admin_client, doctor):
        bogus = SimpleUploadedFile('photo.png', b'not an image', content_type='image/png')

        response = admin_client.post(reverse('dashboard:doctor_photo', args=[doctor.pk]), {
            'image': bogus,
            'aspect': '1:1',
            'x': 0,
            'y': 0,
        })

        doctor.refresh_from_db()
        assert doctor.photo_url == ''
        assert messages_of(response)

    def test_photo_upload_failure_keeps_old_photo(self, admin_client, doctor, image_file):
        doctor.photo_url = '/media/site-images/old.jpg'
        doctor.save()
        storage = get_bucket_storage(SITE_IMAGES)

        with patch.object(storage, 'save', side_effect=OSError('bucket down')), \
                patch('content.images.delete_image') as mock_delete:
            response = admin_client.post(reverse('dashboard:doctor_photo', args=[doctor.pk]), {
                'image': image_file,
                'aspect': '1:1',
                'x': 0,
                'y': 0,
            })

        doctor.refresh_from_db()
        assert doctor.photo_url == '/media/site-images/old.jpg'
        mock_delete.assert_not_called()
        assert 'Erro ao enviar imagem: bucket down' in messages_of(response)

    def test_photo_box_outside_image(self, admin_client, doctor, image_file):
        doctor.photo_url = '/media/site-images/old.jpg'
        doctor.save()

        with patch('content.images.upload_image') as mock_upload:
            response = admin_client.post(reverse('dashboard:doctor_photo', args=[doctor.pk]), {
                'image': image_file,
                'aspect': '1:1',
                'x': 500,
                'y': 500,
                'width': 50,
                'height': 50,
            })

        mock_upload.assert_not_called()
        doctor.refresh_from_db()
        assert doctor.photo_url == '/media/site-images/old.jpg'
        assert 'Área de recorte fora da imagem.' in messages_of(response)

    def test_photo_remove(self, admin_client, doctor):
        doctor.photo_url = '/media/site-images/photo.jpg'
        doctor.save()

        with patch('dashboard.views.delete_image') as mock_delete:
            admin_client.post(reverse('dashboard:doctor_photo', args=[doctor.pk]), {'action': 'remove'})

        doctor.refresh_from_db()
        assert doctor.photo_url == ''
        mock_delete.assert_called_once_with(SITE_IMAGES, '/media/site-images/photo.jpg')


# ============================================
# INSTITUTE TESTS
# ============================================

@pytest.mark.django_db
class TestInstituteViews:

    def test_create_parses_services(self, admin_client):
        admin_client.post(reverse('dashboard:institute_create'), {
            'name': 'Instituto de Pediatria',
            'slug': '',
            'category': 'Cuidado infantil',
            'description': '',
            'icon': 'Baby',
            'display_order': 0,
            'services_text': 'Puericultura, Vacinas , ,Alergia',
        })

        institute = Institute.objects.get(slug='instituto-de-pediatria')
        assert institute.services == ['Puericultura', 'Vacinas', 'Alergia']

    def test_edit_form_shows_services(self, admin_client, institute):
        response = admin_client.get(reverse('dashboard:institute_edit', args=[institute.pk]))

        assert response.context['form'].fields['services_text'].initial == 'Ecocardiograma, Holter 24h'

    def test_move_up(self, admin_client, institute, second_institute):
        admin_client.post(reverse('dashboard:institute_move', args=[second_institute.pk]), {'direction': 'up'})

        assert list(Institute.objects.values_list('slug', flat=True)) == ['ortopedia', 'cardiologia']

    def test_image_upload(self, admin_client, institute, image_file):
        admin_client.post(reverse('dashboard:institute_image', args=[institute.pk]), {
            'image': image_file,
            'aspect': '16:9',
            'x': 0,
            'y': 0,
        })

        institute.refresh_from_db()
        assert institute.image_url.startswith('/media/site-images/')

    def test_delete(self, admin_client, institute):
        admin_client.post(reverse('dashboard:institute_delete', args=[institute.pk]))

        assert not Institute.objects.exists()


# ============================================
# TESTIMONIAL TESTS
# ============================================

@pytest.mark.django_db
class TestTestimonialViews:

    def test_create(self, admin_client):
        admin_client.post(reverse('dashboard:testimonial_create'), {
            'quote': 'Ótimo atendimento',
            'patient_initials': 'P.R.',
            'specialty': 'Ortopedia',
            'rating': 4,
            'is_published': 'on',
            'display_order': 0,
        })

        assert Testimonial.objects.get().rating == 4

    def test_rating_out_of_range(self, admin_client):
        response = admin_client.post(reverse('dashboard:testimonial_create'), {
            'quote': 'Ótimo atendimento',
            'patient_initials': 'P.R.',
            'rating': 6,
            'display_order': 0,
        })

        assert response.status_code == 200
        assert 'rating' in response.context['form'].errors
        assert not Testimonial.objects.exists()

    def test_toggle(self, admin_client, testimonial):
        response = admin_client.post(reverse('dashboard:testimonial_toggle', args=[testimonial.pk]))

        testimonial.refresh_from_db()
        assert testimonial.is_published is False
        assert 'Depoimento ocultado.' in messages_of(response)

        response = admin_client.post(reverse('dashboard:testimonial_toggle', args=[testimonial.pk]))

        testimonial.refresh_from_db()
        assert testimonial.is_published is True
        assert 'Depoimento publicado.' in messages_of(response)

    def test_hidden_testimonial_leaves_home(self, admin_client, client, testimonial):
        admin_client.post(reverse('dashboard:testimonial_toggle', args=[testimonial.pk]))

        response = client.get(reverse('landing:home'))

        assert testimonial.quote not in response.content.decode()

    def test_move(self, admin_client, testimonial):
        other = Testimonial.objects.create(quote='Segundo', patient_initials='J.P.', display_order=1)

        admin_client.post(reverse('dashboard:testimonial_move', args=[other.pk]), {'direction': 'up'})

        assert list(Testimonial.objects.values_list('patient_initials', flat=True)) == ['J.P.', 'M.S.']

    def test_delete(self, admin_client, testimonial):
        admin_client.post(reverse('dashboard:testimonial_delete', args=[testimonial.pk]))

        assert not Testimonial.objects.exists()


# ============================================
# LIST EDITOR TESTS
# ============================================

@pytest.mark.django_db
class TestListEditor:
    """FAQ, gallery, exams and convenios editors"""

    @pytest.fixture
    def faq_row(self, db):
        return SiteContent.objects.create(
            key='faq_data',
            value=json.dumps([
                {'question': 'Q1', 'answer': 'A1'},
                {'question': 'Q2', 'answer': 'A2'},
            ]),
        )

    def post(self, client, name, /, **data):
        return client.post(reverse(f'dashboard:{name}_editor'), data)

    def draft(self, client, key):
        return client.session.get(f'draft:{key}')

    def stored(self, key):
        return json.loads(SiteContent.objects.get(key=key).value)

    def test_requires_admin(self, client, plain_user):
        client.force_login(plain_user)

        response = client.get(reverse('dashboard:faq_editor'))

        assert response.status_code == 302

    def test_starts_from_defaults(self, admin_client):
        response = admin_client.get(reverse('dashboard:faq_editor'))

        assert response.status_code == 200
        assert [r for _, r, _ in response.context['records']] == defaults.FAQS
        assert response.context['has_draft'] is False

    def test_loads_stored_value(self, admin_client, faq_row):
        response = admin_client.get(reverse('dashboard:faq_editor'))

        assert [r['question'] for _, r, _ in response.context['records']] == ['Q1', 'Q2']

    def test_add_creates_expanded_draft(self, admin_client, faq_row):
        self.post(admin_client, 'faq', action='add')

        response = admin_client.get(reverse('dashboard:faq_editor'))
        assert response.context['has_draft'] is True
        assert len(response.context['records']) == 3
        assert response.context['editor'].expanded_index == 2
        # nothing saved yet
        assert len(self.stored('faq_data')) == 2

    def test_update_then_save(self, admin_client, faq_row):
        self.post(admin_client, 'faq', action='update', index='0', question=' Nova pergunta ', answer='Resposta')
        response = self.post(admin_client, 'faq', action='save')

        assert self.stored('faq_data')[0] == {'question': 'Nova pergunta', 'answer': 'Resposta'}
        assert self.draft(admin_client, 'faq_data') is None
        assert 'Perguntas frequentes salvo com sucesso!' in messages_of(response)

    def test_save_without_changes(self, admin_client, faq_row):
        response = self.post(admin_client, 'faq', action='save')

        assert 'Nenhuma alteração para salvar.' in messages_of(response)

    def test_saved_faq_reaches_home(self, admin_client, client, faq_row):
        self.post(admin_client, 'faq', action='remove', index='1')
        self.post(admin_client, 'faq', action='save')

        response = client.get(reverse('landing:home'))

        assert response.context['faqs'] == [{'question': 'Q1', 'answer': 'A1'}]

    def test_move_keeps_expanded_record(self, admin_client, faq_row):
        self.post(admin_client, 'faq', action='toggle', index='0')
        self.post(admin_client, 'faq', action='move', index='0', to='1')

        response = admin_client.get(reverse('dashboard:faq_editor'))
        assert [r['question'] for _, r, _ in response.context['records']] == ['Q2', 'Q1']
        assert response.context['editor'].expanded_index == 1

    def test_discard_drops_draft(self, admin_client, faq_row):
        self.post(admin_client, 'faq', action='remove', index='0')
        self.post(admin_client, 'faq', action='discard')

        assert self.draft(admin_client, 'faq_data') is None
        response = admin_client.get(reverse('dashboard:faq_editor'))
        assert len(response.context['records']) == 2

    def test_invalid_index(self, admin_client, faq_row):
        response = self.post(admin_client, 'faq', action='remove', index='9')

        assert 'Item inválido.' in messages_of(response)
        assert len(self.stored('faq_data')) == 2

    def test_unknown_action(self, admin_client, faq_row):
        response = self.post(admin_client, 'faq', action='explode')

        assert 'Ação inválida.' in messages_of(response)

    def test_exams_price_formatting(self, admin_client):
        self.post(admin_client, 'exams', action='add')
        self.post(
            admin_client, 'exams', action='update', index='0',
            name='Hemograma', price='4590', category='Sangue', convenio='on',
        )
        self.post(admin_client, 'exams', action='save', exams_title='Nossos exames')

        assert self.stored('exams_data') == [{
            'name': 'Hemograma',
            'price': 'R$ 45,90',
            'description': '',
            'category': 'Sangue',
            'convenio': True,
        }]
        assert SiteContent.objects.get(key='exams_title').value == 'Nossos exames'

    def test_exams_categories_in_context(self, admin_client):
        SiteContent.objects.create(key='exams_data', value=json.dumps([
            {'name': 'A', 'category': 'Sangue'},
            {'name': 'B', 'category': 'Imagem'},
            {'name': 'C', 'category': 'Sangue'},
        ]))

        response = admin_client.get(reverse('dashboard:exams_editor'))

        assert response.context['categories'] == [('Sangue', 2), ('Imagem', 1)]

    def test_gallery_text_saved(self, admin_client):
        self.post(admin_client, 'gallery', action='save', gallery_title='Nosso espaço')

        assert SiteContent.objects.get(key='gallery_title').value == 'Nosso espaço'
        assert len(self.stored('gallery_data')) == len(defaults.GALLERY_SPACES)

    def test_gallery_upload(self, admin_client, image_file):
        self.post(admin_client, 'gallery', action='add')
        self.post(admin_client, 'gallery', action='upload', index='5', image=image_file, aspect='16:9', x=0, y=0)
        self.post(admin_client, 'gallery', action='save')

        assert self.stored('gallery_data')[5]['image_url'].startswith('/media/site-images/')

    def test_convenio_logo_is_png(self, admin_client, image_file):
        self.post(admin_client, 'convenios', action='upload', index='0', image=image_file, aspect='1:1', x=0, y=0)

        logo = self.draft(admin_client, 'convenios_data')['records'][0]['logo_url']
        assert logo.startswith('/media/convenios/')
        assert logo.endswith('.png')

    def test_remove_record_deletes_its_image(self, admin_client):
        SiteContent.objects.create(key='convenios_data', value=json.dumps([
            {'name': 'Vale', 'logo_url': '/media/convenios/vale.png'},
        ]))

        with patch('dashboard.views.delete_image') as mock_delete:
            self.post(admin_client, 'convenios', action='remove', index='0')

        mock_delete.assert_called_once_with(CONVENIOS, '/media/convenios/vale.png')
        assert self.draft(admin_client, 'convenios_data')['records'] == []

    def test_remove_image_clears_url(self, admin_client):
        SiteContent.objects.create(key='gallery_data', value=json.dumps([
            {'label': 'Recepção', 'image_url': '/media/site-images/r.jpg'},
        ]))

        with patch('dashboard.views.delete_image') as mock_delete:
            self.post(admin_client, 'gallery', action='remove_image', index='0')

        mock_delete.assert_called_once_with(SITE_IMAGES, '/media/site-images/r.jpg')
        assert self.draft(admin_client, 'gallery_data')['records'][0]['image_url'] == ''

    def test_convenios_plain_names_survive_save(self, admin_client, client):
        SiteContent.objects.create(key='convenios_data', value='["Bradesco", "Vale"]')

        response = admin_client.get(reverse('dashboard:convenios_editor'))
        assert [r['name'] for _, r, _ in response.context['records']] == ['Bradesco', 'Vale']

        self.post(admin_client, 'convenios', action='save')

        assert [c['name'] for c in self.stored('convenios_data')] == ['Bradesco', 'Vale']
        assert 'Bradesco' in client.get(reverse('landing:home')).content.decode()

    def test_upload_failure_keeps_image(self, admin_client, image_file):
        SiteContent.objects.create(key='gallery_data', value=json.dumps([
            {'label': 'Recepção', 'image_url': '/media/site-images/r.jpg'},
        ]))
        storage = get_bucket_storage(SITE_IMAGES)

        with patch.object(storage, 'save', side_effect=OSError('bucket down')), \
                patch('content.images.delete_image') as mock_delete:
            response = self.post(
                admin_client, 'gallery', action='upload', index='0', image=image_file, aspect='16:9', x=0, y=0,
            )

        mock_delete.assert_not_called()
        assert self.draft(admin_client, 'gallery_data')['records'][0]['image_url'] == '/media/site-images/r.jpg'
        assert 'Erro ao enviar imagem: bucket down' in messages_of(response)

    @pytest.mark.parametrize('index', ['-1', '3'])
    def test_upload_invalid_index_sends_nothing(self, admin_client, image_file, index):
        SiteContent.objects.create(key='gallery_data', value=json.dumps([
            {'label': 'Recepção', 'image_url': '/media/site-images/r.jpg'},
        ]))

        with patch('content.images.upload_image') as mock_upload, \
                patch('content.images.delete_image') as mock_delete:
            response = self.post(
                admin_client, 'gallery', action='upload', index=index, image=image_file, aspect='16:9', x=0, y=0,
            )

        mock_upload.assert_not_called()
        mock_delete.assert_not_called()
        assert 'Item inválido.' in messages_of(response)
        assert self.draft(admin_client, 'gallery_data')['records'][0]['image_url'] == '/media/site-images/r.jpg'

    def test_remove_image_invalid_index(self, admin_client):
        SiteContent.objects.create(key='gallery_data', value=json.dumps([
            {'label': 'Recepção', 'image_url': '/media/site-images/r.jpg'},
        ]))

        with patch('dashboard.views.delete_image') as mock_delete:
            response = self.post(admin_client, 'gallery', action='remove_image', index='-1')

        mock_delete.assert_not_called()
        assert 'Item inválido.' in messages_of(response)


# ============================================
# ADMIN USERS PAGE TESTS
# ============================================

@pytest.mark.django_db
class TestUsersPage:

    def test_list(self, admin_client, second_admin_user, plain_user):
        response = admin_client.get(reverse('dashboard:users'))

        assert {u['email'] for u in response.context['admins']} == {'admin@test.com', 'admin2@test.com'}

    def test_create(self, admin_client):
        response = admin_client.post(reverse('dashboard:users'), {
            'email': 'novo@test.com',
            'password': 'securepass123',
        })

        assert response.status_code == 302
        assert has_role(User.objects.get(email='novo@test.com').pk, 'admin')

    def test_create_duplicate(self, admin_client, second_admin_user):
        response = admin_client.post(reverse('dashboard:users'), {
            'email': 'admin2@test.com',
            'password': 'securepass123',
        })

        assert response.status_code == 200
        assert messages_of(response)

    def test_delete(self, admin_client, second_admin_user):
        admin_client.post(reverse('dashboard:users'), {'action': 'delete', 'user_id': second_admin_user.pk})

        assert not User.objects.filter(pk=second_admin_user.pk).exists()

    def test_delete_self_refused(self, admin_client, admin_user):
        response = admin_client.post(reverse('dashboard:users'), {'action': 'delete', 'user_id': admin_user.pk})

        assert User.objects.filter(pk=admin_user.pk).exists()
        assert 'Você não pode remover seu próprio acesso' in messages_of(response)
