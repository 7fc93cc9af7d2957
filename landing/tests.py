import json

import pytest
from unittest.mock import patch
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status

from content.models import SiteContent
from landing import defaults
from landing.models import Testimonial
from landing.services import list_doctors, list_institutes, published_testimonials


# ============================================
# LANDING PAGE TESTS (Public Pages)
# ============================================

@pytest.mark.django_db
class TestLandingPages:
    """Test all public pages load correctly"""

    @pytest.mark.parametrize('name', [
        'landing:home',
        'landing:institutes',
        'landing:doctors',
        'landing:contact',
    ])
    def test_page_loads(self, client, name):
        response = client.get(reverse(name))

        assert response.status_code == 200

    def test_routes(self):
        """Verify the public URL layout"""
        assert reverse('landing:institutes') == '/institutos/'
        assert reverse('landing:institute_detail', args=['cardiologia']) == '/instituto/cardiologia/'
        assert reverse('landing:doctors') == '/medicos/'
        assert reverse('landing:doctor_detail', args=['dr-x']) == '/medico/dr-x/'
        assert reverse('landing:contact') == '/contato/'

    def test_unknown_institute_404(self, client):
        response = client.get(reverse('landing:institute_detail', args=['nao-existe']))

        assert response.status_code == 404

    def test_unknown_doctor_404(self, client):
        response = client.get(reverse('landing:doctor_detail', args=['nao-existe']))

        assert response.status_code == 404


# ============================================
# BUILT-IN DATA FALLBACK TESTS
# ============================================

@pytest.mark.django_db
class TestFallbackData:
    """Empty tables show the built-in institutes, doctors and testimonials"""

    def test_institutes_fallback(self):
        institutes = list_institutes()

        assert len(institutes) == 5
        assert institutes[0]['slug'] == 'cardiologia'
        assert 'doctors' not in institutes[0]

    def test_doctors_fallback(self):
        doctors = list_doctors()

        assert len(doctors) == 6
        assert doctors[0]['institutes'] == [{'slug': 'cardiologia', 'name': 'Instituto de Cardiologia'}]

    def test_doctors_fallback_filtered(self):
        assert [d['slug'] for d in list_doctors(institute='ortopedia')] == ['dr-roberto-silva', 'dra-marina-costa']

    def test_database_rows_replace_fallback(self, doctor, institute):
        assert [i['slug'] for i in list_institutes()] == ['cardiologia']
        assert [d['slug'] for d in list_doctors()] == ['dr-carlos-mendes']

    def test_database_error_uses_fallback(self):
        with patch('landing.services.Institute.objects.order_by', side_effect=DatabaseError('down')):
            assert len(list_institutes()) == 5

    def test_testimonials_fallback(self):
        assert len(published_testimonials()) == 5

    def test_only_published_testimonials(self, testimonial):
        Testimonial.objects.create(quote='Oculto', patient_initials='X.X.', is_published=False)

        assert [t['quote'] for t in published_testimonials()] == [testimonial.quote]

    def test_mock_doctor_page(self, client):
        response = client.get(reverse('landing:doctor_detail', args=['dra-ana-lima']))

        assert response.status_code == 200
        assert 'CRM/SP 234567' in response.content.decode()

    def test_mock_institute_page(self, client):
        response = client.get(reverse('landing:institute_detail', args=['ortopedia']))
        content = response.content.decode()

        assert response.status_code == 200
        assert 'Dr. Roberto Silva' in content
        assert 'Artroscopia' in content


# ============================================
# HOME PAGE CONTENT TESTS
# ============================================

@pytest.mark.django_db
class TestHomeContent:
    """Home page driven by site content keys"""

    def faqs(self, response):
        return response.context['faqs']

    def test_faq_from_content(self, client):
        SiteContent.objects.create(key='faq_data', value='[{"question":"Q1","answer":"A1"}]')

        response = client.get(reverse('landing:home'))

        assert self.faqs(response) == [{'question': 'Q1', 'answer': 'A1'}]
        assert response.content.decode().count('class="faq-item') == 1
        assert 'Q1' in response.content.decode()

    def test_faq_missing_uses_default(self, client):
        response = client.get(reverse('landing:home'))

        assert self.faqs(response) == defaults.FAQS
        assert len(self.faqs(response)) == 5

    @pytest.mark.parametrize('value', ['', '[]', 'not json', '{"question": "Q1"}'])
    def test_faq_empty_or_invalid_uses_default(self, client, value):
        SiteContent.objects.create(key='faq_data', value=value)

        response = client.get(reverse('landing:home'))

        assert len(self.faqs(response)) == 5
        assert response.content.decode().count('class="faq-item') == 5

    def test_hero_text_override(self, client, site_content):
        response = client.get(reverse('landing:home'))

        assert 'Cuidando de você' in response.content.decode()

    def test_gallery_default_spaces(self, client):
        response = client.get(reverse('landing:home'))

        assert [s['label'] for s in response.context['gallery_spaces']] == [
            'Recepção', 'Consultório', 'Laboratório', 'Sala de Espera', 'Centro de Diagnóstico',
        ]

    def test_gallery_from_content(self, client):
        SiteContent.objects.create(key='gallery_data', value=json.dumps([
            {'label': 'Sala VIP', 'description': 'Nova', 'span': 'wide', 'image_url': '/media/site-images/x.jpg'},
        ]))

        response = client.get(reverse('landing:home'))

        assert response.context['gallery_spaces'][0]['label'] == 'Sala VIP'
        assert '/media/site-images/x.jpg' in response.content.decode()

    def test_convenios_default(self, client):
        response = client.get(reverse('landing:home'))

        assert [c['name'] for c in response.context['convenios']] == ['Bradesco Saúde', 'Vale']

    def test_convenios_plain_names_accepted(self, client):
        SiteContent.objects.create(key='convenios_data', value='["Unimed", {"name": "Amil", "logo_url": ""}, {"name": ""}]')

        response = client.get(reverse('landing:home'))

        assert [c['name'] for c in response.context['convenios']] == ['Unimed', 'Amil']

    def test_published_testimonials_shown(self, client, testimonial):
        response = client.get(reverse('landing:home'))

        assert response.context['testimonials'][0]['patient_initials'] == 'M.S.'
        assert len(response.context['testimonials']) == 1

    def test_site_content_failure_renders_defaults(self, client):
        with patch('content.resolver.load_content_map', side_effect=DatabaseError('down')):
            response = client.get(reverse('landing:home'))

        assert response.status_code == 200
        assert len(self.faqs(response)) == 5


# ============================================
# WHATSAPP LINK TESTS
# ============================================

@pytest.mark.django_db
class TestWhatsApp:

    def test_whatsapp_link_encodes_message(self):
        link = defaults.whatsapp_link('Olá! Quero agendar & saber mais', '5511999999999')

        assert link == 'https://wa.me/5511999999999?text=Ol%C3%A1%21%20Quero%20agendar%20%26%20saber%20mais'

    def test_default_number(self):
        assert defaults.whatsapp_link('oi').startswith('https://wa.me/5594992775857?text=')

    def test_number_from_content(self, client):
        SiteContent.objects.create(key='whatsapp_number', value='5511988887777')

        response = client.get(reverse('landing:contact'))

        assert response.context['whatsapp_number'] == '5511988887777'
        assert 'https://wa.me/5511988887777?text=' in response.content.decode()

    def test_doctor_booking_link(self, client, doctor):
        response = client.get(reverse('landing:doctor_detail', args=['dr-carlos-mendes']))

        assert 'Dr.%20Carlos%20Mendes' in response.context['booking_url']


# ============================================
# TESTIMONIAL MODEL / API TESTS
# ============================================

@pytest.mark.django_db
class TestTestimonials:

    @pytest.mark.parametrize('rating', [0, 6])
    def test_rating_validated(self, rating):
        testimonial = Testimonial(quote='q', patient_initials='A.B.', rating=rating)

        with pytest.raises(ValidationError):
            testimonial.full_clean()

    def test_str(self, testimonial):
        assert str(testimonial) == 'M.S. (Cardiologia)'

    def test_api_lists_published_only(self, api_client, testimonial):
        Testimonial.objects.create(quote='Oculto', patient_initials='X.X.', is_published=False)

        response = api_client.get(reverse('testimonial-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [t['patient_initials'] for t in response.data] == ['M.S.']
