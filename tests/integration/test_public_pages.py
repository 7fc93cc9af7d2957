# tests/integration/test_public_pages.py
"""
Public site integration tests:
seeded database, API and HTML pages agree with each other.
"""

import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from content.models import SiteContent
from content.resolver import invalidate_content_cache
from landing import defaults


@pytest.fixture
def seeded(db):
    call_command('seed_content', verbosity=0)


@pytest.mark.django_db
class TestSeededSite:
    """Every public page renders against the seeded database"""

    def test_all_pages_render(self, client, seeded):
        urls = [
            reverse('landing:home'),
            reverse('landing:institutes'),
            reverse('landing:doctors'),
            reverse('landing:contact'),
        ]
        urls += [reverse('landing:institute_detail', args=[i['slug']]) for i in defaults.INSTITUTES]
        urls += [reverse('landing:doctor_detail', args=[d['slug']]) for d in defaults.DOCTORS]

        for url in urls:
            response = client.get(url)
            assert response.status_code == 200, url

    def test_api_matches_pages(self, client, api_client, seeded):
        api = api_client.get(reverse('doctor-list'), {'institute': 'cardiologia'})
        page = client.get(reverse('landing:doctors'), {'instituto': 'cardiologia'})

        assert api.status_code == status.HTTP_200_OK
        assert [d['slug'] for d in api.data] == [d['slug'] for d in page.context['doctors']]
        assert [d['slug'] for d in api.data] == ['dr-carlos-mendes', 'dra-ana-lima']

    def test_content_api_exposes_seeded_keys(self, api_client, seeded):
        response = api_client.get(reverse('site-content'))

        assert response.data['whatsapp_number'] == defaults.WHATSAPP_NUMBER
        assert 'faq_data' in response.data

    def test_home_shows_seeded_faq_and_testimonials(self, client, seeded):
        response = client.get(reverse('landing:home'))

        assert response.context['faqs'] == defaults.FAQS
        assert len(response.context['testimonials']) == len(defaults.TESTIMONIALS)


@pytest.mark.django_db
class TestContentChangesPropagate:
    """Content edits made outside the panel still reach the pages"""

    def test_whatsapp_number_change(self, client, seeded):
        SiteContent.objects.filter(key='whatsapp_number').update(value='5511900000000')
        # queryset.update() skips signals
        invalidate_content_cache()

        response = client.get(reverse('landing:contact'))

        assert 'https://wa.me/5511900000000?text=' in response.content.decode()

    def test_contact_text_change(self, client, seeded):
        row = SiteContent.objects.get(key='contact_phone')
        row.value = '(11) 3000-0000'
        row.save()

        response = client.get(reverse('landing:contact'))

        assert '(11) 3000-0000' in response.content.decode()

    def test_health_and_api_root(self, api_client):
        assert api_client.get(reverse('health-check')).data['status'] == 'healthy'
        assert 'testimonials' in api_client.get(reverse('api-root')).data['endpoints']
