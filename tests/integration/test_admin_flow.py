# tests/integration/test_admin_flow.py
"""
End-to-end integration test:
An administrator signs in, edits the site and the public pages follow.
"""

import json

import pytest
from django.urls import reverse

from content.models import SiteContent
from doctors.models import Doctor


@pytest.mark.django_db
class TestAdminEditingJourney:
    """
    Test complete admin journey:
    1. Open the panel (redirected to login)
    2. Login and land on the requested page
    3. Create an institute and a doctor
    4. Edit the FAQ through a draft and save it
    5. Public pages show the new data
    """

    def test_complete_admin_journey(self, client, admin_user):
        """Full end-to-end editing journey"""

        # ==========================================
        # STEP 1: Protected page sends us to login
        # ==========================================
        faq_url = reverse('dashboard:faq_editor')
        response = client.get(faq_url)

        assert response.status_code == 302
        assert response.url.startswith(reverse('dashboard:login'))

        # ==========================================
        # STEP 2: Login returns to the FAQ editor
        # ==========================================
        response = client.post(reverse('dashboard:login'), {
            'email': 'admin@test.com',
            'password': 'testpass123',
            'next': faq_url,
        })

        assert response.status_code == 302
        assert response.url == faq_url

        # ==========================================
        # STEP 3: Create institute and doctor
        # ==========================================
        client.post(reverse('dashboard:institute_create'), {
            'name': 'Instituto de Pediatria',
            'category': 'Cuidado infantil',
            'description': 'Acompanhamento do nascimento à adolescência.',
            'icon': 'Baby',
            'display_order': 0,
            'services_text': 'Puericultura, Vacinas',
        })
        response = client.get(reverse('dashboard:institute_list'))
        institute = response.context['institutes'][0]
        assert institute.slug == 'instituto-de-pediatria'

        client.post(reverse('dashboard:doctor_create'), {
            'name': 'Dra. Paula Rocha',
            'specialty': 'Pediatra',
            'license': 'CRM/SP 111222',
            'bio': 'Pediatra com foco em neonatologia.',
            'display_order': 0,
            'institutes': [institute.pk],
        })
        assert Doctor.objects.get().slug == 'dra-paula-rocha'

        # ==========================================
        # STEP 4: FAQ draft, then save
        # ==========================================
        response = client.get(faq_url)
        assert len(response.context['records']) == 5

        for index in range(4, 0, -1):
            client.post(faq_url, {'action': 'remove', 'index': index})
        client.post(faq_url, {
            'action': 'update',
            'index': 0,
            'question': 'Atendem crianças?',
            'answer': 'Sim, no Instituto de Pediatria.',
        })

        # draft only, nothing published yet
        assert not SiteContent.objects.filter(key='faq_data').exists()

        client.post(faq_url, {'action': 'save'})

        assert json.loads(SiteContent.objects.get(key='faq_data').value) == [
            {'question': 'Atendem crianças?', 'answer': 'Sim, no Instituto de Pediatria.'},
        ]

        # ==========================================
        # STEP 5: Public pages reflect the changes
        # ==========================================
        client.get(reverse('dashboard:logout'))

        response = client.get(reverse('landing:home'))
        content = response.content.decode()
        assert content.count('class="faq-item') == 1
        assert 'Atendem crianças?' in content
        assert 'Instituto de Pediatria' in content

        response = client.get(reverse('landing:institute_detail', args=['instituto-de-pediatria']))
        assert 'Dra. Paula Rocha' in response.content.decode()
        assert 'Puericultura' in response.content.decode()

        response = client.get(reverse('landing:doctors'), {'instituto': 'instituto-de-pediatria'})
        assert [d['slug'] for d in response.context['doctors']] == ['dra-paula-rocha']

    def test_admin_user_management_journey(self, client, admin_user):
        """Create a second admin, who signs in and removes the first"""
        client.force_login(admin_user)

        client.post(reverse('dashboard:users'), {'email': 'segundo@test.com', 'password': 'securepass123'})
        client.get(reverse('dashboard:logout'))

        response = client.post(reverse('dashboard:login'), {
            'email': 'segundo@test.com',
            'password': 'securepass123',
        })
        assert response.url == reverse('dashboard:home')

        response = client.get(reverse('dashboard:users'))
        assert len(response.context['admins']) == 2

        client.post(reverse('dashboard:users'), {'action': 'delete', 'user_id': admin_user.pk})

        response = client.get(reverse('dashboard:users'))
        assert [u['email'] for u in response.context['admins']] == ['segundo@test.com']
