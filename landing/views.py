# landing/views.py
from django.shortcuts import render
from rest_framework import generics, permissions

from content.editors import exam_categories
from content.resolver import get_site_content
from . import defaults
from .models import Testimonial
from .serializers import TestimonialSerializer
from .services import (
    get_doctor, get_institute, list_doctors, list_institutes, published_testimonials,
)


def _convenios(site):
    convenios = []
    for item in site.get_json('convenios_data', defaults.CONVENIOS, expect=list):
        # older rows stored plain names
        if isinstance(item, str):
            item = {'name': item, 'logo_url': ''}
        if isinstance(item, dict) and item.get('name'):
            convenios.append(item)
    return convenios


def _whatsapp_number(site):
    return site.get('whatsapp_number', defaults.WHATSAPP_NUMBER) or defaults.WHATSAPP_NUMBER


def _page_context(site, **extra):
    number = _whatsapp_number(site)
    context = {
        'site': site,
        'whatsapp_number': number,
        'whatsapp_url': defaults.whatsapp_link(defaults.BOOKING_MESSAGE, number),
        'contact': {key: site.get(key, value) for key, value in defaults.CONTACT.items()},
    }
    context.update(extra)
    return context


def home(request):
    """Home/Landing page"""
    site = get_site_content()

    context = _page_context(
        site,
        page_title='Grupo Unique - Saúde e bem-estar',
        hero={key: site.get(key, value) for key, value in defaults.HERO.items()},
        hero_features=defaults.HERO_FEATURES,
        stats=defaults.STATS,
        institutes=list_institutes(),
        gallery_text={key: site.get(key, value) for key, value in defaults.GALLERY_TEXT.items()},
        gallery_spaces=site.get_json('gallery_data', defaults.GALLERY_SPACES, expect=list) or defaults.GALLERY_SPACES,
        testimonials=published_testimonials(),
        convenios=_convenios(site),
        # an empty list counts as "not configured"
        faqs=site.get_json('faq_data', defaults.FAQS, expect=list) or defaults.FAQS,
    )
    return render(request, 'landing/home.html', context)


def institutes(request):
    """Institutes listing page"""
    site = get_site_content()
    exams = site.get_json('exams_data', [], expect=list)
    context = _page_context(
        site,
        page_title='Institutos - Grupo Unique',
        institutes=list_institutes(),
        exams_title=site.get('exams_title', 'Exames'),
        exams=exams,
        exam_categories=exam_categories([e for e in exams if isinstance(e, dict)]),
    )
    return render(request, 'landing/institutes.html', context)


def institute_detail(request, slug):
    institute = get_institute(slug)
    context = _page_context(
        get_site_content(),
        page_title=f"{institute['name']} - Grupo Unique",
        institute=institute,
        doctors=list_doctors(institute=slug),
    )
    return render(request, 'landing/institute_detail.html', context)


def doctors(request):
    """Doctors listing page, optionally filtered by ?instituto=<slug>"""
    selected = request.GET.get('instituto', '')
    context = _page_context(
        get_site_content(),
        page_title='Médicos - Grupo Unique',
        doctors=list_doctors(institute=selected or None),
        institutes=list_institutes(),
        selected_institute=selected,
    )
    return render(request, 'landing/doctors.html', context)


def doctor_detail(request, slug):
    doctor = get_doctor(slug)
    site = get_site_content()
    number = _whatsapp_number(site)
    context = _page_context(
        site,
        page_title=f"{doctor['name']} - Grupo Unique",
        doctor=doctor,
        booking_url=defaults.whatsapp_link(
            f"Olá! Gostaria de agendar uma consulta com {doctor['name']} ({doctor['specialty']}).",
            number,
        ),
    )
    return render(request, 'landing/doctor_detail.html', context)


def contact(request):
    """Contact page"""
    site = get_site_content()
    number = _whatsapp_number(site)
    context = _page_context(
        site,
        page_title='Contato - Grupo Unique',
        info_url=defaults.whatsapp_link('Olá! Gostaria de mais informações sobre o Grupo Unique.', number),
    )
    return render(request, 'landing/contact.html', context)


class TestimonialListView(generics.ListAPIView):
    serializer_class = TestimonialSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def get_queryset(self):
        return Testimonial.objects.filter(is_published=True).order_by('display_order', 'created_at')
