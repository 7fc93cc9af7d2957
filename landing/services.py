import logging

from django.db import DatabaseError
from django.http import Http404

from doctors.models import Doctor, Institute
from . import defaults
from .models import Testimonial

logger = logging.getLogger(__name__)


def _institute_dict(institute):
    return {
        'slug': institute.slug,
        'name': institute.name,
        'category': institute.category,
        'description': institute.description,
        'icon': institute.icon,
        'services': list(institute.services or []),
        'image_url': institute.image_url,
    }


def _doctor_dict(doctor):
    return {
        'slug': doctor.slug,
        'name': doctor.name,
        'specialty': doctor.specialty,
        'license': doctor.license,
        'bio': doctor.bio,
        'photo_url': doctor.photo_url,
        'institutes': [{'slug': i.slug, 'name': i.name} for i in doctor.institutes.all()],
    }


def _mock_institutes():
    institutes = []
    for item in defaults.INSTITUTES:
        institute = dict(item, image_url='')
        institute.pop('doctors')
        institutes.append(institute)
    return institutes


def _mock_doctors():
    names = {item['slug']: item['name'] for item in defaults.INSTITUTES}
    return [
        {
            'slug': item['slug'],
            'name': item['name'],
            'specialty': item['specialty'],
            'license': item['license'],
            'bio': item['bio'],
            'photo_url': '',
            'institutes': [{'slug': item['institute'], 'name': names[item['institute']]}],
        }
        for item in defaults.DOCTORS
    ]


def _query(fn, fallback):
    """Run a query; empty tables and database errors both give the built-in data."""
    try:
        rows = fn()
    except DatabaseError:
        logger.warning("Falling back to built-in data", exc_info=True)
        return fallback()
    if not rows:
        return fallback()
    return rows


def list_institutes():
    return _query(
        lambda: [_institute_dict(i) for i in Institute.objects.order_by('display_order', 'name')],
        _mock_institutes,
    )


def list_doctors(institute=None):
    rows = _query(
        lambda: [_doctor_dict(d) for d in Doctor.objects.prefetch_related('institutes').order_by('display_order', 'name')],
        _mock_doctors,
    )
    if institute:
        rows = [d for d in rows if any(i['slug'] == institute for i in d['institutes'])]
    return rows


def get_institute(slug):
    for institute in list_institutes():
        if institute['slug'] == slug:
            return institute
    raise Http404("Instituto não encontrado")


def get_doctor(slug):
    for doctor in list_doctors():
        if doctor['slug'] == slug:
            return doctor
    raise Http404("Médico não encontrado")


def published_testimonials():
    return _query(
        lambda: list(Testimonial.objects.filter(is_published=True).order_by('display_order', 'created_at')
                     .values('quote', 'patient_initials', 'specialty', 'rating')),
        lambda: [dict(t) for t in defaults.TESTIMONIALS],
    )
