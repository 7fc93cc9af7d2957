import json

from django.core.management.base import BaseCommand
from django.db import transaction

from content.models import SiteContent
from doctors.models import Doctor, DoctorInstitute, Institute
from landing import defaults
from landing.models import Testimonial


def default_content():
    """Content keys the public pages read, with their built-in values."""
    values = {}
    values.update(defaults.HERO)
    values.update(defaults.CONTACT)
    values.update(defaults.GALLERY_TEXT)
    values['whatsapp_number'] = defaults.WHATSAPP_NUMBER
    values['exams_title'] = 'Exames'
    values['faq_data'] = json.dumps(defaults.FAQS, ensure_ascii=False)
    values['gallery_data'] = json.dumps(
        [dict(space, icon='Building2', image_url='') for space in defaults.GALLERY_SPACES],
        ensure_ascii=False,
    )
    values['convenios_data'] = json.dumps(defaults.CONVENIOS, ensure_ascii=False)
    values['exams_data'] = '[]'
    return values


class Command(BaseCommand):
    help = 'Load the default site content, institutes, doctors and testimonials (existing rows are kept)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--content-only',
            action='store_true',
            help='Only seed site content keys'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for key, value in default_content().items():
            _, was_created = SiteContent.objects.get_or_create(key=key, defaults={'value': value})
            created += was_created
        self.stdout.write(f'Content keys created: {created}')

        if options['content_only']:
            self.stdout.write(self.style.SUCCESS('Done!'))
            return

        institutes = {}
        for order, item in enumerate(defaults.INSTITUTES):
            institute, _ = Institute.objects.get_or_create(
                slug=item['slug'],
                defaults={
                    'name': item['name'],
                    'category': item['category'],
                    'description': item['description'],
                    'icon': item['icon'],
                    'services': item['services'],
                    'display_order': order,
                },
            )
            institutes[item['slug']] = institute
        self.stdout.write(f'Institutes: {len(institutes)}')

        for order, item in enumerate(defaults.DOCTORS):
            doctor, _ = Doctor.objects.get_or_create(
                slug=item['slug'],
                defaults={
                    'name': item['name'],
                    'specialty': item['specialty'],
                    'license': item['license'],
                    'bio': item['bio'],
                    'display_order': order,
                },
            )
            DoctorInstitute.objects.get_or_create(doctor=doctor, institute=institutes[item['institute']])
        self.stdout.write(f'Doctors: {len(defaults.DOCTORS)}')

        if not Testimonial.objects.exists():
            Testimonial.objects.bulk_create([
                Testimonial(display_order=order, **item)
                for order, item in enumerate(defaults.TESTIMONIALS)
            ])
            self.stdout.write(f'Testimonials created: {len(defaults.TESTIMONIALS)}')

        self.stdout.write(self.style.SUCCESS('Done!'))
