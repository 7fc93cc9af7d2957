from django.contrib import admin
from .models import Testimonial


@admin.register(Testimonial)
class TestimonialAdmin(admin.ModelAdmin):
    list_display = ('patient_initials', 'specialty', 'rating', 'is_published', 'display_order')
    list_filter = ('is_published', 'rating')
    ordering = ('display_order',)
