from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Testimonial(models.Model):
    quote = models.TextField()
    patient_initials = models.CharField(max_length=20, help_text="e.g. 'M.S.'")
    specialty = models.CharField(max_length=100, blank=True)
    rating = models.IntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Star rating (1-5)",
    )
    is_published = models.BooleanField(default=True)
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['display_order', 'created_at']

    def __str__(self):
        return f"{self.patient_initials} ({self.specialty})"
