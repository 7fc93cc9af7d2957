from django.db import models


class Institute(models.Model):
    name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=150, unique=True)
    category = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    icon = models.CharField(max_length=50, blank=True)
    services = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name


class Doctor(models.Model):
    name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=150, unique=True)
    specialty = models.CharField(max_length=150)
    license = models.CharField(max_length=50, blank=True, help_text='CRM, e.g. "CRM/SP 123456"')
    bio = models.TextField(blank=True)
    photo_url = models.URLField(max_length=500, blank=True)
    display_order = models.IntegerField(default=0)
    institutes = models.ManyToManyField(
        Institute, through='DoctorInstitute', related_name='doctors', blank=True
    )

    class Meta:
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name


class DoctorInstitute(models.Model):
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='institute_links')
    institute = models.ForeignKey(Institute, on_delete=models.CASCADE, related_name='doctor_links')

    class Meta:
        unique_together = ['doctor', 'institute']

    def __str__(self):
        return f"{self.doctor} - {self.institute}"
