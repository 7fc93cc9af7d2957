from django.contrib import admin
from .models import Doctor, DoctorInstitute, Institute


class DoctorInstituteInline(admin.TabularInline):
    model = DoctorInstitute
    extra = 1


@admin.register(Institute)
class InstituteAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'category', 'display_order']
    prepopulated_fields = {'slug': ('name',)}
    ordering = ['display_order']


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ['name', 'specialty', 'license', 'display_order']
    search_fields = ['name', 'specialty', 'license']
    list_filter = ['institutes']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [DoctorInstituteInline]
