import django_filters
from .models import Doctor


class DoctorFilter(django_filters.FilterSet):
    institute = django_filters.CharFilter(field_name='institutes__slug')
    specialty = django_filters.CharFilter(field_name='specialty', lookup_expr='icontains')

    class Meta:
        model = Doctor
        fields = ['institute', 'specialty']
