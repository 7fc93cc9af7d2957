from django.urls import path
from .views import (
    DoctorListView,
    DoctorDetailView,
    InstituteListView,
    InstituteDetailView,
)

urlpatterns = [
    # Doctors
    path('doctors/', DoctorListView.as_view(), name='doctor-list'),
    path('doctors/<slug:slug>/', DoctorDetailView.as_view(), name='doctor-detail'),

    # Institutes
    path('institutes/', InstituteListView.as_view(), name='institute-list'),
    path('institutes/<slug:slug>/', InstituteDetailView.as_view(), name='institute-detail'),
]
