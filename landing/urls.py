# landing/urls.py
from django.urls import path
from . import views

app_name = 'landing'

urlpatterns = [
    path('', views.home, name='home'),
    path('institutos/', views.institutes, name='institutes'),
    path('instituto/<slug:slug>/', views.institute_detail, name='institute_detail'),
    path('medicos/', views.doctors, name='doctors'),
    path('medico/<slug:slug>/', views.doctor_detail, name='doctor_detail'),
    path('contato/', views.contact, name='contact'),
]
