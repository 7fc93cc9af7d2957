from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    # Auth
    path('login/', views.login_page, name='login'),
    path('logout/', views.logout_page, name='logout'),

    # Dashboard home
    path('', views.dashboard_home, name='home'),

    # Site content
    path('conteudo/', views.content_list, name='content_list'),
    path('conteudo/<int:pk>/', views.content_edit, name='content_edit'),
    path('conteudo/<int:pk>/delete/', views.content_delete, name='content_delete'),

    # Doctors
    path('medicos/', views.doctor_list, name='doctor_list'),
    path('medicos/new/', views.doctor_form, name='doctor_create'),
    path('medicos/<int:pk>/', views.doctor_form, name='doctor_edit'),
    path('medicos/<int:pk>/delete/', views.doctor_delete, name='doctor_delete'),
    path('medicos/<int:pk>/move/', views.doctor_move, name='doctor_move'),
    path('medicos/<int:pk>/photo/', views.doctor_photo, name='doctor_photo'),

    # Institutes
    path('institutos/', views.institute_list, name='institute_list'),
    path('institutos/new/', views.institute_form, name='institute_create'),
    path('institutos/<int:pk>/', views.institute_form, name='institute_edit'),
    path('institutos/<int:pk>/delete/', views.institute_delete, name='institute_delete'),
    path('institutos/<int:pk>/move/', views.institute_move, name='institute_move'),
    path('institutos/<int:pk>/image/', views.institute_image, name='institute_image'),

    # Testimonials
    path('depoimentos/', views.testimonial_list, name='testimonial_list'),
    path('depoimentos/new/', views.testimonial_form, name='testimonial_create'),
    path('depoimentos/<int:pk>/', views.testimonial_form, name='testimonial_edit'),
    path('depoimentos/<int:pk>/delete/', views.testimonial_delete, name='testimonial_delete'),
    path('depoimentos/<int:pk>/toggle/', views.testimonial_toggle, name='testimonial_toggle'),
    path('depoimentos/<int:pk>/move/', views.testimonial_move, name='testimonial_move'),

    # List editors (drafts kept in the session until saved)
    path('faq/', views.list_editor, {'name': 'faq'}, name='faq_editor'),
    path('galeria/', views.list_editor, {'name': 'gallery'}, name='gallery_editor'),
    path('exames/', views.list_editor, {'name': 'exams'}, name='exams_editor'),
    path('convenios/', views.list_editor, {'name': 'convenios'}, name='convenios_editor'),

    # Admin users
    path('usuarios/', views.users_page, name='users'),
]
