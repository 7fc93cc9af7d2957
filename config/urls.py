# config/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    return Response({
        'status': 'healthy',
        'message': 'Clinic site is running'
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request):
    return Response({
        'message': 'Clinic site API',
        'version': '1.0.0',
        'endpoints': {
            'auth': '/api/auth/token/',
            'admin_users': '/api/admin-users/',
            'content': '/api/content/',
            'doctors': '/api/doctors/',
            'institutes': '/api/institutes/',
            'testimonials': '/api/testimonials/',
        }
    })


urlpatterns = [
    # Django admin (the site admin panel owns /admin/)
    path('django-admin/', admin.site.urls),

    # Admin panel (protected area)
    path('admin/', include('dashboard.urls')),

    # API Routes
    path('api/', api_root, name='api-root'),
    path('api/', include('accounts.urls')),
    path('api/', include('content.urls')),
    path('api/', include('doctors.urls')),
    path('api/', include('landing.api_urls')),

    # Health check
    path('health/', health_check, name='health-check'),

    # Public pages - last, as catch-all
    path('', include('landing.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
