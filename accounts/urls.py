from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import LoginView, AdminUsersView

app_name = 'accounts'

urlpatterns = [
    path('auth/token/', LoginView.as_view(), name='token'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('admin-users/', AdminUsersView.as_view(), name='admin-users'),
]
