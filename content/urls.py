from django.urls import path
from .views import SiteContentView

urlpatterns = [
    path('content/', SiteContentView.as_view(), name='site-content'),
]
