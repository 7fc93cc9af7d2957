from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .resolver import get_site_content


class SiteContentView(APIView):
    """Flat {key: value} map of all site content."""
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response(get_site_content().as_dict())
