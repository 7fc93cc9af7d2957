# accounts/views.py
import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from .permissions import IsSiteAdmin
from .serializers import AdminUserSerializer, CreatedUserSerializer, CustomTokenObtainPairSerializer
from .services import AdminUserError, create_admin_user, delete_admin_user, list_admin_users

logger = logging.getLogger(__name__)


class LoginView(TokenObtainPairView):
    """Obtain a JWT pair for API calls (the admin panel itself uses the session)."""
    serializer_class = CustomTokenObtainPairSerializer


class AdminUsersView(APIView):
    """
    Admin user management, selected by the `action` query parameter:

        GET    ?action=list
        POST   ?action=create   {"email": ..., "password": ...}
        DELETE ?action=delete   {"user_id": ...}
    """
    permission_classes = [permissions.IsAuthenticated, IsSiteAdmin]

    ACTIONS = {
        ('GET', 'list'): 'list_users',
        ('POST', 'create'): 'create_user',
        ('DELETE', 'delete'): 'delete_user',
    }

    def get(self, request):
        return self.dispatch_action(request)

    def post(self, request):
        return self.dispatch_action(request)

    def delete(self, request):
        return self.dispatch_action(request)

    def dispatch_action(self, request):
        handler_name = self.ACTIONS.get((request.method, request.query_params.get('action')))
        if handler_name is None:
            return Response({'error': 'Ação não encontrada'}, status=status.HTTP_404_NOT_FOUND)

        try:
            return getattr(self, handler_name)(request)
        except AdminUserError as e:
            return Response({'error': e.message}, status=e.status_code)
        except Exception as e:
            logger.exception("Admin user action failed")
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def list_users(self, request):
        users = list_admin_users(request.user)
        return Response({'users': AdminUserSerializer(users, many=True).data})

    def create_user(self, request):
        user = create_admin_user(request.data.get('email'), request.data.get('password'))
        return Response({'user': CreatedUserSerializer(user).data})

    def delete_user(self, request):
        delete_admin_user(request.user, request.data.get('user_id'))
        return Response({'success': True})
