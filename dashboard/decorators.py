# dashboard/decorators.py

from functools import wraps
from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse

from accounts.services import is_site_admin


def redirect_authenticated_user(view_func):
    """Send admins who are already signed in straight to the panel."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if is_site_admin(request.user):
            return redirect('dashboard:home')
        return view_func(request, *args, **kwargs)
    return wrapper


def admin_required(view_func):
    """Ensure user is signed in and holds the admin role."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            login_url = reverse('dashboard:login')
            return redirect(f"{login_url}?{urlencode({'next': request.get_full_path()})}")
        if not is_site_admin(request.user):
            messages.error(request, 'Acesso negado. Apenas administradores.')
            return redirect('dashboard:login')
        return view_func(request, *args, **kwargs)
    return wrapper
