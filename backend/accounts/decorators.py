from functools import wraps
from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponseForbidden

def require_roles(*roles, allow_superuser=False):
    """
    Usage:
    @require_roles(Role.ADMIN, Role.BAKER, allow_superuser=True)
    def view(request): ...

    Anonymous users are sent to the login page; signed-in users without one
    of the roles get a 403.
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            u = request.user
            if not u.is_authenticated:
                return redirect_to_login(request.get_full_path())
            if allow_superuser and u.is_superuser:
                return view_func(request, *args, **kwargs)
            if u.role in roles:
                return view_func(request, *args, **kwargs)
            return HttpResponseForbidden("Insufficient role.")
        return _wrapped
    return decorator
