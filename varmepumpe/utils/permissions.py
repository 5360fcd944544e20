"""
Permission and role checking utilities
"""
from functools import wraps

from flask_login import current_user

from varmepumpe import login_manager
from varmepumpe.errors import AuthenticationError, PermissionDenied


@login_manager.unauthorized_handler
def unauthorized():
    raise AuthenticationError('Authentication required')


def role_required(*roles):
    """
    Decorator to require one of the given roles
    Usage: @role_required('admin', 'installer')

    Anonymous callers get 401, logged-in callers with another role get 403.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                raise AuthenticationError('Authentication required')

            if current_user.role not in roles:
                raise PermissionDenied('You do not have permission to access this resource')

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    """Decorator to require admin role"""
    return role_required('admin')(f)


def installer_required(f):
    return role_required('installer')(f)
