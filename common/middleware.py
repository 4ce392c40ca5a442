import json

import jwt
from django.conf import settings
from django.http import HttpResponse
from functools import wraps
from common.errors import UnauthorizedError, ValidationError, error_response


class SessionUser:
    """Identity taken from a verified session token (never an anonymous like token)."""

    def __init__(self, email, name='', image=''):
        self.email = email
        self.name = name or ''
        self.image = image or ''

    def __repr__(self):
        return f"SessionUser({self.email!r})"


def _find_request(args):
    # Detect request object (FBV / CBV support)
    if hasattr(args[0], 'request'):  # Class-based view
        return args[1]
    elif hasattr(args[0], 'META'):   # Function-based view
        return args[0]
    raise Exception("Cannot find request object")


def decode_session_token(token):
    """Verify a session token and return its claims. Raises jwt.InvalidTokenError."""
    secret = getattr(settings, 'SESSION_SECRET', None) or settings.SECRET_KEY
    payload = jwt.decode(token, secret, algorithms=["HS256"])
    if not payload.get('email'):
        raise jwt.InvalidTokenError("Token carries no email")
    return payload


def get_session_user(request):
    """
    Return the SessionUser for a request carrying a valid Bearer token, else None.
    Used where a session is optional.
    """
    auth_header = request.META.get('HTTP_AUTHORIZATION')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    try:
        payload = decode_session_token(auth_header.split(' ', 1)[1])
    except jwt.InvalidTokenError:
        return None
    return SessionUser(payload['email'], payload.get('name'), payload.get('picture'))


def authenticate(view_func):
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        request = _find_request(args)

        # ---- CRITICAL: Stop OPTIONS immediately ----
        if request.method == "OPTIONS":
            return HttpResponse("", status=200, content_type="text/plain")

        # ---- JWT Authentication for other methods ----
        auth_header = request.META.get('HTTP_AUTHORIZATION')
        if not auth_header or not auth_header.startswith('Bearer '):
            return error_response(UnauthorizedError())

        try:
            payload = decode_session_token(auth_header.split(' ', 1)[1])
        except jwt.ExpiredSignatureError:
            return error_response(UnauthorizedError('Token expired'))
        except jwt.InvalidTokenError:
            return error_response(UnauthorizedError('Invalid token'))

        request.user = SessionUser(payload['email'], payload.get('name'), payload.get('picture'))

        return view_func(*args, **kwargs)

    return wrapper


def _get_user_details(request):
    """User section of an error report."""
    user = getattr(request, 'user', None)
    if isinstance(user, SessionUser):
        return {"authenticated": True, "email": user.email, "full_name": user.name}
    return {"authenticated": False, "label": "anonymous"}


def _get_location_details(request):
    """Where the error occurred, for error reports."""
    match = getattr(request, 'resolver_match', None)
    return {
        "path": request.path,
        "full_path": request.get_full_path(),
        "method": request.method,
        "view_name": match.view_name if match else None,
    }


def read_json_body(request):
    """Decode a JSON request body that must be an object; empty means {}."""
    try:
        data = json.loads(request.body or b'{}')
    except ValueError:
        raise ValidationError('Invalid JSON body')
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
