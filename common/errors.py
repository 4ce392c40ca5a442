"""
Error taxonomy shared by the prompt and user apps.

Each error carries the HTTP status and the user-facing message the views
send back. Anything that is not a GalleryError is reported and mapped to a
generic 500 by the view that caught it.
"""
from django.http import JsonResponse


class GalleryError(Exception):
    status = 500
    message = "Something went wrong. Please try again."

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationError(GalleryError):
    status = 400
    message = "Missing required fields"


class NotFoundError(GalleryError):
    status = 404
    message = "Not found"


class ConflictError(GalleryError):
    status = 400
    message = "Request conflicts with the current state. Please try again."


class AlreadyLiked(ConflictError):
    message = "Already liked"


class NotLiked(ConflictError):
    message = "Not liked yet"


class CannotUnlike(ConflictError):
    message = "Cannot unlike when other people have liked this prompt"


class UpstreamError(GalleryError):
    status = 500
    message = "Image upload failed"


class UnauthorizedError(GalleryError):
    status = 401
    message = "Unauthorized"


class ForbiddenError(GalleryError):
    status = 403
    message = "You're not authorized"


class UnknownError(GalleryError):
    status = 500


def error_response(exc, **extra):
    """Render a GalleryError as the JSON body every endpoint uses."""
    body = {'success': False, 'error': exc.message}
    body.update(extra)
    return JsonResponse(body, status=exc.status)
