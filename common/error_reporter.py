"""
Report exceptions that a view caught and turned into a 500, so they still
reach an admin. Delivery happens in the notify_admin_error Celery task.
"""
import logging
import traceback
from functools import wraps

from django.conf import settings

from common.errors import UnknownError, error_response
from common.tasks import notify_admin_error

logger = logging.getLogger(__name__)

# Context keys that describe the location instead of the resource
_LOCATION_KEYS = ("path", "full_path", "method")


def build_error_payload(exc, request=None, context=None):
    context = context or {}
    if request is not None and getattr(request, "META", None) is not None:
        from common.middleware import _get_user_details, _get_location_details
        user = _get_user_details(request)
        location = _get_location_details(request)
    else:
        user = {"authenticated": False}
        location = {
            "path": context.get("path", "unknown"),
            "full_path": context.get("full_path", context.get("path", "unknown")),
            "method": context.get("method", "INTERNAL"),
        }

    payload = {
        "user": user,
        "location": location,
        "error": str(exc),
        "traceback": traceback.format_exc(),
    }
    resource = {k: v for k, v in context.items() if k not in _LOCATION_KEYS and not callable(v)}
    if resource:
        payload["context"] = resource
    return payload


def report_handled_exception(exc, request=None, context=None):
    """
    Queue an admin mail for ``exc``. Call from inside the except block so the
    traceback is captured; ``context`` names the affected record, e.g.
    ``{"prompt_id": prompt_id}``. Does nothing when ADMIN_EMAIL is empty.
    """
    if not getattr(settings, "ADMIN_EMAIL", None):
        return

    try:
        notify_admin_error.delay(build_error_payload(exc, request, context))
    except Exception as e:
        # Broker down: the caller already logged the original error
        logger.warning(f"Could not queue admin error report: {e}")


def report_all_exceptions(view_func):
    """
    Last-resort view decorator: log, report and answer a generic JSON 500.
    Place it above @authenticate.
    """
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        try:
            return view_func(*args, **kwargs)
        except Exception as exc:
            request = next((a for a in args[:2] if hasattr(a, "META")), None)
            logger.exception(f"Unhandled error in {view_func.__name__}")
            report_handled_exception(exc, request=request)
            return error_response(UnknownError("An error occurred."))
    return wrapper
