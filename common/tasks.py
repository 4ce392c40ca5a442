"""
Background jobs. Only one for now: mail ADMIN_EMAIL about an error a view
caught and answered with a 500.
"""
import hashlib
import html
import logging

from celery import shared_task
from django.conf import settings
from django.core.cache import cache
from django.core.mail import send_mail

logger = logging.getLogger(__name__)

# Same path + message is mailed at most once per window
ERROR_REPORT_WINDOW_SECONDS = 15 * 60

SUBJECT = "[Prompt Gallery] Handled exception reported"


def error_fingerprint(payload):
    path = (payload.get("location") or {}).get("path") or ""
    message = (payload.get("error") or "")[:300]
    digest = hashlib.sha256(f"{path}|{message}".encode("utf-8")).hexdigest()
    return f"gallery-error:{digest[:32]}"


def _claim_report(payload):
    """True the first time a fingerprint is seen inside the window."""
    return cache.add(error_fingerprint(payload), True, timeout=ERROR_REPORT_WINDOW_SECONDS)


def _who(user):
    if not isinstance(user, dict) or not user.get("authenticated"):
        return ["Session: none (anonymous request)"]
    lines = ["Session:"]
    if user.get("full_name"):
        lines.append(f"  Name: {user['full_name']}")
    if user.get("email"):
        lines.append(f"  Email: {user['email']}")
    return lines


def _where(location):
    location = location or {}
    lines = [
        f"  {location.get('method', '')} {location.get('full_path') or location.get('path', '')}",
    ]
    if location.get("view_name"):
        lines.append(f"  View: {location['view_name']}")
    return ["Request:"] + lines


def format_error_email(payload):
    """(plain, html) bodies for one error report."""
    lines = _who(payload.get("user")) + [""] + _where(payload.get("location")) + [""]

    for key, value in sorted((payload.get("context") or {}).items()):
        lines.append(f"{key}: {value}")
    if payload.get("context"):
        lines.append("")

    lines += ["Error:", payload.get("error", ""), "", "Traceback:", payload.get("traceback", "")]
    plain = "\n".join(lines)
    rich = f"<p><strong>Prompt Gallery error report</strong></p><pre>{html.escape(plain)}</pre>"
    return plain, rich


@shared_task(bind=True, autoretry_for=(Exception,), retry_backoff=5, retry_kwargs={"max_retries": 3})
def notify_admin_error(self, payload):
    recipients = list(getattr(settings, "ADMIN_EMAIL", None) or [])
    if not recipients:
        return
    if not _claim_report(payload):
        logger.debug(f"Skipping repeated error report {error_fingerprint(payload)}")
        return

    plain, rich = format_error_email(payload)
    send_mail(
        subject=SUBJECT,
        message=plain,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=recipients,
        fail_silently=False,
        html_message=rich,
    )
