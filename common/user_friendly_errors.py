"""
Maps technical error messages to user-friendly messages for the frontend.
Used when a store or image-host failure has to be reported without leaking internals.
"""

# Substrings in exception/error messages (lowercase) -> user-friendly message
UPLOAD_ERROR_MAP = [
    # Image host configuration
    ("must supply api_key", "Image uploads are not configured. Please contact support."),
    ("must supply cloud_name", "Image uploads are not configured. Please contact support."),
    ("invalid signature", "Image uploads are not configured. Please contact support."),
    # Rate limits / quota
    ("rate limit", "Too many uploads. Please wait a moment and try again."),
    ("420", "Too many uploads. Please wait a moment and try again."),
    ("quota", "The image host is over its limit for now. Please try again later."),
    # Files
    ("invalid image file", "That file is not a supported image. Please pick a different one."),
    ("file size too large", "That image is too large. Please pick a smaller one."),
    ("empty file", "The uploaded image is empty. Please pick a different one."),
    # Network
    ("timed out", "The image host took too long to answer. Please try again."),
    ("timeout", "The image host took too long to answer. Please try again."),
    ("connection", "Could not reach the image host. Please try again."),
]

STORE_ERROR_MAP = [
    ("serverselectiontimeout", "The gallery is temporarily unavailable. Please try again shortly."),
    ("connection refused", "The gallery is temporarily unavailable. Please try again shortly."),
    ("not authorized", "The gallery is temporarily unavailable. Please try again shortly."),
]


def get_user_friendly_message(technical_error, context="upload"):
    """
    Convert a technical error (Exception or string) to a user-friendly message.

    :param technical_error: Exception instance or str
    :param context: "upload" for image-host errors, "store" for database errors
    :return: User-friendly string
    """
    if technical_error is None:
        return "Something went wrong. Please try again."

    raw = str(technical_error).strip()
    if not raw:
        return "Something went wrong. Please try again."

    raw_lower = raw.lower()
    error_map = UPLOAD_ERROR_MAP if context == "upload" else STORE_ERROR_MAP
    for substring, friendly in error_map:
        if substring in raw_lower:
            return friendly

    if context == "upload":
        return "Image upload failed. Please try again."
    return "Something went wrong on our side. Please try again in a few moments."
