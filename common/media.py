"""
Media upload gateway: the only place that talks to the Cloudinary API.
"""
import logging

import cloudinary.uploader
from django.conf import settings

from common import errors
from common.user_friendly_errors import get_user_friendly_message

logger = logging.getLogger(__name__)


class MediaReference:
    """Stable URL plus the reference id needed to delete the asset later."""

    def __init__(self, url, public_id):
        self.url = url
        self.public_id = public_id

    def to_dict(self):
        return {'secure_url': self.url, 'public_id': self.public_id}


def upload_image(file, folder=None):
    """
    Upload one image (Django UploadedFile, file object or bytes) in a single
    blocking round trip. Failures are not retried.

    Raises errors.UpstreamError when the host fails or returns no URL.
    """
    try:
        result = cloudinary.uploader.upload(
            file,
            resource_type="image",
            folder=folder or settings.CLOUDINARY_FOLDER,
        )
    except Exception as e:
        logger.error(f"[Cloudinary Upload Error] {e}")
        raise errors.UpstreamError(get_user_friendly_message(e, context="upload")) from e

    url = (result or {}).get("secure_url")
    public_id = (result or {}).get("public_id")
    if not url or not public_id:
        logger.error(f"[Cloudinary Error] Missing URL in upload result: {result}")
        raise errors.UpstreamError("Cloudinary upload failed")

    return MediaReference(url, public_id)


def release_image(public_id):
    """
    Delete an uploaded asset. Returns True when the host confirmed the delete.

    Callers release only after the owning record is saved or deleted; host
    failures are logged and returned as False, never raised.
    """
    if not public_id:
        return False
    try:
        result = cloudinary.uploader.destroy(public_id)
    except Exception as e:
        logger.warning(f"Could not release image {public_id}: {e}")
        return False
    ok = (result or {}).get("result") == "ok"
    if not ok:
        logger.warning(f"Image host did not confirm release of {public_id}: {result}")
    return ok
