"""
Prompt create / update / delete shared by the owner endpoints and the admin
endpoints. Image uploads go through common.media so a failed upload aborts
the write before anything is stored.
"""
import logging

from mongoengine.errors import ValidationError as MongoValidationError

from common import errors
from common.media import upload_image, release_image
from .models import Prompt, title_case

logger = logging.getLogger(__name__)


def get_prompt(prompt_id):
    """Fetch one prompt or raise NotFoundError (also for malformed ids)."""
    try:
        prompt = Prompt.objects(id=prompt_id).first()
    except MongoValidationError:
        prompt = None
    if prompt is None:
        raise errors.NotFoundError("Prompt not found")
    return prompt


def _read_categories(data):
    if hasattr(data, "getlist"):
        raw = data.getlist("category")
    else:
        raw = data.get("category") or []
        if isinstance(raw, str):
            raw = [raw]
    categories = []
    for cat in raw:
        tag = title_case(str(cat))
        if tag and tag not in categories:
            categories.append(tag)
    return categories


def _has_image(image):
    return image is not None and getattr(image, "size", 1) > 0


def create_prompt(data, image, creator):
    """
    Validate the form, upload the image, then store the record.

    ``creator`` is a dict with email / name / image for the createdBy fields.
    """
    title = (data.get("title") or "").strip()
    prompt_text = (data.get("prompt") or "").strip()
    categories = _read_categories(data)

    if not title or not prompt_text or not categories or not _has_image(image):
        logger.warning(f"[Validation Error] Missing fields: title={bool(title)} prompt={bool(prompt_text)} "
                       f"categories={categories} image={_has_image(image)}")
        raise errors.ValidationError("Missing required fields")

    media = upload_image(image)

    prompt = Prompt(
        title=title,
        prompt=prompt_text,
        image_url=media.url,
        cloudinary_id=media.public_id,
        category=categories,
        likes=0,
        liked_by=[],
        created_by=creator.get("email"),
        creator_name=creator.get("name") or "",
        creator_image=creator.get("image") or "",
    )
    try:
        prompt.save()
    except Exception:
        release_image(media.public_id)
        raise

    logger.info(f"Prompt saved: {prompt.id} by {prompt.created_by}")
    return prompt


def update_prompt(prompt, data, image=None):
    """
    Apply a partial update. Only fields present in ``data`` change; the image
    is replaced only when a non-empty file is given, and the old asset is
    released once the record points at the new one.
    """
    if "title" in data:
        title = (data.get("title") or "").strip()
        if not title:
            raise errors.ValidationError("Title cannot be empty")
        prompt.title = title
    if "prompt" in data:
        prompt_text = (data.get("prompt") or "").strip()
        if not prompt_text:
            raise errors.ValidationError("Prompt cannot be empty")
        prompt.prompt = prompt_text
    if "category" in data:
        categories = _read_categories(data)
        if not categories:
            raise errors.ValidationError("At least one category is required")
        prompt.category = categories

    old_public_id = None
    if _has_image(image):
        media = upload_image(image)
        old_public_id = prompt.cloudinary_id
        prompt.image_url = media.url
        prompt.cloudinary_id = media.public_id

    prompt.save()

    if old_public_id and old_public_id != prompt.cloudinary_id:
        release_image(old_public_id)

    logger.info(f"Prompt updated: {prompt.id}")
    return prompt


def delete_prompt(prompt):
    """Delete the record, then release its image."""
    public_id = prompt.cloudinary_id
    prompt_id = prompt.id
    prompt.delete()
    release_image(public_id)
    logger.info(f"Prompt deleted: {prompt_id}")


def delete_prompts_by_creator(email):
    """Cascade for account deletion. Returns how many prompts were removed."""
    prompts = list(Prompt.objects(created_by=email).only("cloudinary_id"))
    deleted = Prompt.objects(created_by=email).delete()
    for prompt in prompts:
        release_image(prompt.cloudinary_id)
    logger.info(f"Deleted {deleted} prompts created by {email}")
    return deleted
