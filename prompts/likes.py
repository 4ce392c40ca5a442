"""
Like ledger for a single prompt.

``likes`` and ``likedBy`` are only ever changed through the store's atomic
operators (one findAndModify with $inc / $push to like, $set / $pull to
unlike) with the preconditions repeated in the update filter. A concurrent
toggle therefore either applies completely or matches nothing; it never
overwrites another toggle's write. Invariant after every successful call:
likes == len(likedBy).
"""
import datetime
import logging

from mongoengine.errors import ValidationError as MongoValidationError

from common import errors
from .models import Prompt

logger = logging.getLogger(__name__)


class AnonymousToken:
    """
    Per-browser like token generated by the client.

    A soft de-duplication key, not an authenticated identity: it is never
    compared with, or derived from, the session email.
    """

    MAX_LENGTH = 128

    def __init__(self, value):
        value = (value or "").strip() if isinstance(value, str) else ""
        if not value:
            raise errors.ValidationError("User ID is required")
        if len(value) > self.MAX_LENGTH:
            raise errors.ValidationError("User ID is too long")
        self.value = value

    @classmethod
    def from_body(cls, data):
        """Read the token from a request body; ``userId`` is the older key."""
        if not isinstance(data, dict):
            raise errors.ValidationError("User ID is required")
        return cls(data.get("identity") or data.get("userId"))

    def __eq__(self, other):
        return isinstance(other, AnonymousToken) and other.value == self.value

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return self.value


class LikeResult:
    def __init__(self, likes, liked_by):
        self.likes = max(0, likes or 0)
        self.liked_by = list(liked_by or [])

    def to_dict(self):
        return {"likes": self.likes, "likedBy": self.liked_by}


def _load_ledger(prompt_id):
    try:
        prompt = Prompt.objects(id=prompt_id).only("likes", "liked_by").first()
    except MongoValidationError:
        prompt = None
    if prompt is None:
        raise errors.NotFoundError("Prompt not found")
    return prompt


def like(prompt_id, token):
    """Add ``token`` to the prompt's likers. Raises NotFoundError or AlreadyLiked."""
    prompt = _load_ledger(prompt_id)
    if token.value in (prompt.liked_by or []):
        raise errors.AlreadyLiked()

    updated = Prompt.objects(id=prompt_id, liked_by__ne=token.value).modify(
        new=True,
        inc__likes=1,
        push__liked_by=token.value,
        set__updated_at=datetime.datetime.utcnow(),
    )
    if updated is None:
        # Lost a race between the read above and the update
        _load_ledger(prompt_id)
        raise errors.AlreadyLiked()

    logger.info(f"Prompt {prompt_id} liked, now {updated.likes}")
    return LikeResult(updated.likes, updated.liked_by)


def _check_unlike(prompt, token):
    liked_by = prompt.liked_by or []
    if token.value not in liked_by:
        raise errors.NotLiked()
    if len(set(liked_by)) > 1:
        # Once anyone else has liked the prompt nobody can unlike it
        raise errors.CannotUnlike()


def unlike(prompt_id, token):
    """
    Remove ``token`` from the prompt's likers.

    Raises NotFoundError, NotLiked, or CannotUnlike when more than one
    distinct token has liked the prompt.
    """
    prompt = _load_ledger(prompt_id)
    _check_unlike(prompt, token)

    # Only the likers list that passed the check may be replaced; every
    # entry in it is this token, so the ledger ends up empty
    updated = Prompt.objects(id=prompt_id, liked_by=list(prompt.liked_by)).modify(
        new=True,
        set__likes=0,
        pull__liked_by=token.value,
        set__updated_at=datetime.datetime.utcnow(),
    )
    if updated is None:
        _check_unlike(_load_ledger(prompt_id), token)
        raise errors.ConflictError("Could not update the like. Please try again.")

    logger.info(f"Prompt {prompt_id} unliked, now {updated.likes}")
    return LikeResult(updated.likes, updated.liked_by)
