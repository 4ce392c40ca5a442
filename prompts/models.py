from mongoengine import (
    Document,
    StringField,
    ListField,
    IntField,
    DateTimeField,
)
import datetime


def title_case(tag):
    """Normalise a free-form tag: first character upper, the rest lower."""
    tag = (tag or "").strip()
    return tag[:1].upper() + tag[1:].lower()


def normalize_categories(value):
    """
    Single adapter for the two stored category shapes.

    Older records hold one string, current ones a list of strings; both come
    out as a list with blanks dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return [v for v in value if isinstance(v, str) and v.strip()]


class CategoryField(ListField):
    """List of tags that also reads the legacy single-string form."""

    def __init__(self, **kwargs):
        super().__init__(StringField(), **kwargs)

    def to_python(self, value):
        return super().to_python(normalize_categories(value))


class Prompt(Document):
    title = StringField(required=True)
    prompt = StringField(required=True)
    image_url = StringField(required=True, db_field="imageUrl")
    cloudinary_id = StringField(db_field="cloudinaryId")
    category = CategoryField(required=True)

    # Like ledger; only prompts.likes mutates these two
    likes = IntField(default=0)
    liked_by = ListField(StringField(), default=list, db_field="likedBy")

    created_by = StringField(db_field="createdBy")
    creator_name = StringField(db_field="creatorName")
    creator_image = StringField(db_field="creatorImage")

    created_at = DateTimeField(default=datetime.datetime.utcnow, db_field="createdAt")
    updated_at = DateTimeField(default=datetime.datetime.utcnow, db_field="updatedAt")

    meta = {
        "collection": "prompts",
        "indexes": [
            "-created_at",
            "created_by",
            "category",
            {"fields": ["-likes", "-created_at"]},
        ],
        "strict": False,  # Allow extra fields written by older app versions
        "allow_inheritance": False,
    }

    def save(self, *args, **kwargs):
        self.updated_at = datetime.datetime.utcnow()
        return super().save(*args, **kwargs)

    def to_dict(self):
        return {
            "_id": str(self.id),
            "title": self.title,
            "prompt": self.prompt,
            "imageUrl": self.image_url,
            "cloudinaryId": self.cloudinary_id,
            "category": list(self.category or []),
            "likes": max(0, self.likes or 0),
            "likedBy": list(self.liked_by or []),
            "createdBy": self.created_by,
            "creatorName": self.creator_name,
            "creatorImage": self.creator_image or None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self):
        return self.title
