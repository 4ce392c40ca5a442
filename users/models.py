from mongoengine import (
    Document,
    StringField,
    EmailField,
    BooleanField,
    DateTimeField,
)
import datetime


class User(Document):
    """Public profile of a signed-in user, keyed by email."""
    email = EmailField(required=True, unique=True)
    name = StringField(default='')
    image = StringField(default='')  # avatar URL
    bio = StringField(default='')
    profile_complete = BooleanField(default=False, db_field="profileComplete")

    created_at = DateTimeField(default=datetime.datetime.utcnow, db_field="createdAt")
    updated_at = DateTimeField(default=datetime.datetime.utcnow, db_field="updatedAt")

    def save(self, *args, **kwargs):
        # Update updated_at timestamp
        self.updated_at = datetime.datetime.utcnow()
        return super().save(*args, **kwargs)

    @classmethod
    def upsert_profile(cls, email, name, bio='', image=''):
        """Create or update the profile for ``email`` in one atomic call."""
        now = datetime.datetime.utcnow()
        return cls.objects(email=email).modify(
            upsert=True,
            new=True,
            set__name=name or '',
            set__bio=bio or '',
            set__image=image or '',
            set__profile_complete=True,
            set__updated_at=now,
            set_on_insert__created_at=now,
        )

    def to_dict(self):
        return {
            "_id": str(self.id),
            "email": self.email,
            "name": self.name or '',
            "image": self.image or '',
            "bio": self.bio or '',
            "profileComplete": bool(self.profile_complete),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    meta = {
        "collection": "users",
        "indexes": ["-created_at"],
        "strict": False,  # Allow extra fields written by the identity provider adapter
        "allow_inheritance": False
    }

    def __str__(self):
        return self.email
