import datetime
import itertools

import cloudinary.uploader
import jwt
import mongomock
import pytest
from django.conf import settings
from mongoengine import connect, disconnect

from prompts.models import Prompt
from users.models import User


@pytest.fixture(scope="session", autouse=True)
def mongo_connection():
    """Swap the configured MongoDB for an in-memory mongomock client."""
    disconnect()
    connect("promptgallery_test", host="mongodb://localhost", mongo_client_class=mongomock.MongoClient)
    yield
    disconnect()


@pytest.fixture(autouse=True)
def clean_collections():
    yield
    Prompt.drop_collection()
    User.drop_collection()


def make_token(email, name="Test User", expires_in=3600, secret=None):
    payload = {
        "email": email,
        "name": name,
        "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret or settings.SESSION_SECRET, algorithm="HS256")


@pytest.fixture
def auth():
    """auth("a@b.c") -> extra kwargs carrying a Bearer session token for the test client."""
    def _auth(email="owner@example.com", name="Owner", **kwargs):
        return {"HTTP_AUTHORIZATION": f"Bearer {make_token(email, name, **kwargs)}"}
    return _auth


@pytest.fixture
def fake_cloudinary(monkeypatch):
    """Replace Cloudinary upload/destroy; records what was called."""
    calls = {"upload": [], "destroy": []}
    counter = itertools.count(1)

    def upload(file, **options):
        n = next(counter)
        calls["upload"].append(options)
        return {
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/prompts/img{n}.png",
            "public_id": f"prompts/img{n}",
        }

    def destroy(public_id, **options):
        calls["destroy"].append(public_id)
        return {"result": "ok"}

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", destroy)
    return calls


@pytest.fixture
def make_prompt():
    base = datetime.datetime(2024, 1, 1, 12, 0, 0)
    counter = itertools.count(1)

    def _make(title="Untitled", category=("Nature",), likes=0, liked_by=None, created_by="owner@example.com",
              minutes=None, **extra):
        n = next(counter)
        created_at = base + datetime.timedelta(minutes=n if minutes is None else minutes)
        prompt = Prompt(
            title=title,
            prompt=extra.pop("prompt", f"Prompt text for {title}"),
            image_url=extra.pop("image_url", f"https://res.cloudinary.com/demo/image/upload/seed{n}.png"),
            cloudinary_id=extra.pop("cloudinary_id", f"prompts/seed{n}"),
            category=list(category),
            likes=likes,
            liked_by=list(liked_by or []),
            created_by=created_by,
            creator_name=extra.pop("creator_name", "Owner"),
            created_at=created_at,
            **extra
        )
        prompt.save()
        return prompt

    return _make
