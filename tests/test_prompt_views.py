import json

import cloudinary.uploader
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test.client import BOUNDARY, MULTIPART_CONTENT, encode_multipart

from prompts import views
from prompts.models import Prompt
from users.models import User


def image(name="a.png"):
    return SimpleUploadedFile(name, b"\x89PNG fake image bytes", content_type="image/png")


def multipart_put(client, url, data, **extra):
    return client.put(url, data=encode_multipart(BOUNDARY, data), content_type=MULTIPART_CONTENT, **extra)


def like_body(identity):
    return {"data": json.dumps({"identity": identity}), "content_type": "application/json"}


# =====================
# Gallery listing
# =====================
def test_list_returns_json_array_newest_first(client, make_prompt):
    make_prompt("First", minutes=1)
    make_prompt("Second", minutes=2)

    response = client.get("/api/prompts/")

    assert response.status_code == 200
    body = response.json()
    assert [p["title"] for p in body] == ["Second", "First"]
    assert set(body[0]) >= {"_id", "title", "prompt", "imageUrl", "category", "likes", "likedBy", "createdBy"}


def test_list_applies_search_and_category(client, make_prompt):
    make_prompt("Cosmic Ocean", category=["Space"], likes=1)
    make_prompt("Cosmic Forest", category=["Nature"], likes=4)
    make_prompt("Rainforest", category=["Nature"])

    assert [p["title"] for p in client.get("/api/prompts/", {"search": "cosm"}).json()] == [
        "Cosmic Forest", "Cosmic Ocean"]
    assert [p["title"] for p in client.get("/api/prompts/", {"category": "nature", "search": "forest"}).json()] == [
        "Rainforest", "Cosmic Forest"]
    assert [p["title"] for p in client.get("/api/prompts/", {"category": "Most Liked"}).json()][0] == "Cosmic Forest"


def test_list_store_failure_is_a_500(client, monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("ServerSelectionTimeoutError: localhost:27017")

    monkeypatch.setattr(views, "find_prompts", broken)

    response = client.get("/api/prompts/")

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["error"] == "Failed to fetch prompts"
    assert response.json()["detail"] == "The gallery is temporarily unavailable. Please try again shortly."


def test_detail_and_missing_prompt(client, make_prompt):
    prompt = make_prompt("Cosmic Ocean")

    assert client.get(f"/api/prompts/{prompt.id}/").json()["title"] == "Cosmic Ocean"
    assert client.get("/api/prompts/5f1d7f1d7f1d7f1d7f1d7f1d/").status_code == 404
    assert client.get("/api/prompts/not-an-id/").status_code == 404


def test_creator_listing(client, auth, make_prompt):
    make_prompt("Mine", created_by="me@example.com")
    make_prompt("Theirs", created_by="them@example.com")

    response = client.get("/api/prompts/creator/", {"email": "me@example.com"})
    assert [p["title"] for p in response.json()] == ["Mine"]

    own = client.get("/api/prompts/creator/", **auth("them@example.com"))
    assert [p["title"] for p in own.json()] == ["Theirs"]

    assert client.get("/api/prompts/creator/").status_code == 400
    assert client.get("/api/prompts/creator/", HTTP_AUTHORIZATION="Bearer garbage").status_code == 400


# =====================
# Like / Unlike
# =====================
def test_like_and_unlike_endpoints(client, make_prompt):
    prompt = make_prompt("Cosmic Ocean")
    url = f"/api/prompts/{prompt.id}/like/"

    response = client.post(url, **like_body("user_a"))
    assert response.status_code == 200
    assert response.json() == {"likes": 1, "likedBy": ["user_a"]}

    again = client.post(url, **like_body("user_a"))
    assert again.status_code == 400
    assert again.json()["error"] == "Already liked"

    response = client.delete(url, **like_body("user_a"))
    assert response.status_code == 200
    assert response.json() == {"likes": 0, "likedBy": []}


def test_unlike_is_refused_once_shared(client, make_prompt):
    prompt = make_prompt("Popular", likes=2, liked_by=["user_a", "user_b"])

    response = client.delete(f"/api/prompts/{prompt.id}/like/", **like_body("user_a"))

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot unlike when other people have liked this prompt"


def test_like_requires_identity_and_existing_prompt(client, make_prompt):
    prompt = make_prompt("Cosmic Ocean")

    missing = client.post(f"/api/prompts/{prompt.id}/like/", data="{}", content_type="application/json")
    assert missing.status_code == 400
    assert missing.json()["error"] == "User ID is required"

    legacy_key = client.post(f"/api/prompts/{prompt.id}/like/", data=json.dumps({"userId": "user_a"}),
                             content_type="application/json")
    assert legacy_key.status_code == 200

    gone = client.post("/api/prompts/5f1d7f1d7f1d7f1d7f1d7f1d/like/", **like_body("user_a"))
    assert gone.status_code == 404
    assert gone.json()["error"] == "Prompt not found"


# =====================
# Create
# =====================
def test_create_requires_session(client, fake_cloudinary):
    response = client.post("/api/prompts/", {"title": "T", "prompt": "P", "category": "Nature", "image": image()})

    assert response.status_code == 401
    assert Prompt.objects.count() == 0
    assert fake_cloudinary["upload"] == []


def test_create_stores_title_cased_categories_and_creator(client, fake_cloudinary, auth):
    User.upsert_profile("owner@example.com", name="Stored Name", image="https://example.com/me.png")

    response = client.post("/api/prompts/", {
        "title": " Cosmic Ocean ",
        "prompt": "A whale swimming through nebulae",
        "category": ["space", "OCEAN", "Space"],
        "image": image(),
    }, **auth("owner@example.com", "Session Name"))

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Cosmic Ocean"
    assert body["category"] == ["Space", "Ocean"]
    assert body["likes"] == 0
    assert body["likedBy"] == []
    assert body["createdBy"] == "owner@example.com"
    assert body["creatorName"] == "Stored Name"
    assert body["creatorImage"] == "https://example.com/me.png"
    assert body["imageUrl"].startswith("https://res.cloudinary.com/")
    assert body["cloudinaryId"] == "prompts/img1"
    assert fake_cloudinary["upload"][0]["resource_type"] == "image"


def test_create_falls_back_to_session_name(client, fake_cloudinary, auth):
    response = client.post("/api/prompts/", {
        "title": "T", "prompt": "P", "category": "Nature", "image": image(),
    }, **auth("new@example.com", "Session Name"))

    assert response.status_code == 201
    assert response.json()["creatorName"] == "Session Name"


def test_create_validates_fields(client, fake_cloudinary, auth):
    no_image = client.post("/api/prompts/", {"title": "T", "prompt": "P", "category": "Nature"}, **auth())
    no_category = client.post("/api/prompts/", {"title": "T", "prompt": "P", "image": image()}, **auth())

    for response in (no_image, no_category):
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"
    assert fake_cloudinary["upload"] == []
    assert Prompt.objects.count() == 0


def test_upload_failure_leaves_no_record(client, monkeypatch, auth):
    def failing_upload(file, **options):
        raise Exception("Request timed out")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

    response = client.post("/api/prompts/", {
        "title": "T", "prompt": "P", "category": "Nature", "image": image(),
    }, **auth())

    assert response.status_code == 500
    assert response.json()["error"] == "The image host took too long to answer. Please try again."
    assert Prompt.objects.count() == 0


# =====================
# Owner update / delete
# =====================
def test_owner_partial_update_keeps_other_fields(client, fake_cloudinary, auth, make_prompt):
    prompt = make_prompt("Old title", category=["Nature"], created_by="owner@example.com")

    response = multipart_put(client, f"/api/prompts/{prompt.id}/", {"title": "New title"}, **auth())

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "New title"
    assert body["prompt"] == prompt.prompt
    assert body["category"] == ["Nature"]
    assert body["cloudinaryId"] == prompt.cloudinary_id
    assert fake_cloudinary["upload"] == []
    assert fake_cloudinary["destroy"] == []


def test_replacing_the_image_releases_the_old_one(client, fake_cloudinary, auth, make_prompt):
    prompt = make_prompt("Pic", created_by="owner@example.com")
    old_id = prompt.cloudinary_id

    response = multipart_put(client, f"/api/prompts/{prompt.id}/", {
        "category": ["city", "night"],
        "image": image("new.png"),
    }, **auth())

    assert response.status_code == 200
    assert response.json()["cloudinaryId"] == "prompts/img1"
    assert response.json()["category"] == ["City", "Night"]
    assert fake_cloudinary["destroy"] == [old_id]


def test_non_owner_cannot_update_or_delete(client, fake_cloudinary, auth, make_prompt):
    prompt = make_prompt("Pic", created_by="owner@example.com")
    intruder = auth("intruder@example.com")

    update = multipart_put(client, f"/api/prompts/{prompt.id}/", {"title": "Hijacked"}, **intruder)
    delete = client.delete(f"/api/prompts/{prompt.id}/", **intruder)

    assert update.status_code == 403
    assert delete.status_code == 403
    assert Prompt.objects.get(id=prompt.id).title == "Pic"
    assert fake_cloudinary["destroy"] == []


def test_update_requires_session(client, make_prompt):
    prompt = make_prompt("Pic")

    response = multipart_put(client, f"/api/prompts/{prompt.id}/", {"title": "x"})

    assert response.status_code == 401


def test_owner_delete_releases_image(client, fake_cloudinary, auth, make_prompt):
    prompt = make_prompt("Pic", created_by="owner@example.com")

    response = client.delete(f"/api/prompts/{prompt.id}/", **auth())

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert Prompt.objects.count() == 0
    assert fake_cloudinary["destroy"] == [prompt.cloudinary_id]


def test_owner_can_edit_record_with_drifted_like_count(client, fake_cloudinary, auth, make_prompt):
    prompt = make_prompt("Drifted", likes=-1, created_by="owner@example.com")

    response = multipart_put(client, f"/api/prompts/{prompt.id}/", {"title": "New"}, **auth())

    assert response.status_code == 200
    assert response.json()["title"] == "New"
    assert response.json()["likes"] == 0


def test_like_body_must_be_a_json_object(client, make_prompt):
    prompt = make_prompt("Cosmic Ocean")

    response = client.post(f"/api/prompts/{prompt.id}/like/", data='["user_a"]', content_type="application/json")

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be a JSON object"
