import json

from django.test.client import BOUNDARY, MULTIPART_CONTENT, encode_multipart

from prompts.models import Prompt
from users.models import User


def test_admin_endpoints_reject_missing_or_bad_tokens(client, auth):
    assert client.get("/api/admin/users/").status_code == 401
    assert client.get("/api/admin/prompts/").status_code == 401

    expired = client.get("/api/admin/users/", **auth(expires_in=-60))
    assert expired.status_code == 401
    assert expired.json()["error"] == "Token expired"

    forged = client.get("/api/admin/users/", **auth(secret="not-the-secret"))
    assert forged.status_code == 401
    assert forged.json()["error"] == "Invalid token"


def test_list_users(client, auth):
    User.upsert_profile("ada@example.com", name="Ada")
    User.upsert_profile("grace@example.com", name="Grace")

    response = client.get("/api/admin/users/", **auth())

    assert response.status_code == 200
    assert sorted(u["email"] for u in response.json()) == ["ada@example.com", "grace@example.com"]


def test_update_user_partially(client, auth):
    user = User.upsert_profile("ada@example.com", name="Ada", bio="Old bio")

    response = client.put(f"/api/admin/users/{user.id}/", data=json.dumps({"name": "Ada L"}),
                          content_type="application/json", **auth())

    assert response.status_code == 200
    assert response.json()["name"] == "Ada L"
    assert response.json()["bio"] == "Old bio"


def test_update_missing_user(client, auth):
    response = client.put("/api/admin/users/5f1d7f1d7f1d7f1d7f1d7f1d/", data="{}",
                          content_type="application/json", **auth())
    assert response.status_code == 404


def test_deleting_a_user_cascades_to_their_prompts(client, fake_cloudinary, auth, make_prompt):
    user = User.upsert_profile("ada@example.com", name="Ada")
    mine = [make_prompt("Ada 1", created_by="ada@example.com"), make_prompt("Ada 2", created_by="ada@example.com")]
    other = make_prompt("Grace 1", created_by="grace@example.com")

    response = client.delete(f"/api/admin/users/{user.id}/", **auth())

    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedPrompts": 2}
    assert User.objects.count() == 0
    assert [p.title for p in Prompt.objects] == ["Grace 1"]
    assert sorted(fake_cloudinary["destroy"]) == sorted(p.cloudinary_id for p in mine)
    assert other.cloudinary_id not in fake_cloudinary["destroy"]


def test_admin_can_edit_and_delete_any_prompt(client, fake_cloudinary, auth, make_prompt):
    prompt = make_prompt("Someone's", created_by="someone@example.com")
    admin = auth("admin@example.com", "Admin")

    update = client.put(f"/api/admin/prompts/{prompt.id}/",
                        data=encode_multipart(BOUNDARY, {"prompt": "Edited text"}),
                        content_type=MULTIPART_CONTENT, **admin)
    assert update.status_code == 200
    assert update.json()["prompt"] == "Edited text"
    assert update.json()["title"] == "Someone's"

    delete = client.delete(f"/api/admin/prompts/{prompt.id}/", **admin)
    assert delete.status_code == 200
    assert Prompt.objects.count() == 0
    assert fake_cloudinary["destroy"] == [prompt.cloudinary_id]


def test_admin_list_uses_gallery_query(client, auth, make_prompt):
    make_prompt("Cosmic Ocean", category=["Space"])
    make_prompt("Forest", category=["Nature"])

    response = client.get("/api/admin/prompts/", {"category": "space"}, **auth())

    assert [p["title"] for p in response.json()] == ["Cosmic Ocean"]


def test_admin_can_edit_legacy_record_without_like_fields(client, fake_cloudinary, auth):
    inserted = Prompt._get_collection().insert_one({
        "title": "Legacy",
        "prompt": "old",
        "imageUrl": "https://example.com/a.png",
        "category": "Nature",
        "createdBy": "someone@example.com",
    })

    response = client.put(f"/api/admin/prompts/{inserted.inserted_id}/",
                          data=encode_multipart(BOUNDARY, {"title": "Legacy, edited"}),
                          content_type=MULTIPART_CONTENT, **auth("admin@example.com"))

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Legacy, edited"
    assert body["likes"] == 0
    assert body["likedBy"] == []
    assert body["category"] == ["Nature"]


def test_admin_failures_use_the_generic_error_body(client, auth, monkeypatch):
    from prompts import admin_views

    def broken(**kwargs):
        raise RuntimeError("store down")

    monkeypatch.setattr(admin_views, "find_prompts", broken)

    response = client.get("/api/admin/prompts/", **auth())

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch prompts"}


def test_admin_user_edit_rejects_non_object_body(client, auth):
    user = User.upsert_profile("ada@example.com", name="Ada")

    response = client.put(f"/api/admin/users/{user.id}/", data="[]", content_type="application/json", **auth())

    assert response.status_code == 400
    assert User.objects.get(id=user.id).name == "Ada"
