"""
HTTP client for the prompt gallery API.
"""
import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class APIError(Exception):
    """Non-2xx answer or transport failure. ``status`` is None for the latter."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status


class GalleryAPI:
    def __init__(self, base_url, session_token=None, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        if session_token:
            self.session.headers["Authorization"] = f"Bearer {session_token}"

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIError("Network error. Please check your connection and try again.") from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            message = message or response.reason or f"HTTP {response.status_code}"
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise APIError(message, status=response.status_code)

        if not response.content:
            return None
        return response.json()

    # ---- Gallery ----
    def fetch_prompts(self, search="", category="All"):
        params = {}
        if search:
            params["search"] = search
        if category and category != "All":
            params["category"] = category
        return self._request("GET", "/api/prompts/", params=params)

    def get_prompt(self, prompt_id):
        return self._request("GET", f"/api/prompts/{prompt_id}/")

    def creator_prompts(self, email):
        return self._request("GET", "/api/prompts/creator/", params={"email": email})

    def like(self, prompt_id, identity):
        return self._request("POST", f"/api/prompts/{prompt_id}/like/", json={"identity": identity})

    def unlike(self, prompt_id, identity):
        return self._request("DELETE", f"/api/prompts/{prompt_id}/like/", json={"identity": identity})

    # ---- Prompt CRUD (owner or admin) ----
    def _prompt_form(self, fields, image):
        data = [(key, value) for key, value in fields.items() if key != "category" and value is not None]
        for cat in fields.get("category") or []:
            data.append(("category", cat))
        files = {"image": image} if image is not None else None
        return data, files

    def create_prompt(self, title, prompt, categories, image, admin=False):
        data, files = self._prompt_form({"title": title, "prompt": prompt, "category": categories}, image)
        path = "/api/admin/prompts/" if admin else "/api/prompts/"
        return self._request("POST", path, data=data, files=files)

    def update_prompt(self, prompt_id, fields, image=None, admin=False):
        data, files = self._prompt_form(fields, image)
        path = f"/api/admin/prompts/{prompt_id}/" if admin else f"/api/prompts/{prompt_id}/"
        return self._request("PUT", path, data=data, files=files)

    def delete_prompt(self, prompt_id, admin=False):
        path = f"/api/admin/prompts/{prompt_id}/" if admin else f"/api/prompts/{prompt_id}/"
        return self._request("DELETE", path)

    def list_all_prompts(self):
        return self._request("GET", "/api/admin/prompts/")

    # ---- Profiles ----
    def get_profile(self, email):
        return self._request("GET", "/api/user/profile/", params={"email": email})

    def save_profile(self, name, bio="", image="", email=None):
        body = {"name": name, "bio": bio, "image": image}
        if email:
            body["email"] = email
        return self._request("PUT", "/api/user/profile/", json=body)

    def get_stats(self, email):
        return self._request("GET", "/api/user/stats/", params={"email": email})

    def upload_image(self, file):
        return self._request("POST", "/api/upload/", files={"file": file})

    # ---- Admin: users ----
    def list_users(self):
        return self._request("GET", "/api/admin/users/")

    def update_user(self, user_id, fields):
        return self._request("PUT", f"/api/admin/users/{user_id}/", json=fields)

    def delete_user(self, user_id):
        return self._request("DELETE", f"/api/admin/users/{user_id}/")
