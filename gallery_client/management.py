"""
Admin/owner management lists: load everything, filter locally, page by 10,
edit through a pre-filled form and delete after confirmation.
"""
import logging

from .api import APIError
from .pagination import MANAGEMENT_PAGE_SIZE, clamp_page, paginate, total_pages

logger = logging.getLogger(__name__)


def _categories_of(item):
    category = item.get("category")
    if isinstance(category, str):
        return [category]
    return list(category or [])


class _ManagementController:
    kind = "item"

    def __init__(self, api, confirm=None, notify=None, page_size=MANAGEMENT_PAGE_SIZE):
        self.api = api
        self.confirm = confirm or (lambda message: False)
        self.notify = notify or (lambda message: logger.info(message))
        self.page_size = page_size
        self.items = []
        self.search = ""
        self.page = 1
        self.loading = False

    def _fetch(self):
        raise NotImplementedError

    def _matches(self, item, needle):
        raise NotImplementedError

    def load(self):
        self.loading = True
        try:
            self.items = self._fetch() or []
        except APIError as e:
            logger.error(f"Failed to load {self.kind}s: {e.message}")
            self.notify(f"Failed to load {self.kind}s")
        finally:
            self.loading = False
        return self.items

    def set_search(self, text):
        self.search = text or ""
        self.page = 1

    @property
    def filtered(self):
        needle = self.search.strip().lower()
        if not needle:
            return list(self.items)
        return [item for item in self.items if self._matches(item, needle)]

    @property
    def total_pages(self):
        return max(1, total_pages(len(self.filtered), self.page_size))

    @property
    def visible_items(self):
        return paginate(self.filtered, self.page, self.page_size)

    def go_to_page(self, page):
        self.page = clamp_page(page, self.total_pages)
        return self.page

    def _replace(self, updated):
        for index, item in enumerate(self.items):
            if item.get("_id") == updated.get("_id"):
                self.items[index] = updated

    def delete(self, item):
        """Ask first; drop the item locally only after the server confirmed."""
        if not self.confirm(f"Are you sure you want to delete this {self.kind}?"):
            return False
        try:
            self._delete(item)
        except APIError as e:
            logger.error(f"Failed to delete {self.kind} {item.get('_id')}: {e.message}")
            self.notify(f"Failed to delete {self.kind}")
            return False
        self.items = [i for i in self.items if i.get("_id") != item.get("_id")]
        self.page = clamp_page(self.page, self.total_pages)
        self.notify(f"{self.kind.capitalize()} deleted")
        return True


class PromptManager(_ManagementController):
    kind = "prompt"

    def __init__(self, api, admin=True, **kwargs):
        super().__init__(api, **kwargs)
        self.admin = admin

    def _fetch(self):
        if self.admin:
            return self.api.list_all_prompts()
        return self.api.fetch_prompts()

    def _matches(self, item, needle):
        title = (item.get("title") or "").lower()
        return needle in title or any(needle in (c or "").lower() for c in _categories_of(item))

    def begin_edit(self, item):
        return {
            "title": item.get("title") or "",
            "prompt": item.get("prompt") or "",
            "category": _categories_of(item),
        }

    def submit_edit(self, item, form, image=None):
        """Send the form (all or some fields) and swap in the server's copy."""
        try:
            updated = self.api.update_prompt(item["_id"], form, image=image, admin=self.admin)
        except APIError as e:
            logger.error(f"Failed to update prompt {item.get('_id')}: {e.message}")
            self.notify("Failed to update prompt")
            return None
        self._replace(updated)
        self.notify("Prompt updated")
        return updated

    def _delete(self, item):
        self.api.delete_prompt(item["_id"], admin=self.admin)


class ProfileManager(_ManagementController):
    kind = "profile"

    def _fetch(self):
        return self.api.list_users()

    def _matches(self, item, needle):
        return needle in (item.get("name") or "").lower() or needle in (item.get("email") or "").lower()

    def begin_edit(self, item):
        return {"name": item.get("name") or "", "bio": item.get("bio") or ""}

    def submit_edit(self, item, form):
        try:
            updated = self.api.update_user(item["_id"], form)
        except APIError as e:
            logger.error(f"Failed to update profile {item.get('_id')}: {e.message}")
            self.notify("Failed to update profile")
            return None
        self._replace(updated)
        self.notify("Profile updated")
        return updated

    def _delete(self, item):
        self.api.delete_user(item["_id"])
