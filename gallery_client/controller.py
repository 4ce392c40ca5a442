"""
Gallery client controller: debounced search / category selection, local
pagination over the fetched result set, the detail view and the like toggle.
"""
import enum
import logging
import threading

from .api import APIError
from .debounce import Debouncer
from .history import DetailView
from .pagination import GALLERY_PAGE_SIZE, clamp_page, page_window, paginate, total_pages

logger = logging.getLogger(__name__)

ALL = "All"
MOST_LIKED = "Most Liked"
SEARCH_DEBOUNCE_SECONDS = 0.5


def category_options(tags):
    """Choices for the category selector: the two sentinels, then the tags."""
    return [ALL, MOST_LIKED] + [t for t in tags if t not in (ALL, MOST_LIKED)]


class GalleryState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"


class GalleryController:
    def __init__(self, api, identity=None, notify=None, page_size=GALLERY_PAGE_SIZE,
                 debounce_seconds=SEARCH_DEBOUNCE_SECONDS, timer_factory=threading.Timer,
                 detail_view=None):
        self.api = api
        self.identity = identity
        self.notify = notify or (lambda message: logger.warning(message))
        self.page_size = page_size

        self.state = GalleryState.IDLE
        self.items = []
        self.page = 1
        self.search = ""
        self.category = ALL

        self.detail = detail_view or DetailView()
        self._lock = threading.RLock()
        # Search text and category share one debounce window
        self._debouncer = Debouncer(debounce_seconds, self.refresh, timer_factory=timer_factory)

    # ---- Querying ----
    def mount(self):
        """First load: unfiltered, not debounced."""
        self.refresh()

    def set_search(self, text):
        with self._lock:
            self.search = text or ""
        self._debouncer.trigger()

    def set_category(self, category):
        with self._lock:
            self.category = category or ALL
        self._debouncer.trigger()

    def refresh(self):
        """Query with the latest search and category; resets to page 1 on success."""
        with self._lock:
            search, category = self.search, self.category
            previous = self.items
            self.state = GalleryState.LOADING
        try:
            items = self.api.fetch_prompts(search=search, category=category) or []
        except APIError as e:
            logger.error(f"Failed to fetch prompts: {e.message}")
            with self._lock:
                self.state = GalleryState.LOADED if previous else GalleryState.EMPTY
            self.notify("Failed to fetch prompts")
            return
        with self._lock:
            self.items = items
            self.page = 1
            self.state = GalleryState.LOADED if items else GalleryState.EMPTY

    def dispose(self):
        self._debouncer.cancel()
        self.detail.close()

    # ---- Pagination ----
    @property
    def total_pages(self):
        return total_pages(len(self.items), self.page_size)

    @property
    def visible_items(self):
        return paginate(self.items, self.page, self.page_size)

    @property
    def page_buttons(self):
        return page_window(self.page, self.total_pages)

    def go_to_page(self, page):
        with self._lock:
            self.page = clamp_page(page, self.total_pages)
        return self.page

    def next_page(self):
        return self.go_to_page(self.page + 1)

    def previous_page(self):
        return self.go_to_page(self.page - 1)

    @property
    def results_label(self):
        if self.state == GalleryState.LOADING:
            return "Loading..."
        count = len(self.items)
        if count:
            return f"{count} result{'s' if count > 1 else ''} found"
        if self.search or self.category != ALL:
            return "No results found"
        return ""

    # ---- Detail view ----
    def open_detail(self, item):
        self.detail.open(item)

    def close_detail(self):
        self.detail.close()

    # ---- Likes ----
    def is_liked(self, item):
        return bool(self.identity) and self.identity in (item.get("likedBy") or [])

    def toggle_like(self, item):
        """Like or unlike ``item`` with this client's token; patches the local copy."""
        if not self.identity:
            return item
        try:
            if self.is_liked(item):
                result = self.api.unlike(item["_id"], self.identity)
            else:
                result = self.api.like(item["_id"], self.identity)
        except APIError as e:
            logger.error(f"Failed to toggle like on {item.get('_id')}: {e.message}")
            self.notify(e.message)
            return item

        with self._lock:
            item["likes"] = result["likes"]
            item["likedBy"] = result["likedBy"]
            for existing in self.items:
                if existing is not item and existing.get("_id") == item["_id"]:
                    existing["likes"] = result["likes"]
                    existing["likedBy"] = result["likedBy"]
        return item
