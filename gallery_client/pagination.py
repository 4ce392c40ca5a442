"""Client-side paging over a fully fetched result list."""
import math

GALLERY_PAGE_SIZE = 20
MANAGEMENT_PAGE_SIZE = 10
PAGE_WINDOW = 5


def total_pages(count, page_size):
    return math.ceil(count / page_size) if count > 0 else 0


def clamp_page(page, pages):
    """Keep ``page`` inside ``[1, pages]``; an empty list still sits on page 1."""
    return min(max(1, page), max(1, pages))


def paginate(items, page, page_size):
    start = (page - 1) * page_size
    return items[start:start + page_size]


def page_window(current, pages, size=PAGE_WINDOW):
    """
    Page numbers to show as buttons: at most ``size`` of them, centred on
    ``current`` and shifted to stay inside ``[1, pages]``.

    >>> page_window(7, 10)
    [5, 6, 7, 8, 9]
    >>> page_window(1, 10)
    [1, 2, 3, 4, 5]
    >>> page_window(10, 10)
    [6, 7, 8, 9, 10]
    """
    if pages <= 0:
        return []
    current = clamp_page(current, pages)
    start = max(1, current - size // 2)
    end = min(pages, start + size - 1)
    start = max(1, end - size + 1)
    return list(range(start, end + 1))
