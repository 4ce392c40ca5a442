"""
Gallery query service: turns a (search, category) pair into a store query
and a sort order. Always returns the full matching set.
"""
import logging

from django.conf import settings

from .models import Prompt, title_case

logger = logging.getLogger(__name__)

ALL = "All"
MOST_LIKED = "Most Liked"


def find_prompts(search="", category=None):
    """
    Prompts whose title contains ``search`` (case-insensitive substring),
    filtered by ``category``.

    ``category`` is ``"All"``/empty for no filter, ``"Most Liked"`` to sort by
    like count instead of filtering, or any tag (normalised to Title Case).
    """
    search = (search or "").strip()[:settings.GALLERY_SEARCH_MAX_LENGTH]
    category = (category or "").strip()

    query = {}
    if search:
        query["title__icontains"] = search

    if category == MOST_LIKED:
        ordering = ("-likes", "-created_at")
    else:
        ordering = ("-created_at",)
        if category and category != ALL:
            # Matches list members and legacy single-string values alike
            query["category"] = title_case(category)

    logger.debug(f"Gallery query {query} ordered by {ordering}")
    return list(Prompt.objects(**query).order_by(*ordering))


def find_creator_prompts(email):
    """Every prompt created by ``email``, newest first."""
    return list(Prompt.objects(created_by=email).order_by("-created_at"))
