"""Python client for the prompt gallery: API wrapper plus the gallery and management controllers."""
from .api import APIError, GalleryAPI
from .controller import GalleryController, GalleryState
from .management import PromptManager, ProfileManager

__all__ = [
    "APIError",
    "GalleryAPI",
    "GalleryController",
    "GalleryState",
    "PromptManager",
    "ProfileManager",
]
