"""Static browsing site generation for indexed archive items."""

from .generator import SiteGenerator
from .groups import group_by_genre, group_by_identifier, group_by_speaker, index_views

__all__ = [
    "SiteGenerator",
    "group_by_genre",
    "group_by_identifier",
    "group_by_speaker",
    "index_views",
]
