"""Discovery module for filtering, searching and ranking recipes."""

from .filter_engine import RecipeFilterEngine, TOP_RATED_MIN_STARS
from .profile import (
    ProfileSummary,
    average_rating,
    build_profile,
    favorite_recipes,
    recipes_by_author,
    toggle_favorite,
    user_rating,
    validate_rating,
)

__all__ = [
    "RecipeFilterEngine",
    "TOP_RATED_MIN_STARS",
    "ProfileSummary",
    "average_rating",
    "build_profile",
    "favorite_recipes",
    "recipes_by_author",
    "toggle_favorite",
    "user_rating",
    "validate_rating",
]
