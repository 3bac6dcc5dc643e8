"""Profile helpers: a user's posted recipes, favorites and ratings."""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from recipeverse.data_layer.models import Recipe

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_DISPLAY_STARS = 5.0


@dataclass
class ProfileSummary:
    """A user's posted and favorited recipes."""

    user_id: str
    posted: List[Recipe] = field(default_factory=list)
    favorites: List[Recipe] = field(default_factory=list)

    @property
    def posted_count(self) -> int:
        return len(self.posted)

    @property
    def favorite_count(self) -> int:
        return len(self.favorites)


def recipes_by_author(recipes: Sequence[Recipe], user_id: str) -> List[Recipe]:
    """Get the recipes posted by a user, in collection order."""
    return [r for r in recipes if r.author_id == user_id]


def favorite_recipes(recipes: Sequence[Recipe], favorite_ids: Iterable[str]) -> List[Recipe]:
    """Get the user's favorite recipes, in collection order.

    Ids that match no recipe are ignored.
    """
    wanted = set(favorite_ids)
    return [r for r in recipes if r.id in wanted]


def toggle_favorite(favorite_ids: Sequence[str], recipe_id: str) -> Tuple[List[str], bool]:
    """Add or remove a recipe from a favorites list.

    Args:
        favorite_ids: Current favorite recipe ids (not modified)
        recipe_id: Recipe to toggle

    Returns:
        Tuple of (new favorites list, whether the recipe is now a favorite)
    """
    if recipe_id in favorite_ids:
        return [rid for rid in favorite_ids if rid != recipe_id], False
    return list(favorite_ids) + [recipe_id], True


def build_profile(recipes: Sequence[Recipe], user_id: str,
                  favorite_ids: Iterable[str]) -> ProfileSummary:
    return ProfileSummary(
        user_id=user_id,
        posted=recipes_by_author(recipes, user_id),
        favorites=favorite_recipes(recipes, favorite_ids),
    )


def validate_rating(value: float) -> bool:
    """Check a rating is within the 1-5 star range."""
    return MIN_RATING <= value <= MAX_RATING


def user_rating(recipe: Recipe, user_id: str) -> Optional[float]:
    """Get the rating a user already gave a recipe, if any."""
    rating = recipe.ratings.get(user_id)
    return rating if rating else None


def average_rating(recipe: Recipe) -> float:
    """Community rating for display.

    The recipe service keeps ``stars`` as the running average of every
    rating it has received, so that value is shown as-is; recipes nobody
    has rated show 5.0.
    """
    return recipe.stars or DEFAULT_DISPLAY_STARS
