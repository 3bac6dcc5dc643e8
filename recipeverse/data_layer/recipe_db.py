"""Recipe database for loading recipes from JSON."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from recipeverse.data_layer.exceptions import RecipeNotFoundError, RecipeParseError
from recipeverse.data_layer.models import Recipe

logger = logging.getLogger(__name__)


def split_ingredients(value: Any) -> List[str]:
    """Return ingredients as a list, splitting a comma-separated string.

    Strings are split on commas, trimmed and empties dropped. Lists are
    passed through as strings without trimming.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(item) for item in value]


def split_steps(value: Any) -> List[str]:
    """Return steps as a list, splitting a newline-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [line.strip() for line in value.split("\n") if line.strip()]
    return [str(item) for item in value]


def parse_recipe(recipe_data: Dict[str, Any]) -> Recipe:
    """Parse a single recipe from dictionary data.

    Accepts both the camelCase keys served by the recipe API
    (``imageUrl``, ``authorID``, ``displayName``, ``photoURL``) and
    snake_case keys.

    Args:
        recipe_data: Dictionary containing recipe data

    Returns:
        Recipe object

    Raises:
        RecipeParseError: If ``id`` or ``title`` is missing, or ``stars``
            or ``ratings`` cannot be read as numbers
    """
    for required in ("id", "title"):
        if recipe_data.get(required) in (None, ""):
            raise RecipeParseError(required, recipe_data)

    stars = recipe_data.get("stars")
    if stars is not None:
        try:
            stars = float(stars)
        except (TypeError, ValueError):
            raise RecipeParseError("stars", recipe_data, f"not a number: {stars!r}")

    raw_ratings = recipe_data.get("ratings") or {}
    if not isinstance(raw_ratings, dict):
        raise RecipeParseError("ratings", recipe_data, "expected a mapping of user id to rating")
    try:
        ratings = {str(uid): float(r) for uid, r in raw_ratings.items()}
    except (TypeError, ValueError):
        raise RecipeParseError("ratings", recipe_data, "ratings must be numbers")

    return Recipe(
        id=str(recipe_data["id"]),
        title=str(recipe_data["title"]),
        description=recipe_data.get("description"),
        ingredients=split_ingredients(recipe_data.get("ingredients")),
        steps=split_steps(recipe_data.get("steps")),
        veg=bool(recipe_data.get("veg", False)),
        stars=stars,
        image_url=recipe_data.get("imageUrl", recipe_data.get("image_url")),
        author_id=str(recipe_data.get("authorID", recipe_data.get("author_id", ""))),
        ratings=ratings,
        display_name=recipe_data.get("displayName", recipe_data.get("display_name")),
        email=recipe_data.get("email"),
        photo_url=recipe_data.get("photoURL", recipe_data.get("photo_url")),
    )


def parse_recipes(records: List[Dict[str, Any]]) -> List[Recipe]:
    """Parse many recipe records, skipping (and logging) malformed ones."""
    recipes = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping recipe record that is not an object: %r", record)
            continue
        try:
            recipes.append(parse_recipe(record))
        except RecipeParseError as e:
            logger.warning("Skipping recipe record: %s", e)
    return recipes


class RecipeDB:
    """Database for managing recipes loaded from JSON."""

    def __init__(self, json_path: str):
        """Initialize recipe database from JSON file.

        Args:
            json_path: Path to JSON file containing recipes, either
                ``{"recipes": [...]}`` or a bare list
        """
        self.json_path = Path(json_path)
        self._recipes: List[Recipe] = []
        self._load_recipes()

    def _load_recipes(self):
        """Load recipes from JSON file."""
        with open(self.json_path, "r") as f:
            data = json.load(f)

        if isinstance(data, list):
            records = data
        else:
            records = data.get("recipes", [])
        self._recipes = parse_recipes(records)
        logger.debug("Loaded %d recipes from %s", len(self._recipes), self.json_path)

    def get_all_recipes(self) -> List[Recipe]:
        """Get all recipes in the database.

        Returns:
            List of all Recipe objects
        """
        return self._recipes.copy()

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Get a recipe by its ID.

        Args:
            recipe_id: Unique recipe identifier

        Returns:
            Recipe object if found, None otherwise
        """
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def require_recipe(self, recipe_id: str) -> Recipe:
        """Get a recipe by its ID or raise RecipeNotFoundError."""
        recipe = self.get_recipe_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe
