"""Custom exceptions for the recipe data layer."""
from typing import Optional


class RecipeNotFoundError(Exception):
    """Raised when a recipe id is not present in the recipe source."""

    def __init__(self, recipe_id: str):
        """Initialize exception with recipe id.

        Args:
            recipe_id: Id of the recipe that was not found
        """
        self.recipe_id = recipe_id
        super().__init__(f"Recipe '{recipe_id}' not found")


class RecipeParseError(Exception):
    """Raised when a stored recipe record lacks a required field or has an unusable value."""

    def __init__(self, field_name: str, record: dict, reason: Optional[str] = None):
        self.field_name = field_name
        self.record = record
        self.reason = reason
        if reason:
            super().__init__(f"Recipe record has invalid field '{field_name}': {reason}")
        else:
            super().__init__(f"Recipe record is missing required field '{field_name}'")
