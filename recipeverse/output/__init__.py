"""Output formatting for recipe feeds and detail views."""

from recipeverse.output.formatters import (
    format_feed_json,
    format_feed_markdown,
    format_nutrition_breakdown,
    format_recipe_card,
    format_recipe_json,
    format_recipe_markdown,
)

__all__ = [
    "format_feed_json",
    "format_feed_markdown",
    "format_nutrition_breakdown",
    "format_recipe_card",
    "format_recipe_json",
    "format_recipe_markdown",
]
