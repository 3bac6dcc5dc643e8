"""Formatters for recipe feed and detail output (JSON and Markdown)."""

import json
import math
from typing import Any, Dict, List, Optional, Sequence

from recipeverse.data_layer.models import (
    HealthAssessment,
    NutritionTotals,
    RankedRecipe,
    Recipe,
)
from recipeverse.discovery.filter_engine import DiscoveryResult
from recipeverse.discovery.profile import DEFAULT_DISPLAY_STARS

CARD_DESCRIPTION_LIMIT = 60


def _unwrap(item: DiscoveryResult) -> Recipe:
    return item.recipe if isinstance(item, RankedRecipe) else item


def display_stars(recipe: Recipe) -> float:
    """Star value shown on cards; unrated recipes show 5.0."""
    return recipe.stars or DEFAULT_DISPLAY_STARS


def format_stars(stars: float, icon: str = "⭐") -> str:
    """Format stars as repeated icons plus the one-decimal value.

    Args:
        stars: Star rating
        icon: Icon repeated once per (rounded) star

    Returns:
        Formatted string like "⭐⭐⭐⭐ 4.2"
    """
    count = max(0, int(math.floor(stars + 0.5)))
    return f"{icon * count} {stars:.1f}"


def truncate_description(description: Optional[str], limit: int = CARD_DESCRIPTION_LIMIT) -> str:
    """Shorten a description for a card, adding "..." when cut."""
    if not description:
        return ""
    if len(description) > limit:
        return description[:limit] + "..."
    return description


def format_veg_tag(recipe: Recipe) -> str:
    return "🌱 Veg" if recipe.veg else "🍗 Non-Veg"


def format_recipe_card(item: DiscoveryResult) -> str:
    """Format a feed entry as a short Markdown card.

    Args:
        item: Recipe or RankedRecipe from the filter engine

    Returns:
        Markdown block with title, stars, description, tag and match text
    """
    recipe = _unwrap(item)
    lines = [
        f"### {recipe.title}",
        format_stars(display_stars(recipe)),
    ]
    description = truncate_description(recipe.description)
    if description:
        lines.append(description)
    if isinstance(item, RankedRecipe) and item.match is not None:
        lines.append(f"🧺 Matches: {item.match_text}")
    lines.append(format_veg_tag(recipe))
    return "\n".join(lines)


def format_feed_markdown(items: Sequence[DiscoveryResult]) -> str:
    """Format the whole feed, or the empty-feed message."""
    if not items:
        return "No matching recipes found."
    return "\n\n".join(format_recipe_card(item) for item in items)


def format_nutrition_breakdown(nutrition: NutritionTotals, indent: str = "") -> str:
    """Format nutrition totals as a readable breakdown.

    Args:
        nutrition: NutritionTotals object
        indent: Optional indentation prefix

    Returns:
        Formatted string with calories and macros
    """
    lines = [
        f"{indent}**Calories:** {nutrition.calories} kcal",
        f"{indent}**Protein:** {nutrition.protein:.0f} g",
        f"{indent}**Carbs:** {nutrition.carbs:.0f} g",
        f"{indent}**Fat:** {nutrition.fat:.0f} g"
    ]
    return "\n".join(lines)


def format_health(health: HealthAssessment) -> str:
    return f"**Health Score:** {health.score:.1f}/10 ({health.reason})"


def format_recipe_markdown(recipe: Recipe,
                           nutrition: NutritionTotals,
                           health: HealthAssessment,
                           community_rating: Optional[float] = None,
                           your_rating: Optional[float] = None) -> str:
    """Format a recipe detail view as Markdown.

    Args:
        recipe: Recipe to render
        nutrition: Estimated nutrition for the recipe
        health: Health assessment derived from the nutrition
        community_rating: Rating to show (default: card star value)
        your_rating: The viewing user's own rating, shown when given

    Returns:
        Formatted Markdown string
    """
    lines = []

    lines.append(f"# {recipe.title}\n")
    lines.append("🌱 Vegetarian" if recipe.veg else "🍗 Non-Vegetarian")
    if recipe.description:
        lines.append(f"\n{recipe.description}")
    rating = community_rating if community_rating is not None else display_stars(recipe)
    lines.append(f"\n**Community Rating:** {format_stars(rating, icon='★')}")
    if your_rating is not None:
        lines.append(f"**Your Rating:** {format_stars(your_rating, icon='★')}")
    lines.append(f"**Posted by:** {recipe.display_name or 'Anonymous Chef'}")
    lines.append("")

    lines.append("## Ingredients")
    if recipe.ingredients:
        for ingredient in recipe.ingredients:
            lines.append(f"- {ingredient}")
    else:
        lines.append("Ingredients list not provided.")
    lines.append("")

    lines.append("## Preparation Steps")
    if recipe.steps:
        for step_idx, step in enumerate(recipe.steps, 1):
            lines.append(f"{step_idx}. {step}")
    else:
        lines.append("Preparation steps not provided.")
    lines.append("")

    lines.append("## Nutrition (Estimated)")
    lines.append(format_nutrition_breakdown(nutrition))
    lines.append("")
    lines.append(format_health(health))
    lines.append("")
    lines.append("*Estimated values for academic use*")

    return "\n".join(lines)


def format_recipe_json(item: DiscoveryResult) -> Dict[str, Any]:
    """Format a feed entry as a JSON-ready dictionary (camelCase like the recipe API)."""
    recipe = _unwrap(item)
    data = {
        "id": recipe.id,
        "title": recipe.title,
        "description": recipe.description,
        "ingredients": list(recipe.ingredients),
        "steps": list(recipe.steps),
        "veg": recipe.veg,
        "stars": recipe.stars,
        "imageUrl": recipe.image_url,
        "authorID": recipe.author_id,
    }
    if isinstance(item, RankedRecipe):
        data["matchScore"] = item.match_score
        data["matchText"] = item.match_text
    return data


def format_nutrition_json(nutrition: NutritionTotals, health: HealthAssessment) -> Dict[str, Any]:
    return {
        "nutrition": {
            "calories": nutrition.calories,
            "protein": nutrition.protein,
            "carbs": nutrition.carbs,
            "fat": nutrition.fat,
        },
        "health": {
            "score": health.score,
            "reason": health.reason,
        },
    }


def format_feed_json(items: Sequence[DiscoveryResult]) -> List[Dict[str, Any]]:
    return [format_recipe_json(item) for item in items]


def format_feed_json_string(items: Sequence[DiscoveryResult], indent: int = 2) -> str:
    """Format the feed as a JSON string.

    Args:
        items: Feed entries from the filter engine
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_feed_json(items), indent=indent, ensure_ascii=False)
