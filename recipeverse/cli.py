#!/usr/bin/env python3
"""Command-line interface for RecipeVerse recipe discovery."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from recipeverse.data_layer.config import DiscoveryConfig, DiscoveryConfigLoader
from recipeverse.data_layer.exceptions import RecipeNotFoundError
from recipeverse.data_layer.models import (
    Category,
    EmptyIngredientPolicy,
    FilterState,
    Recipe,
    SearchMode,
)
from recipeverse.data_layer.recipe_api import RecipeAPIClient, RecipeAPIError
from recipeverse.data_layer.recipe_db import RecipeDB
from recipeverse.discovery.filter_engine import RecipeFilterEngine
from recipeverse.discovery.profile import (
    MAX_RATING,
    MIN_RATING,
    average_rating,
    user_rating,
    validate_rating,
)
from recipeverse.nutrition.estimator import NutritionEstimator
from recipeverse.output.formatters import (
    format_feed_json_string,
    format_feed_markdown,
    format_health,
    format_nutrition_breakdown,
    format_recipe_markdown,
    format_stars,
)
from recipeverse.scoring.ingredient_matcher import IngredientMatcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse, search and rank shared recipes"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/discovery.yaml",
        help="Path to discovery config YAML (default: config/discovery.yaml, optional)"
    )
    parser.add_argument(
        "--recipes",
        type=str,
        help="Path to recipes JSON file (overrides config)"
    )
    parser.add_argument(
        "--api-url",
        type=str,
        help="Recipe API base URL; recipes are fetched remotely when set"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Filter, search and rank recipes")
    search.add_argument(
        "--category",
        choices=[c.value for c in Category],
        help="Category filter (default: from config, usually 'all')"
    )
    search.add_argument("--search", default="", help="Free-text search on title and description")
    search.add_argument("--ingredients", default="", help="Comma-separated ingredients you have")
    search.add_argument(
        "--mode",
        choices=[m.value for m in SearchMode],
        help="Search mode; by default whichever of --search/--ingredients is given runs"
    )
    search.add_argument(
        "--empty-policy",
        choices=[p.value for p in EmptyIngredientPolicy],
        help="How ingredient ranking treats recipes without ingredients"
    )
    search.add_argument(
        "--output",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json"
    )

    show = subparsers.add_parser("show", help="Show a recipe with estimated nutrition")
    show.add_argument("recipe_id", help="Recipe id")
    show.add_argument("--user", help="User id; shows that user's own rating")

    rate = subparsers.add_parser("rate", help="Rate a recipe through the recipe API")
    rate.add_argument("recipe_id", help="Recipe id")
    rate.add_argument("--user", required=True, help="Id of the rating user")
    rate.add_argument("--rating", type=float, required=True,
                      help=f"Stars from {MIN_RATING} to {MAX_RATING}")

    nutrition = subparsers.add_parser("nutrition", help="Estimate nutrition for ingredients")
    nutrition.add_argument("ingredients", nargs="+", help="Ingredient names")

    return parser


def load_config(args: argparse.Namespace) -> DiscoveryConfig:
    """Load config from file (if present) and apply command-line overrides."""
    config_path = Path(args.config)
    if config_path.exists():
        print(f"Loading config from {config_path}...", file=sys.stderr)
        config = DiscoveryConfigLoader(str(config_path)).load()
    else:
        config = DiscoveryConfig()

    if args.recipes:
        config.recipes_path = args.recipes
    if args.api_url:
        config.api_base_url = args.api_url
    return config


def load_recipes(config: DiscoveryConfig) -> List[Recipe]:
    if config.api_base_url:
        print(f"Fetching recipes from {config.api_base_url}...", file=sys.stderr)
        client = RecipeAPIClient(config.api_base_url, timeout=config.api_timeout_seconds)
        return client.list_recipes()

    recipes_path = Path(config.recipes_path)
    if not recipes_path.exists():
        raise FileNotFoundError(f"Recipes file not found: {recipes_path}")
    print(f"Loading recipes from {recipes_path}...", file=sys.stderr)
    return RecipeDB(str(recipes_path)).get_all_recipes()


def run_search(args: argparse.Namespace, config: DiscoveryConfig) -> None:
    recipes = load_recipes(config)
    print(f"Found {len(recipes)} recipes", file=sys.stderr)

    policy = EmptyIngredientPolicy(args.empty_policy) if args.empty_policy else config.empty_ingredient_policy
    state = FilterState(
        category=Category(args.category) if args.category else config.default_category,
        search_text=args.search,
        ingredient_query=IngredientMatcher.parse_query(args.ingredients) if args.ingredients else None,
        mode=SearchMode(args.mode) if args.mode else None,
    )

    results = RecipeFilterEngine(empty_ingredient_policy=policy).apply(recipes, state)

    if args.output == "json":
        print(format_feed_json_string(results))
    else:
        print(format_feed_markdown(results))


def run_show(args: argparse.Namespace, config: DiscoveryConfig) -> None:
    if config.api_base_url:
        client = RecipeAPIClient(config.api_base_url, timeout=config.api_timeout_seconds)
        recipe = client.get_recipe(args.recipe_id)
    else:
        recipe = next((r for r in load_recipes(config) if r.id == args.recipe_id), None)
        if recipe is None:
            raise RecipeNotFoundError(args.recipe_id)

    totals, health = NutritionEstimator().assess_recipe(recipe)
    print(format_recipe_markdown(
        recipe, totals, health,
        community_rating=average_rating(recipe),
        your_rating=user_rating(recipe, args.user) if args.user else None,
    ))


def run_rate(args: argparse.Namespace, config: DiscoveryConfig) -> None:
    if not validate_rating(args.rating):
        raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {args.rating}")
    if not config.api_base_url:
        raise ValueError("Rating requires a recipe API; pass --api-url or set api_base_url")

    client = RecipeAPIClient(config.api_base_url, timeout=config.api_timeout_seconds)
    print(f"Submitting rating {args.rating:.1f} for {args.recipe_id}...", file=sys.stderr)
    client.rate_recipe(args.recipe_id, args.user, args.rating)

    recipe = client.get_recipe(args.recipe_id)
    print(f"Rated {args.rating:.1f}! Community rating is now {format_stars(average_rating(recipe))}")


def run_nutrition(args: argparse.Namespace) -> None:
    totals = NutritionEstimator.estimate(args.ingredients)
    print(format_nutrition_breakdown(totals))
    print(format_health(NutritionEstimator.assess_health(totals)))


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid config: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "search":
            run_search(args, config)
        elif args.command == "show":
            run_show(args, config)
        elif args.command == "rate":
            run_rate(args, config)
        else:
            run_nutrition(args)
    except RecipeAPIError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(3)
    except json.JSONDecodeError as e:
        print(f"Error: recipes file is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except (RecipeNotFoundError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
