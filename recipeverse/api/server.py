"""FastAPI server for recipe discovery and nutrition estimates."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from recipeverse.data_layer.config import DiscoveryConfig, DiscoveryConfigLoader
from recipeverse.data_layer.exceptions import RecipeNotFoundError
from recipeverse.data_layer.models import Category, FilterState, Recipe, SearchMode
from recipeverse.data_layer.recipe_api import RecipeAPIClient, RecipeAPIError
from recipeverse.data_layer.recipe_db import RecipeDB
from recipeverse.discovery.filter_engine import RecipeFilterEngine
from recipeverse.discovery.profile import (
    MAX_RATING,
    MIN_RATING,
    average_rating,
    build_profile,
    toggle_favorite,
    user_rating,
    validate_rating,
)
from recipeverse.ingestion.recipe_draft import RecipeDraft, RecipeDraftValidator
from recipeverse.nutrition.estimator import NutritionEstimator
from recipeverse.output.formatters import (
    format_feed_json,
    format_nutrition_json,
    format_recipe_json,
)
from recipeverse.scoring.ingredient_matcher import IngredientMatcher

logger = logging.getLogger(__name__)

config_path = os.environ.get("RECIPEVERSE_CONFIG", "config/discovery.yaml")

app = FastAPI(title="RecipeVerse Discovery API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Local development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class NutritionRequest(BaseModel):
    ingredients: List[str] = Field(default_factory=list)


class RateRequest(BaseModel):
    user_id: str
    rating: float


class DraftRequest(BaseModel):
    title: str = ""
    description: str = ""
    ingredients: str = ""
    steps: str = ""
    veg: bool = True
    stars: float = 5
    author_id: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    image_url: Optional[str] = None


def _load_config() -> DiscoveryConfig:
    if Path(config_path).exists():
        return DiscoveryConfigLoader(config_path).load()
    return DiscoveryConfig()


def _api_client(config: DiscoveryConfig) -> RecipeAPIClient:
    return RecipeAPIClient(config.api_base_url, timeout=config.api_timeout_seconds)


def _load_recipes(config: DiscoveryConfig) -> List[Recipe]:
    if config.api_base_url:
        return _api_client(config).list_recipes()
    return RecipeDB(config.recipes_path).get_all_recipes()


def _load_recipe(config: DiscoveryConfig, recipe_id: str) -> Recipe:
    """Fetch one recipe, mapping lookup failures to HTTP errors."""
    try:
        if config.api_base_url:
            return _api_client(config).get_recipe(recipe_id)
        return RecipeDB(config.recipes_path).require_recipe(recipe_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RecipeAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def _parse_id_list(ids: str) -> List[str]:
    return [rid.strip() for rid in ids.split(",") if rid.strip()]


def _favorite_ids(config: DiscoveryConfig, user_id: str, favorites: str) -> List[str]:
    """Favorites from the query string, else from the recipe API when configured."""
    if favorites:
        return _parse_id_list(favorites)
    if config.api_base_url:
        return _api_client(config).get_favorite_ids(user_id)
    return []


def _parse_filter_state(category: Optional[str], q: str, ingredients: str,
                        mode: Optional[str], config: DiscoveryConfig) -> FilterState:
    try:
        parsed_category = Category.from_string(category) if category else config.default_category
        parsed_mode = SearchMode(mode.strip().lower()) if mode else None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    ingredient_query = IngredientMatcher.parse_query(ingredients) if ingredients else None
    return FilterState(
        category=parsed_category,
        search_text=q,
        ingredient_query=ingredient_query,
        mode=parsed_mode,
    )


@app.get("/api/recipes")
def list_recipes(category: Optional[str] = None,
                 q: str = "",
                 ingredients: str = "",
                 mode: Optional[str] = None) -> List[Dict[str, Any]]:
    config = _load_config()
    state = _parse_filter_state(category, q, ingredients, mode, config)
    try:
        recipes = _load_recipes(config)
    except RecipeAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Failed to load recipes")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    engine = RecipeFilterEngine(empty_ingredient_policy=config.empty_ingredient_policy)
    return format_feed_json(engine.apply(recipes, state))


@app.get("/api/recipes/{recipe_id}")
def get_recipe(recipe_id: str,
               user_id: Optional[str] = None,
               favorites: str = "") -> Dict[str, Any]:
    config = _load_config()
    recipe = _load_recipe(config, recipe_id)

    totals, health = NutritionEstimator().assess_recipe(recipe)
    data = format_recipe_json(recipe)
    data.update(format_nutrition_json(totals, health))
    data["communityRating"] = round(average_rating(recipe), 1)

    if user_id:
        data["userRating"] = user_rating(recipe, user_id)
        try:
            favorite_ids = _favorite_ids(config, user_id, favorites)
        except RecipeAPIError as exc:
            logger.warning("Could not fetch favorites for %s: %s", user_id, exc)
            favorite_ids = []
        data["isFavorite"] = recipe_id in favorite_ids
    return data


@app.post("/api/recipes/{recipe_id}/rate")
def rate_recipe(recipe_id: str, request: RateRequest) -> Dict[str, Any]:
    if not validate_rating(request.rating):
        raise HTTPException(
            status_code=400,
            detail=f"Rating must be between {MIN_RATING} and {MAX_RATING}",
        )
    config = _load_config()
    if not config.api_base_url:
        raise HTTPException(status_code=503, detail="Rating requires a configured recipe API")

    try:
        _api_client(config).rate_recipe(recipe_id, request.user_id, request.rating)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RecipeAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    recipe = _load_recipe(config, recipe_id)
    data = format_recipe_json(recipe)
    data["communityRating"] = round(average_rating(recipe), 1)
    data["userRating"] = user_rating(recipe, request.user_id) or request.rating
    return data


@app.get("/api/users/{user_id}/recipes")
def user_recipes(user_id: str, favorites: str = "") -> Dict[str, Any]:
    config = _load_config()
    try:
        recipes = _load_recipes(config)
        favorite_ids = _favorite_ids(config, user_id, favorites)
    except RecipeAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    profile = build_profile(recipes, user_id, favorite_ids)
    return {
        "userId": user_id,
        "posted": format_feed_json(profile.posted),
        "favorites": format_feed_json(profile.favorites),
        "postedCount": profile.posted_count,
        "favoriteCount": profile.favorite_count,
    }


@app.post("/api/users/{user_id}/favorites/{recipe_id}")
def toggle_user_favorite(user_id: str, recipe_id: str, favorites: str = "") -> Dict[str, Any]:
    """Toggle a recipe in a client-held favorites list and return the new list."""
    new_ids, is_favorite = toggle_favorite(_parse_id_list(favorites), recipe_id)
    logger.debug("User %s %s favorite %s", user_id, "added" if is_favorite else "removed", recipe_id)
    return {
        "userId": user_id,
        "recipeId": recipe_id,
        "favorites": new_ids,
        "isFavorite": is_favorite,
    }


@app.post("/api/recipes/validate")
def validate_draft(request: DraftRequest) -> Dict[str, Any]:
    draft = RecipeDraft(
        title=request.title,
        description=request.description,
        ingredients_text=request.ingredients,
        steps_text=request.steps,
        veg=request.veg,
        stars=request.stars,
        author_id=request.author_id,
        display_name=request.display_name,
        email=request.email,
        photo_url=request.photo_url,
        image_url=request.image_url,
    )
    result = RecipeDraftValidator().validate(draft)
    return {
        "valid": result.is_valid,
        "payload": result.payload,
        "errors": [
            {"field": e.field, "message": e.message, "value": e.value}
            for e in result.errors
        ],
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
