"""Client for the remote recipe REST API.

Thin pass-through: the recipe service owns persistence, rating averages
and favorites. This client fetches records and hands them to the same
parser the JSON store uses.

Endpoints used:
- GET /recipes              -> list of recipe records
- GET /recipes/{id}         -> one recipe record
- GET /recipes/user/{uid}   -> user record (``favorites`` list of recipe ids)
- PATCH /recipes/{id}/rate  -> submit ``{userId, rating}``
"""

import logging
import os
from typing import Any, Dict, List

import requests

from recipeverse.data_layer.exceptions import RecipeNotFoundError
from recipeverse.data_layer.models import Recipe
from recipeverse.data_layer.recipe_db import parse_recipe, parse_recipes
from recipeverse.discovery.profile import MAX_RATING, MIN_RATING, validate_rating

logger = logging.getLogger(__name__)


class RecipeAPIError(Exception):
    """Exception for recipe API failures."""

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code}: {message}")


class RecipeAPIClient:
    """Client for the recipe service.

    Usage:
        client = RecipeAPIClient("https://recipes.example.com/api")
        # or
        client = RecipeAPIClient.from_env()  # reads RECIPEVERSE_API_URL

        recipes = client.list_recipes()
    """

    def __init__(self, base_url: str, timeout: float = 10.0):
        """Initialize client with the service base URL.

        Args:
            base_url: Base URL of the recipe API
            timeout: Request timeout in seconds

        Raises:
            ValueError: If base URL is empty
        """
        if not base_url or not base_url.strip():
            raise ValueError("Recipe API base URL is required")
        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_env(cls, env_var: str = "RECIPEVERSE_API_URL", timeout: float = 10.0) -> "RecipeAPIClient":
        """Create client from environment variable.

        Raises:
            ValueError: If environment variable not set
        """
        base_url = os.environ.get(env_var)
        if not base_url:
            raise ValueError(f"Environment variable {env_var} not set")
        return cls(base_url=base_url, timeout=timeout)

    def list_recipes(self) -> List[Recipe]:
        """Fetch every recipe, skipping malformed records."""
        data = self._get("/recipes")
        if not isinstance(data, list):
            raise RecipeAPIError("API_ERROR", "Expected a list of recipes")
        return parse_recipes(data)

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Fetch a single recipe.

        Raises:
            RecipeNotFoundError: If the service answers 404
        """
        try:
            data = self._get(f"/recipes/{recipe_id}")
        except RecipeAPIError as e:
            if e.error_code == "NOT_FOUND":
                raise RecipeNotFoundError(recipe_id) from e
            raise
        return parse_recipe(data)

    def get_user(self, user_id: str) -> Dict[str, Any]:
        """Fetch a user record; ``favorites`` defaults to an empty list."""
        data = self._get(f"/recipes/user/{user_id}") or {}
        data.setdefault("favorites", [])
        return data

    def get_favorite_ids(self, user_id: str) -> List[str]:
        return [str(rid) for rid in self.get_user(user_id)["favorites"]]

    def rate_recipe(self, recipe_id: str, user_id: str, rating: float) -> Any:
        """Submit a user's star rating for a recipe.

        The service folds the rating into the recipe's ``stars`` average;
        fetch the recipe again to see the new value.

        Args:
            recipe_id: Recipe being rated
            user_id: Id of the rating user
            rating: Stars from 1 to 5

        Returns:
            Decoded response body, or None when the service sends no content

        Raises:
            ValueError: If the rating is outside 1-5 or the user id is empty
            RecipeNotFoundError: If the service answers 404
            RecipeAPIError: If the request fails
        """
        if not user_id:
            raise ValueError("A user id is required to rate a recipe")
        if not validate_rating(rating):
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")

        try:
            return self._request(
                "patch",
                f"/recipes/{recipe_id}/rate",
                json={"userId": user_id, "rating": rating},
            )
        except RecipeAPIError as e:
            if e.error_code == "NOT_FOUND":
                raise RecipeNotFoundError(recipe_id) from e
            raise

    def _get(self, path: str) -> Any:
        return self._request("get", path)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """Make a request against the recipe API.

        Args:
            method: ``requests`` function name, "get" or "patch"
            path: Path below the base URL
            **kwargs: Passed through to requests (e.g. ``json``)

        Raises:
            RecipeAPIError: If the request fails or returns a non-2xx status
        """
        url = f"{self.base_url}{path}"
        send = getattr(requests, method)
        try:
            response = send(url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout:
            logger.warning("Recipe API timed out: %s %s", method.upper(), url)
            raise RecipeAPIError("TIMEOUT", "Recipe API request timed out")
        except requests.exceptions.ConnectionError:
            logger.warning("Recipe API unreachable: %s %s", method.upper(), url)
            raise RecipeAPIError("CONNECTION_ERROR", "Failed to connect to recipe API")
        except requests.exceptions.RequestException as e:
            raise RecipeAPIError("API_ERROR", f"Request failed: {str(e)}")

        if response.status_code == 404:
            raise RecipeAPIError("NOT_FOUND", f"No resource at {path}")
        if not 200 <= response.status_code < 300:
            logger.warning("Recipe API returned %s for %s %s", response.status_code, method.upper(), url)
            raise RecipeAPIError(
                "API_ERROR",
                f"Recipe API returned status {response.status_code}"
            )
        if response.status_code == 204:
            return None
        return response.json()
