"""Validation for new recipes before they are posted to the recipe API.

Turns raw form input (comma-separated ingredients, one step per line) into
the record the recipe service stores. Validation never raises: callers get
a ValidationResult with either a payload or a list of errors.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from recipeverse.data_layer.recipe_db import split_ingredients, split_steps
from recipeverse.discovery.profile import MAX_RATING, MIN_RATING

MAX_DESCRIPTION_LENGTH = 100


@dataclass
class RecipeDraft:
    """Raw recipe form input."""

    title: str
    description: str
    ingredients_text: str  # "onion, tomato, rice"
    steps_text: str  # one step per line
    veg: bool = True
    stars: float = 5
    author_id: Optional[str] = None  # None when nobody is logged in
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class ValidationError:
    """Structured validation error for a draft field."""
    field: str      # Which field failed
    message: str    # Human-readable error message
    value: str      # The invalid value that was provided


@dataclass
class ValidationResult:
    """Result of draft validation.

    Either is_valid=True with payload set,
    or is_valid=False with errors list populated.
    """
    is_valid: bool
    payload: Optional[Dict[str, Any]]
    errors: List[ValidationError] = field(default_factory=list)


class RecipeDraftValidator:
    """Validates recipe drafts and builds the API payload."""

    def validate(self, draft: RecipeDraft) -> ValidationResult:
        """Validate a recipe draft.

        Args:
            draft: RecipeDraft from the posting form

        Returns:
            ValidationResult with either the API payload or errors
        """
        errors: List[ValidationError] = []

        if not draft.author_id:
            errors.append(ValidationError(
                field="author_id",
                message="You must log in to post",
                value=draft.author_id or ""
            ))

        title = draft.title.strip() if draft.title else ""
        if not title:
            errors.append(ValidationError(
                field="title",
                message="Recipe title is required",
                value=draft.title or ""
            ))

        description = draft.description.strip() if draft.description else ""
        if not description:
            errors.append(ValidationError(
                field="description",
                message="Short description is required",
                value=draft.description or ""
            ))
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            errors.append(ValidationError(
                field="description",
                message=f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
                value=description
            ))

        try:
            stars = float(draft.stars)
        except (TypeError, ValueError):
            stars = None
        if stars is None or not MIN_RATING <= stars <= MAX_RATING:
            errors.append(ValidationError(
                field="stars",
                message=f"Stars must be between {MIN_RATING} and {MAX_RATING}",
                value=str(draft.stars)
            ))

        if errors:
            return ValidationResult(is_valid=False, payload=None, errors=errors)

        payload = {
            "title": title,
            "description": description,
            "ingredients": split_ingredients(draft.ingredients_text),
            "steps": split_steps(draft.steps_text),
            "veg": draft.veg,
            "stars": stars,
            "imageUrl": draft.image_url,
            "authorID": draft.author_id,
            "displayName": draft.display_name,
            "email": draft.email,
            "photoURL": draft.photo_url,
        }
        return ValidationResult(is_valid=True, payload=payload, errors=[])
