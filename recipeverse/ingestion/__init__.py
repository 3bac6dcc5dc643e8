"""Ingestion layer for validating recipe input."""

from recipeverse.ingestion.recipe_draft import (
    RecipeDraft,
    RecipeDraftValidator,
    ValidationError,
    ValidationResult,
    MAX_DESCRIPTION_LENGTH,
)
