"""Scoring module for ingredient-match ranking."""

from .ingredient_matcher import IngredientMatcher, normalize_ingredient

__all__ = [
    "IngredientMatcher",
    "normalize_ingredient",
]
