"""Fixed per-100g nutrition table used for recipe estimates.

Values are approximate per-100g figures. The table is read-only: it is
built once at import and exposed through a MappingProxyType.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class MacroProfile:
    """Macros per 100g of an ingredient."""

    calories: float
    protein: float
    carbs: float
    fat: float


NUTRITION_TABLE: Mapping[str, MacroProfile] = MappingProxyType({
    "onion": MacroProfile(calories=40, protein=1.1, carbs=9, fat=0.1),
    "tomato": MacroProfile(calories=18, protein=0.9, carbs=3.9, fat=0.2),
    "rice": MacroProfile(calories=130, protein=2.7, carbs=28, fat=0.3),
    "oil": MacroProfile(calories=884, protein=0, carbs=0, fat=100),
    "potato": MacroProfile(calories=77, protein=2, carbs=17, fat=0.1),
    "egg": MacroProfile(calories=155, protein=13, carbs=1.1, fat=11),
    "chicken": MacroProfile(calories=239, protein=27, carbs=0, fat=14),
    "paneer": MacroProfile(calories=265, protein=18, carbs=1.2, fat=20),
})

# Fraction of 100g assumed per serving
DEFAULT_PORTION = 0.5  # 50g
PORTION_OVERRIDES: Mapping[str, float] = MappingProxyType({
    "oil": 0.1,  # 10g
})


def lookup(name: str) -> Optional[MacroProfile]:
    """Get the macro profile for a normalized (lowercase, trimmed) name."""
    return NUTRITION_TABLE.get(name)


def portion_for(name: str) -> float:
    """Get the portion multiplier for a normalized ingredient name."""
    return PORTION_OVERRIDES.get(name, DEFAULT_PORTION)
