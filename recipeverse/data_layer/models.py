"""Data models for recipe discovery and nutrition scoring."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Category(Enum):
    """Coarse recipe classification applied before search and ranking."""

    ALL = "all"
    VEG = "veg"
    NON_VEG = "nonveg"
    TOP_RATED = "top"

    @classmethod
    def from_string(cls, value: str) -> "Category":
        """Convert a user-facing string ("veg", "NON_VEG", "top") to a Category.

        Raises:
            ValueError: If the string names no category
        """
        key = value.strip().lower()
        for category in cls:
            if key in (category.value, category.name.lower()):
                return category
        raise ValueError(f"Unknown category '{value}'")


class SearchMode(Enum):
    """Which search step the caller has switched on."""

    NONE = "none"
    TEXT = "text"
    INGREDIENT = "ingredient"


class EmptyIngredientPolicy(Enum):
    """How ingredient ranking treats recipes with no ingredient list.

    EXCLUDE drops them. UNRANKED keeps them, unscored, after every scored recipe.
    """

    EXCLUDE = "exclude"
    UNRANKED = "unranked"


@dataclass(frozen=True)
class Recipe:
    """A shared recipe as served by the recipe API."""

    id: str
    title: str
    description: Optional[str] = None
    ingredients: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    veg: bool = False
    stars: Optional[float] = None  # 1.0-5.0 community average, may be absent
    image_url: Optional[str] = None
    author_id: str = ""
    ratings: Dict[str, float] = field(default_factory=dict)  # user id -> rating
    # Author display fields posted alongside the recipe
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class NutritionTotals:
    """Estimated macro totals for one serving of a recipe."""

    calories: int
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class HealthAssessment:
    """Heuristic 0-10 health score with the reason of the last rule that fired."""

    score: float
    reason: str


@dataclass(frozen=True)
class MatchResult:
    """How many of a recipe's ingredients the user already has."""

    matched_count: int
    total_count: int
    score: float  # matched_count / total_count, 0.0 when total_count == 0

    @classmethod
    def no_match(cls) -> "MatchResult":
        return cls(matched_count=0, total_count=0, score=0.0)

    @property
    def text(self) -> str:
        return f"{self.matched_count}/{self.total_count} ingredients"


@dataclass(frozen=True)
class RankedRecipe:
    """A recipe annotated with its ingredient match (None when left unscored)."""

    recipe: Recipe
    match: Optional[MatchResult] = None

    @property
    def match_score(self) -> Optional[float]:
        return self.match.score if self.match is not None else None

    @property
    def match_text(self) -> Optional[str]:
        return self.match.text if self.match is not None else None


@dataclass(frozen=True)
class FilterState:
    """Caller-owned discovery state, passed by value on every recalculation.

    Attributes:
        category: Category filter applied first
        search_text: Free-text query matched against title and description
        ingredient_query: Raw ingredient tokens (untrimmed) for match ranking
        mode: Explicit search mode; None applies whichever inputs are populated
    """

    category: Category = Category.ALL
    search_text: str = ""
    ingredient_query: Optional[List[str]] = None
    mode: Optional[SearchMode] = None
