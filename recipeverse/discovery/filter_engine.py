"""Recipe filter engine: category filter, text search and ingredient ranking."""
import logging
from typing import List, Optional, Sequence, Union

from recipeverse.data_layer.models import (
    Category,
    EmptyIngredientPolicy,
    FilterState,
    RankedRecipe,
    Recipe,
    SearchMode,
)
from recipeverse.scoring.ingredient_matcher import IngredientMatcher

logger = logging.getLogger(__name__)

TOP_RATED_MIN_STARS = 4.8

DiscoveryResult = Union[Recipe, RankedRecipe]


class RecipeFilterEngine:
    """Turns the full recipe collection plus a FilterState into the feed.

    Pipeline, in fixed order:
    1. Category filter
    2. Text search (title or description, case-insensitive)
    3. Ingredient ranking (drop score <= 0, stable sort by score descending)

    ``apply`` is a pure function of its arguments: inputs are never mutated
    and no state is kept between calls.
    """

    def __init__(self,
                 matcher: Optional[IngredientMatcher] = None,
                 empty_ingredient_policy: EmptyIngredientPolicy = EmptyIngredientPolicy.EXCLUDE):
        """Initialize filter engine.

        Args:
            matcher: IngredientMatcher instance (default: new matcher)
            empty_ingredient_policy: Handling of recipes without ingredients
                during ingredient ranking
        """
        self.matcher = matcher or IngredientMatcher()
        self.empty_ingredient_policy = empty_ingredient_policy

    def apply(self, recipes: Sequence[Recipe], state: FilterState) -> List[DiscoveryResult]:
        """Filter, search and rank recipes for the given state.

        Args:
            recipes: Full recipe collection
            state: Caller-owned filter state

        Returns:
            Ordered list of Recipe objects, or RankedRecipe objects when
            ingredient ranking ran
        """
        results: List[Recipe] = self.filter_by_category(recipes, state.category)

        if self._text_search_active(state):
            results = self.search_text(results, state.search_text)

        if self._ingredient_search_active(state):
            ranked = self.rank_by_ingredients(results, state.ingredient_query)
            logger.debug("Ingredient ranking kept %d of %d recipes", len(ranked), len(results))
            return ranked

        logger.debug("Filter kept %d of %d recipes", len(results), len(recipes))
        return results

    @staticmethod
    def filter_by_category(recipes: Sequence[Recipe], category: Category) -> List[Recipe]:
        """Keep recipes in the given category.

        TOP_RATED treats a missing star rating as 0.
        """
        if category == Category.VEG:
            return [r for r in recipes if r.veg]
        if category == Category.NON_VEG:
            return [r for r in recipes if not r.veg]
        if category == Category.TOP_RATED:
            return [r for r in recipes if (r.stars or 0) >= TOP_RATED_MIN_STARS]
        return list(recipes)

    @staticmethod
    def search_text(recipes: Sequence[Recipe], text: str) -> List[Recipe]:
        """Keep recipes whose title or description contains the text."""
        needle = text.lower()
        return [
            r for r in recipes
            if needle in r.title.lower()
            or (r.description is not None and needle in r.description.lower())
        ]

    def rank_by_ingredients(self,
                            recipes: Sequence[Recipe],
                            user_ingredients: Sequence[str]) -> List[RankedRecipe]:
        """Score recipes against the user's ingredients and order them.

        Recipes scoring 0 are dropped. Equal scores keep their incoming
        order. Recipes without ingredients follow ``empty_ingredient_policy``.
        """
        scored: List[RankedRecipe] = []
        unranked: List[RankedRecipe] = []

        for recipe in recipes:
            if not recipe.ingredients:
                if self.empty_ingredient_policy == EmptyIngredientPolicy.UNRANKED:
                    unranked.append(RankedRecipe(recipe=recipe))
                continue

            match = self.matcher.score(recipe.ingredients, user_ingredients)
            if match.score > 0:
                scored.append(RankedRecipe(recipe=recipe, match=match))

        # sorted() is stable
        scored = sorted(scored, key=lambda ranked: ranked.match.score, reverse=True)
        return scored + unranked

    @staticmethod
    def _text_search_active(state: FilterState) -> bool:
        if state.mode is not None and state.mode != SearchMode.TEXT:
            return False
        return bool(state.search_text)

    @staticmethod
    def _ingredient_search_active(state: FilterState) -> bool:
        if state.mode is not None and state.mode != SearchMode.INGREDIENT:
            return False
        if not state.ingredient_query:
            return False
        return any(token.strip() for token in state.ingredient_query)
