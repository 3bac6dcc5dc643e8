"""Ingredient match scoring for "what can I cook with what I have" search."""

from typing import List, Sequence

from recipeverse.data_layer.models import MatchResult


def normalize_ingredient(name: str) -> str:
    """Lowercase and trim an ingredient name for comparison."""
    return name.lower().strip()


class IngredientMatcher:
    """Scores recipes by the fraction of their ingredients the user has."""

    @staticmethod
    def parse_query(query: str) -> List[str]:
        """Split a comma-separated ingredient query.

        Tokens are not trimmed here; ``score`` normalizes both sides.
        """
        return query.split(",")

    @staticmethod
    def score(recipe_ingredients: Sequence[str],
              user_ingredients: Sequence[str]) -> MatchResult:
        """Score a recipe's ingredients against the user's ingredients.

        A recipe ingredient counts as matched if it appears anywhere in the
        user's list, so one user ingredient can satisfy repeated recipe
        entries. Duplicates are kept on both sides.

        Args:
            recipe_ingredients: Ingredients listed on the recipe
            user_ingredients: Ingredients the user has

        Returns:
            MatchResult; the no-match sentinel when the recipe lists nothing
        """
        recipe_set = [normalize_ingredient(i) for i in recipe_ingredients]
        if not recipe_set:
            return MatchResult.no_match()

        user_set = {normalize_ingredient(i) for i in user_ingredients}
        matched = sum(1 for ing in recipe_set if ing in user_set)

        return MatchResult(
            matched_count=matched,
            total_count=len(recipe_set),
            score=matched / len(recipe_set),
        )
