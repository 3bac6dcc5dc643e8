"""Nutrition estimator for per-serving macro totals and a health score."""
import math
from typing import Sequence, Tuple

from recipeverse.data_layer import nutrition_table
from recipeverse.data_layer.models import HealthAssessment, NutritionTotals, Recipe

BALANCED_REASON = "Balanced recipe"
STARTING_SCORE = 10.0
EMPTY_TOTALS = NutritionTotals(calories=0, protein=0.0, carbs=0.0, fat=0.0)

# (threshold check, penalty, reason), evaluated in order; the last rule that
# fires sets the reason.
HEALTH_RULES = (
    (lambda n: n.fat > 25, 2.0, "High fat content"),
    (lambda n: n.carbs > 60, 1.5, "High carbohydrates"),
    (lambda n: n.protein < 10, 1.0, "Low protein"),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class NutritionEstimator:
    """Estimates nutrition from an ingredient list using the fixed table."""

    @staticmethod
    def estimate(ingredients: Sequence[str]) -> NutritionTotals:
        """Estimate macro totals for a list of ingredient names.

        Names are lowercased and trimmed before lookup. Unknown ingredients
        contribute nothing. Repeated entries are counted every time.

        Args:
            ingredients: Ingredient names as entered on the recipe

        Returns:
            NutritionTotals with each value rounded to the nearest integer
        """
        total_calories = 0.0
        total_protein = 0.0
        total_carbs = 0.0
        total_fat = 0.0

        for ingredient in ingredients:
            key = ingredient.lower().strip()
            profile = nutrition_table.lookup(key)
            if profile is None:
                continue

            portion = nutrition_table.portion_for(key)
            total_calories += profile.calories * portion
            total_protein += profile.protein * portion
            total_carbs += profile.carbs * portion
            total_fat += profile.fat * portion

        return NutritionTotals(
            calories=_round_half_up(total_calories),
            protein=float(_round_half_up(total_protein)),
            carbs=float(_round_half_up(total_carbs)),
            fat=float(_round_half_up(total_fat)),
        )

    @staticmethod
    def assess_health(totals: NutritionTotals) -> HealthAssessment:
        """Score a recipe's nutrition on a 10-point scale.

        Every rule is checked independently and subtracts its penalty.
        The reason is overwritten by each rule that fires, so only the
        last one is reported.

        Args:
            totals: Estimated nutrition totals

        Returns:
            HealthAssessment with a one-decimal score and a reason
        """
        score = STARTING_SCORE
        reason = BALANCED_REASON

        # Nothing matched the table: no estimate to penalize
        if totals == EMPTY_TOTALS:
            return HealthAssessment(score=score, reason=reason)

        for fires, penalty, rule_reason in HEALTH_RULES:
            if fires(totals):
                score -= penalty
                reason = rule_reason

        return HealthAssessment(score=round(score, 1), reason=reason)

    def assess_recipe(self, recipe: Recipe) -> Tuple[NutritionTotals, HealthAssessment]:
        """Estimate nutrition and health for a recipe in one call."""
        totals = self.estimate(recipe.ingredients)
        return totals, self.assess_health(totals)
