"""Tests for the recipe filter engine."""
import pytest

from recipeverse.data_layer.models import (
    Category,
    EmptyIngredientPolicy,
    FilterState,
    RankedRecipe,
    Recipe,
    SearchMode,
)
from recipeverse.discovery.filter_engine import RecipeFilterEngine


def _ids(results):
    return [r.recipe.id if isinstance(r, RankedRecipe) else r.id for r in results]


@pytest.fixture
def recipes():
    """Small recipe collection covering every filter branch."""
    return [
        Recipe(id="a", title="Chicken Curry", description=None,
               ingredients=["chicken", "onion", "tomato"], veg=False, stars=4.9),
        Recipe(id="b", title="Veg Pulao", description="Rice with vegetables",
               ingredients=["rice", "onion"], veg=True, stars=4.8),
        Recipe(id="c", title="Egg Rice", description="Simple egg fried rice",
               ingredients=["egg", "rice"], veg=False, stars=None),
        Recipe(id="d", title="Mystery", description="Chef special with chicken",
               ingredients=[], veg=True, stars=3.0),
        Recipe(id="e", title="Potato Fry", description="Crispy",
               ingredients=["potato", "oil"], veg=True, stars=-1.0),
    ]


@pytest.fixture
def engine():
    return RecipeFilterEngine()


class TestCategoryFilter:
    """Tests for the category step."""

    def test_all_passes_everything(self, engine, recipes):
        """Test ALL keeps every recipe in order."""
        assert _ids(engine.apply(recipes, FilterState())) == ["a", "b", "c", "d", "e"]

    def test_veg(self, engine, recipes):
        """Test VEG keeps vegetarian recipes."""
        assert _ids(engine.apply(recipes, FilterState(category=Category.VEG))) == ["b", "d", "e"]

    def test_non_veg(self, engine, recipes):
        """Test NON_VEG keeps non-vegetarian recipes."""
        assert _ids(engine.apply(recipes, FilterState(category=Category.NON_VEG))) == ["a", "c"]

    def test_top_rated(self, engine, recipes):
        """Test TOP_RATED keeps stars >= 4.8 and excludes missing stars."""
        results = engine.apply(recipes, FilterState(category=Category.TOP_RATED))
        assert _ids(results) == ["a", "b"]
        assert all(r.stars >= 4.8 for r in results)

    def test_negative_stars_tolerated(self, engine, recipes):
        """Test malformed star values flow through the comparisons."""
        assert "e" in _ids(engine.apply(recipes, FilterState(category=Category.ALL)))
        assert "e" not in _ids(engine.apply(recipes, FilterState(category=Category.TOP_RATED)))


class TestTextSearch:
    """Tests for the text search step."""

    def test_title_match_without_description(self, engine, recipes):
        """Test a title match works when description is absent."""
        results = engine.apply(recipes, FilterState(search_text="chicken"))
        assert _ids(results) == ["a", "d"]

    def test_case_insensitive_description_match(self, engine, recipes):
        """Test description matching ignores case."""
        assert _ids(engine.apply(recipes, FilterState(search_text="RICE"))) == ["b", "c"]

    def test_no_match(self, engine, recipes):
        """Test a query matching nothing returns an empty list."""
        assert engine.apply(recipes, FilterState(search_text="lasagna")) == []

    def test_combined_with_category(self, engine, recipes):
        """Test search runs after the category filter."""
        state = FilterState(category=Category.VEG, search_text="chicken")
        assert _ids(engine.apply(recipes, state)) == ["d"]


class TestIngredientRanking:
    """Tests for the ingredient ranking step."""

    def test_ranked_descending(self, engine, recipes):
        """Test recipes are ranked by score with zero scores dropped."""
        results = engine.apply(recipes, FilterState(ingredient_query=["egg", "rice"]))
        assert _ids(results) == ["c", "b"]
        assert all(isinstance(r, RankedRecipe) for r in results)
        assert [r.match_score for r in results] == [1.0, 0.5]
        assert results[1].match_text == "1/2 ingredients"

    def test_ties_keep_incoming_order(self, engine, recipes):
        """Test equal scores are not reordered."""
        state = FilterState(ingredient_query=["rice"])
        assert _ids(engine.apply(recipes, state)) == ["b", "c"]
        assert _ids(engine.apply(list(reversed(recipes)), state)) == ["c", "b"]

    def test_untrimmed_query_tokens(self, engine, recipes):
        """Test raw comma-split tokens are trimmed by the matcher."""
        state = FilterState(ingredient_query=" Egg,  RICE ".split(","))
        assert _ids(engine.apply(recipes, state)) == ["c", "b"]

    def test_empty_ingredients_excluded_by_default(self, engine, recipes):
        """Test recipes without ingredients are dropped under EXCLUDE."""
        results = engine.apply(recipes, FilterState(ingredient_query=["chicken"]))
        assert _ids(results) == ["a"]

    def test_empty_ingredients_unranked_policy(self, recipes):
        """Test UNRANKED keeps empty recipes after the scored ones."""
        engine = RecipeFilterEngine(empty_ingredient_policy=EmptyIngredientPolicy.UNRANKED)
        results = engine.apply(recipes, FilterState(ingredient_query=["egg", "rice"]))
        assert _ids(results) == ["c", "b", "d"]
        assert results[-1].match is None
        assert results[-1].match_score is None

    def test_blank_query_is_inactive(self, engine, recipes):
        """Test a whitespace-only query leaves the list unranked."""
        results = engine.apply(recipes, FilterState(ingredient_query=["  ", ""]))
        assert _ids(results) == ["a", "b", "c", "d", "e"]
        assert not any(isinstance(r, RankedRecipe) for r in results)


class TestSearchModes:
    """Tests for explicit and implicit search modes."""

    def test_implicit_mode_applies_both(self, engine, recipes):
        """Test with no mode, text search then ranking both run."""
        state = FilterState(search_text="rice", ingredient_query=["egg"])
        assert _ids(engine.apply(recipes, state)) == ["c"]

    def test_text_mode_ignores_ingredients(self, engine, recipes):
        """Test TEXT mode skips ingredient ranking."""
        state = FilterState(search_text="chicken", ingredient_query=["egg"], mode=SearchMode.TEXT)
        results = engine.apply(recipes, state)
        assert _ids(results) == ["a", "d"]
        assert not any(isinstance(r, RankedRecipe) for r in results)

    def test_ingredient_mode_ignores_text(self, engine, recipes):
        """Test INGREDIENT mode skips text search."""
        state = FilterState(search_text="chicken", ingredient_query=["egg"], mode=SearchMode.INGREDIENT)
        assert _ids(engine.apply(recipes, state)) == ["c"]

    def test_none_mode_skips_both(self, engine, recipes):
        """Test NONE mode applies only the category filter."""
        state = FilterState(category=Category.VEG, search_text="chicken",
                            ingredient_query=["egg"], mode=SearchMode.NONE)
        assert _ids(engine.apply(recipes, state)) == ["b", "d", "e"]


class TestPurity:
    """Tests that apply has no side effects."""

    def test_idempotent(self, engine, recipes):
        """Test repeated calls give identical output."""
        state = FilterState(category=Category.ALL, ingredient_query=["rice", "onion"])
        assert engine.apply(recipes, state) == engine.apply(recipes, state)

    def test_inputs_not_mutated(self, engine, recipes):
        """Test the input list and query are left untouched."""
        original = list(recipes)
        query = ["egg", "rice"]
        engine.apply(recipes, FilterState(ingredient_query=query))
        assert recipes == original
        assert query == ["egg", "rice"]

    def test_empty_collection(self, engine):
        """Test an empty collection returns an empty list for any state."""
        assert engine.apply([], FilterState(search_text="x", ingredient_query=["egg"])) == []
