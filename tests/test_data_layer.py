"""Tests for data layer components."""
import pytest
import json
from pathlib import Path
from tempfile import NamedTemporaryFile

import yaml

from recipeverse.data_layer.config import DiscoveryConfigLoader
from recipeverse.data_layer.exceptions import RecipeNotFoundError, RecipeParseError
from recipeverse.data_layer.models import Category, EmptyIngredientPolicy
from recipeverse.data_layer.recipe_db import (
    RecipeDB,
    parse_recipe,
    parse_recipes,
    split_ingredients,
    split_steps,
)


def _write_temp(content: str, suffix: str) -> str:
    with NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


class TestParseRecipe:
    """Tests for parse_recipe."""

    def test_api_record(self):
        """Test parsing a camelCase record from the recipe API."""
        recipe = parse_recipe({
            "id": "abc",
            "title": "Paneer Curry",
            "description": "Creamy",
            "ingredients": ["Paneer", "Tomato"],
            "steps": ["Cook"],
            "veg": True,
            "stars": 5,
            "imageUrl": "https://img.example/p.jpg",
            "authorID": "u1",
            "displayName": "Bilal",
            "photoURL": "https://img.example/u1.png",
            "ratings": {"u2": 4},
        })
        assert recipe.id == "abc"
        assert recipe.stars == 5.0
        assert recipe.image_url == "https://img.example/p.jpg"
        assert recipe.author_id == "u1"
        assert recipe.display_name == "Bilal"
        assert recipe.photo_url == "https://img.example/u1.png"
        assert recipe.ratings == {"u2": 4.0}

    def test_optional_fields_missing(self):
        """Test missing stars, description and ingredients are tolerated."""
        recipe = parse_recipe({"id": 7, "title": "Plain"})
        assert recipe.id == "7"
        assert recipe.stars is None
        assert recipe.description is None
        assert recipe.ingredients == []
        assert recipe.steps == []
        assert recipe.ratings == {}
        assert recipe.veg is False

    def test_string_ingredients_and_steps(self):
        """Test comma and newline separated strings are split."""
        recipe = parse_recipe({
            "id": "r", "title": "T",
            "ingredients": "rice, egg ,, onion",
            "steps": "one\n\n two \n",
        })
        assert recipe.ingredients == ["rice", "egg", "onion"]
        assert recipe.steps == ["one", "two"]

    @pytest.mark.parametrize("record,field", [
        ({"title": "No id"}, "id"),
        ({"id": "x"}, "title"),
        ({"id": "x", "title": ""}, "title"),
    ])
    def test_missing_required_field(self, record, field):
        """Test records without id or title raise RecipeParseError."""
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe(record)
        assert exc_info.value.field_name == field

    @pytest.mark.parametrize("record,field", [
        ({"id": "x", "title": "T", "stars": "N/A"}, "stars"),
        ({"id": "x", "title": "T", "stars": [4]}, "stars"),
        ({"id": "x", "title": "T", "ratings": [5]}, "ratings"),
        ({"id": "x", "title": "T", "ratings": {"u1": "great"}}, "ratings"),
    ])
    def test_unusable_values(self, record, field):
        """Test non-numeric stars and malformed ratings raise RecipeParseError."""
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe(record)
        assert exc_info.value.field_name == field
        assert exc_info.value.reason


class TestParseRecipes:
    """Tests for parse_recipes."""

    def test_bad_values_skipped(self):
        """Test records with unusable stars or ratings do not abort the batch."""
        recipes = parse_recipes([
            {"id": "1", "title": "Good"},
            {"id": "2", "title": "Bad stars", "stars": "N/A"},
            {"id": "3", "title": "Bad ratings", "ratings": [5]},
            "not a record",
        ])
        assert [r.id for r in recipes] == ["1"]

    def test_db_loads_around_bad_values(self):
        """Test RecipeDB still loads the good records of a file with bad values."""
        data = [{"id": "1", "title": "Good"}, {"id": "2", "title": "Bad", "stars": "N/A"}]
        path = _write_temp(json.dumps(data), ".json")
        try:
            assert [r.id for r in RecipeDB(path).get_all_recipes()] == ["1"]
        finally:
            Path(path).unlink()


class TestSplitHelpers:
    """Tests for split_ingredients and split_steps."""

    def test_list_passthrough(self):
        """Test lists are kept as-is, untrimmed."""
        assert split_ingredients([" Egg", "rice"]) == [" Egg", "rice"]
        assert split_steps(["a", "b"]) == ["a", "b"]

    def test_none(self):
        """Test None gives an empty list."""
        assert split_ingredients(None) == []
        assert split_steps(None) == []


class TestRecipeDB:
    """Tests for RecipeDB."""

    @pytest.fixture
    def recipes_file(self):
        data = {
            "recipes": [
                {"id": "r1", "title": "Egg Fried Rice", "ingredients": ["rice", "egg"], "stars": 4.5},
                {"title": "Broken record"},
                {"id": "r2", "title": "Veg Pulao", "veg": True},
            ]
        }
        path = _write_temp(json.dumps(data), ".json")
        yield path
        Path(path).unlink()

    def test_load_skips_malformed(self, recipes_file):
        """Test malformed records are skipped and the rest loaded."""
        db = RecipeDB(recipes_file)
        assert [r.id for r in db.get_all_recipes()] == ["r1", "r2"]

    def test_get_all_returns_copy(self, recipes_file):
        """Test callers cannot change the database through the returned list."""
        db = RecipeDB(recipes_file)
        db.get_all_recipes().clear()
        assert len(db.get_all_recipes()) == 2

    def test_get_recipe_by_id(self, recipes_file):
        """Test lookup by id."""
        db = RecipeDB(recipes_file)
        assert db.get_recipe_by_id("r2").title == "Veg Pulao"
        assert db.get_recipe_by_id("missing") is None

    def test_require_recipe_raises(self, recipes_file):
        """Test require_recipe raises for unknown ids."""
        db = RecipeDB(recipes_file)
        with pytest.raises(RecipeNotFoundError, match="missing"):
            db.require_recipe("missing")

    def test_bare_list_format(self):
        """Test a file holding a bare list of recipes."""
        path = _write_temp(json.dumps([{"id": "x", "title": "X"}]), ".json")
        try:
            assert [r.id for r in RecipeDB(path).get_all_recipes()] == ["x"]
        finally:
            Path(path).unlink()

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            RecipeDB("/nonexistent/recipes.json")


class TestDiscoveryConfigLoader:
    """Tests for DiscoveryConfigLoader."""

    def test_full_config(self, monkeypatch):
        """Test every setting is read."""
        monkeypatch.delenv("RECIPEVERSE_API_URL", raising=False)
        path = _write_temp(
            "source:\n"
            "  recipes_path: my/recipes.json\n"
            "  api_base_url: https://recipes.example.com/api\n"
            "  api_timeout_seconds: 3\n"
            "discovery:\n"
            "  empty_ingredient_policy: unranked\n"
            "  default_category: top\n"
            "logging:\n"
            "  level: debug\n",
            ".yaml",
        )
        try:
            config = DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()

        assert config.recipes_path == "my/recipes.json"
        assert config.api_base_url == "https://recipes.example.com/api"
        assert config.api_timeout_seconds == 3.0
        assert config.empty_ingredient_policy == EmptyIngredientPolicy.UNRANKED
        assert config.default_category == Category.TOP_RATED
        assert config.log_level == "DEBUG"

    def test_empty_file_uses_defaults(self, monkeypatch):
        """Test an empty YAML file yields the defaults."""
        monkeypatch.delenv("RECIPEVERSE_API_URL", raising=False)
        path = _write_temp("", ".yaml")
        try:
            config = DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()

        assert config.recipes_path == "data/recipes/recipes.json"
        assert config.api_base_url is None
        assert config.empty_ingredient_policy == EmptyIngredientPolicy.EXCLUDE
        assert config.default_category == Category.ALL

    def test_env_overrides_api_url(self, monkeypatch):
        """Test RECIPEVERSE_API_URL wins over the file."""
        monkeypatch.setenv("RECIPEVERSE_API_URL", "https://env.example/api")
        path = _write_temp("source:\n  api_base_url: https://file.example/api\n", ".yaml")
        try:
            config = DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()
        assert config.api_base_url == "https://env.example/api"

    def test_unknown_policy_rejected(self):
        """Test an unknown policy raises ValueError."""
        path = _write_temp("discovery:\n  empty_ingredient_policy: last\n", ".yaml")
        try:
            with pytest.raises(ValueError, match="empty_ingredient_policy"):
                DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()

    def test_unknown_category_rejected(self):
        """Test an unknown category raises ValueError."""
        path = _write_temp("discovery:\n  default_category: vegan\n", ".yaml")
        try:
            with pytest.raises(ValueError, match="Unknown category"):
                DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()

    def test_non_mapping_rejected(self):
        """Test a YAML document that is not a mapping raises ValueError."""
        path = _write_temp("- source\n- discovery\n", ".yaml")
        try:
            with pytest.raises(ValueError, match="must contain a mapping"):
                DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()

    def test_invalid_yaml(self):
        """Test broken YAML raises yaml.YAMLError."""
        path = _write_temp("source: [unclosed\n", ".yaml")
        try:
            with pytest.raises(yaml.YAMLError):
                DiscoveryConfigLoader(path).load()
        finally:
            Path(path).unlink()

    def test_missing_file(self):
        """Test a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DiscoveryConfigLoader("/nonexistent/discovery.yaml").load()
