"""Discovery configuration loader for YAML settings."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from recipeverse.data_layer.models import Category, EmptyIngredientPolicy

API_URL_ENV_VAR = "RECIPEVERSE_API_URL"


@dataclass
class DiscoveryConfig:
    """Settings for the recipe source and discovery engine."""

    recipes_path: str = "data/recipes/recipes.json"
    api_base_url: Optional[str] = None  # When set, recipes come from the API
    api_timeout_seconds: float = 10.0
    empty_ingredient_policy: EmptyIngredientPolicy = EmptyIngredientPolicy.EXCLUDE
    default_category: Category = Category.ALL
    log_level: str = "WARNING"


class DiscoveryConfigLoader:
    """Loader for discovery configuration from YAML.

    Expected layout (every section optional)::

        source:
          recipes_path: data/recipes/recipes.json
          api_base_url: https://recipes.example.com/api
          api_timeout_seconds: 10
        discovery:
          empty_ingredient_policy: exclude   # or "unranked"
          default_category: all              # all, veg, nonveg, top
        logging:
          level: INFO
    """

    def __init__(self, yaml_path: str):
        """Initialize config loader from YAML file.

        Args:
            yaml_path: Path to YAML configuration file
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> DiscoveryConfig:
        """Load configuration from YAML file.

        Returns:
            DiscoveryConfig object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If an enum setting has an unknown value or the file
                is not a mapping
            yaml.YAMLError: If the file is not valid YAML
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {self.yaml_path} must contain a mapping")

        source = data.get("source") or {}
        discovery = data.get("discovery") or {}
        logging_section = data.get("logging") or {}
        defaults = DiscoveryConfig()

        policy_raw = str(discovery.get("empty_ingredient_policy", defaults.empty_ingredient_policy.value))
        try:
            policy = EmptyIngredientPolicy(policy_raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown empty_ingredient_policy '{policy_raw}'")

        category = Category.from_string(str(discovery.get("default_category", defaults.default_category.value)))

        api_base_url = os.environ.get(API_URL_ENV_VAR) or source.get("api_base_url")

        return DiscoveryConfig(
            recipes_path=str(source.get("recipes_path", defaults.recipes_path)),
            api_base_url=api_base_url,
            api_timeout_seconds=float(source.get("api_timeout_seconds", defaults.api_timeout_seconds)),
            empty_ingredient_policy=policy,
            default_category=category,
            log_level=str(logging_section.get("level", defaults.log_level)).upper(),
        )
