"""Configuration settings for the VIGYL prospect core."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

# Packaged sector/vertical catalog
DEFAULT_TAXONOMY_PATH = Path(__file__).parent / "data" / "taxonomy.yaml"

# Spellings of the home country accepted on profiles and prospect records
HOME_COUNTRY_ALIASES = [
    "US",
    "USA",
    "U.S.",
    "U.S.A.",
    "United States",
    "United States of America",
]


@dataclass
class Settings:
    """Unified settings with YAML override support."""

    # Geography
    home_country: str = "US"
    home_country_aliases: list = field(default_factory=lambda: list(HOME_COUNTRY_ALIASES))

    # Radius slider (miles)
    default_local_radius: int = 50
    adjacency_radius: int = 100  # Neighbouring states count as local at or above this
    min_local_radius: int = 10
    max_local_radius: int = 200

    # Prospect generator (OpenAI-compatible chat completions gateway)
    generator_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    generator_model: str = "openai/gpt-5-mini"
    generator_api_key: str = field(
        default_factory=lambda: os.environ.get("VIGYL_GENERATOR_KEY")
        or os.environ.get("LOVABLE_API_KEY", "")
    )
    generator_timeout: int = 120  # seconds
    max_example_hints: int = 6

    # Catalog
    taxonomy_path: str = str(DEFAULT_TAXONOMY_PATH)

    def clamp_radius(self, radius: Optional[int]) -> int:
        """Clamp a radius to the slider range, falling back to the default."""
        if radius is None:
            return self.default_local_radius
        return max(self.min_local_radius, min(self.max_local_radius, int(radius)))

    def build_classifier(self):
        """Create a ScopeClassifier configured from these settings."""
        from vigyl.scope import ScopeClassifier

        return ScopeClassifier(
            home_country=self.home_country,
            home_aliases=self.home_country_aliases,
            adjacency_radius=self.adjacency_radius,
        )


def load_config(path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file with environment overrides.

    Priority: environment > config file > defaults

    Args:
        path: Path to YAML config file (optional)

    Returns:
        Settings instance with merged configuration
    """
    settings = Settings()

    if path:
        config_path = Path(path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

            # Apply config values
            for key, value in data.items():
                if hasattr(settings, key):
                    setattr(settings, key, value)

    # Environment overrides (always win)
    if os.environ.get("VIGYL_HOME_COUNTRY"):
        settings.home_country = os.environ["VIGYL_HOME_COUNTRY"]
    if os.environ.get("VIGYL_LOCAL_RADIUS"):
        settings.default_local_radius = int(os.environ["VIGYL_LOCAL_RADIUS"])
    if os.environ.get("VIGYL_GENERATOR_URL"):
        settings.generator_url = os.environ["VIGYL_GENERATOR_URL"]
    if os.environ.get("VIGYL_GENERATOR_MODEL"):
        settings.generator_model = os.environ["VIGYL_GENERATOR_MODEL"]
    if os.environ.get("VIGYL_GENERATOR_KEY"):
        settings.generator_api_key = os.environ["VIGYL_GENERATOR_KEY"]
    if os.environ.get("VIGYL_TAXONOMY_PATH"):
        settings.taxonomy_path = os.environ["VIGYL_TAXONOMY_PATH"]

    return settings
