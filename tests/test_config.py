"""Tests for configuration loading."""

import pytest

from vigyl.config import DEFAULT_TAXONOMY_PATH, Settings, load_config
from vigyl.models import RadiusBand, UserLocale, radius_band


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "VIGYL_HOME_COUNTRY",
        "VIGYL_LOCAL_RADIUS",
        "VIGYL_GENERATOR_URL",
        "VIGYL_GENERATOR_MODEL",
        "VIGYL_GENERATOR_KEY",
        "VIGYL_TAXONOMY_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Test defaults, YAML and environment layering."""

    def test_defaults(self):
        """Defaults without a file."""
        settings = load_config()
        assert settings.home_country == "US"
        assert settings.default_local_radius == 50
        assert settings.adjacency_radius == 100
        assert settings.taxonomy_path == str(DEFAULT_TAXONOMY_PATH)

    def test_yaml_overrides(self, tmp_path):
        """YAML values override defaults; unknown keys are ignored."""
        path = tmp_path / "vigyl.yaml"
        path.write_text("default_local_radius: 120\nadjacency_radius: 80\nunknown_key: 1\n")

        settings = load_config(str(path))
        assert settings.default_local_radius == 120
        assert settings.adjacency_radius == 80
        assert not hasattr(settings, "unknown_key")

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Environment wins over the file."""
        path = tmp_path / "vigyl.yaml"
        path.write_text("default_local_radius: 120\n")
        monkeypatch.setenv("VIGYL_LOCAL_RADIUS", "150")
        monkeypatch.setenv("VIGYL_GENERATOR_MODEL", "test-model")

        settings = load_config(str(path))
        assert settings.default_local_radius == 150
        assert settings.generator_model == "test-model"

    def test_missing_file_uses_defaults(self, tmp_path):
        """A missing file is not an error."""
        settings = load_config(str(tmp_path / "missing.yaml"))
        assert settings.default_local_radius == 50

    def test_build_classifier(self):
        """Classifier picks up the configured threshold."""
        classifier = Settings(adjacency_radius=75, home_country="us").build_classifier()
        assert classifier.adjacency_radius == 75
        assert classifier.home_country == "US"


class TestRadius:
    """Test radius clamping and bands."""

    @pytest.mark.parametrize("radius,expected", [
        (None, 50),
        (5, 10),
        (75, 75),
        (500, 200),
    ])
    def test_clamp_radius(self, radius, expected):
        """Radius is clamped to the slider range."""
        assert Settings().clamp_radius(radius) == expected

    @pytest.mark.parametrize("radius,band", [
        (10, RadiusBand.METRO),
        (49, RadiusBand.METRO),
        (50, RadiusBand.EXTENDED_METRO),
        (100, RadiusBand.NEIGHBORING_REGIONS),
        (150, RadiusBand.WIDE_REGIONAL),
        (200, RadiusBand.WIDE_REGIONAL),
    ])
    def test_radius_band(self, radius, band):
        """Descriptive bands at 50, 100 and 150 miles."""
        assert radius_band(radius) == band

    def test_locale_from_profile(self):
        """Profile rows map to a locale."""
        locale = UserLocale.from_profile({
            "location_country": "US",
            "location_state": "Georgia",
            "location_city": "Atlanta",
            "local_radius": None,
        }, default_radius=60)
        assert locale.region == "Georgia"
        assert locale.local_radius == 60
        assert locale.band == RadiusBand.EXTENDED_METRO
