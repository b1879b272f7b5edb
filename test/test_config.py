"""
Unit tests for planner configuration.

Run with: pytest test/test_config.py
"""

import pytest
from skylattice.config import PlannerConfig
from skylattice.exceptions import ConfigurationError
from skylattice.planning.graph import AxisRange


def valid_config(**overrides) -> PlannerConfig:
    params = dict(weather_api_key="owm", traffic_api_key="adsb")
    params.update(overrides)
    return PlannerConfig(**params)


class TestPlannerConfigDefaults:
    """Tests for default values."""

    def test_reference_bounding_box(self):
        config = PlannerConfig()

        assert config.lat_range == AxisRange(0.0, 10.0)
        assert config.lon_range == AxisRange(0.0, 10.0)
        assert config.alt_range == AxisRange(0.0, 5.0)
        assert config.cell_size == 1.0
        assert config.altitude_unit_m == 1000.0
        assert config.traffic_radius_km == 50.0

    def test_valid_config_passes(self):
        config = valid_config()
        assert config.validate() is config


class TestPlannerConfigValidation:
    """Tests for PlannerConfig.validate."""

    @pytest.mark.parametrize("overrides", [
        {"cell_size": 0},
        {"cell_size": -0.5},
        {"lat_range": AxisRange(5, 1)},
        {"lon_range": AxisRange(3, 2)},
        {"alt_range": AxisRange(-1, 2)},
        {"lat_range": AxisRange(-95, 0)},
        {"lon_range": AxisRange(0, 181)},
        {"max_concurrency": 0},
        {"request_timeout_s": 0},
        {"traffic_radius_km": -1},
        {"altitude_unit_m": 0},
        {"cost_type": "fuel"},
        {"weather_api_key": None},
        {"traffic_api_key": "   "},
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ConfigurationError):
            valid_config(**overrides).validate()

    def test_credentials_optional_when_not_required(self):
        config = PlannerConfig()
        assert config.validate(require_credentials=False) is config


class TestPlannerConfigFromEnv:
    """Tests for PlannerConfig.from_env."""

    def test_reads_variables(self):
        environ = {
            "SKYLATTICE_WEATHER_API_KEY": "owm-key",
            "SKYLATTICE_TRAFFIC_API_KEY": "adsb-key",
            "SKYLATTICE_LAT_MIN": "40",
            "SKYLATTICE_LAT_MAX": "42",
            "SKYLATTICE_LON_MIN": "-75",
            "SKYLATTICE_LON_MAX": "-73",
            "SKYLATTICE_ALT_MAX": "3",
            "SKYLATTICE_CELL_SIZE": "0.5",
            "SKYLATTICE_MAX_CONCURRENCY": "4",
            "SKYLATTICE_COST_TYPE": "random",
        }

        config = PlannerConfig.from_env(environ=environ).validate()

        assert config.weather_api_key == "owm-key"
        assert config.traffic_api_key == "adsb-key"
        assert config.lat_range == AxisRange(40.0, 42.0)
        assert config.lon_range == AxisRange(-75.0, -73.0)
        assert config.alt_range == AxisRange(0.0, 3.0)
        assert config.cell_size == 0.5
        assert config.max_concurrency == 4
        assert config.cost_type == "random"

    def test_defaults_when_unset(self):
        config = PlannerConfig.from_env(environ={})

        assert config.lat_range == AxisRange(0.0, 10.0)
        assert config.weather_api_key is None

    def test_custom_prefix(self):
        config = PlannerConfig.from_env(prefix="APP_", environ={"APP_CELL_SIZE": "2"})
        assert config.cell_size == 2.0

    def test_bad_number(self):
        with pytest.raises(ConfigurationError):
            PlannerConfig.from_env(environ={"SKYLATTICE_CELL_SIZE": "one"})
