"""
Planner configuration.

Bounding box, cell size, fan-out limit and service credentials. Values are
validated up front: an invalid configuration is fatal before any grid
construction or network traffic starts.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .exceptions import ConfigurationError
from .planning.graph import AxisRange, validate_grid_parameters


@dataclass
class PlannerConfig:
    """
    Everything needed to build and search an airspace grid.

    Attributes:
        lat_range: Latitude bounds in degrees
        lon_range: Longitude bounds in degrees
        alt_range: Altitude bounds in grid units
        cell_size: Step on every axis
        altitude_unit_m: Meters per altitude grid unit (default: 1000, i.e. km)
        max_concurrency: Nodes fetched concurrently
        request_timeout_s: Per-request timeout for the services
        traffic_radius_km: Search radius for nearby aircraft
        cost_type: Edge cost mode ('random', 'environmental', 'constant')
        weather_api_key: OpenWeatherMap credential
        traffic_api_key: ADS-B Exchange credential
    """
    lat_range: AxisRange = field(default_factory=lambda: AxisRange(0.0, 10.0))
    lon_range: AxisRange = field(default_factory=lambda: AxisRange(0.0, 10.0))
    alt_range: AxisRange = field(default_factory=lambda: AxisRange(0.0, 5.0))
    cell_size: float = 1.0
    altitude_unit_m: float = 1000.0
    max_concurrency: int = 8
    request_timeout_s: float = 10.0
    traffic_radius_km: float = 50.0
    cost_type: str = 'environmental'
    weather_api_key: Optional[str] = None
    traffic_api_key: Optional[str] = None

    def validate(self, require_credentials: bool = True) -> "PlannerConfig":
        """
        Check the configuration.

        Args:
            require_credentials: Also require both API keys

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: On the first problem found
        """
        validate_grid_parameters(self.lat_range, self.lon_range, self.alt_range,
                                 self.cell_size, self.max_concurrency)

        if self.lat_range.min < -90 or self.lat_range.max > 90:
            raise ConfigurationError(f"latitude must lie in [-90, 90], got {self.lat_range}")
        if self.lon_range.min < -180 or self.lon_range.max > 180:
            raise ConfigurationError(f"longitude must lie in [-180, 180], got {self.lon_range}")
        if self.altitude_unit_m <= 0:
            raise ConfigurationError(f"altitude_unit_m must be > 0, got {self.altitude_unit_m}")
        if self.request_timeout_s <= 0:
            raise ConfigurationError(f"request_timeout_s must be > 0, got {self.request_timeout_s}")
        if self.traffic_radius_km <= 0:
            raise ConfigurationError(f"traffic_radius_km must be > 0, got {self.traffic_radius_km}")
        if self.cost_type not in ('random', 'environmental', 'constant'):
            raise ConfigurationError(f"Unknown cost type: {self.cost_type}")

        if require_credentials:
            for name in ('weather_api_key', 'traffic_api_key'):
                value = getattr(self, name)
                if not value or not value.strip():
                    raise ConfigurationError(f"{name} is missing")

        return self

    @classmethod
    def from_env(cls, prefix: str = "SKYLATTICE_",
                 environ: Optional[Mapping[str, str]] = None) -> "PlannerConfig":
        """
        Read configuration from environment variables.

        Recognized names (after the prefix): WEATHER_API_KEY, TRAFFIC_API_KEY,
        LAT_MIN, LAT_MAX, LON_MIN, LON_MAX, ALT_MIN, ALT_MAX, CELL_SIZE,
        MAX_CONCURRENCY, TIMEOUT, TRAFFIC_RADIUS_KM, COST_TYPE.
        Unset variables keep their defaults. The result is not validated.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def number(name: str, default: float, kind=float):
            raw = env.get(prefix + name)
            if raw is None or raw == "":
                return default
            try:
                return kind(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{prefix}{name} is not a valid number: {raw!r}") from exc

        return cls(
            lat_range=AxisRange(number("LAT_MIN", defaults.lat_range.min),
                                number("LAT_MAX", defaults.lat_range.max)),
            lon_range=AxisRange(number("LON_MIN", defaults.lon_range.min),
                                number("LON_MAX", defaults.lon_range.max)),
            alt_range=AxisRange(number("ALT_MIN", defaults.alt_range.min),
                                number("ALT_MAX", defaults.alt_range.max)),
            cell_size=number("CELL_SIZE", defaults.cell_size),
            max_concurrency=number("MAX_CONCURRENCY", defaults.max_concurrency, int),
            request_timeout_s=number("TIMEOUT", defaults.request_timeout_s),
            traffic_radius_km=number("TRAFFIC_RADIUS_KM", defaults.traffic_radius_km),
            cost_type=env.get(prefix + "COST_TYPE", defaults.cost_type),
            weather_api_key=env.get(prefix + "WEATHER_API_KEY"),
            traffic_api_key=env.get(prefix + "TRAFFIC_API_KEY"),
        )
