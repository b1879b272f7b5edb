"""
@Author: SkyLattice contributors
@License: MIT

@Description: This module defines the atmospheric conditions attached to grid nodes
and the standard-atmosphere approximation that extrapolates a single surface
observation to an arbitrary altitude.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple
import numpy as np

from ..exceptions import WeatherParseError


# --- ATMOSPHERIC CONSTANTS ---
KELVIN_OFFSET = 273.15
LAPSE_RATE_C_PER_M = 6.5 / 1000  # Standard temperature lapse rate
GRAVITY_MPS2 = 9.80665
MOLAR_MASS_AIR = 0.0289644  # kg/mol
GAS_CONSTANT_AIR = 287.05  # J/(kg*K)

# --- LINEAR TRENDS PER 1000 m ---
HUMIDITY_DROP_PER_KM = 5.0
WIND_GAIN_PER_KM = 2.0
CLOUD_DROP_PER_KM = 10.0
VISIBILITY_GAIN_PER_KM = 1000.0

# OpenWeatherMap omits visibility when it is above its reporting cap
DEFAULT_VISIBILITY_M = 10000.0


@dataclass(frozen=True)
class Wind:
    """
    Represents wind conditions at a point.

    Attributes:
        speed_mps: Wind speed in meters per second
        direction_deg: Direction the wind blows from, in degrees
            (0 = North, 90 = East), as reported by weather services
    """
    speed_mps: float = 0.0
    direction_deg: float = 0.0

    def get_component(self, heading_deg: float) -> Tuple[float, float]:
        """
        Calculate along-track and crosswind components for a given heading.

        Args:
            heading_deg: Track heading in degrees

        Returns:
            Tuple of (along_track, crosswind) in m/s
            Positive along_track = tailwind, negative = headwind
        """
        wind_rad = np.radians(self.direction_deg)
        heading_rad = np.radians(heading_deg)

        relative_angle = wind_rad - heading_rad

        # A wind from dead ahead (relative angle 0) is a pure headwind
        along_track = -self.speed_mps * np.cos(relative_angle)
        crosswind = self.speed_mps * np.sin(relative_angle)

        return float(along_track), float(crosswind)


@dataclass(frozen=True)
class SurfaceWeather:
    """
    A single ground-level observation as reported by the weather provider.

    Units are passed through from the provider, except pressure which is
    stored in Pascal.

    Attributes:
        temperature_k: Air temperature in Kelvin
        pressure_pa: Station pressure in Pascal
        humidity_pct: Relative humidity in percent
        wind: Surface wind
        cloud_cover_pct: Cloud cover in percent
        visibility_m: Horizontal visibility in meters
    """
    temperature_k: float
    pressure_pa: float
    humidity_pct: float
    wind: Wind = field(default_factory=Wind)
    cloud_cover_pct: float = 0.0
    visibility_m: float = DEFAULT_VISIBILITY_M

    @classmethod
    def from_openweather(cls, payload: Mapping[str, Any]) -> "SurfaceWeather":
        """
        Parse an OpenWeatherMap current-weather document.

        Args:
            payload: Decoded JSON body of ``/data/2.5/weather``

        Returns:
            SurfaceWeather instance

        Raises:
            WeatherParseError: If a required field is missing or not numeric
        """
        try:
            main = payload["main"]
            wind = payload.get("wind") or {}
            clouds = payload.get("clouds") or {}
            return cls(
                temperature_k=float(main["temp"]),
                pressure_pa=float(main["pressure"]) * 100.0,
                humidity_pct=float(main["humidity"]),
                wind=Wind(
                    speed_mps=float(wind.get("speed", 0.0)),
                    direction_deg=float(wind.get("deg", 0.0)),
                ),
                cloud_cover_pct=float(clouds.get("all", 0.0)),
                visibility_m=float(payload.get("visibility", DEFAULT_VISIBILITY_M)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise WeatherParseError(f"Malformed weather payload: {exc!r}") from exc


@dataclass(frozen=True)
class EnvironmentalState:
    """
    Estimated weather at a node's altitude. Read-only once derived.

    Attributes:
        temperature_k: Temperature in Kelvin
        pressure_hpa: Pressure in hectopascal
        humidity_pct: Relative humidity, clamped to [0, 100]
        wind: Wind at altitude
        cloud_cover_pct: Cloud cover, clamped to [0, 100]
        visibility_m: Visibility in meters
    """
    temperature_k: float
    pressure_hpa: float
    humidity_pct: float
    wind: Wind
    cloud_cover_pct: float
    visibility_m: float

    @property
    def temperature_c(self) -> float:
        """Temperature in degrees Celsius."""
        return self.temperature_k - KELVIN_OFFSET

    def to_dict(self) -> Dict[str, float]:
        return {
            'temperature_k': self.temperature_k,
            'pressure_hpa': self.pressure_hpa,
            'humidity_pct': self.humidity_pct,
            'wind_speed_mps': self.wind.speed_mps,
            'wind_direction_deg': self.wind.direction_deg,
            'cloud_cover_pct': self.cloud_cover_pct,
            'visibility_m': self.visibility_m,
        }


def _clamp_percent(value: float) -> float:
    return float(min(100.0, max(0.0, value)))


def derive_altitude_weather(surface: SurfaceWeather,
                            altitude_m: float) -> EnvironmentalState:
    """
    Extrapolate a surface observation to a target altitude.

    Uses a fixed lapse rate for temperature, the barometric formula for
    pressure, and linear trends for humidity, wind, cloud cover and
    visibility.

    Args:
        surface: Ground-level observation
        altitude_m: Target altitude above the surface in meters (>= 0)

    Returns:
        EnvironmentalState at the requested altitude

    Raises:
        ValueError: If altitude_m is negative
    """
    if altitude_m < 0:
        raise ValueError(f"altitude_m must be >= 0, got {altitude_m}")

    altitude_km = altitude_m / 1000.0

    surface_temp_c = surface.temperature_k - KELVIN_OFFSET
    temp_at_altitude_c = surface_temp_c - LAPSE_RATE_C_PER_M * altitude_m
    temp_at_altitude_k = temp_at_altitude_c + KELVIN_OFFSET

    # Reference temperature averages the surface value in C with the target in K
    reference_temp = (surface_temp_c + temp_at_altitude_k) / 2.0
    exponent = (-GRAVITY_MPS2 * MOLAR_MASS_AIR * altitude_m) / (GAS_CONSTANT_AIR * reference_temp)
    pressure_pa = surface.pressure_pa * np.exp(exponent)

    humidity = _clamp_percent(surface.humidity_pct - altitude_km * HUMIDITY_DROP_PER_KM)
    wind = Wind(
        speed_mps=surface.wind.speed_mps + altitude_km * WIND_GAIN_PER_KM,
        direction_deg=surface.wind.direction_deg,
    )
    cloud_cover = _clamp_percent(surface.cloud_cover_pct - altitude_km * CLOUD_DROP_PER_KM)
    visibility = surface.visibility_m + altitude_km * VISIBILITY_GAIN_PER_KM

    return EnvironmentalState(
        temperature_k=temp_at_altitude_k,
        pressure_hpa=float(pressure_pa) / 100.0,
        humidity_pct=humidity,
        wind=wind,
        cloud_cover_pct=cloud_cover,
        visibility_m=visibility,
    )


if __name__ == "__main__":
    # Example usage
    surface = SurfaceWeather(
        temperature_k=288.15,
        pressure_pa=101325.0,
        humidity_pct=70.0,
        wind=Wind(speed_mps=5.0, direction_deg=270),
        cloud_cover_pct=60.0,
        visibility_m=8000.0,
    )

    for altitude in (0, 1000, 3000, 5000):
        state = derive_altitude_weather(surface, altitude)
        print(f"{altitude:>5} m: {state.temperature_c:6.1f} C, "
              f"{state.pressure_hpa:7.1f} hPa, "
              f"RH {state.humidity_pct:5.1f}%, "
              f"clouds {state.cloud_cover_pct:5.1f}%, "
              f"wind {state.wind.speed_mps:4.1f} m/s")
