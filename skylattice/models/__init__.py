"""
Models module for grid nodes and atmospheric conditions.
"""

from .environment import Wind, SurfaceWeather, EnvironmentalState, derive_altitude_weather
from .node import Node, Edge

__all__ = ['Wind', 'SurfaceWeather', 'EnvironmentalState', 'derive_altitude_weather', 'Node', 'Edge']
