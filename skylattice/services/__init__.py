"""
Clients for the external weather and air-traffic services.
"""

from .weather import OpenWeatherClient
from .traffic import ADSBExchangeClient

__all__ = ['OpenWeatherClient', 'ADSBExchangeClient']
