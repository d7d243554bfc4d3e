"""Configuration adapters."""

from mbta_departures.adapters.config.app_config import AppConfig
from mbta_departures.adapters.config.stop_descriptor_loader import StopDescriptorLoader

__all__ = ["AppConfig", "StopDescriptorLoader"]
