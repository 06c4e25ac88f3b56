"""
Digital key connector and providers (alliants, openkey, none)
"""

from .connector import DigitalKeyConnector

__all__ = ["DigitalKeyConnector"]
