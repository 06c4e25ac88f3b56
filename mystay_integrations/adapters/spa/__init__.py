"""
Spa connector and booking providers (spabooker, mindbody, generic)
"""

from .connector import SpaConnector

__all__ = ["SpaConnector"]
