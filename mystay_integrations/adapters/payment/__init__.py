"""
Payment connector (Stripe-shaped): authorization holds, charges, tips, refunds
"""

from .connector import PaymentConnector, to_minor_units

__all__ = ["PaymentConnector", "to_minor_units"]
