"""
Marketplace Domain Services
"""

from .pricing_service import OrderPricing, PricingService

__all__ = ["OrderPricing", "PricingService"]
