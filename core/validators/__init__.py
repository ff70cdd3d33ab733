"""
Validators module

Data quality validators for raw price data
"""

from core.validators.prices import PriceDataValidator

__all__ = ["PriceDataValidator"]
