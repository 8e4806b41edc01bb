"""
Interest rate models.

An InterestRateModel gives, at every event time, the prices of zero-coupon
bonds of all maturities as Slices of its Model.
"""

from gridpricer.models.handle import ModelHandle


class InterestRateModel(ModelHandle):
    """Model of the term structure of interest rates."""
