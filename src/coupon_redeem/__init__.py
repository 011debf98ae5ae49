"""Coupon redemption service for the rewards program."""

__version__ = "0.1.0"
