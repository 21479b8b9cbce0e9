"""Carenet - referral network graph engine for the healthcare operations dashboard."""

__version__ = "0.1.0"
