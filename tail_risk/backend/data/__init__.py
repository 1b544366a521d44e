"""Synthetic market data.

Generates price paths for optimisation harnesses and tests.
"""
from .synthetic import generate_price_frame, generate_price_series

__all__ = ["generate_price_series", "generate_price_frame"]
