"""Checkout gateway forwarding browser checkout calls to PayPal."""

__version__ = "1.0.0"
