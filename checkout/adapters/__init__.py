"""Adapters for integrating external payment processors."""

from .base import (
    AuthenticationError,
    CheckoutAdapter,
    CheckoutError,
    InvalidRequestError,
    ProcessorError,
    ProcessorTimeoutError,
    ProcessorUnavailableError,
    RateLimitError,
)

__all__ = ["CheckoutAdapter", "CheckoutError", "InvalidRequestError", "ProcessorError", "AuthenticationError", "ProcessorUnavailableError", "RateLimitError", "ProcessorTimeoutError"]
