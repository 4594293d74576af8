"""Base classes and exceptions for checkout processors."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Optional


# ==================== Exceptions ====================

class CheckoutError(Exception):
    """Base exception for checkout-related errors."""
    pass


class InvalidRequestError(CheckoutError):
    """Raised when the caller's input cannot be forwarded."""
    pass


class ProcessorError(CheckoutError):
    """Raised when the payment processor answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ProcessorError):
    """Raised when the processor rejects the client credentials."""
    pass


class ProcessorUnavailableError(CheckoutError):
    """Raised when the processor cannot be reached or is failing."""
    pass


class RateLimitError(ProcessorUnavailableError):
    """Raised when API rate limits are exceeded."""
    pass


class ProcessorTimeoutError(ProcessorUnavailableError):
    """Raised when the processor does not answer in time."""
    pass


# ==================== Base Adapter ====================

class CheckoutAdapter(ABC):
    """Abstract base class for payment processor adapters.

    Every operation issues exactly one remote call and returns the
    processor's result serialized as JSON text.
    """

    @abstractmethod
    async def create_order(
        self,
        amount: Decimal,
        currency: str,
        intent: str,
        **kwargs: Any
    ) -> str:
        """Create a new order.

        Args:
            amount: Order total in major currency units
            currency: Three-letter ISO currency code
            intent: ``AUTHORIZE`` or ``CAPTURE``
            **kwargs: Additional processor-specific parameters

        Returns:
            The created order as JSON
        """
        pass

    @abstractmethod
    async def capture_order(self, order_id: str, **kwargs: Any) -> str:
        """Capture payment for an approved order.

        Args:
            order_id: Processor order identifier

        Returns:
            The captured order as JSON
        """
        pass

    @abstractmethod
    async def authorize_order(self, order_id: str, **kwargs: Any) -> str:
        """Authorize payment for an approved order.

        Args:
            order_id: Processor order identifier

        Returns:
            The authorization response as JSON
        """
        pass

    @abstractmethod
    async def refund_capture(self, capture_id: str, **kwargs: Any) -> str:
        """Refund a captured payment.

        Args:
            capture_id: Processor capture identifier
            **kwargs: Additional parameters (e.g., amount for partial refund)

        Returns:
            Refund details as JSON
        """
        pass

    @abstractmethod
    async def capture_authorization(
        self, authorization_id: str, **kwargs: Any
    ) -> str:
        """Capture previously authorized funds.

        Args:
            authorization_id: Processor authorization identifier

        Returns:
            The captured payment as JSON
        """
        pass
