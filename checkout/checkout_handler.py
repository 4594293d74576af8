import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from fastapi import status

from checkout.adapters.base import (
    CheckoutAdapter,
    InvalidRequestError,
    ProcessorError,
    ProcessorTimeoutError,
    ProcessorUnavailableError,
)
from checkout.models import OrderRequest

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    INVALID_REQUEST = "invalid_request"
    PROCESSOR_DECLINED = "processor_declined"
    PROCESSOR_UNAVAILABLE = "processor_unavailable"
    PROCESSOR_TIMEOUT = "processor_timeout"
    INTERNAL = "internal"


ERROR_STATUS = {
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PROCESSOR_DECLINED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PROCESSOR_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.PROCESSOR_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of one checkout operation.

    ``body`` is the processor's JSON on success and always ``None`` on
    failure, so error details never reach the caller.
    """

    status_code: int
    body: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, body: str) -> "CheckoutResult":
        return cls(status_code=status.HTTP_200_OK, body=body)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "CheckoutResult":
        return cls(status_code=ERROR_STATUS[kind], error_kind=kind)


class CheckoutHandler:
    """Stateless request handler for the five checkout operations.

    Each operation makes exactly one adapter call and never retries it;
    a failed capture or refund may already have taken effect remotely.
    """

    def __init__(self, checkout_adapter: CheckoutAdapter, order_request: OrderRequest):
        self._checkout_adapter = checkout_adapter
        self._order_request = order_request
        logger.info(f"CheckoutHandler initialized with {checkout_adapter.__class__.__name__}")

    async def create_order(self, cart: Any = None) -> CheckoutResult:
        """Create an order using the configured pricing policy."""
        logger.debug("Create order requested for cart: %r", cart)
        terms = self._order_request
        return await self._invoke(
            "create order",
            self._checkout_adapter.create_order,
            amount=terms.amount,
            currency=terms.currency,
            intent=terms.intent,
            card_verification=terms.card_verification,
            shipping_options=terms.shipping_options,
        )

    async def capture_order(self, order_id: str) -> CheckoutResult:
        return await self._invoke(
            "capture order", self._checkout_adapter.capture_order, order_id
        )

    async def authorize_order(self, order_id: str) -> CheckoutResult:
        return await self._invoke(
            "authorize order", self._checkout_adapter.authorize_order, order_id
        )

    async def refund_captured_payment(self, captured_payment_id: str) -> CheckoutResult:
        return await self._invoke(
            "refund captured payment",
            self._checkout_adapter.refund_capture,
            captured_payment_id,
        )

    async def capture_authorization(self, authorization_id: str) -> CheckoutResult:
        return await self._invoke(
            "capture authorization",
            self._checkout_adapter.capture_authorization,
            authorization_id,
        )

    async def _invoke(
        self,
        action: str,
        method: Callable[..., Awaitable[str]],
        identifier: Optional[str] = None,
        **kwargs: Any,
    ) -> CheckoutResult:
        try:
            if identifier is None:
                body = await method(**kwargs)
            else:
                if not isinstance(identifier, str) or not identifier.strip():
                    raise InvalidRequestError(f"Missing identifier for {action}")
                body = await method(identifier, **kwargs)
        except InvalidRequestError as e:
            logger.warning("Rejected %s: %s", action, e)
            return CheckoutResult.failure(ErrorKind.INVALID_REQUEST)
        except ProcessorTimeoutError as e:
            logger.error(f"Failed to {action}: {e}")
            return CheckoutResult.failure(ErrorKind.PROCESSOR_TIMEOUT)
        except ProcessorUnavailableError as e:
            logger.error(f"Failed to {action}: {e}")
            return CheckoutResult.failure(ErrorKind.PROCESSOR_UNAVAILABLE)
        except ProcessorError as e:
            logger.error(f"Failed to {action}: {e}")
            return CheckoutResult.failure(ErrorKind.PROCESSOR_DECLINED)
        except Exception:
            logger.exception("Failed to %s", action)
            return CheckoutResult.failure(ErrorKind.INTERNAL)

        if identifier is None:
            logger.info("Completed %s", action)
        else:
            logger.info("Completed %s for %s", action, identifier)
        return CheckoutResult.success(body)
