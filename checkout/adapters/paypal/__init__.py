"""PayPal payment processor adapter."""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import requests
from apimatic_core.exceptions.auth_validation_exception import AuthValidationException
from paypalserversdk.api_helper import APIHelper as ApiHelper
from paypalserversdk.configuration import Environment
from paypalserversdk.exceptions.api_exception import ApiException
from paypalserversdk.http.auth.o_auth_2 import ClientCredentialsAuthCredentials
from paypalserversdk.logging.configuration.api_logging_configuration import (
    LoggingConfiguration,
    RequestLoggingConfiguration,
    ResponseLoggingConfiguration,
)
from paypalserversdk.models.amount_with_breakdown import AmountWithBreakdown
from paypalserversdk.models.card_attributes import CardAttributes
from paypalserversdk.models.card_request import CardRequest
from paypalserversdk.models.card_verification import CardVerification
from paypalserversdk.models.money import Money
from paypalserversdk.models.order_request import OrderRequest
from paypalserversdk.models.payment_source import PaymentSource
from paypalserversdk.models.purchase_unit_request import PurchaseUnitRequest
from paypalserversdk.models.shipping_details import ShippingDetails
from paypalserversdk.models.shipping_option import ShippingOption
from paypalserversdk.models.shipping_type import ShippingType
from paypalserversdk.paypal_serversdk_client import PaypalServersdkClient

from ..base import (
    AuthenticationError,
    CheckoutAdapter,
    ProcessorError,
    ProcessorTimeoutError,
    ProcessorUnavailableError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

# Full resource representations instead of the minimal HATEOAS reply.
PREFER_REPRESENTATION = "return=representation"

# (id, label, selected, price)
SHIPPING_OPTIONS = (
    ("1", "Free Shipping", True, "0"),
    ("2", "Expedited Shipping", False, "5"),
)


def build_paypal_client(settings) -> PaypalServersdkClient:
    """Create the SDK client shared by every request."""
    environment = (
        Environment.PRODUCTION
        if settings.PAYPAL_ENVIRONMENT == "production"
        else Environment.SANDBOX
    )
    return PaypalServersdkClient(
        client_credentials_auth_credentials=ClientCredentialsAuthCredentials(
            o_auth_client_id=settings.PAYPAL_CLIENT_ID,
            o_auth_client_secret=settings.PAYPAL_CLIENT_SECRET,
        ),
        environment=environment,
        timeout=settings.PAYPAL_TIMEOUT,
        max_retries=0,
        logging_configuration=LoggingConfiguration(
            log_level=logging.INFO,
            mask_sensitive_headers=True,
            request_logging_config=RequestLoggingConfiguration(
                log_body=settings.PAYPAL_LOG_BODIES
            ),
            response_logging_config=ResponseLoggingConfiguration(
                log_headers=True, log_body=settings.PAYPAL_LOG_BODIES
            ),
        ),
    )


class PayPalAdapter(CheckoutAdapter):
    """Checkout adapter backed by the official ``paypal-server-sdk``.

    The SDK is synchronous, so each call runs in a worker thread to keep
    the event loop free. Errors raised by the SDK or its HTTP transport are
    translated into the exceptions from ``adapters.base``.
    """

    def __init__(self, client: PaypalServersdkClient) -> None:
        self._orders = client.orders
        self._payments = client.payments

    @classmethod
    def from_settings(cls, settings) -> "PayPalAdapter":
        return cls(build_paypal_client(settings))

    async def create_order(
        self, amount: Decimal, currency: str, intent: str, **kwargs: Any
    ) -> str:
        body = build_order_request(
            amount,
            currency,
            intent,
            card_verification=kwargs.get("card_verification"),
            shipping_options=kwargs.get("shipping_options", False),
        )
        return await self._call(
            "create_order",
            self._orders.create_order,
            {"body": body, "prefer": PREFER_REPRESENTATION},
        )

    async def capture_order(self, order_id: str, **kwargs: Any) -> str:
        return await self._call(
            "capture_order",
            self._orders.capture_order,
            {"id": order_id, "prefer": PREFER_REPRESENTATION},
        )

    async def authorize_order(self, order_id: str, **kwargs: Any) -> str:
        return await self._call(
            "authorize_order",
            self._orders.authorize_order,
            {"id": order_id, "prefer": PREFER_REPRESENTATION},
        )

    async def refund_capture(self, capture_id: str, **kwargs: Any) -> str:
        return await self._call(
            "refund_captured_payment",
            self._payments.refund_captured_payment,
            {"capture_id": capture_id, "prefer": PREFER_REPRESENTATION},
        )

    async def capture_authorization(
        self, authorization_id: str, **kwargs: Any
    ) -> str:
        return await self._call(
            "capture_authorized_payment",
            self._payments.capture_authorized_payment,
            {"authorization_id": authorization_id, "prefer": PREFER_REPRESENTATION},
        )

    async def _call(
        self, name: str, method: Callable[[Dict[str, Any]], Any], options: Dict[str, Any]
    ) -> str:
        try:
            response = await asyncio.to_thread(method, options)
        except AuthValidationException as exc:
            # Raised when no OAuth token could be obtained for the request.
            raise AuthenticationError(
                f"PayPal rejected client credentials during {name}: {exc}"
            ) from exc
        except ApiException as exc:
            raise translate_api_exception(name, exc) from exc
        except requests.exceptions.Timeout as exc:
            raise ProcessorTimeoutError(f"PayPal {name} timed out") from exc
        except requests.exceptions.ConnectionError as exc:
            raise ProcessorUnavailableError(f"PayPal unreachable during {name}: {exc}") from exc

        logger.debug("PayPal %s returned HTTP %s", name, response.status_code)
        return ApiHelper.json_serialize(response.body)


def translate_api_exception(name: str, exc: ApiException) -> Exception:
    """Map an SDK ``ApiException`` onto the checkout error taxonomy."""
    status_code = getattr(exc, "response_code", None)
    message = f"PayPal {name} failed with HTTP {status_code}: {exc}"
    if status_code in (401, 403):
        return AuthenticationError(message, status_code=status_code)
    if status_code == 429:
        return RateLimitError(message)
    if status_code is not None and status_code >= 500:
        return ProcessorUnavailableError(message)
    return ProcessorError(message, status_code=status_code)


def build_order_request(
    amount: Decimal,
    currency: str,
    intent: str,
    card_verification: Optional[str] = None,
    shipping_options: bool = False,
) -> OrderRequest:
    """Build the SDK order body for a single purchase unit."""
    purchase_unit = PurchaseUnitRequest(
        amount=AmountWithBreakdown(currency_code=currency, value=format(amount, "f")),
    )
    if shipping_options:
        purchase_unit.shipping = ShippingDetails(
            options=_shipping_options(currency)
        )

    order = OrderRequest(intent=intent, purchase_units=[purchase_unit])
    if card_verification:
        order.payment_source = PaymentSource(
            card=CardRequest(
                attributes=CardAttributes(
                    verification=CardVerification(method=card_verification)
                )
            )
        )
    return order


def _shipping_options(currency: str) -> List[ShippingOption]:
    return [
        ShippingOption(
            id=option_id,
            label=label,
            selected=selected,
            mtype=ShippingType.SHIPPING,
            amount=Money(currency_code=currency, value=price),
        )
        for option_id, label, selected, price in SHIPPING_OPTIONS
    ]


__all__ = ["PayPalAdapter", "build_paypal_client", "build_order_request"]
