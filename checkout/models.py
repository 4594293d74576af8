from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateOrderBody(BaseModel):
    """Payload accepted by ``POST /api/orders``."""

    cart: Any = None


class RefundBody(BaseModel):
    """Payload accepted by ``POST /api/payments/refund``."""

    model_config = ConfigDict(populate_by_name=True)

    captured_payment_id: str = Field(alias="capturedPaymentId")


class OrderRequest(BaseModel):
    """Order terms sent to the processor for a create-order call."""

    model_config = ConfigDict(frozen=True)

    currency: str
    amount: Decimal
    intent: Literal["AUTHORIZE", "CAPTURE"]
    card_verification: Optional[str] = None
    shipping_options: bool = False

    @classmethod
    def from_settings(cls, settings) -> "OrderRequest":
        return cls(
            currency=settings.ORDER_CURRENCY,
            amount=settings.ORDER_AMOUNT,
            intent=settings.ORDER_INTENT,
            card_verification=settings.CARD_VERIFICATION_METHOD,
            shipping_options=settings.ORDER_SHIPPING_OPTIONS,
        )
