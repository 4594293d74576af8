import logging
from contextlib import asynccontextmanager
from functools import lru_cache

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from checkout.adapters import CheckoutAdapter
from checkout.adapters.paypal import PayPalAdapter
from checkout.checkout_handler import CheckoutHandler, CheckoutResult, ErrorKind
from checkout.config import Settings, get_settings
from checkout.models import CreateOrderBody, OrderRequest, RefundBody

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("checkout-gateway")

class EndpointFilter(logging.Filter):
    """Filter out noisy health check access logs."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - logging filter
        return "GET /health" not in record.getMessage()


logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


@lru_cache(maxsize=1)
def get_provider() -> CheckoutAdapter:
    return PayPalAdapter.from_settings(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing or blank PayPal credentials abort startup here.
    settings = get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL)

    app.state.checkout_handler = CheckoutHandler(
        get_provider(), OrderRequest.from_settings(settings)
    )
    logger.info(
        "Checkout gateway ready (PayPal %s, timeout %ss)",
        settings.PAYPAL_ENVIRONMENT,
        settings.PAYPAL_TIMEOUT,
    )
    yield


def get_checkout_handler(request: Request) -> CheckoutHandler:
    return request.app.state.checkout_handler


def to_response(result: CheckoutResult) -> Response:
    if result.body is None:
        return Response(status_code=result.status_code)
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type="application/json",
    )


app = FastAPI(
    title="Checkout Gateway",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return to_response(CheckoutResult.failure(ErrorKind.INVALID_REQUEST))


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "checkout-gateway"}


@app.post("/api/orders")
async def create_order(
    payload: CreateOrderBody,
    handler: CheckoutHandler = Depends(get_checkout_handler),
):
    """Create an order to start the transaction."""
    return to_response(await handler.create_order(payload.cart))


@app.post("/api/orders/{order_id}/capture")
async def capture_order(
    order_id: str, handler: CheckoutHandler = Depends(get_checkout_handler)
):
    """Capture payment for an approved order."""
    return to_response(await handler.capture_order(order_id))


@app.post("/api/orders/{order_id}/authorize")
async def authorize_order(
    order_id: str, handler: CheckoutHandler = Depends(get_checkout_handler)
):
    """Authorize payment for an approved order."""
    return to_response(await handler.authorize_order(order_id))


@app.post("/api/orders/{authorization_id}/captureAuthorize")
async def capture_authorization(
    authorization_id: str, handler: CheckoutHandler = Depends(get_checkout_handler)
):
    """Capture funds held by an authorization."""
    return to_response(await handler.capture_authorization(authorization_id))


@app.post("/api/payments/refund")
async def refund_captured_payment(
    payload: RefundBody,
    handler: CheckoutHandler = Depends(get_checkout_handler),
):
    """Refund a captured payment."""
    return to_response(
        await handler.refund_captured_payment(payload.captured_payment_id)
    )


@app.get("/")
async def root(settings: Settings = Depends(get_settings)):
    return {"message": "Checkout Gateway API", "environment": settings.PAYPAL_ENVIRONMENT}

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "checkout.main:app",
        host="0.0.0.0",
        port=settings.HTTP_PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
