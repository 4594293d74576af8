"""
Pytest configuration and fixtures for checkout gateway tests.
"""

import os
import sys
import pytest
from unittest.mock import AsyncMock

# Add project root to Python path for imports
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(ROOT_DIR)

from checkout.adapters.base import CheckoutAdapter  # noqa: E402
from checkout.checkout_handler import CheckoutHandler  # noqa: E402
from checkout.config import Settings, get_settings  # noqa: E402
from checkout.models import OrderRequest  # noqa: E402


@pytest.fixture(scope="session")
def test_env():
    """Fixture to set up test environment variables."""
    test_env_vars = {
        'PAYPAL_CLIENT_ID': 'test-client-id',
        'PAYPAL_CLIENT_SECRET': 'test-client-secret',
        'LOG_LEVEL': 'DEBUG',
    }

    for key, value in test_env_vars.items():
        os.environ.setdefault(key, value)

    return test_env_vars


@pytest.fixture
def settings():
    """Settings with fake PayPal credentials and default order policy."""
    return Settings(
        PAYPAL_CLIENT_ID="test-client-id",
        PAYPAL_CLIENT_SECRET="test-client-secret",
        _env_file=None,
    )


@pytest.fixture
def mock_adapter():
    """Checkout adapter whose processor calls are AsyncMocks."""
    return AsyncMock(spec=CheckoutAdapter)


@pytest.fixture
def checkout_handler(mock_adapter, settings):
    return CheckoutHandler(mock_adapter, OrderRequest.from_settings(settings))


@pytest.fixture
def client(checkout_handler, settings):
    """HTTP client wired to the mocked adapter; lifespan is not run."""
    from fastapi.testclient import TestClient
    from checkout.main import app, get_checkout_handler

    app.dependency_overrides[get_checkout_handler] = lambda: checkout_handler
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_paypal_client():
    """PayPal SDK client whose controllers are autospecced from the real SDK."""
    from unittest.mock import MagicMock, create_autospec
    from paypalserversdk.controllers.orders_controller import OrdersController
    from paypalserversdk.controllers.payments_controller import PaymentsController
    from paypalserversdk.paypal_serversdk_client import PaypalServersdkClient

    paypal_client = MagicMock(spec=PaypalServersdkClient)
    paypal_client.orders = create_autospec(OrdersController, instance=True)
    paypal_client.payments = create_autospec(PaymentsController, instance=True)

    paypal_client.orders.create_order.return_value = MagicMock(
        status_code=201,
        body={"id": "5O190127TN364715T", "status": "PAYER_ACTION_REQUIRED"},
    )
    paypal_client.orders.capture_order.return_value = MagicMock(
        status_code=201, body={"id": "ABC123", "status": "COMPLETED"}
    )
    paypal_client.orders.authorize_order.return_value = MagicMock(
        status_code=201, body={"id": "ABC123", "status": "COMPLETED"}
    )
    paypal_client.payments.refund_captured_payment.return_value = MagicMock(
        status_code=201, body={"id": "1JU08902781691411", "status": "COMPLETED"}
    )
    paypal_client.payments.capture_authorized_payment.return_value = MagicMock(
        status_code=201, body={"id": "2GG279541U471931P", "status": "COMPLETED"}
    )
    return paypal_client


# Configure pytest-asyncio
def pytest_configure(config):
    """Configure pytest with asyncio support."""
    config.addinivalue_line("markers", "asyncio: mark test as async")
