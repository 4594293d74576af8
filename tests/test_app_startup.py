"""
Tests for application startup wiring through the FastAPI lifespan.
"""

import pytest
from fastapi.testclient import TestClient

from checkout import main
from checkout.config import get_settings


@pytest.fixture
def fresh_settings(test_env):
    get_settings.cache_clear()
    main.get_provider.cache_clear()
    yield
    get_settings.cache_clear()
    main.get_provider.cache_clear()


def test_lifespan_builds_handler(fresh_settings, mock_adapter, monkeypatch):
    monkeypatch.setattr(main, "get_provider", lambda: mock_adapter)
    mock_adapter.capture_order.return_value = '{"id": "ABC123", "status": "COMPLETED"}'

    with TestClient(main.app) as client:
        response = client.post("/api/orders/ABC123/capture")
        handler = main.app.state.checkout_handler

    assert response.status_code == 200
    assert response.json()["status"] == "COMPLETED"
    assert handler._checkout_adapter is mock_adapter
    assert handler._order_request.intent == "AUTHORIZE"


def test_provider_is_shared(fresh_settings, monkeypatch):
    built = []

    def from_settings(settings):
        built.append(settings)
        return object()

    monkeypatch.setattr(main.PayPalAdapter, "from_settings", from_settings)

    assert main.get_provider() is main.get_provider()
    assert len(built) == 1
    assert built[0] is get_settings()
