"""
Checkout Gateway Test Suite

This package contains all tests for the checkout gateway including:
- HTTP route tests with a mocked adapter
- Checkout handler error mapping tests
- PayPal adapter tests against mocked SDK controllers
- Configuration tests
"""
