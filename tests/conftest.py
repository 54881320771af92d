import httpx
import pytest

from draft_order_service.config import ServiceConfig
from mock_services import mock_shopify

SHOP_DOMAIN = mock_shopify.SHOP_DOMAIN
ACCESS_TOKEN = mock_shopify.ACCESS_TOKEN


@pytest.fixture()
def config() -> ServiceConfig:
    return ServiceConfig(shop_domain=SHOP_DOMAIN, access_token=ACCESS_TOKEN)


@pytest.fixture()
def mock_transport() -> httpx.ASGITransport:
    """Routes outbound Shopify calls into the mock Shopify Admin API."""
    return httpx.ASGITransport(app=mock_shopify.app)


@pytest.fixture()
def last_draft_order():
    def _last():
        assert mock_shopify.CREATED_DRAFT_ORDERS, "no draft order reached the mock Shopify API"
        return mock_shopify.CREATED_DRAFT_ORDERS[-1]
    return _last


@pytest.fixture(autouse=True)
def reset_mock_shopify():
    mock_shopify.CREATED_DRAFT_ORDERS.clear()
    yield
    mock_shopify.CREATED_DRAFT_ORDERS.clear()
