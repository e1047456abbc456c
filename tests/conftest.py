"""
Shared fixtures.

Configuration is read from the environment at import time, so test values are
set before anything under genie/ or routes/ is imported. MongoDB is replaced by
an in-memory mongomock client shared by every repository and route module.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["SHOPIFY_API_KEY"] = "test_api_key"
os.environ["SHOPIFY_API_SECRET"] = "test_api_secret"
os.environ["ENCRYPTION_SECRET"] = "test_encryption_secret"
os.environ["OPENAI_API_KEY"] = "sk-test"
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DB_NAME"] = "aladdyn_genie_test"
os.environ["APP_URL"] = "https://genie.test"

import mongomock
import requests
import pytest
from unittest.mock import MagicMock

from genie.MongoManager import MongoManager

MongoManager._client = mongomock.MongoClient()

from fastapi.testclient import TestClient

from genie.shops import Shops

SHOP_DOMAIN = "test-shop.myshopify.com"


@pytest.fixture(autouse=True)
def mongo():
    """Clean in-memory database for every test."""
    manager = MongoManager()
    for collection in (manager.shops, manager.customers, manager.chatbots, manager.logs):
        collection.delete_many({})
    yield manager


@pytest.fixture
def client():
    from main import app
    return TestClient(app)


@pytest.fixture
def installed_shop(mongo):
    """A shop that finished the OAuth install."""
    return Shops(mongo).save_installation(SHOP_DOMAIN, "shpat_test_token", ["read_products", "read_orders"])


@pytest.fixture
def storefront_shop(installed_shop):
    installed_shop.set_storefront_token("storefront_test_token")
    return installed_shop


@pytest.fixture
def customer_account_shop(installed_shop):
    installed_shop.set_customer_account_credentials("ca_client_id", "ca_client_secret")
    return installed_shop


def http_response(json_data=None, status_code=200, text=""):
    """Stand-in for a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    response.json.return_value = json_data if json_data is not None else {}
    return response


def non_json_response(status_code=200, text="<html>Service unavailable</html>"):
    """A response whose body is not JSON."""
    response = http_response(status_code=status_code, text=text)
    response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", text, 0)
    return response
