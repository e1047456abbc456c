from unittest.mock import patch

from fastapi.testclient import TestClient

from genie.clients.shopify_client import ShopifyClient
from genie.exceptions import ShopifyAPIError
from genie.shop import Shop

from conftest import SHOP_DOMAIN


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert response.json()["timestamp"].endswith("Z")


def test_config_status_reports_presence_only(client):
    response = client.get("/api/test")

    assert response.json() == {
        "message": "Server is working",
        "env": {
            "hasApiKey": True,
            "hasApiSecret": True,
            "hasMongoUri": True,
            "hasOpenAIKey": True,
            "hasEncryptionSecret": True
        }
    }
    assert "test_api_secret" not in response.text


def test_unknown_api_path(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "API endpoint not found"}


def test_unhandled_errors_become_500(installed_shop):
    from main import app

    with patch.object(ShopifyClient, "create_storefront_access_token", side_effect=RuntimeError("boom")):
        response = TestClient(app, raise_server_exceptions=False).post(
            "/api/create-storefront-token", json={"shop": SHOP_DOMAIN}
        )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


class TestShopInfo:

    def test_requires_shop(self, client):
        response = client.post("/api/shop-info", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Shop domain required"}

    def test_unknown_shop(self, client):
        response = client.post("/api/shop-info", json={"shop": "ghost.myshopify.com"})
        assert response.status_code == 404
        assert response.json() == {"error": "Shop not found"}

    @patch.object(ShopifyClient, "get_orders", return_value=[{"id": 3}])
    @patch.object(ShopifyClient, "get_customers", return_value=[{"id": 2}])
    @patch.object(ShopifyClient, "get_products", return_value=[{"id": "gid://shopify/Product/1"}])
    @patch.object(ShopifyClient, "get_shop_info", return_value={"name": "Test Shop"})
    def test_aggregates_admin_data(self, mock_info, mock_products, mock_customers, mock_orders,
                                   client, installed_shop):
        response = client.post("/api/shop-info", json={"shop": SHOP_DOMAIN})

        assert response.json() == {
            "shop": {"name": "Test Shop"},
            "products": [{"id": "gid://shopify/Product/1"}],
            "customers": [{"id": 2}],
            "orders": [{"id": 3}]
        }

    @patch.object(ShopifyClient, "get_orders", side_effect=ShopifyAPIError("Shopify API request failed"))
    @patch.object(ShopifyClient, "get_customers", return_value=[])
    @patch.object(ShopifyClient, "get_products", return_value=[])
    @patch.object(ShopifyClient, "get_shop_info", return_value={})
    def test_any_failure_is_500(self, mock_info, mock_products, mock_customers, mock_orders,
                                client, installed_shop):
        response = client.post("/api/shop-info", json={"shop": SHOP_DOMAIN})

        assert response.status_code == 500
        assert response.json() == {"error": "Shopify API request failed"}


class TestCreateStorefrontToken:

    @patch.object(ShopifyClient, "create_storefront_access_token",
                  return_value={"accessToken": "sf_new", "title": "Chatbot Storefront Access Token"})
    def test_creates_and_stores(self, mock_create, client, installed_shop, mongo):
        response = client.post("/api/create-storefront-token", json={"shop": SHOP_DOMAIN})

        assert response.json() == {
            "success": True,
            "storefrontToken": "sf_new",
            "message": "Storefront access token created and stored"
        }
        assert Shop(SHOP_DOMAIN, mongo).get_storefront_token() == "sf_new"

    @patch.object(ShopifyClient, "create_storefront_access_token",
                  side_effect=ShopifyAPIError("userErrors", errors=[{"message": "Access denied"}]))
    def test_user_errors_are_details(self, mock_create, client, installed_shop):
        response = client.post("/api/create-storefront-token", json={"shop": SHOP_DOMAIN})

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to create storefront token",
            "details": [{"message": "Access denied"}]
        }

    def test_unknown_shop(self, client):
        response = client.post("/api/create-storefront-token", json={"shop": "ghost.myshopify.com"})
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Shop not found"}


class TestStoreCustomerAuth:

    def test_requires_all_fields(self, client):
        response = client.post("/api/store-customer-auth", json={
            "shop": SHOP_DOMAIN, "customer_account_client_id": "id"
        })
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "All fields required"}

    def test_stores_encrypted_secret(self, client, installed_shop, mongo):
        response = client.post("/api/store-customer-auth", json={
            "shop": SHOP_DOMAIN,
            "customer_account_client_id": "ca_id",
            "customer_account_client_secret": "ca_secret"
        })

        assert response.json() == {"success": True, "message": "Customer auth credentials stored"}
        record = mongo.shops.find_one({"shopify_domain": SHOP_DOMAIN})
        assert record["customer_account_client_id"] == "ca_id"
        assert record["customer_account_client_secret"] != "ca_secret"
        assert Shop(SHOP_DOMAIN, mongo).get_customer_account_credentials() == ("ca_id", "ca_secret")

    def test_unknown_shop(self, client):
        response = client.post("/api/store-customer-auth", json={
            "shop": "ghost.myshopify.com",
            "customer_account_client_id": "ca_id",
            "customer_account_client_secret": "ca_secret"
        })
        assert response.status_code == 404
