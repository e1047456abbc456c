from unittest.mock import patch

import pytest
import requests

from genie.clients.shopify_client import ShopifyClient
from genie.clients.shopify_oauth_client import normalize_shop_domain
from genie.clients.customer_account_client import CustomerAccountClient, UNKNOWN_CUSTOMER_EMAIL
from genie.exceptions import ShopifyAPIError, OAuthExchangeError

from conftest import SHOP_DOMAIN, http_response, non_json_response


class TestNormalizeShopDomain:

    @pytest.mark.parametrize("raw", [
        "test-shop",
        "test-shop.myshopify.com",
        "https://test-shop.myshopify.com/admin",
        "  Test-Shop  ",
    ])
    def test_normalizes(self, raw):
        assert normalize_shop_domain(raw) == SHOP_DOMAIN

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            normalize_shop_domain("")


class TestShopifyClient:

    def test_client_uses_decrypted_admin_token(self, installed_shop):
        client = installed_shop.client
        assert isinstance(client, ShopifyClient)
        assert client.headers["X-Shopify-Access-Token"] == "shpat_test_token"
        assert client.endpoint == f"https://{SHOP_DOMAIN}/admin/api/2025-07/graphql.json"

    @patch("genie.clients.shopify_client.time.sleep")
    @patch("genie.clients.shopify_client.requests.post")
    def test_graphql_retries_on_429(self, mock_post, mock_sleep, installed_shop):
        mock_post.side_effect = [
            http_response(status_code=429),
            http_response(status_code=429),
            http_response({"data": {"products": {"edges": []}}}),
        ]

        assert installed_shop.client.get_products() == []
        assert mock_post.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    @patch("genie.clients.shopify_client.time.sleep")
    @patch("genie.clients.shopify_client.requests.post")
    def test_graphql_gives_up_after_five_attempts(self, mock_post, mock_sleep, installed_shop):
        mock_post.return_value = http_response(status_code=429)

        with pytest.raises(ShopifyAPIError) as exc_info:
            installed_shop.client.get_products()

        assert exc_info.value.status_code == 429
        assert mock_post.call_count == 5

    @patch("genie.clients.shopify_client.requests.post")
    def test_graphql_errors_raise(self, mock_post, installed_shop):
        mock_post.return_value = http_response({"errors": [{"message": "Access denied"}]})

        with pytest.raises(ShopifyAPIError) as exc_info:
            installed_shop.client.get_products()

        assert exc_info.value.errors == [{"message": "Access denied"}]

    @patch("genie.clients.shopify_client.requests.request")
    def test_rest_orders_request_all_statuses(self, mock_request, installed_shop):
        mock_request.return_value = http_response({"orders": [{"id": 1}]})

        assert installed_shop.client.get_orders() == [{"id": 1}]
        assert mock_request.call_args.kwargs["params"] == {"status": "any", "limit": 50}
        assert mock_request.call_args.args[1].endswith("/admin/api/2025-07/orders.json")

    @patch("genie.clients.shopify_client.requests.request")
    def test_rest_http_error(self, mock_request, installed_shop):
        mock_request.return_value = http_response(status_code=401, text="Unauthorized")

        with pytest.raises(ShopifyAPIError) as exc_info:
            installed_shop.client.get_shop_info()

        assert exc_info.value.status_code == 401

    @patch("genie.clients.shopify_client.requests.post")
    def test_storefront_token_user_errors(self, mock_post, installed_shop):
        mock_post.return_value = http_response({"data": {"storefrontAccessTokenCreate": {
            "userErrors": [{"field": ["title"], "message": "Title is taken"}],
            "storefrontAccessToken": None
        }}})

        with pytest.raises(ShopifyAPIError) as exc_info:
            installed_shop.client.create_storefront_access_token("Chatbot Storefront Access Token")

        assert exc_info.value.errors[0]["message"] == "Title is taken"

    @patch("genie.clients.shopify_client.requests.post")
    def test_script_tag_input(self, mock_post, installed_shop):
        mock_post.return_value = http_response({"data": {"scriptTagCreate": {
            "userErrors": [],
            "scriptTag": {"id": "gid://shopify/ScriptTag/1", "src": "https://genie.test/chatbot-widget.js"}
        }}})

        script_tag = installed_shop.client.create_script_tag("https://genie.test/chatbot-widget.js")

        assert script_tag["id"] == "gid://shopify/ScriptTag/1"
        variables = mock_post.call_args.kwargs["json"]["variables"]
        assert variables["input"] == {
            "src": "https://genie.test/chatbot-widget.js",
            "displayScope": "ONLINE_STORE",
            "cache": False
        }


class TestStorefrontClient:

    @patch("genie.clients.storefront_client.requests.post")
    def test_create_cart_attaches_buyer_identity(self, mock_post, storefront_shop):
        mock_post.return_value = http_response({"data": {"cartCreate": {"cart": {"id": "c1"}}}})
        lines = [{"merchandiseId": "gid://shopify/ProductVariant/1", "quantity": 1}]

        storefront_shop.storefront().create_cart(lines, customer_access_token="cust-token")

        variables = mock_post.call_args.kwargs["json"]["variables"]
        assert variables["input"] == {"lines": lines, "buyerIdentity": {"customerAccessToken": "cust-token"}}

    @patch("genie.clients.storefront_client.requests.post")
    def test_partial_errors_still_return_data(self, mock_post, storefront_shop):
        body = {"data": {"products": {"edges": []}}, "errors": [{"message": "throttled field"}]}
        mock_post.return_value = http_response(body)

        assert storefront_shop.storefront().search_products("shirt") == body

    @patch("genie.clients.storefront_client.requests.post")
    def test_http_failure_raises(self, mock_post, storefront_shop):
        mock_post.return_value = http_response(status_code=401)

        with pytest.raises(ShopifyAPIError):
            storefront_shop.storefront().get_cart("gid://shopify/Cart/1")

    @patch("genie.clients.storefront_client.requests.post")
    def test_non_json_body_raises_api_error(self, mock_post, storefront_shop, mongo):
        mock_post.return_value = non_json_response()

        with pytest.raises(ShopifyAPIError) as exc_info:
            storefront_shop.storefront().search_products(first=50)

        assert exc_info.value.message == "Invalid JSON from Shopify Storefront API"
        assert mongo.logs.count_documents({"event": "❌ storefront_invalid_json"}) == 1


class TestCustomerAccountClient:

    def test_authorize_url(self):
        client = CustomerAccountClient(SHOP_DOMAIN, "client-id", "secret")
        url = client.authorize_url("https://genie.test/api/customer-auth/callback", "state123")

        assert url.startswith("https://shopify.com/myshopify/customer_account/oauth/authorize?")
        assert "client_id=client-id" in url
        assert "state=state123" in url
        assert "shop=test-shop.myshopify.com" in url
        assert "scope=openid+email+https%3A%2F%2Fapi.shopify.com%2Fauth%2Fcustomer.graphql" in url

    @patch("genie.clients.customer_account_client.requests.post")
    def test_exchange_code_sends_secret_and_verifier(self, mock_post):
        mock_post.return_value = http_response({"access_token": "cat_1"})
        client = CustomerAccountClient(SHOP_DOMAIN, "client-id", "secret")

        assert client.exchange_code("code-1", redirect_uri="https://x/cb", code_verifier="v")["access_token"] == "cat_1"

        payload = mock_post.call_args.kwargs["json"]
        assert payload["grant_type"] == "authorization_code"
        assert payload["client_secret"] == "secret"
        assert payload["code_verifier"] == "v"

    @patch("genie.clients.customer_account_client.requests.post")
    def test_exchange_code_failure(self, mock_post):
        mock_post.return_value = http_response(status_code=400, text="invalid_grant")

        with pytest.raises(OAuthExchangeError):
            CustomerAccountClient(SHOP_DOMAIN, "client-id").exchange_code("bad")

    @patch("genie.clients.customer_account_client.requests.post")
    def test_exchange_code_non_json_body(self, mock_post):
        mock_post.return_value = non_json_response()

        with pytest.raises(OAuthExchangeError) as exc_info:
            CustomerAccountClient(SHOP_DOMAIN, "client-id").exchange_code("code-1")

        assert exc_info.value.message == "Token response was not valid JSON"

    @patch("genie.clients.customer_account_client.requests.post")
    def test_get_orders_non_json_body(self, mock_post):
        mock_post.return_value = non_json_response()

        with pytest.raises(ShopifyAPIError):
            CustomerAccountClient(SHOP_DOMAIN, "client-id").get_orders("cat_1")

    @patch("genie.clients.customer_account_client.requests.post")
    def test_get_customer(self, mock_post):
        mock_post.return_value = http_response({"data": {"customer": {
            "id": "gid://shopify/Customer/1",
            "emailAddress": {"emailAddress": "a@b.c"},
            "firstName": "Ada",
            "lastName": "Lovelace"
        }}})

        customer = CustomerAccountClient(SHOP_DOMAIN, "client-id").get_customer("cat_1")

        assert customer == {"id": "gid://shopify/Customer/1", "email": "a@b.c", "name": "Ada Lovelace"}

    @patch("genie.clients.customer_account_client.requests.post")
    def test_get_customer_falls_back_to_placeholder_email(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("down")

        customer = CustomerAccountClient(SHOP_DOMAIN, "client-id").get_customer("cat_1")

        assert customer == {"id": None, "email": UNKNOWN_CUSTOMER_EMAIL, "name": None}
