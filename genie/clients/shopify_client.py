# genie/clients/shopify_client.py

import time
import requests
from typing import Dict, Any
from urllib.parse import urlparse

import shopify

from genie.config import SHOPIFY_API_VERSION, SHOPIFY_SCOPES, APP_URL
from genie.exceptions import ShopifyAPIError
from genie.product_shapes import admin_products_to_rest
from genie.shopify_graphql.mutations import (
    STOREFRONT_ACCESS_TOKEN_CREATE_MUTATION,
    SCRIPT_TAG_CREATE_MUTATION
)
from genie.shopify_graphql.queries import GET_PRODUCTS_QUERY


class ShopifyClient:
    """
    Admin API client for an installed shop (REST + GraphQL).
    """

    WEBHOOK_TOPICS = ["app/uninstalled"]

    def __init__(self, shop):
        from genie.shop import Shop  # avoid circular import

        if not isinstance(shop, Shop):
            raise TypeError("Expected a Shop instance")

        self.shop = shop
        self.domain = shop.domain
        self.token = shop.get_access_token()

        if not self.token:
            self.shop.log_action(
                event="admin_token_missing",
                level="error",
                data={"message": "❌ Cannot initialize ShopifyClient — access token is missing."}
            )
            raise ValueError(f"❌ ShopifyClient init failed: access token missing for {self.domain}")

        self.endpoint = f"https://{self.domain}/admin/api/{SHOPIFY_API_VERSION}/graphql.json"
        self.headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.token,
        }

    @staticmethod
    def get_default_scopes() -> list[str]:
        return list(SHOPIFY_SCOPES)

    def rest(self, method: str, path: str, json: dict = None, params: dict = None, timeout: int = 10) -> dict:
        url = f"https://{self.domain}/admin/api/{SHOPIFY_API_VERSION}/{path.lstrip('/')}"

        try:
            response = requests.request(method, url, headers=self.headers, json=json, params=params, timeout=timeout)
        except requests.RequestException as e:
            self.shop.log_action("❌ shopify_rest_exception", "error", {
                "method": method,
                "url": url,
                "params": params,
                "error": str(e)
            })
            raise ShopifyAPIError(f"Shopify request failed: {e}")

        if not response.ok:
            self.shop.log_action("❌ shopify_rest_http_error", "error", {
                "method": method,
                "url": url,
                "status_code": response.status_code,
                "response_text": response.text
            })
            raise ShopifyAPIError(
                f"Shopify {method} {path} failed with status {response.status_code}",
                status_code=response.status_code
            )

        return response.json()

    def _post_graphql(self, query: str, variables: Dict[str, Any] = None) -> Dict[str, Any]:
        for attempt in range(5):
            try:
                response = requests.post(
                    self.endpoint,
                    json={"query": query, "variables": variables or {}},
                    headers=self.headers,
                    timeout=15
                )
            except requests.RequestException as e:
                self.shop.log_action(
                    event="❌ shopify_request_failed",
                    level="error",
                    data={"error": str(e)}
                )
                raise ShopifyAPIError(str(e))

            if response.status_code == 429:
                self.shop.log_action(
                    event="⚠️ shopify_rate_limited",
                    level="warning",
                    data={"attempt": attempt + 1}
                )
                time.sleep(2 ** attempt)
                continue

            if not response.ok:
                self.shop.log_action(
                    event="❌ shopify_graphql_http_error",
                    level="error",
                    data={"status_code": response.status_code, "text": response.text}
                )
                raise ShopifyAPIError(
                    f"Shopify GraphQL request failed with status {response.status_code}",
                    status_code=response.status_code
                )

            try:
                json_data = response.json()
            except ValueError as e:
                self.shop.log_action(
                    event="❌ shopify_invalid_json",
                    level="error",
                    data={"error": str(e), "text": response.text}
                )
                raise ShopifyAPIError("Invalid JSON from Shopify")

            if "errors" in json_data:
                self.shop.log_action(
                    event="❌ shopify_graphql_error",
                    level="error",
                    data={"errors": json_data["errors"]}
                )
                raise ShopifyAPIError("Shopify GraphQL error", errors=json_data["errors"])

            return json_data["data"]

        raise ShopifyAPIError("Too many retries – Shopify API", status_code=429)

    def get_shop_info(self) -> dict:
        result = self.rest("GET", "shop.json")
        return result.get("shop", {})

    def get_products(self, first: int = 50) -> list[dict]:
        data = self._post_graphql(GET_PRODUCTS_QUERY, {"first": first})
        products = admin_products_to_rest(data)
        self.shop.log_action("✅ shopify_products_fetched", "debug", {"count": len(products)})
        return products

    def get_customers(self, limit: int = 50) -> list[dict]:
        result = self.rest("GET", "customers.json", params={"limit": limit})
        return result.get("customers", [])

    def get_orders(self, limit: int = 50) -> list[dict]:
        result = self.rest("GET", "orders.json", params={"status": "any", "limit": limit})
        return result.get("orders", [])

    def search_customers_by_email(self, email: str) -> list[dict]:
        result = self.rest("GET", "customers/search.json", params={"query": f"email:{email}"})
        return result.get("customers", [])

    def create_storefront_access_token(self, title: str) -> dict:
        data = self._post_graphql(STOREFRONT_ACCESS_TOKEN_CREATE_MUTATION, {"input": {"title": title}})

        result = data.get("storefrontAccessTokenCreate") or {}
        errors = result.get("userErrors", [])
        token = result.get("storefrontAccessToken")

        if errors or not token:
            self.shop.log_action(
                event="⚠️ storefront_token_create_errors",
                level="warning",
                data={"errors": errors}
            )
            raise ShopifyAPIError("Failed to create storefront token", errors=errors)

        self.shop.log_action(
            event="✅ storefront_token_created",
            level="success",
            data={"title": token.get("title"), "scopes": [s.get("handle") for s in token.get("accessScopes", [])]}
        )
        return token

    def create_script_tag(self, src: str) -> dict:
        variables = {
            "input": {
                "src": src,
                "displayScope": "ONLINE_STORE",
                "cache": False
            }
        }
        data = self._post_graphql(SCRIPT_TAG_CREATE_MUTATION, variables)

        result = data.get("scriptTagCreate") or {}
        errors = result.get("userErrors", [])
        script_tag = result.get("scriptTag")

        if errors or not script_tag:
            self.shop.log_action(
                event="⚠️ script_tag_create_errors",
                level="warning",
                data={"errors": errors, "src": src}
            )
            raise ShopifyAPIError("Failed to create script tag", errors=errors)

        self.shop.log_action(
            event="✅ script_tag_created",
            level="success",
            data={"script_tag_id": script_tag.get("id"), "src": script_tag.get("src")}
        )
        return script_tag

    def register_webhooks(self) -> bool:
        """
        Registers the app's Shopify webhooks.
        - Validates APP_URL
        - Deletes outdated webhooks (same topic but different address)
        - Registers new webhooks if missing
        """
        parsed = urlparse(APP_URL)
        if not parsed.scheme or not parsed.netloc:
            self.shop.log_action("webhook_config_error", "error", {
                "message": f"❌ APP_URL is malformed: {APP_URL}"
            })
            raise ValueError("APP_URL must be a valid URL.")

        success = True
        registered = []

        try:
            shopify.ShopifyResource.activate_session(
                shopify.Session(self.domain, SHOPIFY_API_VERSION, self.token)
            )

            existing_hooks = shopify.Webhook.find()

            for topic in self.WEBHOOK_TOPICS:
                target_url = f"{APP_URL}/webhooks/shopify/{topic}"

                matched_hook = next((hook for hook in existing_hooks if hook.topic == topic), None)

                if matched_hook:
                    if matched_hook.address == target_url:
                        self.shop.log_action("webhook_already_exists", "debug", {
                            "topic": topic,
                            "address": target_url
                        })
                        continue

                    matched_hook.destroy()
                    self.shop.log_action("webhook_deleted_existing", "info", {
                        "topic": topic,
                        "previous_address": matched_hook.address,
                        "message": "💥 Deleted existing webhook due to address mismatch."
                    })

                webhook = shopify.Webhook.create({
                    "topic": topic,
                    "address": target_url,
                    "format": "json"
                })

                if webhook.errors and webhook.errors.full_messages():
                    self.shop.log_action("webhook_register_failed", "warning", {
                        "topic": topic,
                        "errors": [str(e) for e in webhook.errors.full_messages()]
                    })
                    success = False
                else:
                    registered.append({"topic": topic, "address": target_url})

        except Exception as e:
            self.shop.log_action("webhook_register_exception", "error", {
                "message": "❌ Error registering webhooks.",
                "error_type": type(e).__name__,
                "error_str": str(e)
            })
            success = False
        finally:
            shopify.ShopifyResource.clear_session()

        if registered:
            self.shop.log_action("webhooks_registered_summary", "info", {
                "registered_webhooks": registered
            })

        return success
