# genie/clients/storefront_client.py

import requests
from typing import Dict, Any

from genie.config import SHOPIFY_STOREFRONT_API_VERSION
from genie.exceptions import ShopifyAPIError
from genie.shopify_graphql.storefront import (
    STOREFRONT_PRODUCTS_QUERY,
    STOREFRONT_PRODUCT_BY_HANDLE_QUERY,
    CART_CREATE_MUTATION,
    CART_LINES_ADD_MUTATION,
    CART_LINES_UPDATE_MUTATION,
    CART_QUERY
)


class StorefrontClient:
    """
    Storefront API client. Methods return the raw GraphQL body ({"data": ...})
    so widgets can read it exactly as Shopify shapes it.
    """

    def __init__(self, domain: str, storefront_token: str, logger=None):
        if not storefront_token:
            raise ValueError(f"Storefront token missing for {domain}")

        self.domain = domain
        self.logger = logger
        self.endpoint = f"https://{domain}/api/{SHOPIFY_STOREFRONT_API_VERSION}/graphql.json"
        self.headers = {
            "Content-Type": "application/json",
            "X-Shopify-Storefront-Access-Token": storefront_token,
        }

    def _log(self, event: str, level: str, data: dict):
        if self.logger:
            self.logger.log(event=event, level=level, store=self.domain, data=data)

    def execute(self, query: str, variables: Dict[str, Any] = None, timeout: int = 15) -> Dict[str, Any]:
        try:
            response = requests.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
                headers=self.headers,
                timeout=timeout
            )
        except requests.RequestException as e:
            self._log("❌ storefront_request_failed", "error", {"error": str(e)})
            raise ShopifyAPIError(f"Storefront request failed: {e}")

        if not response.ok:
            self._log("❌ storefront_http_error", "error", {
                "status_code": response.status_code,
                "text": response.text
            })
            raise ShopifyAPIError(
                "Storefront API request failed",
                status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            self._log("❌ storefront_invalid_json", "error", {"error": str(e), "text": response.text})
            raise ShopifyAPIError("Invalid JSON from Shopify Storefront API")

        if body.get("errors") and not body.get("data"):
            self._log("❌ storefront_graphql_error", "error", {"errors": body["errors"]})
            raise ShopifyAPIError("Storefront GraphQL error", errors=body["errors"])

        return body

    def search_products(self, query: str = None, first: int = 10) -> dict:
        return self.execute(STOREFRONT_PRODUCTS_QUERY, {"first": first, "query": query or None})

    def get_product(self, handle: str) -> dict:
        return self.execute(STOREFRONT_PRODUCT_BY_HANDLE_QUERY, {"handle": handle})

    def create_cart(self, lines: list[dict], customer_access_token: str = None) -> dict:
        cart_input = {"lines": lines}
        if customer_access_token:
            cart_input["buyerIdentity"] = {"customerAccessToken": customer_access_token}
        return self.execute(CART_CREATE_MUTATION, {"input": cart_input})

    def add_cart_lines(self, cart_id: str, lines: list[dict]) -> dict:
        return self.execute(CART_LINES_ADD_MUTATION, {"cartId": cart_id, "lines": lines})

    def update_cart_lines(self, cart_id: str, lines: list[dict]) -> dict:
        return self.execute(CART_LINES_UPDATE_MUTATION, {"cartId": cart_id, "lines": lines})

    def get_cart(self, cart_id: str) -> dict:
        return self.execute(CART_QUERY, {"cartId": cart_id})
