# genie/clients/customer_account_client.py

import requests
from urllib.parse import urlencode

from genie.config import (
    CUSTOMER_ACCOUNT_AUTH_URL,
    CUSTOMER_ACCOUNT_API_URL,
    CUSTOMER_ACCOUNT_API_VERSION,
    CUSTOMER_ACCOUNT_SCOPES
)
from genie.exceptions import ShopifyAPIError, OAuthExchangeError
from genie.product_shapes import customer_orders_to_summary
from genie.shopify_graphql.customer_account import CUSTOMER_QUERY, CUSTOMER_ORDERS_QUERY

UNKNOWN_CUSTOMER_EMAIL = "unknown@example.com"


class CustomerAccountClient:
    """
    Shopify Customer Account API: OAuth for shoppers and their account data.
    Works as a confidential client (with a secret) or a public PKCE client.
    """

    def __init__(self, shop_domain: str, client_id: str, client_secret: str = None):
        if not client_id:
            raise ValueError("Customer Account client id is required.")

        self.shop_domain = shop_domain
        self.client_id = client_id
        self.client_secret = client_secret
        self.auth_base_url = CUSTOMER_ACCOUNT_AUTH_URL
        self.graphql_endpoint = f"{CUSTOMER_ACCOUNT_API_URL}/{CUSTOMER_ACCOUNT_API_VERSION}/graphql.json"

    def authorize_url(self, redirect_uri: str, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "scope": CUSTOMER_ACCOUNT_SCOPES,
            "redirect_uri": redirect_uri,
            "state": state,
            "shop": self.shop_domain,
        }
        return f"{self.auth_base_url}/oauth/authorize?{urlencode(params)}"

    def exchange_code(self, code: str, redirect_uri: str = None, code_verifier: str = None) -> dict:
        payload = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "code": code,
        }
        if self.client_secret:
            payload["client_secret"] = self.client_secret
        if redirect_uri:
            payload["redirect_uri"] = redirect_uri
        if code_verifier:
            payload["code_verifier"] = code_verifier

        try:
            response = requests.post(f"{self.auth_base_url}/oauth/token", json=payload, timeout=15)
        except requests.RequestException as e:
            raise OAuthExchangeError(self.shop_domain, "Failed to exchange authorization code", e)

        if not response.ok:
            raise OAuthExchangeError(
                self.shop_domain,
                f"Failed to exchange authorization code: {response.status_code} {response.text}"
            )

        try:
            token_data = response.json()
        except ValueError as e:
            raise OAuthExchangeError(self.shop_domain, "Token response was not valid JSON", e)

        if not token_data.get("access_token"):
            raise OAuthExchangeError(self.shop_domain, "Token response did not include an access token")
        return token_data

    def _query(self, access_token: str, query: str, variables: dict = None) -> dict:
        try:
            response = requests.post(
                self.graphql_endpoint,
                json={"query": query, "variables": variables or {}},
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Content-Type": "application/json",
                },
                timeout=15
            )
        except requests.RequestException as e:
            raise ShopifyAPIError(f"Customer Account request failed: {e}")

        if not response.ok:
            raise ShopifyAPIError("Customer Account API request failed", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise ShopifyAPIError("Invalid JSON from Customer Account API")

        if body.get("errors"):
            raise ShopifyAPIError("Customer Account GraphQL error", errors=body["errors"])
        return body.get("data") or {}

    def get_customer(self, access_token: str) -> dict:
        """
        Returns {id, email, name}; email falls back to a placeholder
        when the customer query fails.
        """
        try:
            data = self._query(access_token, CUSTOMER_QUERY)
        except ShopifyAPIError:
            return {"id": None, "email": UNKNOWN_CUSTOMER_EMAIL, "name": None}

        customer = data.get("customer") or {}
        email = (customer.get("emailAddress") or {}).get("emailAddress") or UNKNOWN_CUSTOMER_EMAIL
        name = " ".join(filter(None, [customer.get("firstName"), customer.get("lastName")])) or None
        return {"id": customer.get("id"), "email": email, "name": name}

    def get_orders(self, access_token: str, first: int = 20) -> list[dict]:
        data = self._query(access_token, CUSTOMER_ORDERS_QUERY, {"first": first})
        return customer_orders_to_summary(data)
