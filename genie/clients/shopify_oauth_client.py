import secrets

import shopify

from genie.config import (
    SHOPIFY_API_KEY,
    SHOPIFY_API_SECRET,
    SHOPIFY_API_VERSION,
    SHOPIFY_SCOPES,
    SHOPIFY_REDIRECT_URI
)
from genie.exceptions import OAuthExchangeError

MYSHOPIFY_SUFFIX = ".myshopify.com"


def normalize_shop_domain(shop: str) -> str:
    """
    Accepts 'my-store', 'my-store.myshopify.com' or a pasted URL and
    returns 'my-store.myshopify.com'.
    """
    domain = (shop or "").strip().lower()
    for prefix in ("https://", "http://"):
        if domain.startswith(prefix):
            domain = domain[len(prefix):]
    domain = domain.split("/")[0]
    domain = domain.replace(MYSHOPIFY_SUFFIX, "")
    if not domain:
        raise ValueError("Shop domain is required.")
    return f"{domain}{MYSHOPIFY_SUFFIX}"


class ShopifyOAuthClient:
    """
    Lightweight Shopify client used during OAuth before a token is available.
    Only supports install URLs, token exchange and access scope fetching.
    """

    def __init__(self, domain: str):
        if not domain:
            raise ValueError("Shop domain is required for ShopifyOAuthClient.")

        self.domain = domain

        shopify.Session.setup(api_key=SHOPIFY_API_KEY, secret=SHOPIFY_API_SECRET)
        self.session = shopify.Session(self.domain, SHOPIFY_API_VERSION)

    @staticmethod
    def generate_state() -> str:
        return secrets.token_urlsafe(16)

    def install_url(self, state: str) -> str:
        return self.session.create_permission_url(
            scope=SHOPIFY_SCOPES,
            redirect_uri=SHOPIFY_REDIRECT_URI,
            state=state
        )

    def exchange_token(self, params: dict) -> str:
        """
        Exchange authorization code for permanent access token.
        The session validates the callback HMAC and timestamp first.
        """
        try:
            return self.session.request_token(params)
        except Exception as e:
            raise OAuthExchangeError(self.domain, f"Failed to exchange code for token: {e}", e)

    def fetch_access_scopes(self) -> list:
        """
        Fetch access scopes granted to the app.
        """
        shopify.ShopifyResource.activate_session(self.session)
        try:
            scopes = [s.attributes["handle"] for s in shopify.AccessScope.find()]
        except Exception:
            scopes = []
        finally:
            shopify.ShopifyResource.clear_session()

        return scopes
