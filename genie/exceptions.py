# genie/exceptions.py

class ShopNotFoundError(Exception):
    """
    Exception raised when a shop has never completed the OAuth install.
    """
    def __init__(self, domain):
        self.domain = domain
        self.message = f"Shop '{domain}' not found."
        super().__init__(self.message)


class ShopifyAPIError(Exception):
    """
    Exception raised when a Shopify Admin, Storefront or Customer Account call fails.
    """
    def __init__(self, message, status_code=None, errors=None):
        self.status_code = status_code
        self.errors = errors
        self.message = message
        super().__init__(self.message)


class OAuthExchangeError(Exception):
    """
    Exception raised when an authorization code cannot be exchanged for a token.
    """
    def __init__(self, shop, message=None, original_exception=None):
        self.shop = shop
        self.original_exception = original_exception
        self.message = message or f"Failed to exchange code for token for {shop}."
        super().__init__(self.message)


class CustomerAccountNotConfiguredError(Exception):
    def __init__(self, shop):
        self.shop = shop
        self.message = "Customer Account API not configured"
        super().__init__(self.message)


class StorefrontNotConfiguredError(Exception):
    def __init__(self, shop):
        self.shop = shop
        self.message = "Storefront access token not configured"
        super().__init__(self.message)


class AssistantError(Exception):
    """
    Exception raised when the LLM call fails or returns nothing usable.
    """
    def __init__(self, message, original_exception=None):
        self.original_exception = original_exception
        self.message = message
        super().__init__(self.message)
