# genie/auth_gate.py

from urllib.parse import quote

STOREFRONT_AUTH_KEYWORDS = (
    "cart",
    "my cart",
    "add to cart",
    "past order",
    "my order",
    "order history",
    "purchase",
)

GENIE_AUTH_KEYWORDS = STOREFRONT_AUTH_KEYWORDS + (
    "my purchases",
    "checkout",
    "my account",
)

STOREFRONT_LOGIN_PROMPT = "To access your cart and order information, please sign in to your account."
GENIE_LOGIN_PROMPT = "To access your cart and order information, please sign in to your store account."


def requires_auth(message: str, keywords=STOREFRONT_AUTH_KEYWORDS) -> bool:
    """
    True when any keyword occurs in the message (case-insensitive substring).
    """
    if not message:
        return False
    text = message.lower()
    return any(keyword in text for keyword in keywords)


def storefront_login_url(shop: str) -> str:
    return f"https://{shop}/account/login?return_url=/apps/chatbot-bridge"


def customer_auth_login_url(shop: str, return_url: str) -> str:
    return f"/api/customer-auth/login?shop={quote(shop, safe='')}&return_url={quote(return_url, safe='')}"
