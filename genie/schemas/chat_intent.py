from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class ChatAction(str, Enum):
    PRODUCT_QUERY = "PRODUCT_QUERY"
    CART_ADD = "CART_ADD"
    CART_UPDATE = "CART_UPDATE"
    CART_VIEW = "CART_VIEW"
    RETURN_POLICY = "RETURN_POLICY"
    AUTH_REQUEST = "AUTH_REQUEST"
    CUSTOMER_ORDERS = "CUSTOMER_ORDERS"
    PERSONAL_CART = "PERSONAL_CART"
    CHECKOUT = "CHECKOUT"
    GENERAL = "GENERAL"


# Actions that need a signed-in store account rather than a guest session
CUSTOMER_ONLY_ACTIONS = {
    ChatAction.CUSTOMER_ORDERS,
    ChatAction.PERSONAL_CART,
    ChatAction.CHECKOUT,
}


class IntentParameters(BaseModel):
    productQuery: Optional[str] = Field(
        None, title="Product Query",
        description="Search terms for the product the shopper is asking about, or 'all' to list the catalogue"
    )
    productHandle: Optional[str] = Field(
        None, title="Product Handle",
        description="The exact Shopify product handle, only when the shopper names one explicitly"
    )
    variantId: Optional[str] = Field(
        None, title="Variant ID",
        description="A Shopify ProductVariant GID (gid://shopify/ProductVariant/...) or cart line GID if the shopper gave one"
    )
    quantity: Optional[int] = Field(
        None, title="Quantity",
        description="Requested quantity for cart actions"
    )
    variantTitle: Optional[str] = Field(
        None, title="Variant Title",
        description="The option the shopper wants, e.g. a size, colour or denomination"
    )


class ChatIntent(BaseModel):
    action: ChatAction = Field(
        ..., title="Action",
        description="What the widget should do with this message"
    )
    parameters: IntentParameters = Field(
        ..., title="Parameters",
        description="Details extracted from the message for the chosen action"
    )
    response: str = Field(
        ..., title="Response",
        description="A short, friendly reply to show the shopper, used directly for GENERAL messages"
    )
