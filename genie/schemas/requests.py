# Request bodies. Fields are optional so routes can answer missing input
# with the widget-facing error messages instead of a 422.

from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class ShopRequest(BaseModel):
    shop: Optional[str] = None


class ChatRequest(BaseModel):
    message: Optional[str] = None
    shop: Optional[str] = None
    customerEmail: Optional[str] = None


class ParseRequest(ChatRequest):
    authMethod: Optional[str] = None
    isGuest: Optional[bool] = None


class VerifyEmailRequest(BaseModel):
    email: Optional[str] = None
    shop: Optional[str] = None


class CustomerAuthCredentialsRequest(BaseModel):
    shop: Optional[str] = None
    customer_account_client_id: Optional[str] = None
    customer_account_client_secret: Optional[str] = None


class ProductsRequest(BaseModel):
    shop: Optional[str] = None
    query: Optional[str] = None
    first: int = 10


class ProductRequest(BaseModel):
    shop: Optional[str] = None
    handle: Optional[str] = None


class CartLinesRequest(BaseModel):
    shop: Optional[str] = None
    cartId: Optional[str] = None
    lines: Optional[List[Dict[str, Any]]] = None
    customerAccessToken: Optional[str] = None


class CartRequest(BaseModel):
    shop: Optional[str] = None
    cartId: Optional[str] = None


class CustomerTokenRequest(BaseModel):
    shop: Optional[str] = None
    code: Optional[str] = None
    codeVerifier: Optional[str] = None
    redirectUri: Optional[str] = None


class CustomerSessionRequest(BaseModel):
    shop: Optional[str] = None
    customerAccessToken: Optional[str] = None
