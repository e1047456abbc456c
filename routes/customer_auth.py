# routes/customer_auth.py

import secrets
from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from genie.Logger import AppLogger, mask_token
from genie.shop import Shop
from genie.shops import Shops
from genie.customers import Customers
from genie.exceptions import OAuthExchangeError
from genie.responses import error_response, failure
from genie.schemas.requests import ShopRequest, CustomerTokenRequest, CustomerSessionRequest
from genie.widgets import templates

router = APIRouter(prefix="/api")
logger = AppLogger()
shops = Shops()
customers = Customers()


def _base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def _customer_cart(shop: Shop, access_token: str):
    """
    The Storefront cart remembered for this customer, or None.
    """
    record = customers.get_by_token(shop.domain, access_token)
    if not record or not record.get("cart_id"):
        return None
    body = shop.storefront().get_cart(record["cart_id"])
    return (body.get("data") or {}).get("cart")


@router.get("/customer-auth/login")
def customer_login(request: Request, shop: str = None, return_url: str = None):
    if not shop:
        return error_response(400, "Shop parameter required")

    shop_instance = shops.get_by_domain(shop)
    if not shop_instance:
        return error_response(404, "Shop not found")

    if not shop_instance.has_customer_account_api():
        # Store login hands back no token; it only gets the shopper signed in on the storefront
        target = return_url or f"{_base_url(request)}/chat"
        shop_instance.log_action("customer_login_store_fallback", "warning", {
            "message": "⚠️ Customer Account API not configured, redirecting to store login."
        })
        return RedirectResponse(f"https://{shop}/account/login?return_url={quote(target, safe='')}")

    redirect_uri = f"{_base_url(request)}/api/customer-auth/callback"
    auth_url = shop_instance.customer_account().authorize_url(redirect_uri, secrets.token_urlsafe(16))

    shop_instance.log_action("customer_login_redirect", "info", {"redirect_uri": redirect_uri})
    return RedirectResponse(auth_url)


@router.get("/customer-auth/callback")
def customer_callback(request: Request, code: str = None, state: str = None, shop: str = None):
    if not code:
        return error_response(400, "Missing authorization code")

    if not shop:
        return templates.TemplateResponse(request, "customer_auth/missing_shop.html", status_code=400)

    shop_instance = shops.get_by_domain(shop)
    if not shop_instance or not shop_instance.has_customer_account_api():
        return error_response(404, "Customer Account API not configured")

    client = shop_instance.customer_account()
    try:
        token_data = client.exchange_code(code, redirect_uri=f"{_base_url(request)}/api/customer-auth/callback")
        access_token = token_data["access_token"]
        customer = client.get_customer(access_token)
        customers.save_token(
            shop,
            customer["email"],
            access_token,
            customer_id=customer["id"],
            session_id=token_data.get("session_id")
        )
    except Exception as e:
        logger.log_request_error("❌ customer_auth_callback_error", e, store=shop)
        error = e.message if isinstance(e, OAuthExchangeError) else "Failed to complete sign in"
        return templates.TemplateResponse(
            request, "customer_auth/login_failed.html", {"error": error}, status_code=500
        )

    logger.log("customer_login_completed", level="success", store=shop, data={
        "customer_email": customer["email"],
        "token": mask_token(access_token)
    })

    return templates.TemplateResponse(request, "customer_auth/login_success.html", {
        "shop": shop,
        "customer_email": customer["email"],
        "customer_id": customer["id"]
    })


@router.post("/customer-account/config")
def customer_account_config(body: ShopRequest):
    if not body.shop:
        return failure(400, "Shop required")

    client = Shop(body.shop).customer_account()
    return {"success": True, "clientId": client.client_id, "apiEndpoint": client.auth_base_url}


@router.post("/customer-account/token")
def customer_account_token(body: CustomerTokenRequest):
    if not body.shop or not body.code:
        return failure(400, "Shop and code required")

    client = Shop(body.shop).customer_account()
    try:
        token_data = client.exchange_code(body.code, redirect_uri=body.redirectUri, code_verifier=body.codeVerifier)
    except OAuthExchangeError as e:
        logger.log_request_error("❌ customer_account_token_error", e, store=body.shop)
        return failure(400, e.message)

    access_token = token_data["access_token"]
    customer = client.get_customer(access_token)
    customers.save_token(
        body.shop,
        customer["email"],
        access_token,
        customer_id=customer["id"],
        session_id=token_data.get("session_id")
    )

    return {"success": True, "accessToken": access_token, "customer": customer}


@router.post("/customer-account/orders")
def customer_account_orders(body: CustomerSessionRequest):
    if not body.shop or not body.customerAccessToken:
        return failure(400, "Shop and customerAccessToken required")

    client = Shop(body.shop).customer_account()
    return {"success": True, "orders": client.get_orders(body.customerAccessToken)}


@router.post("/customer-account/cart")
def customer_account_cart(body: CustomerSessionRequest):
    if not body.shop or not body.customerAccessToken:
        return failure(400, "Shop and customerAccessToken required")

    shop = Shop(body.shop)
    if not customers.get_by_token(body.shop, body.customerAccessToken):
        return failure(401, "Customer session not found")

    return {"success": True, "cart": _customer_cart(shop, body.customerAccessToken)}


@router.post("/customer-account/checkout")
def customer_account_checkout(body: CustomerSessionRequest):
    if not body.shop or not body.customerAccessToken:
        return failure(400, "Shop and customerAccessToken required")

    shop = Shop(body.shop)
    if not customers.get_by_token(body.shop, body.customerAccessToken):
        return failure(401, "Customer session not found")

    cart = _customer_cart(shop, body.customerAccessToken)
    if not cart or not cart.get("checkoutUrl"):
        return failure(404, "No cart to check out")

    return {"success": True, "checkoutUrl": cart["checkoutUrl"]}
