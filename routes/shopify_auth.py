# routes/shopify_auth.py

from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from genie.Logger import AppLogger, mask_token
from genie.shops import Shops
from genie.shop import Shop
from genie.config import APP_URL, SHOPIFY_REDIRECT_URI, STOREFRONT_TOKEN_TITLE
from genie.clients.shopify_client import ShopifyClient
from genie.clients.shopify_oauth_client import ShopifyOAuthClient, normalize_shop_domain
from genie.exceptions import ShopifyAPIError, OAuthExchangeError
from genie.responses import error_response

router = APIRouter(prefix="/api/auth")
logger = AppLogger()
shops = Shops()


@router.get("/install")
def install(shop: str = None):
    if not shop:
        return error_response(400, "Missing shop parameter")

    try:
        shop_domain = normalize_shop_domain(shop)
    except ValueError as e:
        return error_response(400, str(e))

    state = ShopifyOAuthClient.generate_state()
    permission_url = ShopifyOAuthClient(shop_domain).install_url(state)

    logger.log(
        event="install_redirect",
        level="info",
        store=shop_domain,
        data={
            "redirect_uri": SHOPIFY_REDIRECT_URI,
            "scopes": ShopifyClient.get_default_scopes(),
            "message": "🔗 Redirecting merchant to install screen."
        }
    )

    return RedirectResponse(permission_url)


def _provision_storefront_token(shop: Shop):
    try:
        token = shop.client.create_storefront_access_token(STOREFRONT_TOKEN_TITLE)
        shop.set_storefront_token(token["accessToken"])
    except ShopifyAPIError as e:
        shop.log_action("⚠️ install_storefront_token_failed", "warning", {
            "error": str(e),
            "errors": e.errors
        })


def _install_script_tag(shop: Shop):
    src = f"{APP_URL}/chatbot-widget.js?shop={quote(shop.domain)}"
    try:
        script_tag = shop.client.create_script_tag(src)
        shop.set_script_tag_id(script_tag.get("id"))
    except ShopifyAPIError as e:
        shop.log_action("⚠️ install_script_tag_failed", "warning", {
            "error": str(e),
            "errors": e.errors,
            "src": src
        })


def _register_webhooks(shop: Shop) -> bool:
    try:
        return shop.client.register_webhooks()
    except ValueError as e:
        shop.log_action("⚠️ install_webhooks_failed", "warning", {"error": str(e)})
        return False


@router.get("")
def callback(request: Request):
    params = dict(request.query_params)
    shop_domain = params.get("shop")

    if not (params.get("code") and shop_domain and params.get("state")):
        return error_response(400, "Missing required parameters")

    try:
        oauth = ShopifyOAuthClient(shop_domain)
        token = oauth.exchange_token(params)
        scopes = oauth.fetch_access_scopes()
        shop = shops.save_installation(shop_domain, token, scopes)
    except (OAuthExchangeError, ValueError) as e:
        logger.log_request_error("❌ shopify_auth_callback_error", e, store=shop_domain)
        return RedirectResponse(f"{APP_URL}/shopify/callback?error={quote(str(e), safe='')}")

    # Post-install provisioning never blocks the merchant
    _provision_storefront_token(shop)
    _install_script_tag(shop)
    webhooks_registered = _register_webhooks(shop)

    shop.log_action(
        event="shop_install_completed",
        level="success",
        data={
            "message": "✅ App installed successfully.",
            "token": mask_token(token),
            "scopes": scopes,
            "storefront_token": shop.has_storefront_token(),
            "webhooks_registered": webhooks_registered
        }
    )

    return RedirectResponse(f"{APP_URL}/shopify/callback?shop={quote(shop_domain)}&success=true")
