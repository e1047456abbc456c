# routes/shop.py

from datetime import datetime

from fastapi import APIRouter

from genie.Logger import AppLogger, mask_token
from genie.shops import Shops
from genie.concurrency import fan_out
from genie.config import (
    SHOPIFY_API_KEY,
    SHOPIFY_API_SECRET,
    MONGODB_URI,
    OPENAI_API_KEY,
    ENCRYPTION_SECRET,
    STOREFRONT_TOKEN_TITLE
)
from genie.exceptions import ShopifyAPIError
from genie.responses import error_response, failure
from genie.schemas.requests import ShopRequest, CustomerAuthCredentialsRequest

router = APIRouter(prefix="/api")
logger = AppLogger()
shops = Shops()


@router.get("/health")
def health():
    return {"status": "OK", "timestamp": datetime.utcnow().isoformat() + "Z"}


@router.get("/test")
def config_status():
    return {
        "message": "Server is working",
        "env": {
            "hasApiKey": bool(SHOPIFY_API_KEY),
            "hasApiSecret": bool(SHOPIFY_API_SECRET),
            "hasMongoUri": bool(MONGODB_URI),
            "hasOpenAIKey": bool(OPENAI_API_KEY),
            "hasEncryptionSecret": bool(ENCRYPTION_SECRET)
        }
    }


@router.post("/shop-info")
def shop_info(body: ShopRequest):
    if not body.shop:
        return error_response(400, "Shop domain required")

    shop = shops.get_by_domain(body.shop)
    if not shop:
        return error_response(404, "Shop not found")

    try:
        client = shop.client
        info, products, customers, orders = fan_out(
            client.get_shop_info,
            client.get_products,
            client.get_customers,
            client.get_orders
        )
    except (ShopifyAPIError, ValueError) as e:
        logger.log_request_error("❌ shop_info_failed", e, store=body.shop)
        return error_response(500, str(e))

    return {
        "shop": info,
        "products": products,
        "customers": customers,
        "orders": orders
    }


@router.post("/create-storefront-token")
def create_storefront_token(body: ShopRequest):
    if not body.shop:
        return failure(400, "Shop domain required")

    shop = shops.get_by_domain(body.shop)
    if not shop:
        return failure(404, "Shop not found")

    try:
        token = shop.client.create_storefront_access_token(STOREFRONT_TOKEN_TITLE)
    except ShopifyAPIError as e:
        if e.errors is not None:
            return failure(500, "Failed to create storefront token", details=e.errors)
        return failure(500, str(e))

    shop.set_storefront_token(token["accessToken"])
    shop.log_action("storefront_token_created_manually", "success", {
        "token": mask_token(token["accessToken"])
    })

    return {
        "success": True,
        "storefrontToken": token["accessToken"],
        "message": "Storefront access token created and stored"
    }


@router.post("/store-customer-auth")
def store_customer_auth(body: CustomerAuthCredentialsRequest):
    if not (body.shop and body.customer_account_client_id and body.customer_account_client_secret):
        return failure(400, "All fields required")

    # Credentials only attach to an installed shop
    shop = shops.get_by_domain(body.shop)
    if not shop:
        return failure(404, "Shop not found")

    shop.set_customer_account_credentials(body.customer_account_client_id, body.customer_account_client_secret)
    return {"success": True, "message": "Customer auth credentials stored"}
