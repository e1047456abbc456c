from fastapi import APIRouter, Request, Header, HTTPException
import hmac, hashlib, base64
from genie.config import SHOPIFY_API_SECRET
from genie.shops import Shops
from genie.customers import Customers
from genie.Logger import AppLogger

router = APIRouter(prefix="/webhooks/shopify")
logger = AppLogger()
shops = Shops()
customers = Customers()

# --- HMAC Verification ---

def verify_hmac(hmac_header: str, body: bytes) -> bool:
    if not hmac_header or not SHOPIFY_API_SECRET:
        return False
    digest = hmac.new(SHOPIFY_API_SECRET.encode(), body, hashlib.sha256).digest()
    calc_hmac = base64.b64encode(digest).decode()
    return hmac.compare_digest(calc_hmac, hmac_header)

# --- Webhook Topic Handlers ---

async def handle_app_uninstalled(shop_domain: str, payload: dict):
    if shops.delete_shop(shop_domain):
        logger.log(
            event="shop_deleted_via_uninstall",
            data={"message": "🧹 Shop deleted after uninstall webhook."},
            store=shop_domain,
            level="info"
        )
    else:
        logger.log(
            event="uninstall_unknown_shop",
            data={"message": "⚠️ Uninstall webhook received for unknown shop."},
            store=shop_domain,
            level="warning"
        )


async def handle_shop_redact(shop_domain: str, payload: dict):
    shops.delete_shop(shop_domain)
    logger.log(
        event="shop_redacted",
        data={"message": "🧹 Shop data erased on redact request."},
        store=shop_domain,
        level="info"
    )


async def handle_customers_redact(shop_domain: str, payload: dict):
    customer = payload.get("customer") or {}
    customer_id = customer.get("id")
    deleted = customers.redact(
        shop_domain,
        email=customer.get("email"),
        customer_id=f"gid://shopify/Customer/{customer_id}" if customer_id else None
    )
    logger.log(
        event="customer_redact_webhook",
        data={"customer_id": customer_id, "deleted": deleted, "message": "🗑️ Customer tokens erased."},
        store=shop_domain,
        level="info"
    )


async def handle_customers_data_request(shop_domain: str, payload: dict):
    customer = payload.get("customer") or {}
    logger.log(
        event="customer_data_request_webhook",
        data={
            "customer_id": customer.get("id"),
            "orders_requested": payload.get("orders_requested", []),
            "message": "📨 Customer data request received. Only the access token and cart id are stored."
        },
        store=shop_domain,
        level="info"
    )

# --- Webhook Topic Registry ---

WEBHOOK_HANDLERS = {
    "app/uninstalled": handle_app_uninstalled,
    "shop/redact": handle_shop_redact,
    "customers/redact": handle_customers_redact,
    "customers/data_request": handle_customers_data_request,
}

# --- Central Webhook Endpoint ---

@router.post("/{topic:path}")
async def handle_shopify_webhook(
    topic: str,
    request: Request,
    x_shopify_hmac_sha256: str = Header(None),
    x_shopify_shop_domain: str = Header(None)
):
    raw_body = await request.body()

    if not verify_hmac(x_shopify_hmac_sha256, raw_body):
        logger.log(
            event="webhook_invalid_hmac",
            data={"message": "⚠️ Invalid HMAC received from Shopify.", "topic": topic},
            store=x_shopify_shop_domain,
            level="warning"
        )
        raise HTTPException(status_code=401, detail="Invalid HMAC signature")

    if not x_shopify_shop_domain:
        raise HTTPException(status_code=400, detail="Missing shop domain")

    if topic not in WEBHOOK_HANDLERS:
        logger.log(
            event="webhook_topic_not_supported",
            data={"message": f"⚠️ Webhook topic not supported: {topic}"},
            store=x_shopify_shop_domain,
            level="warning"
        )
        raise HTTPException(status_code=400, detail=f"Unsupported webhook topic: {topic}")

    payload = await request.json()

    logger.log(
        event="webhook_received",
        level="debug",
        store=x_shopify_shop_domain,
        data={"topic": topic}
    )

    await WEBHOOK_HANDLERS[topic](x_shopify_shop_domain, payload)

    return {"status": "ok", "message": f"✅ Webhook '{topic}' handled"}
