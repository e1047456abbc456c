# routes/chat.py

from fastapi import APIRouter, Request

from genie.Logger import AppLogger
from genie.shops import Shops
from genie.customers import Customers
from genie.assistant import StoreAssistant
from genie.concurrency import fan_out
from genie.exceptions import ShopifyAPIError, AssistantError
from genie.product_shapes import storefront_products_to_rest, storefront_products_summary
from genie.responses import failure, error_response
from genie.schemas.chat_intent import ChatAction, ChatIntent, IntentParameters, CUSTOMER_ONLY_ACTIONS
from genie.schemas.requests import ChatRequest, ParseRequest, VerifyEmailRequest
from genie.auth_gate import (
    requires_auth,
    storefront_login_url,
    customer_auth_login_url,
    STOREFRONT_AUTH_KEYWORDS,
    GENIE_AUTH_KEYWORDS,
    STOREFRONT_LOGIN_PROMPT,
    GENIE_LOGIN_PROMPT
)
from genie import prompts

router = APIRouter(prefix="/api")
logger = AppLogger()
shops = Shops()
customers = Customers()
assistant = StoreAssistant(logger=logger)


def _genie_products(shop):
    """
    Storefront catalogue when the shop has a storefront token, Admin catalogue otherwise
    or whenever the Storefront call fails.
    """
    if shop.has_storefront_token():
        try:
            return storefront_products_to_rest(shop.storefront().search_products(first=50))
        except Exception as e:
            shop.log_action("⚠️ storefront_products_fallback", "warning", {
                "error": str(e),
                "message": "Storefront API failed, falling back to Admin API."
            })
    return shop.client.get_products()


@router.post("/chat")
def chat(body: ChatRequest):
    if not body.message or not body.shop:
        return failure(400, "Message and shop required")

    shop = shops.get_by_domain(body.shop)
    if not shop:
        return failure(404, "Shop not found")

    if requires_auth(body.message, STOREFRONT_AUTH_KEYWORDS):
        shop.log_action("chat_auth_required", "info", {"message": "🔒 Cart/order question from anonymous shopper."})
        return {
            "success": True,
            "requiresAuth": True,
            "loginUrl": storefront_login_url(body.shop),
            "response": STOREFRONT_LOGIN_PROMPT
        }

    try:
        client = shop.client
        shop_info, products = fan_out(client.get_shop_info, client.get_products)
        system_prompt = prompts.build_store_assistant_prompt(shop_info.get("name"), products)
        response = assistant.reply(system_prompt, body.message, max_tokens=200, store=body.shop)
    except Exception as e:
        logger.log_request_error("❌ chat_failed", e, store=body.shop)
        return {"success": True, "response": prompts.STORE_ASSISTANT_FALLBACK}

    return {"success": True, "response": response or prompts.STORE_ASSISTANT_EMPTY}


@router.post("/chat/genie")
def chat_genie(body: ChatRequest, request: Request):
    if not body.message or not body.shop:
        return failure(400, "Message and shop required")

    gated = requires_auth(body.message, GENIE_AUTH_KEYWORDS)
    shop = shops.get_by_domain(body.shop)
    if not shop:
        return failure(404, "Shop not found")

    if gated and not body.customerEmail:
        return_url = f"{str(request.base_url).rstrip('/')}/chat"
        return {
            "success": True,
            "requiresAuth": True,
            "loginUrl": customer_auth_login_url(body.shop, return_url),
            "response": GENIE_LOGIN_PROMPT,
            "message": "Authentication required"
        }

    try:
        client = shop.client
        products, shop_info, shop_customers, orders = fan_out(
            lambda: _genie_products(shop),
            client.get_shop_info,
            client.get_customers,
            client.get_orders
        )
        context = prompts.build_genie_context(shop_info, products, shop_customers, orders)
        response = assistant.reply(
            prompts.build_genie_prompt(context), body.message, max_tokens=500, store=body.shop
        ) or prompts.GENIE_EMPTY
    except Exception as e:
        logger.log_request_error("❌ genie_chat_failed", e, store=body.shop)
        return failure(500, str(e), response=prompts.GENIE_FAILURE)

    if gated and body.customerEmail:
        record = customers.get(body.shop, body.customerEmail)
        if Customers.get_access_token(record):
            return {
                "success": True,
                "response": f"{response}\n\n(You are logged in as {body.customerEmail})",
                "authenticated": True
            }

    return {"success": True, "response": response}


@router.post("/chatbot/storefront")
def chatbot_storefront(body: ChatRequest):
    if not body.message or not body.shop:
        return failure(400, "Message and shop required")

    shop = shops.get_by_domain(body.shop)
    if not shop:
        return failure(404, "Shop not found")

    products = []
    if shop.has_storefront_token():
        try:
            products = storefront_products_summary(shop.storefront().search_products(first=20))
        except Exception as e:
            logger.log_request_error("⚠️ storefront_products_unavailable", e, store=body.shop)

    try:
        response = assistant.reply(
            prompts.build_storefront_genie_prompt(products), body.message, max_tokens=200, store=body.shop
        )
    except AssistantError as e:
        logger.log_request_error("❌ storefront_chat_failed", e, store=body.shop)
        return failure(500, str(e), response=prompts.STOREFRONT_GENIE_FAILURE)

    return {"success": True, "response": response or prompts.STOREFRONT_GENIE_EMPTY}


def _fallback_intent(message: str) -> ChatIntent:
    if requires_auth(message, GENIE_AUTH_KEYWORDS):
        return ChatIntent(
            action=ChatAction.AUTH_REQUEST,
            parameters=IntentParameters(),
            response=GENIE_LOGIN_PROMPT
        )
    return ChatIntent(action=ChatAction.GENERAL, parameters=IntentParameters(), response=prompts.PARSE_FALLBACK)


@router.post("/chat/parse")
def chat_parse(body: ParseRequest):
    if not body.message or not body.shop:
        return failure(400, "Message and shop required")

    is_guest = body.isGuest if body.isGuest is not None else not body.customerEmail
    system_prompt = prompts.build_intent_prompt(body.shop, is_guest, body.authMethod)

    try:
        intent = assistant.parse_intent(system_prompt, body.message, store=body.shop)
    except AssistantError as e:
        logger.log_request_error("⚠️ intent_parse_fallback", e, store=body.shop)
        intent = _fallback_intent(body.message)

    if is_guest and intent.action in CUSTOMER_ONLY_ACTIONS:
        intent = ChatIntent(
            action=ChatAction.AUTH_REQUEST,
            parameters=intent.parameters,
            response=GENIE_LOGIN_PROMPT
        )

    return {"success": True, **intent.model_dump(mode="json")}


@router.post("/verify-email")
def verify_email(body: VerifyEmailRequest):
    if not body.email or not body.shop:
        return error_response(400, "Email and shop required", verified=False)

    shop = shops.get_by_domain(body.shop)
    if not shop:
        return error_response(404, "Shop not found", verified=False)

    try:
        matches = shop.client.search_customers_by_email(body.email)
    except ShopifyAPIError as e:
        logger.log_request_error("❌ verify_email_failed", e, store=body.shop)
        return error_response(500, str(e), verified=False)

    customer = next((c for c in matches if (c.get("email") or "").lower() == body.email.lower()), None)
    if not customer:
        return {"verified": False}

    name = f"{customer.get('first_name') or ''} {customer.get('last_name') or ''}".strip()
    return {
        "verified": True,
        "customer": {
            "id": customer.get("id"),
            "name": name or customer.get("email"),
            "email": customer.get("email")
        }
    }
