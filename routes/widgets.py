# routes/widgets.py

from fastapi import APIRouter, Request
from fastapi.responses import Response

from genie.Logger import AppLogger
from genie.shops import Shops
from genie.chatbots import Chatbots, ChatbotExistsError
from genie.config import APP_URL
from genie.responses import error_response, failure
from genie.schemas.requests import ShopRequest
from genie import widgets

router = APIRouter()
logger = AppLogger()
shops = Shops()
chatbots = Chatbots()


def _javascript(content: str, status_code: int = 200) -> Response:
    return Response(content=content, media_type="application/javascript", status_code=status_code)


@router.get("/storefront-chatbot.js")
def storefront_chatbot(shop: str = None):
    if not shop:
        return _javascript("// Shop parameter required", status_code=400)
    return _javascript(widgets.storefront_chatbot_script(shop))


@router.get("/chatbot-widget.js")
def chatbot_widget(request: Request, shop: str = None):
    if not shop:
        return _javascript("// Error: Shop parameter required", status_code=400)

    if not shops.get_by_domain(shop):
        return _javascript("// Error: Shop not found", status_code=404)

    api_base_url = f"{str(request.base_url).rstrip('/')}/api"
    return _javascript(widgets.chatbot_widget_script(shop, api_base_url))


@router.get("/loader.js")
def loader():
    return _javascript(widgets.loader_script(APP_URL))


@router.post("/api/generate-script")
def generate_script(body: ShopRequest):
    if not body.shop:
        return failure(400, "Shop domain required")

    existing = chatbots.get_active(body.shop)
    if existing:
        return {
            "success": True,
            "script": existing["script_content"],
            "scriptId": existing["script_id"],
            "message": "Script already exists for this shop"
        }

    try:
        chatbot = chatbots.create(body.shop, lambda script_id: widgets.embed_script(body.shop, script_id))
    except ChatbotExistsError as e:
        # An inactive script still holds the shop's slot
        return failure(409, e.message)

    return {
        "success": True,
        "script": chatbot["script_content"],
        "scriptId": chatbot["script_id"],
        "message": "Script generated successfully"
    }


@router.post("/api/genie/generate")
def genie_generate(body: ShopRequest):
    if not body.shop:
        return error_response(400, "Shop domain required")

    if not shops.get_by_domain(body.shop):
        return error_response(404, "Shop not found")

    try:
        genie = chatbots.create(body.shop, lambda script_id: widgets.integration_snippet(body.shop))
    except ChatbotExistsError:
        return error_response(409, "Genie script already generated for this shop")

    return {"success": True, "genie": genie}


@router.post("/api/genie/check")
def genie_check(body: ShopRequest):
    if not body.shop:
        return error_response(400, "Shop domain required")

    genie = chatbots.get_active(body.shop)
    if not genie:
        return {"exists": False}
    return {"exists": True, "genie": genie}
