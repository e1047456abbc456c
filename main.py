from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from pathlib import Path
from urllib.parse import quote
from genie.Logger import AppLogger
from genie.exceptions import (
    ShopNotFoundError,
    ShopifyAPIError,
    StorefrontNotConfiguredError,
    CustomerAccountNotConfiguredError
)
from genie.responses import error_response, failure
from genie.widgets import templates
from routes import shopify_auth, shopify_webhooks, shop, chat, storefront, customer_auth, widgets

app = FastAPI(title="Aladdyn Genie")
logger = AppLogger()

# Define the base directory
BASE_DIR = Path(__file__).resolve().parent

# Mount the static directory
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")


# Route for the root URL
@app.get("/", response_class=HTMLResponse)
def root(request: Request):
    query_params = dict(request.query_params)
    shop_domain = query_params.get("shop")
    hmac = query_params.get("hmac")
    timestamp = query_params.get("timestamp")

    # Shopify admin opening the app before install
    if shop_domain and hmac and timestamp:
        return RedirectResponse(url=f"/api/auth/install?shop={quote(shop_domain)}")

    return templates.TemplateResponse(request, "index.html")


@app.exception_handler(ShopNotFoundError)
def shop_not_found_handler(request: Request, exc: ShopNotFoundError):
    return failure(404, "Shop not found")


@app.exception_handler(StorefrontNotConfiguredError)
def storefront_not_configured_handler(request: Request, exc: StorefrontNotConfiguredError):
    return failure(400, exc.message)


@app.exception_handler(CustomerAccountNotConfiguredError)
def customer_account_not_configured_handler(request: Request, exc: CustomerAccountNotConfiguredError):
    return failure(404, exc.message)


@app.exception_handler(ShopifyAPIError)
def shopify_api_error_handler(request: Request, exc: ShopifyAPIError):
    logger.log_request_error("❌ shopify_api_error", exc, extra={"path": request.url.path, "errors": exc.errors})
    if exc.errors:
        return failure(500, exc.message, details=exc.errors)
    return failure(500, exc.message)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and request.url.path.startswith("/api/"):
        return error_response(404, "API endpoint not found")
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception):
    logger.log_request_error("❌ unhandled_error", exc, extra={"path": request.url.path})
    return error_response(500, "Internal server error")


app.include_router(shopify_auth.router)
app.include_router(shopify_webhooks.router)
app.include_router(shop.router)
app.include_router(chat.router)
app.include_router(storefront.router)
app.include_router(customer_auth.router)
app.include_router(widgets.router)
