# routes/storefront.py
#
# Storefront API passthrough for the chat widgets. Bodies come back exactly as
# Shopify returns them ({"data": ...}). Unknown shops, shops without a storefront
# token and Shopify failures are answered by the exception handlers in main.py.

from fastapi import APIRouter

from genie.shop import Shop
from genie.customers import Customers
from genie.responses import failure
from genie.schemas.requests import ProductsRequest, ProductRequest, CartLinesRequest, CartRequest

router = APIRouter(prefix="/api/storefront")
customers = Customers()


@router.post("/products")
def products(body: ProductsRequest):
    if not body.shop:
        return failure(400, "Shop required")

    return Shop(body.shop).storefront().search_products(body.query, first=body.first)


@router.post("/product")
def product(body: ProductRequest):
    if not body.shop or not body.handle:
        return failure(400, "Shop and handle required")

    return Shop(body.shop).storefront().get_product(body.handle)


@router.post("/cart/create")
def cart_create(body: CartLinesRequest):
    if not body.shop or not body.lines:
        return failure(400, "Shop and lines required")

    shop = Shop(body.shop)
    result = shop.storefront().create_cart(body.lines, body.customerAccessToken)

    cart = ((result.get("data") or {}).get("cartCreate") or {}).get("cart")
    if cart and body.customerAccessToken:
        if customers.set_cart(body.shop, body.customerAccessToken, cart["id"]):
            shop.log_action("customer_cart_remembered", "info", {"cart_id": cart["id"]})

    return result


@router.post("/cart/add-lines")
def cart_add_lines(body: CartLinesRequest):
    if not (body.shop and body.cartId and body.lines):
        return failure(400, "Shop, cartId and lines required")

    return Shop(body.shop).storefront().add_cart_lines(body.cartId, body.lines)


@router.post("/cart/update-lines")
def cart_update_lines(body: CartLinesRequest):
    if not (body.shop and body.cartId and body.lines):
        return failure(400, "Shop, cartId and lines required")

    return Shop(body.shop).storefront().update_cart_lines(body.cartId, body.lines)


@router.post("/cart")
def cart(body: CartRequest):
    if not body.shop or not body.cartId:
        return failure(400, "Shop and cartId required")

    return Shop(body.shop).storefront().get_cart(body.cartId)
