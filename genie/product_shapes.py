# genie/product_shapes.py
#
# Translate Shopify GraphQL responses into the REST-like shapes the dashboard,
# widgets and prompts consume.

DEFAULT_PRICE = "0.00"


def _edges(connection) -> list[dict]:
    if not connection:
        return []
    return [edge.get("node") or {} for edge in connection.get("edges") or []]


def _image(node: dict):
    featured = node.get("featuredImage")
    return {"src": featured["url"]} if featured and featured.get("url") else None


def admin_products_to_rest(data: dict) -> list[dict]:
    """
    Admin GraphQL `products` data -> REST-style product list.
    """
    products = []
    for node in _edges((data or {}).get("products")):
        products.append({
            "id": node.get("id"),
            "title": node.get("title"),
            "vendor": node.get("vendor"),
            "status": node.get("status"),
            "totalInventory": node.get("totalInventory"),
            "image": _image(node),
            "variants": [
                {
                    "id": variant.get("id"),
                    "price": variant.get("price"),
                    "inventoryQuantity": variant.get("inventoryQuantity"),
                    "inventoryPolicy": variant.get("inventoryPolicy"),
                }
                for variant in _edges(node.get("variants"))
            ],
        })
    return products


def _money_amount(money) -> str:
    if not money:
        return DEFAULT_PRICE
    return money.get("amount") or DEFAULT_PRICE


def storefront_products_to_rest(body: dict) -> list[dict]:
    """
    Storefront GraphQL `products` response -> the Admin/REST shape,
    with a flat `price` taken from the minimum variant price.
    """
    products = []
    for node in _edges(((body or {}).get("data") or {}).get("products")):
        price_range = node.get("priceRange") or {}
        products.append({
            "id": node.get("id"),
            "title": node.get("title"),
            "vendor": node.get("vendor") or "N/A",
            "handle": node.get("handle"),
            "description": node.get("description"),
            "image": _image(node),
            "price": _money_amount(price_range.get("minVariantPrice")),
            "variants": [
                {"id": variant.get("id"), "price": _money_amount(variant.get("price"))}
                for variant in _edges(node.get("variants"))
            ],
        })
    return products


def storefront_products_summary(body: dict) -> list[dict]:
    return [
        {
            "title": product["title"],
            "price": product["price"],
            "vendor": product["vendor"],
            "description": product.get("description") or "",
        }
        for product in storefront_products_to_rest(body)
    ]


def product_price(product: dict) -> str:
    if product.get("price"):
        return product["price"]
    variants = product.get("variants") or []
    if variants and variants[0].get("price"):
        return variants[0]["price"]
    return DEFAULT_PRICE


def customer_orders_to_summary(data: dict) -> list[dict]:
    """
    Customer Account API `customer.orders` -> the order summaries the widget renders.
    """
    customer = (data or {}).get("customer") or {}
    orders = []
    for node in _edges(customer.get("orders")):
        orders.append({
            "id": node.get("id"),
            "orderNumber": node.get("number") or node.get("name"),
            "totalPrice": node.get("totalPrice") or {"amount": DEFAULT_PRICE, "currencyCode": None},
            "fulfillmentStatus": node.get("fulfillmentStatus") or "UNFULFILLED",
            "financialStatus": node.get("financialStatus"),
            "processedAt": node.get("processedAt"),
        })
    return orders
