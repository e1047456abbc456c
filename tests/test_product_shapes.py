from genie.product_shapes import (
    admin_products_to_rest,
    storefront_products_to_rest,
    storefront_products_summary,
    product_price,
    customer_orders_to_summary
)


ADMIN_DATA = {
    "products": {
        "edges": [
            {
                "node": {
                    "id": "gid://shopify/Product/1",
                    "title": "Whey Protein",
                    "vendor": "Acme",
                    "status": "ACTIVE",
                    "totalInventory": 12,
                    "featuredImage": {"url": "https://cdn.test/whey.png"},
                    "variants": {
                        "edges": [
                            {"node": {
                                "id": "gid://shopify/ProductVariant/11",
                                "price": "29.99",
                                "inventoryQuantity": 12,
                                "inventoryPolicy": "DENY"
                            }}
                        ]
                    }
                }
            },
            {
                "node": {
                    "id": "gid://shopify/Product/2",
                    "title": "Shaker",
                    "vendor": "Acme",
                    "status": "DRAFT",
                    "totalInventory": 0,
                    "featuredImage": None,
                    "variants": {"edges": []}
                }
            }
        ]
    }
}

STOREFRONT_BODY = {
    "data": {
        "products": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/Product/1",
                        "title": "Whey Protein",
                        "vendor": "",
                        "handle": "whey-protein",
                        "description": "Vanilla",
                        "featuredImage": None,
                        "priceRange": {"minVariantPrice": {"amount": "24.50", "currencyCode": "USD"}},
                        "variants": {"edges": [
                            {"node": {"id": "gid://shopify/ProductVariant/11",
                                      "price": {"amount": "24.50", "currencyCode": "USD"}}}
                        ]}
                    }
                }
            ]
        }
    }
}


def test_admin_products_to_rest():
    products = admin_products_to_rest(ADMIN_DATA)

    assert len(products) == 2
    assert products[0]["image"] == {"src": "https://cdn.test/whey.png"}
    assert products[0]["variants"] == [{
        "id": "gid://shopify/ProductVariant/11",
        "price": "29.99",
        "inventoryQuantity": 12,
        "inventoryPolicy": "DENY"
    }]
    assert products[1]["image"] is None
    assert products[1]["variants"] == []


def test_admin_products_to_rest_handles_missing_data():
    assert admin_products_to_rest({}) == []
    assert admin_products_to_rest(None) == []


def test_storefront_products_take_min_variant_price_and_default_vendor():
    product = storefront_products_to_rest(STOREFRONT_BODY)[0]

    assert product["price"] == "24.50"
    assert product["vendor"] == "N/A"
    assert product["handle"] == "whey-protein"
    assert product["variants"] == [{"id": "gid://shopify/ProductVariant/11", "price": "24.50"}]


def test_storefront_products_summary():
    assert storefront_products_summary(STOREFRONT_BODY) == [
        {"title": "Whey Protein", "price": "24.50", "vendor": "N/A", "description": "Vanilla"}
    ]
    assert storefront_products_summary({"data": None}) == []


def test_product_price_fallbacks():
    assert product_price({"price": "5.00", "variants": [{"price": "9.00"}]}) == "5.00"
    assert product_price({"variants": [{"price": "9.00"}]}) == "9.00"
    assert product_price({"variants": []}) == "0.00"


def test_customer_orders_to_summary():
    data = {
        "customer": {
            "orders": {
                "edges": [
                    {"node": {
                        "id": "gid://shopify/Order/1",
                        "number": 1001,
                        "processedAt": "2025-01-02T10:00:00Z",
                        "financialStatus": "PAID",
                        "fulfillmentStatus": None,
                        "totalPrice": {"amount": "49.00", "currencyCode": "USD"}
                    }}
                ]
            }
        }
    }

    assert customer_orders_to_summary(data) == [{
        "id": "gid://shopify/Order/1",
        "orderNumber": 1001,
        "totalPrice": {"amount": "49.00", "currencyCode": "USD"},
        "fulfillmentStatus": "UNFULFILLED",
        "financialStatus": "PAID",
        "processedAt": "2025-01-02T10:00:00Z"
    }]
