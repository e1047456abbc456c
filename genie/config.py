# genie/config.py

from dotenv import load_dotenv
import os

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "production").lower()
IS_DEV = ENVIRONMENT == "development"

SHOPIFY_API_KEY = os.getenv("SHOPIFY_API_KEY")
SHOPIFY_API_SECRET = os.getenv("SHOPIFY_API_SECRET")
SHOPIFY_API_VERSION = os.getenv("SHOPIFY_API_VERSION", "2025-07").strip()
SHOPIFY_STOREFRONT_API_VERSION = os.getenv("SHOPIFY_STOREFRONT_API_VERSION", "2025-01").strip()
SHOPIFY_SCOPES = [
    scope.strip()
    for scope in os.getenv(
        "SHOPIFY_SCOPES",
        "read_customers,read_inventory,read_orders,read_products,"
        "write_script_tags,read_script_tags,write_storefront_access_tokens"
    ).split(",")
    if scope.strip()
]

APP_URL = os.getenv("APP_URL", "http://localhost:3000").rstrip("/")
SHOPIFY_REDIRECT_URI = os.getenv("SHOPIFY_REDIRECT_URI", f"{APP_URL}/api/auth")

MONGODB_URI = os.getenv("MONGODB_URI")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "aladdyn_genie")

ENCRYPTION_SECRET = os.getenv("ENCRYPTION_SECRET")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", None)
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

CUSTOMER_ACCOUNT_AUTH_URL = os.getenv(
    "CUSTOMER_ACCOUNT_AUTH_URL", "https://shopify.com/myshopify/customer_account"
).rstrip("/")
CUSTOMER_ACCOUNT_API_URL = os.getenv(
    "CUSTOMER_ACCOUNT_API_URL", "https://customeraccount.shopify.com/customer/api"
).rstrip("/")
CUSTOMER_ACCOUNT_API_VERSION = os.getenv("CUSTOMER_ACCOUNT_API_VERSION", "2024-07").strip()
CUSTOMER_ACCOUNT_SCOPES = "openid email https://api.shopify.com/auth/customer.graphql"

STOREFRONT_TOKEN_TITLE = "Chatbot Storefront Access Token"
