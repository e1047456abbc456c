# genie/shop.py

from datetime import datetime

from genie.MongoManager import MongoManager
from genie.encryption import encrypt_token, decrypt_token
from genie.Logger import AppLogger
from genie.exceptions import ShopNotFoundError, StorefrontNotConfiguredError


class Shop:
    def __init__(self, domain: str, mongo: MongoManager = None):
        self.mongo = mongo or MongoManager()
        self.logger = AppLogger(self.mongo)
        self.domain = domain
        self.collection = self.mongo.shops
        self.shop = self.collection.find_one({"shopify_domain": domain})

        if not self.shop:
            raise ShopNotFoundError(domain)

        self._client = None

    def _update(self, fields: dict):
        fields = {**fields, "updated_at": datetime.utcnow()}
        self.collection.update_one({"shopify_domain": self.domain}, {"$set": fields})
        self.shop.update(fields)

    def get_access_token(self):
        token = self.shop.get("shopify_access_token")
        return decrypt_token(token) if token else None

    def get_storefront_token(self):
        token = self.shop.get("storefront_access_token")
        return decrypt_token(token) if token else None

    def has_storefront_token(self) -> bool:
        return bool(self.shop.get("storefront_access_token"))

    def set_storefront_token(self, token: str):
        self._update({"storefront_access_token": encrypt_token(token)})
        self.log_action(
            event="storefront_token_saved",
            level="info",
            data={"message": "🔐 Storefront access token saved."}
        )

    def set_customer_account_credentials(self, client_id: str, client_secret: str):
        self._update({
            "customer_account_client_id": client_id,
            "customer_account_client_secret": encrypt_token(client_secret)
        })
        self.log_action(
            event="customer_account_credentials_saved",
            level="info",
            data={"client_id": client_id, "message": "🔐 Customer Account API credentials stored."}
        )

    def get_customer_account_credentials(self) -> tuple[str | None, str | None]:
        client_id = self.shop.get("customer_account_client_id")
        secret = self.shop.get("customer_account_client_secret")
        return client_id, decrypt_token(secret) if secret else None

    def has_customer_account_api(self) -> bool:
        client_id, secret = self.get_customer_account_credentials()
        return bool(client_id and secret)

    def set_script_tag_id(self, script_tag_id: str):
        self._update({"script_tag_id": script_tag_id})

    @property
    def client(self):
        """
        Admin API client, created on first use.
        """
        if self._client is None:
            from genie.clients.shopify_client import ShopifyClient
            self._client = ShopifyClient(self)
        return self._client

    def storefront(self):
        from genie.clients.storefront_client import StorefrontClient

        token = self.get_storefront_token()
        if not token:
            raise StorefrontNotConfiguredError(self.domain)
        return StorefrontClient(self.domain, token, logger=self.logger)

    def customer_account(self):
        from genie.clients.customer_account_client import CustomerAccountClient
        from genie.exceptions import CustomerAccountNotConfiguredError

        client_id, secret = self.get_customer_account_credentials()
        if not client_id:
            raise CustomerAccountNotConfiguredError(self.domain)
        return CustomerAccountClient(self.domain, client_id, secret)

    def log_action(self, event: str, level: str = "info", data: dict = None):
        self.logger.log(
            event=event,
            level=level,
            store=self.domain,
            data=data or {}
        )
