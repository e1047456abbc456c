# genie/shops.py

from datetime import datetime

from genie.MongoManager import MongoManager
from genie.Logger import AppLogger
from genie.encryption import encrypt_token
from genie.shop import Shop


class Shops:
    def __init__(self, mongo: MongoManager = None):
        self.mongo = mongo or MongoManager()
        self.logger = AppLogger(self.mongo)
        self.collection = self.mongo.shops

    def log_action(self, event: str, level: str = "info", data: dict = None, store: str = None):
        self.logger.log(
            event=event,
            level=level,
            store=store,
            data=data or {}
        )

    def get_by_domain(self, shop_domain: str) -> Shop | None:
        if not shop_domain:
            return None
        shop_data = self.collection.find_one({"shopify_domain": shop_domain}, {"_id": 1})
        if shop_data:
            return Shop(shop_domain, self.mongo)
        return None

    def save_installation(self, shop_domain: str, access_token: str, scopes: list) -> Shop:
        """
        Upsert the shop with a fresh Admin token. Reinstalling replaces the token.
        """
        now = datetime.utcnow()
        result = self.collection.update_one(
            {"shopify_domain": shop_domain},
            {
                "$set": {
                    "shopify_domain": shop_domain,
                    "shopify_access_token": encrypt_token(access_token),
                    "scopes": scopes,
                    "updated_at": now
                },
                "$setOnInsert": {"created_at": now}
            },
            upsert=True
        )

        self.log_action(
            event="shop_installed" if result.upserted_id else "shop_reinstalled",
            level="success",
            store=shop_domain,
            data={
                "scopes": scopes,
                "message": "🔐 Access token and scopes saved successfully."
            }
        )
        return Shop(shop_domain, self.mongo)

    def delete_shop(self, shop_domain: str, cleanup_related: bool = True) -> bool:
        shop_record = self.collection.find_one({"shopify_domain": shop_domain})

        if not shop_record:
            self.log_action(
                event="shop_delete_not_found",
                level="warning",
                store=shop_domain,
                data={"message": "⚠️ Attempted to delete a shop that doesn't exist."}
            )
            return False

        self.collection.delete_one({"shopify_domain": shop_domain})

        self.log_action(
            event="shop_deleted",
            level="warning",
            store=shop_domain,
            data={"message": "🗑️ Shop deleted from database."}
        )

        if cleanup_related:
            mongo = self.mongo

            result_customers = mongo.customers.delete_many({"shopify_domain": shop_domain})
            result_chatbots = mongo.chatbots.delete_many({"shopify_domain": shop_domain})
            result_logs = mongo.logs.delete_many({"store": shop_domain})

            self.log_action(
                event="shop_related_data_deleted",
                level="info",
                store=shop_domain,
                data={
                    "deleted_customers": result_customers.deleted_count,
                    "deleted_chatbots": result_chatbots.deleted_count,
                    "deleted_logs": result_logs.deleted_count,
                    "message": "🧹 Removed customers, chatbot script and logs for this shop."
                }
            )

        return True
