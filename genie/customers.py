# genie/customers.py

from datetime import datetime

from pymongo import ReturnDocument

from genie.MongoManager import MongoManager
from genie.Logger import AppLogger, mask_token
from genie.encryption import encrypt_token, decrypt_token, fingerprint_token


class Customers:
    """
    Shopper credentials obtained through the Customer Account API,
    keyed by (shopify_domain, customer_email).
    """

    def __init__(self, mongo: MongoManager = None):
        self.mongo = mongo or MongoManager()
        self.logger = AppLogger(self.mongo)
        self.collection = self.mongo.customers

    def save_token(self, shop_domain: str, email: str, access_token: str,
                   customer_id: str = None, session_id: str = None) -> dict:
        now = datetime.utcnow()
        record = self.collection.find_one_and_update(
            {"shopify_domain": shop_domain, "customer_email": email},
            {
                "$set": {
                    "shopify_domain": shop_domain,
                    "customer_email": email,
                    "customer_access_token": encrypt_token(access_token),
                    "token_fingerprint": fingerprint_token(access_token),
                    "customer_id": customer_id,
                    "session_id": session_id,
                    "updated_at": now
                },
                "$setOnInsert": {"created_at": now}
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )

        self.logger.log(
            event="customer_token_saved",
            level="success",
            store=shop_domain,
            data={
                "customer_email": email,
                "customer_id": customer_id,
                "token": mask_token(access_token),
                "message": "✅ Customer token stored."
            }
        )
        return record

    def get(self, shop_domain: str, email: str) -> dict | None:
        if not email:
            return None
        return self.collection.find_one({"shopify_domain": shop_domain, "customer_email": email})

    def get_by_token(self, shop_domain: str, access_token: str) -> dict | None:
        if not access_token:
            return None
        return self.collection.find_one({
            "shopify_domain": shop_domain,
            "token_fingerprint": fingerprint_token(access_token)
        })

    @staticmethod
    def get_access_token(record: dict) -> str | None:
        token = (record or {}).get("customer_access_token")
        return decrypt_token(token) if token else None

    def set_cart(self, shop_domain: str, access_token: str, cart_id: str) -> bool:
        result = self.collection.update_one(
            {"shopify_domain": shop_domain, "token_fingerprint": fingerprint_token(access_token)},
            {"$set": {"cart_id": cart_id, "updated_at": datetime.utcnow()}}
        )
        return result.matched_count > 0

    def redact(self, shop_domain: str, email: str = None, customer_id: str = None) -> int:
        clauses = []
        if email:
            clauses.append({"customer_email": email})
        if customer_id:
            clauses.append({"customer_id": customer_id})
        if not clauses:
            return 0

        result = self.collection.delete_many({"shopify_domain": shop_domain, "$or": clauses})
        self.logger.log(
            event="customer_redacted",
            level="info",
            store=shop_domain,
            data={"deleted_customers": result.deleted_count}
        )
        return result.deleted_count
