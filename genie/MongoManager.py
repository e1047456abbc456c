# genie/MongoManager.py

from pymongo import MongoClient, ASCENDING, DESCENDING
from genie.config import MONGODB_URI, MONGODB_DB_NAME
import time


class MongoManager:
    # One client per process; serverless workers reuse it between invocations.
    _client = None

    def __init__(self, client: MongoClient = None):
        if client is not None:
            MongoManager._client = client
        elif MongoManager._client is None:
            MongoManager._client = MongoClient(MONGODB_URI)

        self.client = MongoManager._client
        self.db = self.client[MONGODB_DB_NAME]

        # Collections
        self.shops = self.db["shops"]
        self.customers = self.db["customers"]
        self.chatbots = self.db["chatbots"]
        self.logs = self.db["logs"]

        self._indexes_created = False

    def create_indexes(self):
        """
        Create indexes for commonly queried fields.
        This will run only once per MongoManager instance.
        """

        if self._indexes_created:
            return

        start = time.time()
        print("🔧 Creating MongoDB indexes...")

        # === Shops Indexes ===
        self._safe_create_index(self.shops, [("shopify_domain", ASCENDING)], "shopify_domain_index", unique=True)

        # === Customers Indexes ===
        self._safe_create_index(
            self.customers,
            [("shopify_domain", ASCENDING), ("customer_email", ASCENDING)],
            "shop_customer_email_index",
            unique=True
        )
        self._safe_create_index(
            self.customers,
            [("shopify_domain", ASCENDING), ("token_fingerprint", ASCENDING)],
            "shop_token_fingerprint_index"
        )

        # === Chatbots Indexes ===
        self._safe_create_index(self.chatbots, [("shopify_domain", ASCENDING)], "chatbot_shop_index", unique=True)
        self._safe_create_index(self.chatbots, [("script_id", ASCENDING)], "script_id_index", unique=True)

        # === Logs Indexes ===
        self._safe_create_index(self.logs, [("store", ASCENDING)], "log_store_index")
        self._safe_create_index(self.logs, [("timestamp", DESCENDING)], "log_timestamp_index")

        elapsed = time.time() - start
        print(f"✅ MongoDB index creation completed in {elapsed:.2f}s.\n")

        self._indexes_created = True

    def _safe_create_index(self, collection, fields, name, **kwargs):
        try:
            print(f"⏳ Creating index: {name} on {collection.name}")
            collection.create_index(fields, name=name, **kwargs)
        except Exception as e:
            print(f"❌ Failed to create index {name} on {collection.name}: {e}")
