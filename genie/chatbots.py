# genie/chatbots.py

import random
import string
import time
from datetime import datetime
from typing import Callable

from pymongo.errors import DuplicateKeyError

from genie.MongoManager import MongoManager
from genie.Logger import AppLogger

_BASE36 = string.digits + string.ascii_lowercase


def generate_script_id() -> str:
    suffix = "".join(random.choice(_BASE36) for _ in range(9))
    return f"chatbot_{int(time.time() * 1000)}_{suffix}"


class ChatbotExistsError(Exception):
    def __init__(self, shop_domain):
        self.shop_domain = shop_domain
        self.message = f"Chatbot script already exists for {shop_domain}"
        super().__init__(self.message)


class Chatbots:
    """
    One embeddable chatbot script per shop.
    """

    def __init__(self, mongo: MongoManager = None):
        self.mongo = mongo or MongoManager()
        self.logger = AppLogger(self.mongo)
        self.collection = self.mongo.chatbots

    def get_active(self, shop_domain: str) -> dict | None:
        return self.collection.find_one(
            {"shopify_domain": shop_domain, "is_active": True},
            {"_id": 0}
        )

    def exists(self, shop_domain: str) -> bool:
        return self.collection.count_documents({"shopify_domain": shop_domain}, limit=1) > 0

    def create(self, shop_domain: str, render_script: Callable[[str], str]) -> dict:
        """
        Create the shop's script. `render_script` receives the new script id
        and returns the embed content.
        """
        if self.exists(shop_domain):
            raise ChatbotExistsError(shop_domain)

        script_id = generate_script_id()
        now = datetime.utcnow()
        document = {
            "shopify_domain": shop_domain,
            "script_id": script_id,
            "script_content": render_script(script_id),
            "is_active": True,
            "created_at": now,
            "updated_at": now
        }

        try:
            self.collection.insert_one(document)
        except DuplicateKeyError:
            raise ChatbotExistsError(shop_domain)

        document.pop("_id", None)
        self.logger.log(
            event="chatbot_script_created",
            level="success",
            store=shop_domain,
            data={"script_id": script_id, "message": "🧞 New chatbot script generated."}
        )
        return document
