# genie/Logger.py

from datetime import datetime
from termcolor import colored
from genie.MongoManager import MongoManager
from genie.config import IS_DEV


def mask_token(token: str, visible: int = 20) -> str:
    if not token:
        return "N/A"
    return f"{token[:visible]}..."


class AppLogger:
    def __init__(self, mongo: MongoManager = None):
        self.mongo = mongo or MongoManager()

    def log(self, event: str, data: dict, store: str = None, level: str = "info"):
        # Always log to DB
        log_entry = {
            "event": event,
            "level": level,
            "store": store,
            "data": data,
            "timestamp": datetime.utcnow()
        }
        self.mongo.logs.insert_one(log_entry)

        # Only print in development
        if IS_DEV:
            icon = {
                "info": "ℹ️",
                "success": "✅",
                "warning": "⚠️",
                "error": "❌",
                "debug": "🐞"
            }.get(level, "🔍")

            color = {
                "info": "blue",
                "success": "green",
                "warning": "yellow",
                "error": "red",
                "debug": "cyan"
            }.get(level, "white")

            label = colored(f"[{level.upper()}]", color)
            prefix = f"[{store}] " if store else ""
            print(f"{icon} {label} {prefix}{event} — {data}")

    def log_request_error(self, event: str, error: Exception, store: str = None, extra: dict = None):
        error_data = {
            "error_type": type(error).__name__,
            "error": str(error)
        }
        if extra:
            error_data.update(extra)

        self.log(
            event=event,
            level="error",
            store=store,
            data=error_data
        )
