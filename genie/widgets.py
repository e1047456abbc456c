# genie/widgets.py

from pathlib import Path

from fastapi.templating import Jinja2Templates

from genie.config import APP_URL

BASE_DIR = Path(__file__).resolve().parent.parent

templates = Jinja2Templates(directory=BASE_DIR / "templates")


def _render(name: str, **context) -> str:
    return templates.get_template(name).render(**context)


def storefront_chatbot_script(shop: str) -> str:
    return _render("widgets/storefront_chatbot.js", shop=shop, chat_url=f"{APP_URL}/api/chat")


def chatbot_widget_script(shop: str, api_base_url: str) -> str:
    return _render(
        "widgets/chatbot_widget.js",
        shop=shop,
        api_base_url=api_base_url,
        widget_id="aladdyn-chatbot-widget"
    )


def embed_script(shop: str, script_id: str) -> str:
    return _render("widgets/embed_script.html", shop=shop, script_id=script_id, chat_url=f"{APP_URL}/api/chat")


def loader_script(app_url: str) -> str:
    return _render("widgets/loader.js", widget_url=f"{app_url}/chatbot-widget.js")


def integration_snippet(shop: str) -> str:
    return _render("widgets/integration_snippet.html", shop=shop, loader_url=f"{APP_URL}/loader.js")
