# genie/assistant.py

import random
import time

from openai import OpenAI, RateLimitError, OpenAIError

from genie.config import OPENAI_API_KEY, OPENAI_MODEL
from genie.exceptions import AssistantError
from genie.Logger import AppLogger
from genie.schemas.chat_intent import ChatIntent

MAX_RETRIES = 3


class StoreAssistant:
    """
    Thin wrapper around the OpenAI chat API for the chat endpoints.
    """

    def __init__(self, client: OpenAI = None, model: str = OPENAI_MODEL, logger: AppLogger = None):
        self._client = client
        self.model = model
        self.logger = logger

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=OPENAI_API_KEY)
        return self._client

    def _with_retries(self, call, store: str = None):
        retries = 0
        while True:
            try:
                return call()
            except RateLimitError as e:
                if retries >= MAX_RETRIES:
                    raise AssistantError("Exceeded maximum retries for OpenAI call", e)
                delay = (2 ** retries) + random.uniform(0.1, 0.5)
                if self.logger:
                    self.logger.log("openai_429_retry", level="warning", store=store, data={
                        "retry": retries,
                        "sleep_time": round(delay, 2),
                        "message": "🚦 429 rate limit hit, retrying..."
                    })
                time.sleep(delay)
                retries += 1
            except OpenAIError as e:
                raise AssistantError(f"Failed to get AI response: {e}", e)

    def reply(self, system_prompt: str, message: str, max_tokens: int, store: str = None,
              temperature: float = 0.7) -> str | None:
        """
        Returns the assistant's text, or None when the model answered with nothing.
        """
        completion = self._with_retries(
            lambda: self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": message}
                ],
                max_tokens=max_tokens,
                temperature=temperature
            ),
            store=store
        )

        if not completion.choices:
            return None
        return completion.choices[0].message.content or None

    def parse_intent(self, system_prompt: str, message: str, store: str = None) -> ChatIntent:
        completion = self._with_retries(
            lambda: self.client.chat.completions.parse(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": message}
                ],
                temperature=0,
                response_format=ChatIntent
            ),
            store=store
        )

        parsed = completion.choices[0].message.parsed if completion.choices else None
        if parsed is None:
            raise AssistantError("Model returned no parsable intent")
        return parsed
