import json
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

import httpx
from openai import APIConnectionError, APIStatusError, OpenAI, Omit

from ai_assistant.config import AiAssistantConfig
from ai_assistant.constants import NO_RESPONSE_ANSWER, SYSTEM_PROMPT
from ai_assistant.schemas.requests import AiApplySuggestionRequest, AiAskRequest, AiChatRequest, AssistantUser
from ai_assistant.schemas.responses import AiCredentials, ApplySuggestionResponse, AskAiResponse, ChatStreamResponse

logger = logging.getLogger(__name__)


class SelfHostedAssistantError(Exception):
    pass


class UpstreamAPIError(SelfHostedAssistantError):
    def __init__(self, provider: str, status_code: int, reason: str):
        super().__init__(f"{provider} API error: {status_code} {reason}")
        self.provider = provider
        self.status_code = status_code
        self.reason = reason


def _js_value(value: Any) -> Any:
    # JSON.stringify prints integral numbers without a fraction and non-finite ones as null
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _js_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_js_value(item) for item in value]
    return value


def to_json(value: Any) -> str:
    return json.dumps(_js_value(value), separators=(",", ":"), ensure_ascii=False)


def is_truthy(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float, str)):
        return bool(value) and not (isinstance(value, float) and math.isnan(value))
    return True


def convert_payload_to_messages(payload: AiChatRequest) -> List[Dict[str, Any]]:
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]

    body = payload.payload
    if isinstance(body, (dict, list)):
        content = to_json(body)
        if isinstance(body, dict):
            for key in ("message", "question"):
                if is_truthy(body.get(key)):
                    content = body[key]
                    break
        messages.append({"role": "user", "content": content})

    return messages


def _schema_text(node) -> str:
    if "node_schema" not in node.model_fields_set:
        return "undefined"
    return to_json(node.node_schema)


def build_ask_ai_prompt(payload: AiAskRequest) -> str:
    prompt = f"Question: {payload.question}\n\n"

    context = payload.context
    if context is not None:
        prompt += "Context:\n"
        if context.schemas is not None:
            prompt += "Available nodes and their schemas:\n"
            for node in context.schemas:
                prompt += f"- {node.node_name}: {_schema_text(node)}\n"

        if context.input_schema is not None:
            prompt += (
                f"Input schema for {context.input_schema.node_name}: "
                f"{_schema_text(context.input_schema)}\n"
            )

    prompt += f"\nFor node: {payload.for_node}\n\n"
    prompt += "Please provide a helpful answer for this n8n workflow automation question."

    return prompt


class UpstreamStream:
    """Byte iterator over a streamed upstream response.

    Owns the response from the moment it is created, so ``close()`` releases
    the connection even when the body was never read.
    """

    def __init__(self, manager, response):
        self._manager = manager
        self._chunks = response.iter_bytes()
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        if self.closed:
            raise StopIteration
        try:
            return next(self._chunks)
        except StopIteration:
            self.close()
            raise

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self.closed:
            return
        self.closed = True
        self._manager.__exit__(None, None, None)

    def __del__(self):
        if getattr(self, "_manager", None) is not None:
            self.close()


class SelfHostedClient(ABC):
    provider_name: str = ""
    base_url: str = ""
    default_model: str = ""

    def __init__(self, api_key: str, model: Optional[str] = None, http_client: Optional[httpx.Client] = None):
        self.api_key = api_key
        self.model = model or self.default_model
        # The SDK falls back to OPENAI_ORG_ID / OPENAI_PROJECT_ID from the environment
        headers = {"OpenAI-Organization": Omit(), "OpenAI-Project": Omit(), **self.extra_headers()}
        self.client = OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            default_headers=headers,
            max_retries=0,
            http_client=http_client,
        )
        logger.info("%s client initialized (model=%s)", self.provider_name, self.model)

    @abstractmethod
    def extra_headers(self) -> Dict[str, str]:
        pass

    def _api_error(self, exc: Exception) -> SelfHostedAssistantError:
        if isinstance(exc, APIStatusError):
            logger.warning(
                "%s API returned %s %s", self.provider_name, exc.status_code, exc.response.reason_phrase
            )
            return UpstreamAPIError(self.provider_name, exc.status_code, exc.response.reason_phrase)
        logger.exception("%s API request failed", self.provider_name)
        return SelfHostedAssistantError(f"{self.provider_name} API error: {str(exc)}")

    def chat(self, payload: AiChatRequest, user: AssistantUser) -> ChatStreamResponse:
        manager = self.client.chat.completions.with_streaming_response.create(
            model=self.model,
            messages=convert_payload_to_messages(payload),
            stream=True,
        )
        try:
            response = manager.__enter__()
        except (APIStatusError, APIConnectionError) as e:
            raise self._api_error(e) from e

        return ChatStreamResponse(body=UpstreamStream(manager, response))

    def apply_suggestion(self, payload: AiApplySuggestionRequest, user: AssistantUser) -> ApplySuggestionResponse:
        # Suggestions are not stored upstream, the request is acknowledged as applied.
        return ApplySuggestionResponse(
            session_id=payload.session_id,
            suggestion_id=payload.suggestion_id,
            applied=True,
        )

    def ask_ai(self, payload: AiAskRequest, user: AssistantUser) -> AskAiResponse:
        prompt = build_ask_ai_prompt(payload)

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                stream=False,
            )
        except (APIStatusError, APIConnectionError) as e:
            raise self._api_error(e) from e

        content = None
        choices = getattr(completion, "choices", None)
        if choices:
            message = getattr(choices[0], "message", None)
            content = getattr(message, "content", None)

        return AskAiResponse(answer=content or NO_RESPONSE_ANSWER)

    def generate_ai_credits_credentials(self, user: AssistantUser) -> AiCredentials:
        return AiCredentials(api_key=self.api_key, url=self.base_url)

    def close(self):
        self.client.close()


def get_self_hosted_client(
    config: AiAssistantConfig, http_client: Optional[httpx.Client] = None
) -> Optional[SelfHostedClient]:
    if not config.self_hosted_enabled:
        return None

    if config.open_router_api_key:
        from ai_assistant.services.openrouter_client import OpenRouterClient
        return OpenRouterClient(config.open_router_api_key, config.open_router_model, http_client=http_client)
    elif config.open_ai_api_key:
        from ai_assistant.services.openai_client import OpenAIClient
        return OpenAIClient(config.open_ai_api_key, config.open_ai_model, http_client=http_client)

    return None
