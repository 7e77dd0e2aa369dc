from dataclasses import dataclass
from typing import Any, Callable, Protocol

from ai_assistant.schemas.requests import AiApplySuggestionRequest, AiAskRequest, AiChatRequest, AssistantUser


class LicenseService(Protocol):
    def is_ai_assistant_enabled(self) -> bool: ...

    def load_cert_str(self) -> str: ...

    def get_consumer_id(self) -> str: ...


class LicensedAssistantClient(Protocol):
    def chat(self, payload: AiChatRequest, user: AssistantUser) -> Any: ...

    def apply_suggestion(self, payload: AiApplySuggestionRequest, user: AssistantUser) -> Any: ...

    def ask_ai(self, payload: AiAskRequest, user: AssistantUser) -> Any: ...

    def generate_ai_credits_credentials(self, user: AssistantUser) -> Any: ...


@dataclass
class LicensedClientOptions:
    license_cert: str
    consumer_id: str
    version: str
    base_url: str
    log_level: str


LicensedClientFactory = Callable[[LicensedClientOptions], LicensedAssistantClient]
