from typing import Dict

from ai_assistant.config import DEFAULT_OPENAI_MODEL
from ai_assistant.services.self_hosted_client import SelfHostedClient


class OpenAIClient(SelfHostedClient):
    provider_name = "OpenAI"
    base_url = "https://api.openai.com/v1"
    default_model = DEFAULT_OPENAI_MODEL

    def extra_headers(self) -> Dict[str, str]:
        return {}
