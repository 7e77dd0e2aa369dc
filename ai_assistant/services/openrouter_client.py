from typing import Dict

from ai_assistant.config import DEFAULT_OPENROUTER_MODEL
from ai_assistant.services.self_hosted_client import SelfHostedClient


class OpenRouterClient(SelfHostedClient):
    provider_name = "OpenRouter"
    base_url = "https://openrouter.ai/api/v1"
    default_model = DEFAULT_OPENROUTER_MODEL

    def extra_headers(self) -> Dict[str, str]:
        # OpenRouter uses these to attribute traffic to the calling app
        return {
            "HTTP-Referer": "https://n8n.io",
            "X-Title": "n8n AI Assistant",
        }
