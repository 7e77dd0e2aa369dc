import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_OPENROUTER_MODEL = "meta-llama/llama-3.1-8b-instruct:free"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

LOG_LEVELS = {
    "silent": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def normalize_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in ("true", "1")


@dataclass
class AiAssistantConfig:
    base_url: str = ""
    open_router_api_key: str = ""
    open_ai_api_key: str = ""
    open_router_model: str = DEFAULT_OPENROUTER_MODEL
    open_ai_model: str = DEFAULT_OPENAI_MODEL
    self_hosted_enabled: bool = False
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AiAssistantConfig":
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("N8N_AI_ASSISTANT_BASE_URL", ""),
            open_router_api_key=env.get("N8N_AI_ASSISTANT_OPENROUTER_API_KEY", ""),
            open_ai_api_key=env.get("N8N_AI_ASSISTANT_OPENAI_API_KEY", ""),
            open_router_model=env.get("N8N_AI_ASSISTANT_OPENROUTER_MODEL", DEFAULT_OPENROUTER_MODEL),
            open_ai_model=env.get("N8N_AI_ASSISTANT_OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
            self_hosted_enabled=normalize_flag(env.get("N8N_AI_ASSISTANT_SELF_HOSTED_ENABLED")),
            log_level=env.get("N8N_LOG_LEVEL", "info"),
        )


def configure_logging(level: str = "info"):
    logging.basicConfig(
        level=LOG_LEVELS.get(level.lower(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
