import logging
import os
from typing import Optional

from ai_assistant.config import AiAssistantConfig, configure_logging
from ai_assistant.constants import VERSION
from ai_assistant.schemas.requests import AiApplySuggestionRequest, AiAskRequest, AiChatRequest, AssistantUser
from ai_assistant.services.licensed_client import (
    LicensedAssistantClient,
    LicensedClientFactory,
    LicensedClientOptions,
    LicenseService,
)
from ai_assistant.services.self_hosted_client import SelfHostedClient, get_self_hosted_client

configure_logging(os.environ.get("N8N_LOG_LEVEL", "info"))

logger = logging.getLogger(__name__)


class AssistantNotConfiguredError(Exception):
    pass


class AiService:
    """Routes assistant requests to the licensed cloud client or a self-hosted provider.

    The choice is made once, on the first request (or an explicit ``init()``):
    an active AI assistant license always wins; otherwise a self-hosted client
    is built from the OpenRouter or OpenAI key in the config.
    """

    def __init__(
        self,
        license_service: LicenseService,
        config: AiAssistantConfig,
        licensed_client_factory: LicensedClientFactory,
        version: str = VERSION,
    ):
        self.license_service = license_service
        self.config = config
        self.licensed_client_factory = licensed_client_factory
        self.version = version
        self.client: Optional[LicensedAssistantClient] = None
        self.self_hosted_client: Optional[SelfHostedClient] = None
        self._is_using_licensed_client = False

    @property
    def is_using_licensed_client(self) -> bool:
        return self._is_using_licensed_client

    def init(self):
        if self.license_service.is_ai_assistant_enabled():
            options = LicensedClientOptions(
                license_cert=self.license_service.load_cert_str(),
                consumer_id=self.license_service.get_consumer_id(),
                version=self.version,
                base_url=self.config.base_url,
                log_level=self.config.log_level,
            )
            self.client = self.licensed_client_factory(options)
            self._is_using_licensed_client = True
            logger.info("AI assistant using licensed client")
            return

        self.self_hosted_client = get_self_hosted_client(self.config)
        self._is_using_licensed_client = False
        if self.self_hosted_client:
            logger.info("AI assistant using self-hosted %s client", self.self_hosted_client.provider_name)
        else:
            logger.info("AI assistant not configured: no license and no self-hosted provider")

    def _ensure_init(self):
        if not self.client and not self.self_hosted_client:
            self.init()

    def _active_client(self):
        self._ensure_init()
        if self._is_using_licensed_client:
            if not self.client:
                raise AssistantNotConfiguredError("Licensed assistant client not setup")
            return self.client
        if not self.self_hosted_client:
            raise AssistantNotConfiguredError("Self-hosted assistant client not setup")
        return self.self_hosted_client

    def chat(self, payload: AiChatRequest, user: AssistantUser):
        return self._active_client().chat(payload, AssistantUser(id=user.id))

    def apply_suggestion(self, payload: AiApplySuggestionRequest, user: AssistantUser):
        return self._active_client().apply_suggestion(payload, AssistantUser(id=user.id))

    def ask_ai(self, payload: AiAskRequest, user: AssistantUser):
        return self._active_client().ask_ai(payload, AssistantUser(id=user.id))

    def create_free_ai_credits(self, user: AssistantUser):
        return self._active_client().generate_ai_credits_credentials(user)

    def close(self):
        if self.self_hosted_client:
            self.self_hosted_client.close()
