from dataclasses import dataclass
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class ChatStreamResponse:
    body: Iterator[bytes]


class AskAiResponse(BaseModel):
    answer: str


class ApplySuggestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    suggestion_id: str = Field(alias="suggestionId")
    applied: bool = True


class AiCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(alias="apiKey")
    url: str
