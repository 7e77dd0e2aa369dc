from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssistantUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")


class AiChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payload: Any = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class NodeSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    node_name: str = Field(alias="nodeName")
    node_schema: Any = Field(default=None, alias="schema")


class AskContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schemas: Optional[List[NodeSchema]] = Field(default=None, alias="schema")
    input_schema: Optional[NodeSchema] = Field(default=None, alias="inputSchema")
    push_ref: Optional[str] = Field(default=None, alias="pushRef")
    ndv_push_ref: Optional[str] = Field(default=None, alias="ndvPushRef")


class AiAskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    context: Optional[AskContext] = None
    for_node: str = Field(alias="forNode")


class AiApplySuggestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    suggestion_id: str = Field(alias="suggestionId")
