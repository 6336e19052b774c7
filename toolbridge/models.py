"""
MCP Tool Models

Request/response shapes exchanged with the local MCP client, and the
translation of remote tool records into MCP tool descriptors.
"""

import copy
import json
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from toolbridge.configs.constants import DEFAULT_INPUT_SCHEMA


def _default_schema() -> dict:
    return copy.deepcopy(DEFAULT_INPUT_SCHEMA)


class ToolDescriptor(BaseModel):
    """A tool as advertised to the MCP client."""
    name: str
    description: str = ""
    inputSchema: dict = Field(default_factory=_default_schema)

    @classmethod
    def from_remote(cls, record: dict) -> "ToolDescriptor":
        """Translate a remote `{name, description?, parameters?}` record.

        The name passes through verbatim; `parameters` becomes `inputSchema`.
        A non-string description is stringified. Non-object parameters
        are rejected, since no schema can be derived from them.
        """
        if not isinstance(record, dict):
            raise ValueError(f"tool record must be an object, got {type(record).__name__}")

        fields: dict[str, Any] = {"name": record.get("name")}
        if record.get("description") is not None:
            fields["description"] = str(record["description"])
        if record.get("parameters") is not None:
            fields["inputSchema"] = record["parameters"]
        return cls(**fields)


class ToolInvocationRequest(BaseModel):
    """Params of an MCP tools/call request."""
    name: str
    arguments: dict = {}

    @field_validator("arguments", mode="before")
    @classmethod
    def _default_arguments(cls, value: Optional[dict]) -> dict:
        return {} if value is None else value


class TextContent(BaseModel):
    """Single text content block."""
    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Content envelope returned for an MCP tools/call request."""
    content: list[TextContent]
    isError: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "ToolCallResult":
        """Wrap a successful remote payload as pretty-printed JSON text."""
        return cls(content=[TextContent(text=json.dumps(payload, indent=2, ensure_ascii=False))])

    @classmethod
    def from_failure(cls, message: str) -> "ToolCallResult":
        """Wrap a failed invocation as in-band `{success: false, error}` data."""
        body = {"success": False, "error": message}
        return cls(content=[TextContent(text=json.dumps(body, indent=2, ensure_ascii=False))], isError=True)
