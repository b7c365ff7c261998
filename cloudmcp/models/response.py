"""Response envelope produced by every command."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import to_jsonable_python

from cloudmcp.models.argument import ArgumentInfo


class CommandResponse(BaseModel):
    """Outcome of one invocation: negotiation state, results, or an error."""

    status: int = 200
    message: str = "Success"
    arguments: list[ArgumentInfo] | None = Field(default_factory=list)
    results: Any = None
    duration_ms: int = 0

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status,
            "message": self.message,
            "durationMs": self.duration_ms,
        }
        if self.arguments is not None:
            payload["arguments"] = [info.to_payload() for info in self.arguments]
        if self.results is not None:
            payload["results"] = to_jsonable_python(self.results)
        return payload

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_payload(), indent=indent, ensure_ascii=False)

    def results_json(self) -> str:
        """Serialize only ``results``; this is the tool-call payload."""
        return json.dumps(to_jsonable_python(self.results), ensure_ascii=False)


class CommandInfo(BaseModel):
    """Introspection record for one registered command."""

    name: str
    description: str
    command: str
    arguments: list[ArgumentInfo] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "command": self.command,
            "arguments": [info.to_payload() for info in self.arguments],
        }
