"""Search requests — How a built query is going to be executed.

A request is either ``StandardRequest`` (the engine sends ``params`` itself)
or ``OverriddenRequest`` (a query callback receives the client and ``params``
and its return value is used as the result).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from scoutbridge.models.query import SearchCallback


class StandardRequest(BaseModel):
    """Parameters the engine passes straight to ``client.search()``."""

    model_config = ConfigDict(frozen=True)

    params: dict[str, Any] = Field(description="Keyword arguments for client.search(): index and body")


class OverriddenRequest(BaseModel):
    """Parameters handed to a query callback instead of being sent."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    callback: SearchCallback = Field(description="Replacement for the engine's search call")
    term: str | None = Field(default=None, description="The raw free-text term of the query")
    params: dict[str, Any] = Field(description="The parameters the engine would have sent")


SearchRequest = StandardRequest | OverriddenRequest
