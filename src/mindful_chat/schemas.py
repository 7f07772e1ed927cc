from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class ChatResponse:
    answer: str
    session_id: str
    message_count: int
    latency_ms: Optional[int] = None
    upstream: Dict[str, Any] = field(default_factory=dict)


class QueryRequest(BaseModel):
    """Body of POST /api/query."""
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = Field(default=None, description="User's latest message")
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Client-generated conversation identifier",
    )
