"""Assistant conversation turns and OwlAI exchanges."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .journal_schema import utcnow


class ConversationTurn(BaseModel):
    """One turn of the assistant conversation log, scoped per chat."""
    chat_id: str
    role: Literal["user", "model"]
    content: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=utcnow)

    def to_content(self) -> dict:
        """Gemini chat-history shape."""
        return {"role": self.role, "parts": [{"text": self.content}]}


class OwlExchange(BaseModel):
    """A message and the OwlAI reply it received."""
    chat_id: str
    user_id: str
    username: Optional[str] = None
    message: str = ""
    response: str = ""
    timestamp: int = Field(..., description="Milliseconds since epoch")

    class Config:
        from_attributes = True
