from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Wrapper shape expected from the remote service: a success flag plus payload."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    data: Optional[T] = None


class HttpResponse(BaseModel, Generic[T]):
    """Outcome of a single request execution.

    The raw body is always kept, even when it could not be decoded into
    ``result``. ``errors_map`` is reserved for structured error payloads and
    is currently always empty.
    """

    url: str
    method: str
    status: str = ""
    status_code: int = 0
    body: bytes = b""
    headers: Dict[str, str] = Field(default_factory=dict)
    result: Envelope[T] = Field(default_factory=Envelope)
    errors_map: Dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
