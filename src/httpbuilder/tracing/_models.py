from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from pydantic import BaseModel


class HttpStatement(BaseModel):
    """Trace record of one HTTP call, appended to a diagnostic sink."""

    started_at: Optional[datetime] = None
    time: str = ""
    status: int = 0
    timeout: str = ""
    method: str = ""
    url: str = ""
    error: str = ""
    body: str = ""
    query_params: Dict[str, str] = {}
    headers: Dict[str, str] = {}
    response: Dict[str, Any] = {}
    duration: timedelta = timedelta(0)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view with empty fields left out."""
        return self.model_dump(mode="json", exclude_defaults=True)
