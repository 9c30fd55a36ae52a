"""Request-scoped session for one analysis.

AnalysisSession carries everything a single analysis needs through the
pipeline stages. Nothing is shared across requests.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..intentions.schemas import QueryRow
    from ..llm.schemas import Provider


@dataclass
class AnalysisSession:
    """Runtime context for one analysis request."""

    provider: "Provider"
    api_key: str = field(repr=False)
    queries: list["QueryRow"] = field(default_factory=list)
    brand: str | None = None
    sector: str | None = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    started_at: datetime = field(default_factory=datetime.now)

    def to_log_dict(self) -> dict[str, Any]:
        """Loggable view of the session. The API key is never included."""
        return {
            "request_id": self.request_id,
            "provider": self.provider.value,
            "query_count": len(self.queries),
            "brand": self.brand,
            "sector": self.sector,
            "started_at": self.started_at.isoformat(),
        }

    def elapsed_ms(self) -> int:
        """Milliseconds since the session started."""
        return int((datetime.now() - self.started_at).total_seconds() * 1000)
