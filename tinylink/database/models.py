"""Data models for the link store."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Link:
    """A short code mapped to its target URL plus usage metadata."""

    code: str
    target_url: str
    created_at: datetime
    clicks: int = 0
    last_clicked: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape served by the API."""
        return {
            "code": self.code,
            "targetUrl": self.target_url,
            "clicks": self.clicks,
            "lastClicked": self.last_clicked.isoformat() if self.last_clicked else None,
            "createdAt": self.created_at.isoformat(),
        }
