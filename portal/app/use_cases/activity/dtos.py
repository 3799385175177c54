from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ActivityInfo(BaseModel):
    id: str
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    activity_type: str
    description: str
    metadata: Dict[str, Any]
    created_at: datetime


class ActivityFeedResponse(BaseModel):
    activities: List[ActivityInfo]
