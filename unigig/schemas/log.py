from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class LogSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int]
    timestamp: datetime
    action: str
    status: str
    details: Optional[str]
    actor_id: Optional[str]
    entity_type: Optional[str]
    entity_id: Optional[str]
