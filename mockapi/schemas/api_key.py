# === mockapi/schemas/api_key.py ===
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class AccessKeyCreate(BaseModel):
    key_value: Optional[str] = Field(default=None, min_length=1, max_length=256)

class AccessKeyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    endpoint_id: str
    key_value: str
    created_at: Optional[datetime] = None

class AccessKeyListResponse(BaseModel):
    keys: List[AccessKeyResponse]
