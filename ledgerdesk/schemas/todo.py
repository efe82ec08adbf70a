from datetime import datetime
from pydantic import BaseModel, ConfigDict


class TodoCreateRequest(BaseModel):
    title: str | None = None


class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    title: str
    is_complete: bool
    created_at: datetime
