from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TypeUserResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    type_user_id: int
    type_user: Optional[TypeUserResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
