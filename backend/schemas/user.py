from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from models.users import UserLevel

# Schema for creating a staff account
class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    full_name: Optional[str] = None
    level: UserLevel

# Schema for partial account updates; a new password is re-hashed
class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    password: Optional[str] = Field(None, min_length=1)
    full_name: Optional[str] = None
    level: Optional[UserLevel] = None

# Output schema for user profile details (never exposes the hash)
class UserResponse(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    level: UserLevel

    model_config = ConfigDict(from_attributes=True)

class UserPage(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    page_size: int
