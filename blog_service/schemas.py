from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=20, pattern=r"^[A-Za-z0-9]+$")
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    # Missing fields are reported as 401 by the login route, not 422.
    username: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class PostCreate(BaseModel):
    title: str
    body: str
    tags: List[str]


class PostUpdate(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None
    tags: Optional[List[str]] = None


class OwnerOut(BaseModel):
    id: str
    username: str


class PostOut(BaseModel):
    id: str
    title: str
    body: str
    tags: List[str]
    published_date: datetime
    owner: OwnerOut
