from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UserCreated(BaseModel):
    userId: str


class UserBrief(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True
