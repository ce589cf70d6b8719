from typing import Optional, Union

from pydantic import BaseModel


class RegistrationRequest(BaseModel):
    userId: Optional[Union[str, int]] = None


class MessageOut(BaseModel):
    message: str
