from typing import Optional

from fitbook.schemas.camel import CamelModel


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: Optional[str] = None
