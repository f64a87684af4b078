from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ExceptionDetails(BaseModel):
    title: str
    timestamp: datetime
    status: int
    exception: str
    details: dict[str, Any]
