from pydantic import BaseModel
from datetime import datetime


class ErrorOut(BaseModel):
    detail: str
    code: int
    timestamp: datetime
    path: str
