"""Booth schemas."""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class BoothResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    class_name: str
    name: str
    location: Optional[str] = None
    description: Optional[str] = None
