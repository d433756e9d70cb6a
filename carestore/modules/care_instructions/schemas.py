from datetime import datetime
from pydantic import BaseModel, Field
from carestore.modules.validators import NonBlankStr

class CareInstructionCreate(BaseModel):
    title: NonBlankStr = Field(..., max_length=200)
    content: NonBlankStr
    frequency: str | None = Field(default=None, max_length=64)
    added_by: str | None = Field(default=None, max_length=200)

class CareInstructionOut(BaseModel):
    id: str
    title: str
    content: str
    frequency: str | None
    added_by: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
