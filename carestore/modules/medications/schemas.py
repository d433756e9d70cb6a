from datetime import datetime
from pydantic import BaseModel, Field
from carestore.modules.validators import NonBlankStr, PositiveNumber, Quantity

class MedicationCreate(BaseModel):
    name: NonBlankStr = Field(..., max_length=200)
    generic_name: str | None = Field(default=None, max_length=200)
    dosage_type: NonBlankStr = Field(..., max_length=64)
    strength: PositiveNumber
    units: NonBlankStr = Field(..., max_length=32)
    quantity: Quantity = 0
    icon: NonBlankStr = Field(default="pill", max_length=64)
    prescriber_id: str | None = None

class MedicationUpdate(BaseModel):
    # no quantity: it moves only through doses and refills
    name: NonBlankStr | None = Field(default=None, max_length=200)
    generic_name: str | None = Field(default=None, max_length=200)
    dosage_type: NonBlankStr | None = Field(default=None, max_length=64)
    strength: PositiveNumber | None = None
    units: NonBlankStr | None = Field(default=None, max_length=32)
    icon: NonBlankStr | None = Field(default=None, max_length=64)
    prescriber_id: str | None = None

class MedicationRefill(BaseModel):
    quantity: int = Field(..., gt=0)

class DoseCreate(BaseModel):
    strength: PositiveNumber
    units: NonBlankStr = Field(..., max_length=32)
    comments: str | None = None
    quantity: int = Field(default=1, gt=0)
    timestamp: datetime | None = None

class MedicationOut(BaseModel):
    id: str
    name: str
    generic_name: str | None
    dosage_type: str
    strength: float
    units: str
    quantity: int
    icon: str
    created_at: datetime
    updated_at: datetime
    last_taken: datetime | None
    prescriber_id: str | None

    class Config:
        from_attributes = True

class MedicationLogOut(BaseModel):
    id: str
    medication_id: str
    timestamp: datetime
    strength: float
    units: str
    quantity: int
    comments: str | None

    class Config:
        from_attributes = True

class MedicationDeleted(BaseModel):
    deleted: str
    logs_deleted: int
