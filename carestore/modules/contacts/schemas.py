from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from carestore.modules.contacts.models import ContactType
from carestore.modules.validators import NonBlankStr, PhoneNumber

class ContactCreate(BaseModel):
    name: NonBlankStr = Field(..., max_length=200)
    contact_type: ContactType
    enabled_relay: bool = False
    phone_number: PhoneNumber | None = None
    email: EmailStr | None = None

class ContactUpdate(BaseModel):
    name: NonBlankStr | None = Field(default=None, max_length=200)
    phone_number: PhoneNumber | None = None
    email: EmailStr | None = None
    enabled_relay: bool | None = None

class ContactOut(BaseModel):
    id: str
    full_name: str
    phone_number: str | None
    email: str | None
    type_of: ContactType
    enabled_relay: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
