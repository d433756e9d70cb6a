import enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Enum
from carestore.core.base import Base, TimestampedMixin

class ContactType(str, enum.Enum):
    PATIENT = "PATIENT"
    NURSE = "NURSE"
    CAREGIVER = "CAREGIVER"

class Contact(Base, TimestampedMixin):
    full_name: Mapped[str] = mapped_column(String(200))
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    type_of: Mapped[ContactType] = mapped_column(Enum(ContactType, native_enum=False, length=16))
    enabled_relay: Mapped[bool] = mapped_column(default=False)
