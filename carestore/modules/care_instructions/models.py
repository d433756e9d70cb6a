from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text
from carestore.core.base import Base, TimestampedMixin

class CareInstruction(Base, TimestampedMixin):
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    frequency: Mapped[str | None] = mapped_column(String(64), nullable=True)  # e.g. "Once a day"
    added_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
