from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Float, Integer, ForeignKey, Index, CheckConstraint, UniqueConstraint
from carestore.core.base import Base, CreatedMixin, TimestampedMixin, UTCDateTime

class Medication(Base, TimestampedMixin):
    name: Mapped[str] = mapped_column(String(200))
    generic_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    dosage_type: Mapped[str] = mapped_column(String(64))  # tablet, capsule, liquid, injection, ...
    strength: Mapped[float] = mapped_column(Float)
    units: Mapped[str] = mapped_column(String(32))
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    icon: Mapped[str] = mapped_column(String(64), default="pill")
    last_taken: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    prescriber_id: Mapped[str | None] = mapped_column(ForeignKey("contact.id"), nullable=True, index=True)

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_medication_quantity_non_negative"),)

class MedicationLog(Base, CreatedMixin):
    # append-only: rows are inserted once and never updated
    medication_id: Mapped[str] = mapped_column(ForeignKey("medication.id"))
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime())
    strength: Mapped[float] = mapped_column(Float)
    units: Mapped[str] = mapped_column(String(32))
    quantity: Mapped[int] = mapped_column(Integer, default=1)  # doses consumed
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    seq: Mapped[int] = mapped_column(Integer)  # insertion order within a medication

    __table_args__ = (
        UniqueConstraint("medication_id", "seq", name="uq_medicationlog_seq"),
        Index("ix_medicationlog_medication_ts", "medication_id", "timestamp"),
    )
