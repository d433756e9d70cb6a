from typing import Sequence
from datetime import datetime
from sqlalchemy import select, func, delete
from sqlalchemy.exc import SQLAlchemyError
from carestore.core.errors import StorageError
from carestore.core.paging import Page
from carestore.core.storage import StorageEngine
from carestore.modules.medications.models import Medication, MedicationLog

class MedicationRepository:
    def __init__(self, store: StorageEngine):
        self.store = store

    async def create(self, **data) -> Medication:
        return await self.store.put(Medication(**data))

    async def find(self, medication_id: str) -> Medication | None:
        return await self.store.find(Medication, medication_id)

    async def get(self, medication_id: str) -> Medication:
        return await self.store.get(Medication, medication_id)

    async def list(self) -> Sequence[Medication]:
        return await self.store.all(Medication)

    async def save(self, obj: Medication) -> Medication:
        return await self.store.put(obj)

    async def delete(self, obj: Medication) -> None:
        await self.store.delete(obj)

class MedicationLogRepository:
    def __init__(self, store: StorageEngine):
        self.store = store

    @property
    def s(self):
        return self.store.session

    async def append(self, **data) -> MedicationLog:
        return await self.store.append_log(MedicationLog(**data))

    async def _scalar(self, q):
        try:
            return (await self.s.execute(q)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"read failed for medicationlog: {e.__class__.__name__}") from e

    async def next_seq(self, medication_id: str) -> int:
        q = select(func.coalesce(func.max(MedicationLog.seq), 0)).where(MedicationLog.medication_id == medication_id)
        return int(await self._scalar(q)) + 1

    async def count(self, medication_id: str) -> int:
        q = select(func.count()).select_from(MedicationLog).where(MedicationLog.medication_id == medication_id)
        return int(await self._scalar(q))

    async def latest_timestamp(self, medication_id: str) -> datetime | None:
        q = select(MedicationLog.timestamp).where(
            MedicationLog.medication_id == medication_id
        ).order_by(MedicationLog.timestamp.desc()).limit(1)
        try:
            return (await self.s.execute(q)).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"read failed for medicationlog: {e.__class__.__name__}") from e

    async def page(self, medication_id: str, page: Page) -> Sequence[MedicationLog]:
        # newest first; equal timestamps keep insertion order
        q = select(MedicationLog).where(
            MedicationLog.medication_id == medication_id,
        ).order_by(MedicationLog.timestamp.desc(), MedicationLog.seq.asc()).offset(page.offset)
        if page.limit is not None:
            q = q.limit(page.limit)
        try:
            res = await self.s.execute(q)
        except SQLAlchemyError as e:
            raise StorageError(f"read failed for medicationlog: {e.__class__.__name__}") from e
        return res.scalars().all()

    async def delete_for(self, medication_id: str) -> int:
        res = await self.store.execute_write(delete(MedicationLog).where(MedicationLog.medication_id == medication_id))
        return res.rowcount or 0
