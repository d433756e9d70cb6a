import logging
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.base import new_id, utcnow, as_utc
from carestore.core.locks import record_locks
from carestore.core.paging import Page
from carestore.core.storage import StorageEngine
from carestore.modules.medications import integrity
from carestore.modules.medications.repository import MedicationRepository, MedicationLogRepository
from carestore.modules.medications.schemas import MedicationCreate, MedicationUpdate, DoseCreate
from carestore.modules.medications.models import Medication, MedicationLog

log = logging.getLogger(__name__)

class MedicationService:
    def __init__(self, session: AsyncSession):
        self.store = StorageEngine(session)
        self.meds = MedicationRepository(self.store)
        self.logs = MedicationLogRepository(self.store)

    # ---- Medications ----
    async def create(self, payload: MedicationCreate) -> Medication:
        now = utcnow()
        async with self.store.transaction():
            if payload.prescriber_id is not None:
                await integrity.require_prescriber(self.store, payload.prescriber_id)
            obj = await self.meds.create(
                id=new_id(),
                created_at=now,
                updated_at=now,
                last_taken=None,
                **payload.model_dump(),
            )
        log.info("Created medication %s (%s, qty=%d)", obj.id, obj.name, obj.quantity)
        return obj

    async def find(self, medication_id: str) -> Medication | None:
        return await self.meds.find(medication_id)

    async def get(self, medication_id: str) -> Medication:
        return await self.meds.get(medication_id)

    async def list(self):
        return await self.meds.list()

    async def update(self, medication_id: str, payload: MedicationUpdate) -> Medication:
        data = payload.model_dump(exclude_unset=True)
        async with record_locks.hold("medication", medication_id):
            async with self.store.transaction():
                obj = await self.meds.get(medication_id)
                if data.get("prescriber_id") is not None:
                    await integrity.require_prescriber(self.store, data["prescriber_id"])
                for k, v in data.items():
                    # explicit null clears the optional fields only
                    if v is None and k not in ("generic_name", "prescriber_id"):
                        continue
                    setattr(obj, k, v)
                obj.updated_at = utcnow()
                obj = await self.meds.save(obj)
        log.info("Updated medication %s fields=%s", medication_id, sorted(data))
        return obj

    async def refill(self, medication_id: str, quantity: int) -> Medication:
        async with record_locks.hold("medication", medication_id):
            async with self.store.transaction():
                obj = await self.meds.get(medication_id)
                obj.quantity = obj.quantity + quantity
                obj.updated_at = utcnow()
                obj = await self.meds.save(obj)
        log.info("Refilled medication %s by %d (qty=%d)", medication_id, quantity, obj.quantity)
        return obj

    async def delete(self, medication_id: str, cascade: bool = False) -> int:
        async with record_locks.hold("medication", medication_id):
            async with self.store.transaction():
                obj = await self.meds.get(medication_id)
                count = await self.logs.count(medication_id)
                integrity.check_deletable(obj, count, cascade)
                removed = await self.logs.delete_for(medication_id) if count else 0
                await self.meds.delete(obj)
        log.info("Deleted medication %s (logs removed=%d)", medication_id, removed)
        return removed

    # ---- Dose logs ----
    async def log_dose(self, medication_id: str, payload: DoseCreate) -> MedicationLog:
        """Append a dose and apply it to the medication in one transaction.

        The log row, the quantity decrement and the recomputed ``last_taken``
        commit together or not at all.

        ``last_taken`` is the latest dose *timestamp* across the medication's
        logs, which is also the first entry ``get_logs`` returns. For doses
        appended in time order that is the most recently appended log; a
        back-dated dose does not move it backwards.
        """
        async with record_locks.hold("medication", medication_id):
            # stamped under the lock so default timestamps follow insertion order
            when = as_utc(payload.timestamp) if payload.timestamp else utcnow()
            async with self.store.transaction():
                med = await integrity.require_medication(self.store, medication_id)
                integrity.check_dose(med, payload.quantity, when)
                entry = await self.logs.append(
                    id=new_id(),
                    medication_id=medication_id,
                    timestamp=when,
                    strength=payload.strength,
                    units=payload.units,
                    quantity=payload.quantity,
                    comments=payload.comments,
                    seq=await self.logs.next_seq(medication_id),
                    created_at=utcnow(),
                )
                med.quantity = med.quantity - payload.quantity
                med.last_taken = await self.logs.latest_timestamp(medication_id)
                med.updated_at = utcnow()
                await self.meds.save(med)
        log.info("Logged dose %s for medication %s (qty left=%d)", entry.id, medication_id, med.quantity)
        return entry

    async def get_logs(self, medication_id: str, page: Page):
        await self.meds.get(medication_id)
        return await self.logs.page(medication_id, page)
