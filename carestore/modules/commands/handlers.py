"""The named commands the interface invokes.

Names are the wire contract. Single-record lookups are modelled as
optional values internally; ``get_medications`` still answers with a list
because callers have always received one.
"""
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.paging import Page
from carestore.modules.commands.registry import command
from carestore.modules.contacts.schemas import ContactCreate, ContactUpdate, ContactOut
from carestore.modules.contacts.service import ContactService
from carestore.modules.medications.schemas import (
    MedicationCreate, MedicationUpdate, DoseCreate,
    MedicationOut, MedicationLogOut, MedicationDeleted,
)
from carestore.modules.medications.service import MedicationService
from carestore.modules.care_instructions.schemas import CareInstructionCreate, CareInstructionOut
from carestore.modules.care_instructions.service import CareInstructionService

class Args(BaseModel):
    model_config = ConfigDict(extra="forbid")

class NoArgs(Args):
    pass

class IdArgs(Args):
    id: str

class GetMedicationsArgs(Args):
    id: str | None = None

class GetMedicationLogsArgs(Args):
    medication_id: str
    offset: int | None = None
    limit: int | None = None

class CreateContactArgs(ContactCreate):
    model_config = ConfigDict(extra="forbid")

class UpdateContactArgs(ContactUpdate):
    model_config = ConfigDict(extra="forbid")
    id: str

class CreateMedicationArgs(MedicationCreate):
    model_config = ConfigDict(extra="forbid")

class UpdateMedicationArgs(MedicationUpdate):
    model_config = ConfigDict(extra="forbid")
    id: str

class RefillMedicationArgs(Args):
    id: str
    quantity: int = Field(..., gt=0)

class DeleteMedicationArgs(Args):
    id: str
    cascade: bool = False

class LogDoseArgs(DoseCreate):
    model_config = ConfigDict(extra="forbid")
    medication_id: str

class CreateCareInstructionArgs(CareInstructionCreate):
    model_config = ConfigDict(extra="forbid")

# ---- Care instructions ----

@command("get_all_care_instructions", NoArgs)
async def get_all_care_instructions(s: AsyncSession, args: NoArgs):
    rows = await CareInstructionService(s).list()
    return [CareInstructionOut.model_validate(r) for r in rows]

@command("get_care_instruction", IdArgs)
async def get_care_instruction(s: AsyncSession, args: IdArgs):
    return CareInstructionOut.model_validate(await CareInstructionService(s).get(args.id))

@command("create_care_instruction", CreateCareInstructionArgs, mutates=True)
async def create_care_instruction(s: AsyncSession, args: CreateCareInstructionArgs):
    return CareInstructionOut.model_validate(await CareInstructionService(s).create(args))

# ---- Contacts ----

@command("get_all_contacts", NoArgs)
async def get_all_contacts(s: AsyncSession, args: NoArgs):
    return [ContactOut.model_validate(r) for r in await ContactService(s).list()]

@command("get_contact", IdArgs)
async def get_contact(s: AsyncSession, args: IdArgs):
    return ContactOut.model_validate(await ContactService(s).get(args.id))

@command("create_contact", CreateContactArgs, mutates=True)
async def create_contact(s: AsyncSession, args: CreateContactArgs):
    return ContactOut.model_validate(await ContactService(s).create(args))

@command("update_contact", UpdateContactArgs, mutates=True)
async def update_contact(s: AsyncSession, args: UpdateContactArgs):
    payload = ContactUpdate(**args.model_dump(exclude={"id"}, exclude_unset=True))
    return ContactOut.model_validate(await ContactService(s).update(args.id, payload))

# ---- Medications ----

@command("get_medications", GetMedicationsArgs)
async def get_medications(s: AsyncSession, args: GetMedicationsArgs):
    service = MedicationService(s)
    if args.id is None:
        return [MedicationOut.model_validate(r) for r in await service.list()]
    med = await service.find(args.id)
    return [] if med is None else [MedicationOut.model_validate(med)]

@command("create_medication", CreateMedicationArgs, mutates=True)
async def create_medication(s: AsyncSession, args: CreateMedicationArgs):
    return MedicationOut.model_validate(await MedicationService(s).create(args))

@command("update_medication", UpdateMedicationArgs, mutates=True)
async def update_medication(s: AsyncSession, args: UpdateMedicationArgs):
    payload = MedicationUpdate(**args.model_dump(exclude={"id"}, exclude_unset=True))
    return MedicationOut.model_validate(await MedicationService(s).update(args.id, payload))

@command("refill_medication", RefillMedicationArgs, mutates=True)
async def refill_medication(s: AsyncSession, args: RefillMedicationArgs):
    return MedicationOut.model_validate(await MedicationService(s).refill(args.id, args.quantity))

@command("delete_medication", DeleteMedicationArgs, mutates=True)
async def delete_medication(s: AsyncSession, args: DeleteMedicationArgs):
    removed = await MedicationService(s).delete(args.id, cascade=args.cascade)
    return MedicationDeleted(deleted=args.id, logs_deleted=removed)

# ---- Dose logs ----

@command("get_medication_logs", GetMedicationLogsArgs)
async def get_medication_logs(s: AsyncSession, args: GetMedicationLogsArgs):
    rows = await MedicationService(s).get_logs(args.medication_id, Page.of(args.offset, args.limit))
    return [MedicationLogOut.model_validate(r) for r in rows]

@command("log_dose", LogDoseArgs, mutates=True)
async def log_dose(s: AsyncSession, args: LogDoseArgs):
    return MedicationLogOut.model_validate(await MedicationService(s).log_dose(args.medication_id, args))
