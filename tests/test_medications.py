import pytest
from datetime import timedelta
from carestore.core.base import utcnow
from carestore.core.errors import IntegrityError, NotFoundError, StorageError
from carestore.core.paging import Page
from carestore.modules.contacts.schemas import ContactCreate
from carestore.modules.contacts.service import ContactService
from carestore.modules.medications.schemas import MedicationCreate, MedicationUpdate, DoseCreate
from carestore.modules.medications.repository import MedicationRepository
from carestore.modules.medications.service import MedicationService


def _med(**overrides):
    data = dict(name="Metformin", dosage_type="tablet", strength=500, units="mg", quantity=10)
    data.update(overrides)
    return MedicationCreate(**data)


def _dose(**overrides):
    data = dict(strength=200, units="mg")
    data.update(overrides)
    return DoseCreate(**data)


async def test_create_with_nurse_prescriber(session, nurse):
    svc = MedicationService(session)
    med = await svc.create(_med(prescriber_id=nurse.id))
    again = await svc.find(med.id)
    assert again.prescriber_id == nurse.id
    assert again.last_taken is None
    assert again.created_at == again.updated_at


async def test_create_with_unknown_prescriber_is_rejected(session):
    with pytest.raises(IntegrityError) as ei:
        await MedicationService(session).create(_med(prescriber_id="missing"))
    assert ei.value.invariant == "prescriber_exists"
    assert await MedicationService(session).list() == []


@pytest.mark.parametrize("role", ["PATIENT", "CAREGIVER"])
async def test_create_with_non_nurse_prescriber_is_rejected(session, role):
    contact = await ContactService(session).create(ContactCreate(name="Someone", contact_type=role))
    with pytest.raises(IntegrityError) as ei:
        await MedicationService(session).create(_med(prescriber_id=contact.id))
    assert ei.value.invariant == "prescriber_is_nurse"


async def test_log_dose_decrements_quantity_and_sets_last_taken(session, medication):
    svc = MedicationService(session)
    entries = [await svc.log_dose(medication.id, _dose()) for _ in range(3)]
    med = await svc.get(medication.id)
    assert med.quantity == 27
    assert med.last_taken == entries[-1].timestamp
    assert [e.seq for e in entries] == [1, 2, 3]


async def test_log_dose_with_multiple_units(session, medication):
    svc = MedicationService(session)
    await svc.log_dose(medication.id, _dose(quantity=4))
    assert (await svc.get(medication.id)).quantity == 26


async def test_dose_exceeding_quantity_is_rejected_and_changes_nothing(session):
    svc = MedicationService(session)
    med = await svc.create(_med(quantity=1))
    await svc.log_dose(med.id, _dose())
    before = await svc.get(med.id)
    with pytest.raises(IntegrityError) as ei:
        await svc.log_dose(med.id, _dose())
    assert ei.value.invariant == "quantity_non_negative"
    after = await svc.get(med.id)
    assert after.quantity == 0
    assert after.last_taken == before.last_taken
    assert len(await svc.get_logs(med.id, Page.of())) == 1


async def test_dose_for_unknown_medication_is_integrity_error(session):
    with pytest.raises(IntegrityError) as ei:
        await MedicationService(session).log_dose("ghost", _dose())
    assert ei.value.invariant == "medication_exists"


async def test_dose_before_medication_created_is_rejected(session, medication):
    svc = MedicationService(session)
    with pytest.raises(IntegrityError) as ei:
        await svc.log_dose(medication.id, _dose(timestamp=medication.created_at - timedelta(days=1)))
    assert ei.value.invariant == "log_after_medication_created"
    assert (await svc.get(medication.id)).quantity == 30


async def test_last_taken_tracks_latest_timestamp_on_out_of_order_insert(session, medication):
    svc = MedicationService(session)
    base = utcnow()
    late = await svc.log_dose(medication.id, _dose(timestamp=base + timedelta(hours=2)))
    await svc.log_dose(medication.id, _dose(timestamp=base + timedelta(hours=1)))
    med = await svc.get(medication.id)
    assert med.last_taken == late.timestamp
    logs = await svc.get_logs(medication.id, Page.of())
    assert [l.timestamp for l in logs] == sorted((l.timestamp for l in logs), reverse=True)


async def test_no_logs_means_no_last_taken(session, medication):
    svc = MedicationService(session)
    assert (await svc.get(medication.id)).last_taken is None
    assert list(await svc.get_logs(medication.id, Page.of(0, 5))) == []


async def test_update_revalidates_prescriber(session, medication):
    svc = MedicationService(session)
    patient = await ContactService(session).create(ContactCreate(name="P", contact_type="PATIENT"))
    with pytest.raises(IntegrityError):
        await svc.update(medication.id, MedicationUpdate(prescriber_id=patient.id))
    assert (await svc.get(medication.id)).prescriber_id == medication.prescriber_id


async def test_update_bumps_updated_at_and_can_clear_prescriber(session, medication):
    svc = MedicationService(session)
    updated = await svc.update(medication.id, MedicationUpdate(name="Advil", prescriber_id=None))
    assert updated.name == "Advil"
    assert updated.prescriber_id is None
    assert updated.quantity == 30
    assert updated.updated_at >= medication.created_at


async def test_update_unknown_medication(session):
    with pytest.raises(NotFoundError):
        await MedicationService(session).update("ghost", MedicationUpdate(name="x"))


async def test_refill_adds_quantity(session, medication):
    med = await MedicationService(session).refill(medication.id, 10)
    assert med.quantity == 40


async def test_delete_with_logs_is_blocked_without_cascade(session, medication):
    svc = MedicationService(session)
    await svc.log_dose(medication.id, _dose())
    with pytest.raises(IntegrityError) as ei:
        await svc.delete(medication.id)
    assert ei.value.invariant == "no_orphan_logs"
    assert await svc.find(medication.id) is not None


async def test_delete_with_cascade_removes_logs(session, medication):
    svc = MedicationService(session)
    await svc.log_dose(medication.id, _dose())
    await svc.log_dose(medication.id, _dose())
    assert await svc.delete(medication.id, cascade=True) == 2
    assert await svc.find(medication.id) is None
    with pytest.raises(NotFoundError):
        await svc.get_logs(medication.id, Page.of())


async def test_delete_without_logs(session, medication):
    svc = MedicationService(session)
    assert await svc.delete(medication.id) == 0
    assert await svc.list() == []


async def test_entities_stay_readable_after_rejection(session, nurse, medication):
    svc = MedicationService(session)
    with pytest.raises(IntegrityError):
        await svc.log_dose(medication.id, _dose(quantity=999))
    with pytest.raises(IntegrityError):
        await svc.create(_med(prescriber_id="missing"))
    with pytest.raises(NotFoundError):
        await svc.update("ghost", MedicationUpdate(name="x"))
    assert medication.quantity == 30
    assert medication.last_taken is None
    assert nurse.full_name == "Dr. A"
    # and the caller can retry with corrected input on the same session
    entry = await svc.log_dose(medication.id, _dose())
    assert entry.medication_id == medication.id
    assert (await svc.get(medication.id)).quantity == 29


async def test_dose_rolls_back_when_medication_write_fails(session, medication, monkeypatch):
    med_id = medication.id

    async def fail_save(self, obj):
        raise StorageError("disk full")

    monkeypatch.setattr(MedicationRepository, "save", fail_save)
    svc = MedicationService(session)
    with pytest.raises(StorageError):
        await svc.log_dose(med_id, _dose())
    monkeypatch.undo()

    med = await svc.get(med_id)
    assert med.quantity == 30
    assert med.last_taken is None
    assert list(await svc.get_logs(med_id, Page.of())) == []
