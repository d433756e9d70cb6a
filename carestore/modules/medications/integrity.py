"""Cross-entity checks run before anything reaches storage.

Each check raises IntegrityError naming the rule that failed and leaves
the store untouched.
"""
import logging
from datetime import datetime
from carestore.core.errors import IntegrityError
from carestore.core.storage import StorageEngine
from carestore.modules.contacts.models import Contact, ContactType
from carestore.modules.medications.models import Medication

log = logging.getLogger(__name__)

MEDICATION_EXISTS = "medication_exists"
PRESCRIBER_EXISTS = "prescriber_exists"
PRESCRIBER_IS_NURSE = "prescriber_is_nurse"
QUANTITY_NON_NEGATIVE = "quantity_non_negative"
LOG_AFTER_CREATION = "log_after_medication_created"
NO_ORPHAN_LOGS = "no_orphan_logs"

def _reject(invariant: str, message: str) -> IntegrityError:
    log.warning("Rejected (%s): %s", invariant, message)
    return IntegrityError(invariant, message)

async def require_medication(store: StorageEngine, medication_id: str) -> Medication:
    med = await store.find(Medication, medication_id)
    if med is None:
        raise _reject(MEDICATION_EXISTS, f"medication '{medication_id}' does not exist")
    return med

async def require_prescriber(store: StorageEngine, prescriber_id: str) -> Contact:
    contact = await store.find(Contact, prescriber_id)
    if contact is None:
        raise _reject(PRESCRIBER_EXISTS, f"prescriber '{prescriber_id}' does not exist")
    if contact.type_of != ContactType.NURSE:
        raise _reject(
            PRESCRIBER_IS_NURSE,
            f"prescriber '{prescriber_id}' is a {contact.type_of.value}, not a NURSE",
        )
    return contact

def check_dose(med: Medication, quantity: int, timestamp: datetime) -> None:
    if med.quantity - quantity < 0:
        raise _reject(
            QUANTITY_NON_NEGATIVE,
            f"dose of {quantity} exceeds remaining quantity {med.quantity} for medication '{med.id}'",
        )
    if timestamp < med.created_at:
        raise _reject(
            LOG_AFTER_CREATION,
            f"dose timestamp {timestamp.isoformat()} precedes medication creation {med.created_at.isoformat()}",
        )

def check_deletable(med: Medication, log_count: int, cascade: bool) -> None:
    if log_count and not cascade:
        raise _reject(
            NO_ORPHAN_LOGS,
            f"medication '{med.id}' has {log_count} dose logs; delete with cascade to remove them",
        )
