import logging
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.base import new_id, utcnow
from carestore.core.locks import record_locks
from carestore.core.storage import StorageEngine
from carestore.modules.contacts.repository import ContactRepository
from carestore.modules.contacts.schemas import ContactCreate, ContactUpdate
from carestore.modules.contacts.models import Contact

log = logging.getLogger(__name__)

class ContactService:
    def __init__(self, session: AsyncSession):
        self.store = StorageEngine(session)
        self.repo = ContactRepository(self.store)

    async def create(self, payload: ContactCreate) -> Contact:
        now = utcnow()
        async with self.store.transaction():
            obj = await self.repo.create(
                id=new_id(),
                full_name=payload.name,
                type_of=payload.contact_type,
                enabled_relay=payload.enabled_relay,
                phone_number=payload.phone_number,
                email=payload.email,
                created_at=now,
                updated_at=now,
            )
        log.info("Created contact %s (%s)", obj.id, obj.type_of.value)
        return obj

    async def get(self, contact_id: str) -> Contact:
        return await self.repo.get(contact_id)

    async def list(self):
        return await self.repo.list()

    async def update(self, contact_id: str, payload: ContactUpdate) -> Contact:
        data = payload.model_dump(exclude_unset=True)
        async with record_locks.hold("contact", contact_id):
            async with self.store.transaction():
                obj = await self.repo.get(contact_id)
                if "name" in data and data["name"] is not None:
                    obj.full_name = data["name"]
                for k in ("phone_number", "email"):
                    if k in data:
                        setattr(obj, k, data[k])
                if data.get("enabled_relay") is not None:
                    obj.enabled_relay = data["enabled_relay"]
                obj.updated_at = utcnow()
                await self.store.put(obj)
        log.info("Updated contact %s", contact_id)
        return obj
