from typing import Sequence
from carestore.core.storage import StorageEngine
from carestore.modules.contacts.models import Contact

class ContactRepository:
    def __init__(self, store: StorageEngine):
        self.store = store

    async def create(self, **data) -> Contact:
        return await self.store.put(Contact(**data))

    async def find(self, contact_id: str) -> Contact | None:
        return await self.store.find(Contact, contact_id)

    async def get(self, contact_id: str) -> Contact:
        return await self.store.get(Contact, contact_id)

    async def list(self) -> Sequence[Contact]:
        return await self.store.all(Contact)
