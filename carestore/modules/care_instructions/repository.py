from typing import Sequence
from carestore.core.storage import StorageEngine
from carestore.modules.care_instructions.models import CareInstruction

class CareInstructionRepository:
    def __init__(self, store: StorageEngine):
        self.store = store

    async def create(self, **data) -> CareInstruction:
        return await self.store.put(CareInstruction(**data))

    async def get(self, instruction_id: str) -> CareInstruction:
        return await self.store.get(CareInstruction, instruction_id)

    async def list(self) -> Sequence[CareInstruction]:
        return await self.store.all(CareInstruction)
