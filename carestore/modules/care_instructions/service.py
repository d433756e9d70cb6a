import logging
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.base import new_id, utcnow
from carestore.core.storage import StorageEngine
from carestore.modules.care_instructions.repository import CareInstructionRepository
from carestore.modules.care_instructions.schemas import CareInstructionCreate
from carestore.modules.care_instructions.models import CareInstruction

log = logging.getLogger(__name__)

class CareInstructionService:
    def __init__(self, session: AsyncSession):
        self.store = StorageEngine(session)
        self.repo = CareInstructionRepository(self.store)

    async def create(self, payload: CareInstructionCreate) -> CareInstruction:
        now = utcnow()
        async with self.store.transaction():
            obj = await self.repo.create(id=new_id(), created_at=now, updated_at=now, **payload.model_dump())
        log.info("Created care instruction %s", obj.id)
        return obj

    async def get(self, instruction_id: str) -> CareInstruction:
        return await self.repo.get(instruction_id)

    async def list(self):
        return await self.repo.list()
