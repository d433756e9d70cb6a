from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.db import get_session
from carestore.modules.care_instructions.schemas import CareInstructionCreate, CareInstructionOut
from carestore.modules.care_instructions.service import CareInstructionService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> CareInstructionService:
    return CareInstructionService(session)

@router.post("", response_model=CareInstructionOut, status_code=201)
async def create_care_instruction(payload: CareInstructionCreate, service: CareInstructionService = Depends(svc)):
    return await service.create(payload)

@router.get("", response_model=list[CareInstructionOut])
async def list_care_instructions(service: CareInstructionService = Depends(svc)):
    return await service.list()

@router.get("/{instruction_id}", response_model=CareInstructionOut)
async def get_care_instruction(instruction_id: str, service: CareInstructionService = Depends(svc)):
    return await service.get(instruction_id)
