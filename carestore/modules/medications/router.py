from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.config import settings
from carestore.core.db import get_session
from carestore.core.paging import Page
from carestore.modules.medications.schemas import (
    MedicationCreate, MedicationUpdate, MedicationRefill, DoseCreate,
    MedicationOut, MedicationLogOut, MedicationDeleted,
)
from carestore.modules.medications.service import MedicationService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> MedicationService:
    return MedicationService(session)

@router.post("", response_model=MedicationOut, status_code=201)
async def create_medication(payload: MedicationCreate, service: MedicationService = Depends(svc)):
    return await service.create(payload)

@router.get("", response_model=list[MedicationOut])
async def list_medications(service: MedicationService = Depends(svc)):
    return await service.list()

@router.get("/{medication_id}", response_model=MedicationOut)
async def get_medication(medication_id: str, service: MedicationService = Depends(svc)):
    return await service.get(medication_id)

@router.patch("/{medication_id}", response_model=MedicationOut)
async def update_medication(medication_id: str, payload: MedicationUpdate, service: MedicationService = Depends(svc)):
    return await service.update(medication_id, payload)

@router.post("/{medication_id}/refill", response_model=MedicationOut)
async def refill_medication(medication_id: str, payload: MedicationRefill, service: MedicationService = Depends(svc)):
    return await service.refill(medication_id, payload.quantity)

@router.delete("/{medication_id}", response_model=MedicationDeleted)
async def delete_medication(medication_id: str, cascade: bool = False, service: MedicationService = Depends(svc)):
    removed = await service.delete(medication_id, cascade=cascade)
    return {"deleted": medication_id, "logs_deleted": removed}

@router.post("/{medication_id}/logs", response_model=MedicationLogOut, status_code=201)
async def log_dose(medication_id: str, payload: DoseCreate, service: MedicationService = Depends(svc)):
    return await service.log_dose(medication_id, payload)

@router.get("/{medication_id}/logs", response_model=list[MedicationLogOut])
async def list_logs(
    medication_id: str,
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_LOG_PAGE_SIZE, ge=0),
    service: MedicationService = Depends(svc),
):
    return await service.get_logs(medication_id, Page.of(offset, limit))
