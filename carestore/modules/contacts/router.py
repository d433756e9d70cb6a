from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.db import get_session
from carestore.modules.contacts.schemas import ContactCreate, ContactUpdate, ContactOut
from carestore.modules.contacts.service import ContactService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> ContactService:
    return ContactService(session)

@router.post("", response_model=ContactOut, status_code=201)
async def create_contact(payload: ContactCreate, service: ContactService = Depends(svc)):
    return await service.create(payload)

@router.get("", response_model=list[ContactOut])
async def list_contacts(service: ContactService = Depends(svc)):
    return await service.list()

@router.get("/{contact_id}", response_model=ContactOut)
async def get_contact(contact_id: str, service: ContactService = Depends(svc)):
    return await service.get(contact_id)

@router.patch("/{contact_id}", response_model=ContactOut)
async def update_contact(contact_id: str, payload: ContactUpdate, service: ContactService = Depends(svc)):
    return await service.update(contact_id, payload)
