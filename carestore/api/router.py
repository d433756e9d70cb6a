from fastapi import APIRouter
from carestore.modules.contacts.router import router as contacts_router
from carestore.modules.medications.router import router as medications_router
from carestore.modules.care_instructions.router import router as care_instructions_router
from carestore.modules.commands.router import router as commands_router

api_router = APIRouter()
api_router.include_router(contacts_router, prefix="/contacts", tags=["contacts"])
api_router.include_router(medications_router, prefix="/medications", tags=["medications"])
api_router.include_router(care_instructions_router, prefix="/care-instructions", tags=["care-instructions"])
api_router.include_router(commands_router, tags=["commands"])

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
