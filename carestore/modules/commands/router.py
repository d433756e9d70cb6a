from typing import Any
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.db import get_session
from carestore.core.errors import ValidationError
from carestore.modules.commands import handlers  # noqa: F401  registers the commands
from carestore.modules.commands.registry import COMMANDS, dispatch

router = APIRouter()

@router.get("/commands")
async def list_commands():
    return sorted(COMMANDS)

@router.post("/commands/{name}")
async def invoke(name: str, args: Any = Body(default=None), session: AsyncSession = Depends(get_session)):
    if args is not None and not isinstance(args, dict):
        raise ValidationError("command arguments must be a JSON object")
    return await dispatch(session, name, args)
