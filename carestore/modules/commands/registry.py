import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Type
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from carestore.core.errors import NotFoundError, from_pydantic

log = logging.getLogger("carestore.commands")

Handler = Callable[[AsyncSession, Any], Awaitable[Any]]

@dataclass(frozen=True)
class Command:
    name: str
    args: Type[BaseModel]
    handler: Handler
    mutates: bool

COMMANDS: dict[str, Command] = {}

def command(name: str, args: Type[BaseModel], *, mutates: bool = False):
    def deco(fn: Handler) -> Handler:
        if name in COMMANDS:
            raise RuntimeError(f"command {name!r} registered twice")
        COMMANDS[name] = Command(name=name, args=args, handler=fn, mutates=mutates)
        return fn
    return deco

def _jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, (list, tuple)):
        return [_jsonable(r) for r in result]
    return result

async def dispatch(session: AsyncSession, name: str, raw_args: dict | None) -> Any:
    """Validate the argument bundle and run the named command.

    Raises StoreError subclasses only; the caller renders them.
    """
    cmd = COMMANDS.get(name)
    if cmd is None:
        raise NotFoundError("command", name)
    try:
        args = cmd.args.model_validate(raw_args or {})
    except PydanticValidationError as e:
        err = from_pydantic(e)
        log.warning("Command %s rejected: %s", name, err.message)
        raise err from e
    (log.info if cmd.mutates else log.debug)("Dispatching %s", name)
    return _jsonable(await cmd.handler(session, args))
