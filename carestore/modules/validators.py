"""Field predicates shared by the create/update schemas."""
import re
from typing import Annotated
from pydantic import AfterValidator, Field, StringConstraints

_PHONE = re.compile(r"^\+?[0-9 ()\-.]{3,32}$")

def phone_number(v: str) -> str | None:
    v = v.strip()
    if not v:
        return None
    if not _PHONE.match(v):
        raise ValueError("not a phone number")
    return v

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Quantity = Annotated[int, Field(ge=0)]
PositiveNumber = Annotated[float, Field(gt=0)]
PhoneNumber = Annotated[str, AfterValidator(phone_number)]
