from dataclasses import dataclass
from .config import settings
from .errors import ValidationError

@dataclass(frozen=True)
class Page:
    """Stateless offset/limit window. No cursor is held between calls."""
    offset: int = 0
    limit: int | None = None

    @classmethod
    def of(cls, offset: int | None = None, limit: int | None = None) -> "Page":
        offset = 0 if offset is None else offset
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            raise ValidationError("offset must be a non-negative integer", field="offset")
        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
                raise ValidationError("limit must be a non-negative integer", field="limit")
            limit = min(limit, settings.MAX_PAGE_SIZE)
        return cls(offset=offset, limit=limit)
