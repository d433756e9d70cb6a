"""Error taxonomy shared by every layer of the store.

Validation, not-found and integrity errors are raised before anything is
written, so the store is unchanged and the caller can retry with corrected
input. Storage errors are fatal for the operation that hit them; the
transaction is rolled back and nothing is retried.
"""


class StoreError(Exception):
    kind = "StoreError"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(StoreError):
    kind = "ValidationError"
    status_code = 422

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        out = super().to_dict()
        if self.field:
            out["field"] = self.field
        return out


class NotFoundError(StoreError):
    kind = "NotFoundError"
    status_code = 404

    def __init__(self, collection: str, id: str):
        super().__init__(f"{collection} '{id}' not found")
        self.collection = collection
        self.id = id


class IntegrityError(StoreError):
    kind = "IntegrityError"
    status_code = 409

    def __init__(self, invariant: str, message: str):
        super().__init__(message)
        self.invariant = invariant

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["invariant"] = self.invariant
        return out


class StorageError(StoreError):
    kind = "StorageError"
    status_code = 503


def from_pydantic(exc) -> ValidationError:
    """Collapse a pydantic ValidationError into the store's own."""
    errs = exc.errors()
    if not errs:
        return ValidationError(str(exc))
    first = errs[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or None
    msg = first.get("msg", "invalid input")
    if field:
        msg = f"{field}: {msg}"
    return ValidationError(msg, field=field)
