"""Pydantic schemas for user operations."""

from pydantic import BaseModel, ConfigDict, StrictStr


# ============================================================
# Session Schemas
# ============================================================


class UserProjection(BaseModel):
    """Minimal public view of a directory record.

    This is the value stored in the cache and handed to request handlers.
    ``username`` is None for accounts that have not finished registration.
    """

    id: StrictStr
    username: StrictStr | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_registered(self) -> bool:
        """Whether the account has picked a username."""
        return bool(self.username)
