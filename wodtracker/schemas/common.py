"""Shared response shapes."""

from pydantic import BaseModel


class MutationResult(BaseModel):
    """Acknowledgement for create/update/delete; id is set on create."""

    success: bool = True
    id: int | None = None
