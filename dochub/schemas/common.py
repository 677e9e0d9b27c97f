"""Shared Pydantic schema base with camelCase aliases."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request DTO and response model.

    Fields are snake_case in Python and camelCase on the wire (`organizationId`,
    `inviteAccepted`); either spelling is accepted on input. Response models
    are built straight from ORM rows via `from_attributes`.
    """

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    """Body of the unversioned /health probe."""
    status: str = "ok"
    app: str
    env: str
