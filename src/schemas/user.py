"""
StockUser Pydantic schemas.
"""

import uuid

from pydantic import BaseModel, Field


class StockUserRead(BaseModel):
    """
    Stock user as seen by request handlers.

    The same shape is used for the actor's own record and for the record
    whose id is replaced by the effective owner id.

    Attributes:
        id: Stock user id (or effective owner id)
        auth_user_id: Auth service id of the actor
        email: Email of the actor
    """

    id: uuid.UUID = Field(description="Stock user id")
    auth_user_id: str = Field(description="Auth service id")
    email: str | None = Field(default=None, description="Email address")

    model_config = {"from_attributes": True, "frozen": True}
