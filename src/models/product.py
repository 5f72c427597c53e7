"""Product domain models and API schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

NonNegativeNumber = Annotated[int, Field(ge=0)] | Annotated[
    float, Field(ge=0, allow_inf_nan=False)
]


class Product(BaseModel):
    """A newly created product record.

    Strict so that ``1`` or ``"yes"`` never become ``inStock`` and booleans
    never become prices. Records already on disk are not decoded through it.
    """

    model_config = ConfigDict(strict=True, populate_by_name=True)

    id: int = Field(..., gt=0, description="Identifier assigned by the store")
    name: str = Field(..., min_length=1, description="Trimmed display name")
    price: NonNegativeNumber
    in_stock: bool = Field(..., alias="inStock")

    def to_record(self) -> dict:
        """Return the JSON-ready representation used on disk and on the wire."""

        return self.model_dump(by_alias=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement payload."""

    message: str
