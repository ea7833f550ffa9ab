"""Product schemas.

Products are stored locally and remotely with camelCase keys
(``expiryDate``), so serialization always goes through ``to_record()``.
"""

from datetime import date
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


def new_product_id() -> str:
    """Generate a collision-resistant product identifier."""
    return uuid4().hex


class ProductFields(BaseModel):
    """Editable product attributes shared by drafts and stored products."""

    name: str = Field(min_length=1, description="Display name")
    category: str = Field(description="Category name, may be archived")
    quantity: int = Field(ge=0, description="Units in stock")
    price: float = Field(ge=0, description="Price per unit")
    expiry_date: date = Field(alias="expiryDate", description="Expiry date (YYYY-MM-DD)")
    notes: str | None = Field(default=None, description="Optional free text")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class ProductDraft(ProductFields):
    """Product payload without an id, as entered in the stock form."""

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}

    def to_product(self, product_id: str) -> "Product":
        """Bind this draft to a product id."""
        return Product(id=product_id, **self.model_dump())


class Product(ProductFields):
    """A stock-keeping unit.

    Immutable: edits produce a new instance via ``model_copy``.
    """

    id: str = Field(..., min_length=1, description="Unique product id")

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON record shape used by both stores."""
        return self.model_dump(mode="json", by_alias=True)

    def with_category(self, category: str) -> "Product":
        """Return a copy of this product pointed at another category."""
        return self.model_copy(update={"category": category})
