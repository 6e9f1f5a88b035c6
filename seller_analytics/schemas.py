from typing import Any, Optional, Union
from pydantic import BaseModel, Field, field_validator

# Seller ids show up as ints in some exports and as strings ("seller_1") in others.
SellerId = Union[int, str]


def seller_key(seller_id: SellerId) -> str:
    """Lookup key for a seller id: 1 and "1" are the same seller."""
    return str(seller_id)


class SkuModel(BaseModel):
    """Base for anything carrying a SKU. Numeric SKUs are stored as strings."""

    sku: str

    @field_validator("sku", mode="before")
    @classmethod
    def sku_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Seller(BaseModel):
    id: SellerId
    first_name: str
    last_name: str


class Product(SkuModel):
    """A catalogue card. Only the prices are needed to compute profit."""

    name: Optional[str] = None
    category: Optional[str] = None
    purchase_price: float
    sale_price: float


class LineItem(SkuModel):
    # Negative quantities are returns; they are computed like any other line.
    quantity: int
    # Missing sale_price means "sold at the catalogue price".
    sale_price: Optional[float] = None
    discount: float = 0


class PurchaseRecord(BaseModel):
    """One receipt: who sold it, how much it came to, and what was on it."""

    seller_id: SellerId
    total_amount: float
    items: list[LineItem] = Field(default_factory=list)

    # Carried through untouched; the report never reads them.
    receipt_id: Optional[Any] = None
    customer_id: Optional[Any] = None
    date: Optional[Any] = None
    total_discount: Optional[Any] = None


class TopProduct(SkuModel):
    quantity: int


class ReportEntry(BaseModel):
    """
    Defines the data contract for a single seller row in the final report.
    Monetary fields are already rounded to 2 decimal places.
    """

    seller_id: SellerId
    name: str
    revenue: float
    profit: float
    sales_count: int = Field(default=0, ge=0)
    top_products: list[TopProduct] = Field(default_factory=list)
    bonus: float = 0.0
