"""
Per-seller sales performance report.

`analyze` turns the four raw collections (customers, products, sellers,
purchase_records) into one `ReportEntry` per seller, ranked by profit.
It runs in five passes:

    validate -> index -> accumulate -> rank (bonus + top products) -> project

Revenue per line item and the bonus are caller-supplied policies (see
`policies.py`). Nothing here touches disk or the network.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from . import settings
from .exceptions import DanglingReferenceError, InvalidInputError, MissingPolicyError
from .policies import BonusPolicy, RevenuePolicy
from .schemas import (
    Product,
    PurchaseRecord,
    ReportEntry,
    Seller,
    SellerId,
    TopProduct,
    seller_key,
)

logger = logging.getLogger(__name__)


@dataclass
class SellerAggregate:
    """Running totals for one seller while the report is being built."""

    id: SellerId
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: dict[str, int] = field(default_factory=dict)
    top_products: list[tuple[str, int]] = field(default_factory=list)
    bonus: float = 0.0


# --- 1. Validation ---


def validate_data(data: Any) -> None:
    """Raise InvalidInputError unless every required collection is a non-empty list."""
    if data is None or not isinstance(data, Mapping):
        raise InvalidInputError("Input data is missing or is not a mapping")

    for name in settings.REQUIRED_COLLECTIONS:
        collection = data.get(name)
        if not isinstance(collection, (list, tuple)):
            raise InvalidInputError(
                f"'{name}' must be a list", details={"collection": name}
            )
        if len(collection) == 0:
            raise InvalidInputError(
                f"'{name}' must not be empty", details={"collection": name}
            )


def resolve_policies(options: Any) -> tuple[RevenuePolicy, BonusPolicy]:
    """Return (calculate_revenue, calculate_bonus) or raise MissingPolicyError."""
    if options is None or not isinstance(options, Mapping):
        raise MissingPolicyError("options")

    calculate_revenue = options.get("calculate_revenue")
    calculate_bonus = options.get("calculate_bonus")
    if not callable(calculate_revenue):
        raise MissingPolicyError("calculate_revenue")
    if not callable(calculate_bonus):
        raise MissingPolicyError("calculate_bonus")
    return calculate_revenue, calculate_bonus


def _coerce(model: type[BaseModel], records, collection: str) -> list:
    """Build schema instances from raw dicts (already-built instances pass through)."""
    try:
        return [model.model_validate(record) for record in records]
    except ValidationError as e:
        raise InvalidInputError(
            f"'{collection}' contains an invalid record", details=e.errors()
        ) from e


# --- 2. Indexing ---


def build_seller_index(sellers: list[Seller]) -> dict[str, SellerAggregate]:
    """Keyed by seller_key(id); the aggregate keeps the id as given."""
    return {
        seller_key(seller.id): SellerAggregate(
            id=seller.id, name=f"{seller.first_name} {seller.last_name}"
        )
        for seller in sellers
    }


def build_product_index(products: list[Product]) -> dict[str, Product]:
    return {product.sku: product for product in products}


# --- 3. Accumulation ---


def accumulate(
    records: list[PurchaseRecord],
    seller_index: dict[str, SellerAggregate],
    product_index: dict[str, Product],
    calculate_revenue: RevenuePolicy,
) -> None:
    """Fold every receipt and line item into the seller aggregates, in place."""
    for record in records:
        seller = seller_index.get(seller_key(record.seller_id))
        if seller is None:
            raise DanglingReferenceError("seller", record.seller_id)

        seller.sales_count += 1
        seller.revenue += record.total_amount

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                raise DanglingReferenceError("sku", item.sku)

            cost = product.purchase_price * item.quantity
            revenue = calculate_revenue(item, product)
            seller.profit += revenue - cost

            seller.products_sold[item.sku] = (
                seller.products_sold.get(item.sku, 0) + item.quantity
            )


# --- 4. Ranking ---


def rank_sellers(
    aggregates: list[SellerAggregate], calculate_bonus: BonusPolicy
) -> list[SellerAggregate]:
    """
    Sort by profit (highest first) and assign bonuses by final position.
    sorted() is stable, so sellers with equal profit keep their input order.
    """
    ranked = sorted(aggregates, key=lambda s: s.profit, reverse=True)
    total = len(ranked)
    for index, seller in enumerate(ranked):
        seller.bonus = calculate_bonus(index, total, seller)
    return ranked


def top_products(
    products_sold: dict[str, int], limit: Optional[int] = None
) -> list[tuple[str, int]]:
    """Best sellers by quantity; ties keep the order the SKUs were first sold in."""
    if limit is None:
        limit = settings.TOP_PRODUCTS_LIMIT
    ranked = sorted(products_sold.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


# --- 5. Projection ---


def round_money(value: float) -> float:
    """Round to cents, halves away from zero on the float's exact value (0.125 -> 0.13, 2.675 -> 2.67)."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def to_report_entry(seller: SellerAggregate) -> ReportEntry:
    return ReportEntry(
        seller_id=seller.id,
        name=seller.name,
        revenue=round_money(seller.revenue),
        profit=round_money(seller.profit),
        sales_count=int(seller.sales_count),
        top_products=[
            TopProduct(sku=sku, quantity=quantity)
            for sku, quantity in seller.top_products
        ],
        bonus=round_money(seller.bonus),
    )


def analyze(data: Mapping[str, Any], options: Mapping[str, Any]) -> list[ReportEntry]:
    """
    Build the seller performance report.

    Args:
        data: mapping with 'customers', 'products', 'sellers' and
            'purchase_records' lists. Records may be dicts or schema instances.
        options: mapping with 'calculate_revenue' (RevenuePolicy) and
            'calculate_bonus' (BonusPolicy).

    Returns:
        One ReportEntry per seller, most profitable first.

    Raises:
        InvalidInputError, MissingPolicyError, DanglingReferenceError
    """
    validate_data(data)
    calculate_revenue, calculate_bonus = resolve_policies(options)

    sellers = _coerce(Seller, data["sellers"], "sellers")
    products = _coerce(Product, data["products"], "products")
    records = _coerce(PurchaseRecord, data["purchase_records"], "purchase_records")

    seller_index = build_seller_index(sellers)
    product_index = build_product_index(products)
    logger.debug(
        f"Indexed {len(seller_index)} sellers and {len(product_index)} products."
    )

    accumulate(records, seller_index, product_index, calculate_revenue)
    logger.debug(f"Accumulated {len(records)} purchase records.")

    ranked = rank_sellers(list(seller_index.values()), calculate_bonus)
    for seller in ranked:
        seller.top_products = top_products(seller.products_sold)

    return [to_report_entry(seller) for seller in ranked]
