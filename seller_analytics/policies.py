"""
Revenue and bonus policies plugged into `analysis.analyze`.

A policy is any callable matching one of the two protocols below. The
module-level functions are the house defaults; `TieredBonusPolicy` is the
same bonus tiering with rates taken from settings.
"""

from typing import TYPE_CHECKING, Protocol

from . import settings
from .schemas import LineItem, Product

if TYPE_CHECKING:
    from .analysis import SellerAggregate


class RevenuePolicy(Protocol):
    def __call__(self, item: LineItem, product: Product) -> float: ...


class BonusPolicy(Protocol):
    def __call__(self, rank: int, total: int, seller: "SellerAggregate") -> float: ...


def calculate_simple_revenue(item: LineItem, product: Product) -> float:
    """Line revenue after the percentage discount: sale_price * quantity * (1 - discount / 100)."""
    sale_price = item.sale_price if item.sale_price is not None else product.sale_price
    return sale_price * item.quantity * (1 - item.discount / 100)


def calculate_bonus_by_profit(rank: int, total: int, seller: "SellerAggregate") -> float:
    """
    Bonus by position in the profit ranking (0 = most profitable):
    rank 0 -> 15%, ranks 1-2 -> 10%, last place -> 0%, everyone else -> 5%.
    The first-place check wins over the last-place one, so a lone seller gets 15%.
    """
    if rank == 0:
        return seller.profit * 0.15
    elif rank in (1, 2):
        return seller.profit * 0.10
    elif rank == total - 1:
        return 0.0
    return seller.profit * 0.05


class TieredBonusPolicy:
    """`calculate_bonus_by_profit` with configurable rates (defaults from settings)."""

    def __init__(
        self,
        max_rate: float | None = None,
        high_rate: float | None = None,
        low_rate: float | None = None,
        min_rate: float | None = None,
    ):
        self.max_rate = settings.BONUS_MAX_RATE if max_rate is None else max_rate
        self.high_rate = settings.BONUS_HIGH_RATE if high_rate is None else high_rate
        self.low_rate = settings.BONUS_LOW_RATE if low_rate is None else low_rate
        self.min_rate = settings.BONUS_MIN_RATE if min_rate is None else min_rate

    def rate_for(self, rank: int, total: int) -> float:
        if rank == 0:
            return self.max_rate
        elif rank in (1, 2):
            return self.high_rate
        elif rank == total - 1:
            return self.min_rate
        return self.low_rate

    def __call__(self, rank: int, total: int, seller: "SellerAggregate") -> float:
        return seller.profit * self.rate_for(rank, total)


DEFAULT_OPTIONS = {
    "calculate_revenue": calculate_simple_revenue,
    "calculate_bonus": calculate_bonus_by_profit,
}
