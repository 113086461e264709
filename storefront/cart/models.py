"""Cart line model with Decimal-based pricing."""
from dataclasses import dataclass, replace
from decimal import Decimal

from storefront.money import to_decimal, round_money


@dataclass
class LineItem:
    """Single variant in the local cart."""
    variant_id: str
    title: str
    unit_price: Decimal
    quantity: int = 1

    def __post_init__(self):
        # Prices arrive as strings from the API ("19.99")
        self.unit_price = to_decimal(self.unit_price)

    @property
    def total_price(self) -> Decimal:
        """Price for all units."""
        return self.unit_price * self.quantity

    def copy(self) -> "LineItem":
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "variant_id": self.variant_id,
            "title": self.title,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "total_price": str(round_money(self.total_price)),
        }
