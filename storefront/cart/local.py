"""In-memory cart for the current shopping session."""
from decimal import Decimal
from typing import List, Optional, Union

from storefront.shopify.models import LineInput

from .models import LineItem


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class LocalCart:
    """
    Ordered list of line items, unique by variant id.

    Insertion order is display order. A line whose quantity drops to zero or
    below is removed rather than stored.

    Usage:
        cart = LocalCart()
        cart.add("gid://shopify/ProductVariant/1", "Tee", "25.00")
        cart.set_quantity("gid://shopify/ProductVariant/1", 3)
        cart.get_total()  # Decimal("75.00")
    """

    def __init__(self):
        self._items: List[LineItem] = []

    def _find(self, variant_id: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.variant_id == variant_id), None)

    def add(
        self,
        variant_id: str,
        title: str,
        price: Union[str, int, float, Decimal],
        quantity: int = 1,
    ) -> LineItem:
        """Append a line, or increment the quantity of an existing one."""
        if not variant_id or not isinstance(variant_id, str):
            raise ValueError("variant_id must be a non-empty string")
        if not _is_int(quantity) or quantity < 1:
            raise ValueError("quantity must be a positive integer")

        existing = self._find(variant_id)
        if existing:
            existing.quantity += quantity
            return existing.copy()

        item = LineItem(variant_id=variant_id, title=title, unit_price=price, quantity=quantity)
        self._items.append(item)
        return item.copy()

    def remove(self, variant_id: str) -> None:
        """Delete the line for ``variant_id``; no-op if absent."""
        self._items = [item for item in self._items if item.variant_id != variant_id]

    def set_quantity(self, variant_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or negative removes it. No-op if absent."""
        if not _is_int(quantity):
            raise ValueError("quantity must be an integer")
        existing = self._find(variant_id)
        if existing is None:
            return
        if quantity <= 0:
            self.remove(variant_id)
        else:
            existing.quantity = quantity

    def clear(self) -> None:
        self._items = []

    def get_all(self) -> List[LineItem]:
        """Independent copy of the lines; mutating it leaves the cart untouched."""
        return [item.copy() for item in self._items]

    def get_total(self) -> Decimal:
        """Exact sum of unit price times quantity. Round only for display."""
        return sum((item.total_price for item in self._items), Decimal("0"))

    @property
    def item_count(self) -> int:
        """Total units across all lines."""
        return sum(item.quantity for item in self._items)

    def to_line_inputs(self) -> List[LineInput]:
        return [LineInput(variant_id=item.variant_id, quantity=item.quantity) for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
