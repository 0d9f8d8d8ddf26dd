"""
Project: Cafe POS
Date: October 2026

Description:
Client-side cart: the order in progress, kept in memory and written to
local storage on every change so it survives a restart.
"""

import json
import logging
import uuid
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, computed_field

from local_storage import LocalStorage
from schemas import CustomizationOption, Product

log = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"


class SelectedOption(BaseModel):
    id: Optional[int] = None
    name: str
    price: int = 0

    @classmethod
    def from_option(cls, option: CustomizationOption) -> "SelectedOption":
        return cls(id=option.id, name=option.name, price=option.price)


class CartItemCustomizations(BaseModel):
    """
    Known modifiers as typed fields, store-specific option types in
    `extra_options` keyed by option type.
    """

    temperature: Optional[SelectedOption] = None
    sugar_level: Optional[SelectedOption] = None
    milk_type: Optional[SelectedOption] = None
    toppings: List[SelectedOption] = Field(default_factory=list)
    extras: List[SelectedOption] = Field(default_factory=list)
    special_instructions: Optional[str] = None
    extra_options: Dict[str, List[SelectedOption]] = Field(default_factory=dict)

    def selected(self) -> List[SelectedOption]:
        opts = [o for o in (self.temperature, self.sugar_level, self.milk_type) if o is not None]
        opts.extend(self.toppings)
        opts.extend(self.extras)
        for group in self.extra_options.values():
            opts.extend(group)
        return opts

    def price_delta(self) -> int:
        return sum(o.price for o in self.selected())


class CartItem(BaseModel):
    """
    One cart line. `id` is a client slot key: the same product can sit in
    the cart several times with different customizations.
    """

    id: str
    product_id: int
    name: str
    price: int
    quantity: int = Field(default=1, ge=1)
    customizations: CartItemCustomizations = Field(default_factory=CartItemCustomizations)

    model_config = {"validate_assignment": True}

    @computed_field
    @property
    def total_price(self) -> int:
        return self.unit_price() * self.quantity

    def unit_price(self) -> int:
        return self.price + self.customizations.price_delta()


def new_cart_item(product: Product, customizations: Optional[CartItemCustomizations] = None, quantity: int = 1) -> CartItem:
    return CartItem(
        id=uuid.uuid4().hex,
        product_id=product.id,
        name=product.name,
        price=product.price,
        quantity=quantity,
        customizations=customizations or CartItemCustomizations(),
    )


class CartStore:
    """Single source of truth for the cart on this client."""

    def __init__(self, storage: LocalStorage, key: str = CART_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._items: List[CartItem] = self._load()

    def _load(self) -> List[CartItem]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
            items = [CartItem.model_validate(d) for d in data]
        except (ValueError, TypeError, ValidationError) as e:
            log.error("Failed to parse cart from local storage: %s", e)
            return []
        # keep the first entry for any duplicated id
        seen = set()
        unique = []
        for item in items:
            if item.id not in seen:
                seen.add(item.id)
                unique.append(item)
        return unique

    def _persist(self) -> None:
        self.storage.set_item(self.key, json.dumps([i.model_dump(mode="json") for i in self._items], ensure_ascii=False))

    def _index_of(self, item_id: str) -> int:
        return next((n for n, i in enumerate(self._items) if i.id == item_id), -1)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    def add_to_cart(self, item: CartItem) -> None:
        """Appends `item`, or replaces the entry holding the same id in place."""
        idx = self._index_of(item.id)
        if idx >= 0:
            self._items[idx] = item
        else:
            self._items.append(item)
        self._persist()

    def update_cart_item(self, item_id: str, updated_item: Optional[CartItem] = None) -> bool:
        """
        Replaces the entry with `item_id` by `updated_item`, keeping its position.

        Unknown ids leave the cart untouched; so does calling without
        `updated_item` (opening the editor is the caller's business).
        Returns True when a replacement happened.
        """
        if updated_item is None:
            return False
        idx = self._index_of(item_id)
        if idx < 0:
            log.debug("update_cart_item: no cart entry with id %s", item_id)
            return False
        self._items[idx] = updated_item
        # the replacement may carry a different id; drop any other entry that already had it
        self._items = [i for n, i in enumerate(self._items) if n == idx or i.id != updated_item.id]
        self._persist()
        return True

    def remove_from_cart(self, item_id: str) -> None:
        self._items = [i for i in self._items if i.id != item_id]
        self._persist()

    def clear_cart(self) -> None:
        self._items = []
        self._persist()

    def total(self) -> int:
        return sum(i.total_price for i in self._items)

    def item_count(self) -> int:
        return sum(i.quantity for i in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def to_order_payload(self) -> List[dict]:
        return [
            {
                "product_id": i.product_id,
                "quantity": i.quantity,
                "customizations": i.customizations.model_dump(mode="json"),
            }
            for i in self._items
        ]
