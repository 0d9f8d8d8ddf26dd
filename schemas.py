"""
Project: Cafe POS
Date: October 2026

Description:
Pydantic models for the data the client receives from the server:
catalog entries, orders with their line items, the theme and the
logged-in user.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

OptionType = Literal["type", "sugar_level", "milk_type", "topping", "extra"]


class Product(BaseModel):
    """A menu item. Prices are whole baht."""

    id: int
    name: str
    category: str
    price: int
    image: str = ""
    description: Optional[str] = None
    active: bool = True


class CustomizationOption(BaseModel):
    """A product modifier. `type` groups options for presentation; "type" is hot/iced."""

    id: int
    name: str
    type: OptionType
    price: int = 0
    is_default: bool = False


class OrderLine(BaseModel):
    id: int
    order_id: int
    product_id: Optional[int] = None
    name: str
    price: int
    quantity: int
    customizations: Dict[str, Any] = Field(default_factory=dict)
    subtotal: int = 0


class Order(BaseModel):
    id: int
    order_code: Optional[str] = None
    staff_id: Optional[int] = None
    status: str
    payment_method: str = "cash"
    discount: int = 0
    total: int = 0
    cancel_reason: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None
    items: List[OrderLine] = Field(default_factory=list)


class Theme(BaseModel):
    variant: str = "professional"
    primary: str = "hsl(30, 35%, 33%)"
    appearance: str = "light"
    radius: float = 0.5


class User(BaseModel):
    id: int
    username: str
    name: str = ""
    role: str = "staff"
    active: bool = True
