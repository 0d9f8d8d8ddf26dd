"""
Project: Cafe POS
Date: October 2026

Description:
Order data access for the client: cached order list and order details,
status updates and order placement. The UI only sees a new status once
the server has confirmed it and the list has been refetched.
"""

import logging
from typing import Callable, List, Optional

from api_client import ApiClient
from cart import CartStore
from query_cache import IDLE, Mutation, MutationResult, QueryCache, QueryResult
from schemas import Order

log = logging.getLogger(__name__)

ORDERS_KEY = ("/api/orders",)


def order_key(order_id: int):
    return ORDERS_KEY + (order_id,)


class OrderService:
    def __init__(self, api: ApiClient, cache: QueryCache) -> None:
        self.api = api
        self.cache = cache
        self._update_status = Mutation(self._put_status, invalidates=[ORDERS_KEY])
        self._place = Mutation(self._post_order, invalidates=[ORDERS_KEY])

    # ---------- reads ----------
    def _fetch_orders(self) -> List[Order]:
        return [Order.model_validate(o) for o in self.api.get("/api/orders")]

    def _fetch_order(self, order_id: int) -> Order:
        return Order.model_validate(self.api.get(f"/api/orders/{order_id}"))

    def list_orders(self) -> QueryResult:
        return self.cache.query(ORDERS_KEY, self._fetch_orders)

    def get_order(self, order_id: Optional[int]) -> QueryResult:
        """Order with its items; stays idle until `order_id` is a positive id."""
        enabled = isinstance(order_id, int) and not isinstance(order_id, bool) and order_id > 0
        if not enabled:
            return QueryResult(IDLE)
        return self.cache.query(order_key(order_id), lambda: self._fetch_order(order_id))

    def observe_orders(self, callback: Callable[[QueryResult], None]) -> Callable[[], None]:
        return self.cache.subscribe(ORDERS_KEY, self._fetch_orders, callback)

    # ---------- writes ----------
    def _put_status(self, order_id: int, status: str, cancel_reason: Optional[str] = None) -> Order:
        body = {"status": status}
        if cancel_reason is not None:
            body["cancel_reason"] = cancel_reason
        return Order.model_validate(self.api.put(f"/api/orders/{order_id}/status", json=body))

    def _post_order(self, payload: dict) -> Order:
        return Order.model_validate(self.api.post("/api/orders", json=payload))

    def update_order_status(self, order_id: int, status: str, cancel_reason: Optional[str] = None) -> MutationResult:
        result = self._update_status.run(self.cache, order_id, status, cancel_reason)
        if result.ok:
            log.info("Order %s is now %s", order_id, status)
        return result

    def place_order(self, cart: CartStore, payment_method: str = "cash", discount: int = 0) -> MutationResult:
        """Submits the cart; the cart is cleared only once the server accepted the order."""
        if cart.is_empty():
            return MutationResult(error=ValueError("Cart is empty"))
        payload = {"items": cart.to_order_payload(), "payment_method": payment_method, "discount": discount}
        result = self._place.run(self.cache, payload)
        if result.ok:
            cart.clear_cart()
            log.info("Placed order %s", result.data.order_code)
        return result
