"""Per-user state for Locust scenarios.

Each simulated user keeps the ids returned by earlier requests so later
requests in its journey can refer to them. Nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class SellerState:
    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class ShopperState:
    user_id: str | None = None
    browsed: list[dict] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
    chat_id: str | None = None

    def pick_products(self, count: int) -> list[dict]:
        return self.browsed[:count]
