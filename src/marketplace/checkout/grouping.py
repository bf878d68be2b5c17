"""Split cart lines into per-seller groups."""

from marketplace.cart.lines import CartLine
from marketplace.order.order import money


def group_by_seller(lines: list[CartLine]) -> dict[str, list[CartLine]]:
    """Group lines by their snapshot's seller.

    Sellers appear in the order their first line appears, and lines keep their
    relative order inside a group. Lines for the same product are not merged.
    """
    groups: dict[str, list[CartLine]] = {}
    for line in lines:
        groups.setdefault(line.seller_id, []).append(line)
    return groups


def group_total(lines: list[CartLine]) -> float:
    """Rounded per line, then in total, the same way an order prices its items."""
    return money(sum(money(line.product.price * line.quantity) for line in lines))
