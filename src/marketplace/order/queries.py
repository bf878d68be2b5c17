"""Order lookups scoped to the calling user."""

from protean.utils.globals import current_domain

from marketplace.order.order import Order
from shared.session import NotAuthorized, Session


def orders_for(session: Session) -> list[Order]:
    """Sellers see orders placed with them; everyone else sees what they bought."""
    repo = current_domain.repository_for(Order)
    if session.is_seller:
        return repo.for_seller(session.user_id)
    return repo.for_buyer(session.user_id)


def get_order(order_id, session: Session) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    if session.user_id not in (str(order.buyer_id), str(order.seller_id)) and not session.is_admin:
        raise NotAuthorized("You can only view your own orders")
    return order
