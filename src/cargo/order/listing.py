"""Order listings for buyers and back-office administrators."""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from cargo.user.user import User
from cargo.order.order import Order


@dataclass(frozen=True)
class OrderPage:
    items: list
    total: int
    page: int
    size: int
    buyers: dict = field(default_factory=dict)  # buyer id -> User, admin listing only


def list_buyer_orders(buyer_id, page: int = 0, size: int = 20) -> OrderPage:
    result = current_domain.repository_for(Order).find_by_buyer(buyer_id, page=page, size=size)
    return OrderPage(items=list(result.items), total=result.total, page=page, size=size)


def list_all_orders(page: int = 0, size: int = 20) -> OrderPage:
    """Every order, newest first, with the buyers needed to show email and address."""
    result = current_domain.repository_for(Order).find_all(page=page, size=size)
    users = current_domain.repository_for(User).find_by_ids(order.buyer_id for order in result.items)
    buyers = {str(user.id): user for user in users}
    return OrderPage(items=list(result.items), total=result.total, page=page, size=size, buyers=buyers)
