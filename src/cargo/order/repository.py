"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from cargo.domain import cargo
from cargo.order.order import Order


@cargo.repository(part_of=Order)
class OrderRepository:
    def find_by_session_id(self, payment_session_id: str) -> Order:
        results = self._dao.query.filter(payment_session_id=payment_session_id).all()
        if not results or not results.items:
            raise ObjectNotFoundError(f"Order with payment session `{payment_session_id}` not found")
        return results.first

    def find_by_buyer(self, buyer_id, page: int = 0, size: int = 20):
        """Newest first. Returns the query's ResultSet (``items`` and ``total``)."""
        return (
            self._dao.query.filter(buyer_id=str(buyer_id))
            .order_by("-created_at")
            .offset(page * size)
            .limit(size)
            .all()
        )

    def find_all(self, page: int = 0, size: int = 20):
        return self._dao.query.order_by("-created_at").offset(page * size).limit(size).all()
