"""Repository for the User aggregate."""

from cargo.domain import cargo
from cargo.user.user import User


@cargo.repository(part_of=User)
class UserRepository:
    def _first(self, **filters) -> User | None:
        results = self._dao.query.filter(**filters).all()
        if results and results.items:
            return results.first
        return None

    def find_by_email(self, email: str) -> User | None:
        return self._first(email=email)

    def find_by_subject(self, subject: str) -> User | None:
        return self._first(subject=subject)

    def find_by_ids(self, user_ids) -> list[User]:
        ids = list({str(user_id) for user_id in user_ids})
        if not ids:
            return []
        return self._dao.query.filter(id__in=ids).all().items
