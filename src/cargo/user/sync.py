"""User synchronization with the identity provider.

The access token tells us who is calling; the identity provider tells us
what their profile looks like. A sync creates the local User on first sight
and refreshes it whenever the provider reports a sign-in newer than our last
update, or when the caller forces it.
"""

import json
from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain

from cargo.domain import cargo
from cargo.provider import get_identity_provider
from cargo.user.user import User

logger = structlog.get_logger(__name__)


@cargo.command(part_of="User")
class SyncUser:
    subject: String(required=True, max_length=255)
    roles: Text()  # JSON: list of role names carried by the access token
    last_signed_in: Integer()  # epoch seconds, from the token claims
    force_resync: Boolean(default=False)


def _parse_timestamp(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, UTC)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _as_aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@cargo.command_handler(part_of=User)
class SyncUserHandler:
    @handle(SyncUser)
    def sync_user(self, command):
        info = get_identity_provider().get_user_info(command.subject)
        email = info.get("preferred_email") or info.get("email")
        if not email:
            raise ValidationError({"email": ["Identity provider returned no email"]})

        roles = json.loads(command.roles) if command.roles else []
        signed_in_at = _parse_timestamp(command.last_signed_in) or _parse_timestamp(info.get("last_signed_in"))

        repo = current_domain.repository_for(User)
        user = repo.find_by_subject(command.subject) or repo.find_by_email(email)

        if user is None:
            user = User.register(
                subject=command.subject,
                email=email,
                first_name=info.get("first_name"),
                last_name=info.get("last_name"),
                image_url=info.get("picture"),
                authorities=roles,
                last_seen=signed_in_at,
            )
            repo.add(user)
            logger.info("User registered from identity provider", user_id=str(user.id), subject=command.subject)
            return str(user.id)

        stale = signed_in_at is not None and signed_in_at > _as_aware(user.updated_at)
        if command.force_resync or stale:
            user.refresh_profile(
                email=email,
                first_name=info.get("first_name") or user.first_name,
                last_name=info.get("last_name") or user.last_name,
                image_url=info.get("picture"),
                authorities=roles,
                last_seen=signed_in_at,
            )
            repo.add(user)
            logger.info(
                "User refreshed from identity provider",
                user_id=str(user.id),
                forced=bool(command.force_resync),
            )
        return str(user.id)
