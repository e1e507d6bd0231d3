"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from cargo.domain import cargo


@cargo.event(part_of="User")
class UserRegistered:
    """A user signed in for the first time and was created from the identity provider."""

    __version__ = 1

    user_id: Identifier(required=True)
    subject: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)


@cargo.event(part_of="User")
class UserProfileRefreshed:
    """Name, email or picture were refreshed from the identity provider."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String()
    last_name: String()
    refreshed_at: DateTime(required=True)


@cargo.event(part_of="User")
class UserAddressUpdated:
    """The shipping address collected at checkout replaced the stored one."""

    __version__ = 1

    user_id: Identifier(required=True)
    street: String(required=True)
    city: String(required=True)
    zip_code: String(required=True)
    country: String(required=True)
    updated_at: DateTime(required=True)
