"""User aggregate root with the UserAddress value object.

A User mirrors an account held by the external identity provider. The
provider owns names, email and picture; CarGo owns the public id, the
authorities granted through the access token and the shipping address
collected at checkout.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, List, String, ValueObject

from cargo.domain import cargo
from cargo.user.events import UserAddressUpdated, UserProfileRefreshed, UserRegistered

ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"


@cargo.value_object(part_of="User")
class UserAddress:
    """Shipping address, as last collected by the payment provider."""

    street: String(required=True, max_length=255)
    city: String(required=True, max_length=255)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)

    def formatted(self) -> str:
        return ", ".join([self.street, self.city, self.zip_code, self.country])


@cargo.aggregate
class User:
    subject: String(required=True, max_length=255, unique=True)
    email: String(required=True, max_length=255, unique=True)
    first_name: String(max_length=255)
    last_name: String(max_length=255)
    image_url: String(max_length=1000)
    authorities: List(content_type=String)
    address: ValueObject(UserAddress)
    last_seen: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_have_a_single_at_sign(self):
        email = self.email or ""
        local_part, _, domain_part = email.partition("@")
        if not local_part or not domain_part or "@" in domain_part or " " in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @classmethod
    def register(cls, subject, email, first_name, last_name, image_url=None, authorities=None, last_seen=None):
        now = datetime.now(UTC)
        user = cls(
            subject=subject,
            email=email,
            first_name=first_name,
            last_name=last_name,
            image_url=image_url,
            authorities=sorted(set(authorities or [])),
            last_seen=last_seen,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                subject=subject,
                email=email,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in (self.authorities or [])

    def refresh_profile(self, email, first_name, last_name, image_url=None, authorities=None, last_seen=None):
        """Take over the identity provider's view of the profile."""
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.image_url = image_url
        if authorities is not None:
            self.authorities = sorted(set(authorities))
        if last_seen is not None:
            self.last_seen = last_seen
        self.updated_at = datetime.now(UTC)
        self.raise_(
            UserProfileRefreshed(
                user_id=str(self.id),
                email=email,
                first_name=first_name,
                last_name=last_name,
                refreshed_at=self.updated_at,
            )
        )

    def update_address(self, street, city, zip_code, country):
        self.address = UserAddress(street=street, city=city, zip_code=zip_code, country=country)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            UserAddressUpdated(
                user_id=str(self.id),
                street=street,
                city=city,
                zip_code=zip_code,
                country=country,
                updated_at=self.updated_at,
            )
        )
