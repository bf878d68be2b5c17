"""Domain events for the Profile aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="Profile")
class ProfileRegistered:
    """A user completed sign-up and now has a marketplace profile."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    full_name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="Profile")
class ProfileUpdated:
    """A user changed their account settings."""

    __version__ = 1

    user_id: Identifier(required=True)
    full_name: String(required=True)
    phone: String()
    city: String()
    state: String()
    updated_at: DateTime(required=True)


@identity.event(part_of="Profile")
class BusinessRegistered:
    """A seller submitted (or resubmitted) their business details for approval."""

    __version__ = 1

    user_id: Identifier(required=True)
    business_name: String(required=True)
    gst_number: String()
    fssai_license: String()


@identity.event(part_of="Profile")
class SellerApproved:
    """An admin approved a seller to trade on the marketplace."""

    __version__ = 1

    user_id: Identifier(required=True)
    approved_by: Identifier(required=True)
    approved_at: DateTime(required=True)
