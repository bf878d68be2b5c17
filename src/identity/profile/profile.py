"""Profile aggregate: the marketplace's view of an authenticated user.

A profile is keyed by the user id issued by the authentication gateway. Its
role decides what the user may do anywhere in the marketplace: buyers keep
carts and place orders, sellers list products and fulfil orders, admins
approve sellers.
"""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, ValueObject

from identity.domain import identity
from shared.session import Role

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{7,20}$")
_PINCODE_PATTERN = re.compile(r"^\d{6}$")


@identity.value_object(part_of="Profile")
class BusinessDetails:
    """What a seller tells buyers and regulators about their business.

    GST and FSSAI numbers are stored as given; verifying them is part of the
    manual approval an admin performs.
    """

    business_name: String(required=True, max_length=255)
    business_description: String(max_length=2000)
    business_address: String(max_length=500)
    gst_number: String(max_length=15)
    fssai_license: String(max_length=14)


@identity.aggregate(limit=None)
class Profile:
    user_id: Identifier(identifier=True, required=True)
    email: String(required=True, max_length=254)
    full_name: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.BUYER.value)
    avatar_url: String(max_length=500)
    phone: String(max_length=20)
    address: String(max_length=500)
    city: String(max_length=100)
    state: String(max_length=100)
    pincode: String(max_length=6)
    business: ValueObject(BusinessDetails)
    seller_approved: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def only_sellers_carry_business_details(self):
        if self.business is not None and self.role != Role.SELLER.value:
            raise ValidationError({"business": ["Only seller accounts can register business details"]})

    @classmethod
    def register(cls, user_id, email, full_name, role=Role.BUYER.value, phone=None):
        from identity.profile.events import ProfileRegistered

        _validate_email(email)
        if phone:
            _validate_phone(phone)

        now = datetime.now(UTC)
        profile = cls(
            user_id=user_id,
            email=email.strip().lower(),
            full_name=full_name,
            role=role,
            phone=phone,
            seller_approved=False,
            created_at=now,
            updated_at=now,
        )
        profile.raise_(
            ProfileRegistered(
                user_id=str(profile.user_id),
                email=profile.email,
                full_name=full_name,
                role=profile.role,
                registered_at=now,
            )
        )
        return profile

    def update_settings(
        self,
        full_name=_UNSET,
        phone=_UNSET,
        address=_UNSET,
        city=_UNSET,
        state=_UNSET,
        pincode=_UNSET,
        avatar_url=_UNSET,
    ):
        """Apply a partial account-settings update; omitted fields are kept."""
        from identity.profile.events import ProfileUpdated

        if phone is not _UNSET and phone:
            _validate_phone(phone)
        if pincode is not _UNSET and pincode and not _PINCODE_PATTERN.match(pincode):
            raise ValidationError({"pincode": ["Pincode must be 6 digits"]})

        changes = {
            "full_name": full_name,
            "phone": phone,
            "address": address,
            "city": city,
            "state": state,
            "pincode": pincode,
            "avatar_url": avatar_url,
        }
        for field_name, value in changes.items():
            if value is not _UNSET:
                setattr(self, field_name, value)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProfileUpdated(
                user_id=str(self.user_id),
                full_name=self.full_name,
                phone=self.phone,
                city=self.city,
                state=self.state,
                updated_at=self.updated_at,
            )
        )

    def register_business(self, business_name, business_description=None, business_address=None,
                          gst_number=None, fssai_license=None):
        from identity.profile.events import BusinessRegistered

        if self.role != Role.SELLER.value:
            raise ValidationError({"role": ["Only seller accounts can register a business"]})

        self.business = BusinessDetails(
            business_name=business_name,
            business_description=business_description,
            business_address=business_address,
            gst_number=gst_number,
            fssai_license=fssai_license,
        )
        # Changed details go back through approval
        self.seller_approved = False
        self.updated_at = datetime.now(UTC)

        self.raise_(
            BusinessRegistered(
                user_id=str(self.user_id),
                business_name=business_name,
                gst_number=gst_number,
                fssai_license=fssai_license,
            )
        )

    def approve_seller(self, approved_by):
        from identity.profile.events import SellerApproved

        if self.role != Role.SELLER.value:
            raise ValidationError({"role": ["Only seller accounts can be approved"]})
        if self.business is None:
            raise ValidationError({"business": ["Seller has not registered business details"]})
        if self.seller_approved:
            raise ValidationError({"seller_approved": ["Seller is already approved"]})

        self.seller_approved = True
        self.updated_at = datetime.now(UTC)
        self.raise_(
            SellerApproved(
                user_id=str(self.user_id),
                approved_by=str(approved_by),
                approved_at=self.updated_at,
            )
        )


def _validate_email(email):
    if not email or not _EMAIL_PATTERN.match(email.strip()):
        raise ValidationError({"email": [f"Invalid email address: {email!r}"]})


def _validate_phone(phone):
    if not _PHONE_PATTERN.match(phone) or not re.search(r"\d", phone):
        raise ValidationError({"phone": [f"Invalid phone number: {phone!r}"]})
