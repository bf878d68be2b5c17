"""Profile registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.profile.profile import Profile
from shared.session import Role


@identity.command(part_of="Profile")
class RegisterProfile:
    """Create the marketplace profile for a freshly authenticated user."""

    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    full_name: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.BUYER.value)
    phone: String(max_length=20)


@identity.command_handler(part_of=Profile)
class RegisterProfileHandler:
    @handle(RegisterProfile)
    def register_profile(self, command):
        repo = current_domain.repository_for(Profile)

        # Emails are unique across profiles
        email = command.email.strip().lower()
        if repo._dao.query.filter(email=email).all().items:
            raise ValidationError({"email": ["An account with this email already exists"]})

        profile = Profile.register(
            user_id=command.user_id,
            email=email,
            full_name=command.full_name,
            role=command.role,
            phone=command.phone,
        )
        repo.add(profile)

        logger.info("profile_registered", user_id=str(profile.user_id), role=profile.role)
        return str(profile.user_id)
