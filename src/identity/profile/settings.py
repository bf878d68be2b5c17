"""Account settings: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.profile.profile import Profile

_SETTINGS_FIELDS = ("full_name", "phone", "address", "city", "state", "pincode", "avatar_url")


@identity.command(part_of="Profile")
class UpdateProfile:
    """Partial update; fields left out of the command keep their current value."""

    user_id: Identifier(required=True)
    full_name: String(max_length=255)
    phone: String(max_length=20)
    address: String(max_length=500)
    city: String(max_length=100)
    state: String(max_length=100)
    pincode: String(max_length=6)
    avatar_url: String(max_length=500)


@identity.command_handler(part_of=Profile)
class ManageSettingsHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)

        changes = {}
        for field_name in _SETTINGS_FIELDS:
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value

        profile.update_settings(**changes)
        repo.add(profile)
