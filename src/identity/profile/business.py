"""Seller onboarding: business registration and admin approval."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.profile.profile import Profile
from shared.session import NotAuthorized, Role


@identity.command(part_of="Profile")
class RegisterBusiness:
    user_id: Identifier(required=True)
    business_name: String(required=True, max_length=255)
    business_description: String(max_length=2000)
    business_address: String(max_length=500)
    gst_number: String(max_length=15)
    fssai_license: String(max_length=14)


@identity.command(part_of="Profile")
class ApproveSeller:
    seller_id: Identifier(required=True)
    approved_by: Identifier(required=True)


@identity.command_handler(part_of=Profile)
class SellerOnboardingHandler:
    @handle(RegisterBusiness)
    def register_business(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)
        profile.register_business(
            business_name=command.business_name,
            business_description=command.business_description,
            business_address=command.business_address,
            gst_number=command.gst_number,
            fssai_license=command.fssai_license,
        )
        repo.add(profile)

    @handle(ApproveSeller)
    def approve_seller(self, command):
        repo = current_domain.repository_for(Profile)

        approver = repo.get(command.approved_by)
        if approver.role != Role.ADMIN.value:
            raise NotAuthorized("Only admin accounts can approve sellers")

        seller = repo.get(command.seller_id)
        seller.approve_seller(approved_by=command.approved_by)
        repo.add(seller)

        logger.info("seller_approved", seller_id=str(seller.user_id), approved_by=str(command.approved_by))
