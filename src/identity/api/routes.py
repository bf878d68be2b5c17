"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends, Header, HTTPException
from protean.utils.globals import current_domain

from identity.api.schemas import (
    BusinessResponse,
    ProfileResponse,
    RegisterBusinessRequest,
    RegisterProfileRequest,
    StatusResponse,
    UpdateProfileRequest,
    UserIdResponse,
)
from identity.profile.business import ApproveSeller, RegisterBusiness
from identity.profile.profile import Profile
from identity.profile.registration import RegisterProfile
from identity.profile.settings import UpdateProfile
from identity.sessions import resolve_session
from shared.session import Session

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _profile_response(profile: Profile) -> ProfileResponse:
    business = None
    if profile.business is not None:
        business = BusinessResponse(
            business_name=profile.business.business_name,
            business_description=profile.business.business_description,
            business_address=profile.business.business_address,
            gst_number=profile.business.gst_number,
            fssai_license=profile.business.fssai_license,
        )
    return ProfileResponse(
        user_id=str(profile.user_id),
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role,
        avatar_url=profile.avatar_url,
        phone=profile.phone,
        address=profile.address,
        city=profile.city,
        state=profile.state,
        pincode=profile.pincode,
        business=business,
        seller_approved=bool(profile.seller_approved),
    )


@router.post("", status_code=201, response_model=UserIdResponse)
async def register_profile(
    body: RegisterProfileRequest,
    x_user_id: str | None = Header(default=None),
) -> UserIdResponse:
    # No profile exists yet, so only the gateway-verified id is available
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    command = RegisterProfile(
        user_id=x_user_id,
        email=body.email,
        full_name=body.full_name,
        role=body.role,
        phone=body.phone,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(session: Session = Depends(resolve_session)) -> ProfileResponse:
    profile = current_domain.repository_for(Profile).get(session.user_id)
    return _profile_response(profile)


@router.put("/me", response_model=StatusResponse)
async def update_my_profile(
    body: UpdateProfileRequest,
    session: Session = Depends(resolve_session),
) -> StatusResponse:
    command = UpdateProfile(user_id=session.user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/me/business", response_model=StatusResponse)
async def register_business(
    body: RegisterBusinessRequest,
    session: Session = Depends(resolve_session),
) -> StatusResponse:
    command = RegisterBusiness(user_id=session.user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/{seller_id}/approve", response_model=StatusResponse)
async def approve_seller(seller_id: str, session: Session = Depends(resolve_session)) -> StatusResponse:
    command = ApproveSeller(seller_id=seller_id, approved_by=session.user_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
