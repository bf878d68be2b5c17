"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "meera@example.com",
                    "full_name": "Meera Iyer",
                    "role": "buyer",
                    "phone": "+91 98450 12345",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    full_name: str = Field(..., max_length=255)
    role: str = Field("buyer", pattern="^(buyer|seller)$")
    phone: str | None = Field(None, max_length=20)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Meera Iyer",
                    "address": "12 Lake View Road",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "pincode": "560001",
                }
            ]
        }
    }

    full_name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=6)
    avatar_url: str | None = Field(None, max_length=500)


class RegisterBusinessRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "business_name": "Himalayan Springs",
                    "business_description": "Glacier-fed mineral water",
                    "business_address": "Plot 4, Industrial Area, Dehradun",
                    "gst_number": "05ABCDE1234F1Z5",
                    "fssai_license": "10019022000123",
                }
            ]
        }
    }

    business_name: str = Field(..., max_length=255)
    business_description: str | None = Field(None, max_length=2000)
    business_address: str | None = Field(None, max_length=500)
    gst_number: str | None = Field(None, max_length=15)
    fssai_license: str | None = Field(None, max_length=14)


# --- Response Schemas ---


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"


class UserIdResponse(BaseModel):
    user_id: str


class BusinessResponse(BaseModel):
    business_name: str
    business_description: str | None = None
    business_address: str | None = None
    gst_number: str | None = None
    fssai_license: str | None = None


class ProfileResponse(BaseModel):
    user_id: str
    email: str
    full_name: str
    role: str
    avatar_url: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    business: BusinessResponse | None = None
    seller_approved: bool = False
