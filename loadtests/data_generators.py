"""Faker-based payloads for the EcoPure load test scenarios.

Payloads pass the domain's validation (email and phone formats, 6-digit
pincodes, supported bottle sizes) and use the field names of the API's
Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

BOTTLE_SIZES_ML = (500, 750)


def unique_user_id(role: str) -> str:
    """Stand-in for the id the authentication gateway would issue."""
    return f"lt-{role}-{uuid.uuid4().hex[:10]}"


def auth_headers(user_id: str) -> dict:
    return {"X-User-Id": user_id}


def valid_email() -> str:
    return f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def valid_phone() -> str:
    return f"+91 {random.randint(70000, 99999)} {random.randint(10000, 99999)}"


def profile_data(role: str = "buyer") -> dict:
    return {
        "email": valid_email(),
        "full_name": fake.name()[:255],
        "role": role,
        "phone": valid_phone(),
    }


def business_data() -> dict:
    return {
        "business_name": f"{fake.company()[:200]} Waters",
        "business_description": fake.catch_phrase(),
        "business_address": fake.address().replace("\n", ", ")[:500],
        "gst_number": f"{random.randint(10, 37)}{fake.bothify('?????####?#Z#').upper()}",
    }


def product_data() -> dict:
    price = round(random.uniform(40, 400), 2)
    return {
        "name": f"{fake.word().title()} {random.choice(['Spring', 'Mineral', 'Alkaline'])} Water",
        "description": fake.sentence(nb_words=12),
        "size_ml": random.choice(BOTTLE_SIZES_ML),
        "price": price,
        "wholesale_price": round(price * 0.8, 2),
        "stock_quantity": random.randint(500, 5000),
        "certifications": {"bis": "IS 14543"},
        "batch_info": f"B-{fake.date_this_year().isoformat()}",
    }


def shipping_data() -> dict:
    return {
        "full_name": fake.name()[:255],
        "phone": valid_phone(),
        "address": fake.street_address()[:500],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "pincode": f"{random.randint(110000, 855999)}",
    }


def checkout_data() -> dict:
    return {
        "shipping": shipping_data(),
        "payment_method": random.choice(["cod", "online"]),
        "notes": random.choice([None, "Leave with the security desk", "Call before delivery"]),
    }


def message_text() -> str:
    return fake.sentence(nb_words=random.randint(4, 20))
