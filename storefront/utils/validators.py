"""
Field validators shared by request schemas and routes.

Each ``check_*`` function returns the normalised value or raises
``ValueError`` with the message that is sent back to the client.
"""
import re
from typing import Any, Optional

from bson import ObjectId

# Local and domain parts: 1-64 of [A-Za-z0-9.], no leading, trailing or doubled dots
EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.@)(?!.*\.{2})[a-zA-Z0-9.]{1,64}@(?!\.)(?!.*\.$)(?!.*\.{2})[a-zA-Z0-9.]{1,64}$"
)
PHONE_PATTERN = re.compile(r"^[689]\d{7}$")
PRICE_PATTERN = re.compile(r"^\d*\.?\d+$")
QUANTITY_PATTERN = re.compile(r"^-?\d+$")

MIN_PASSWORD_LENGTH = 6
MAX_USER_NAME_LENGTH = 150
MAX_ADDRESS_LENGTH = 150
MAX_ANSWER_LENGTH = 100
MAX_CATEGORY_NAME_LENGTH = 100
MAX_PRODUCT_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_KEYWORD_LENGTH = 100


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_short_password(password: str) -> bool:
    """Length rule, applied to the password as it will be hashed (trimmed)."""
    return len(password.strip()) < MIN_PASSWORD_LENGTH


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.match(phone))


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, (str, ObjectId)) and ObjectId.is_valid(value)


def check_price(price: str) -> float:
    """Parse a positive decimal string and round it to cents."""
    price = str(price).strip()
    rounded = round(float(price), 2) if PRICE_PATTERN.match(price) else 0
    if rounded <= 0:
        raise ValueError("Price must be a positive number when parsed")
    return rounded


def check_quantity(quantity: str) -> int:
    quantity = str(quantity).strip()
    if not QUANTITY_PATTERN.match(quantity) or int(quantity) <= 0:
        raise ValueError("Quantity must be a stringed positive integer")
    return int(quantity)


def check_shipping(shipping: str) -> bool:
    shipping = str(shipping).strip()
    if shipping not in ("0", "1"):
        raise ValueError("Shipping must either take on values 0 or 1")
    return shipping == "1"


def slugify(text: str) -> str:
    """Build a URL slug: lowercase, punctuation dropped, separators collapsed to '-'."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def exact_match_pattern(value: str) -> str:
    """Anchored, escaped regex for case-insensitive equality lookups."""
    return f"^{re.escape(value)}$"
