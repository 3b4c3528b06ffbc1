"""
Product API schemas for request validation.
These models define the structure of data sent to the product endpoints.
"""
from typing import Any, ClassVar, Dict, Optional
from pydantic import BaseModel, Field, model_validator
from bson import ObjectId

from ..utils.validators import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PRODUCT_NAME_LENGTH,
    check_price,
    check_quantity,
    check_shipping,
    is_blank,
    is_valid_object_id,
)


class CreateProductForm(BaseModel):
    """
    Multipart form fields for creating a product.

    Every value arrives as a string; ``to_fields`` returns the parsed,
    typed values once the form has validated.
    """
    shipping_required: ClassVar[bool] = False

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[str] = None
    shipping: Optional[str] = None
    photo_size: int = Field(0, ge=0, description="Size of the uploaded photo in bytes")
    max_photo_size: int = Field(1_000_000, description="Largest accepted photo in bytes")

    @model_validator(mode="after")
    def validate_form(self):
        if is_blank(self.name):
            raise ValueError("Name is Required")
        if is_blank(self.description):
            raise ValueError("Description is Required")
        if is_blank(self.price):
            raise ValueError("Price is Required")
        if is_blank(self.category):
            raise ValueError("Category is Required")
        if is_blank(self.quantity):
            raise ValueError("Quantity is Required")
        if self.shipping_required and is_blank(self.shipping):
            raise ValueError("Shipping is Required")
        if self.photo_size > self.max_photo_size:
            raise ValueError("Photo should be less than 1mb")

        if len(self.name) > MAX_PRODUCT_NAME_LENGTH:
            raise ValueError("Name of product can only be up to 100 characters long")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValueError("Description of product can only be up to 500 characters long")
        if not is_valid_object_id(self.category):
            raise ValueError("Category id must conform to mongoose object id format")

        check_price(self.price)
        check_quantity(self.quantity)
        check_shipping(self.shipping if self.shipping is not None else "")
        return self

    def to_fields(self) -> Dict[str, Any]:
        """Typed product fields ready for the products collection."""
        return {
            "name": self.name.strip(),
            "description": self.description.strip(),
            "price": check_price(self.price),
            "category": ObjectId(self.category),
            "quantity": check_quantity(self.quantity),
            "shipping": check_shipping(self.shipping),
        }


class UpdateProductForm(CreateProductForm):
    """Multipart form fields for updating a product; shipping must be sent."""
    shipping_required: ClassVar[bool] = True


class ProductFiltersRequest(BaseModel):
    """
    Request schema for the home-page filters.

    ``checked`` holds category ids; ``radio`` is empty or a [min, max] price pair.
    """
    checked: Any = None
    radio: Any = None

    @model_validator(mode="after")
    def validate_filters(self):
        checked = self.checked
        if not isinstance(checked, list) or not all(is_valid_object_id(cid) for cid in checked):
            raise ValueError("'checked' must be an array with valid category ids")

        radio = self.radio
        if (
            not isinstance(radio, list)
            or len(radio) not in (0, 2)
            or not all(isinstance(n, (int, float)) and not isinstance(n, bool) for n in radio)
        ):
            raise ValueError("'radio' must an empty array or an array with two numbers")
        return self

    def to_query(self) -> Dict[str, Any]:
        """MongoDB filter for the selected categories and price range."""
        query: Dict[str, Any] = {}
        if self.checked:
            query["category"] = {"$in": [ObjectId(cid) for cid in self.checked]}
        if self.radio:
            query["price"] = {"$gte": self.radio[0], "$lte": self.radio[1]}
        return query
