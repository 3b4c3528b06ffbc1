"""
FastAPI dependencies for request authorization and common lookups
"""
from fastapi import HTTPException, Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from typing import Dict, Any, Optional
import jwt
import logging

from ..config.database import get_database
from ..models.user import ADMIN_ROLE
from .security import decode_access_token, get_token_from_header

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized Access"


def validate_object_id(object_id: str, detail: str, status_code: int = 400) -> ObjectId:
    """
    Validate and convert string to ObjectId

    Args:
        object_id: String representation of ObjectId
        detail: Message returned to the client when the id is malformed
        status_code: Status returned when the id is malformed

    Returns:
        Valid ObjectId instance

    Raises:
        HTTPException: If ObjectId format is invalid
    """
    if not object_id or not ObjectId.is_valid(object_id):
        raise HTTPException(status_code=status_code, detail=detail)
    return ObjectId(object_id)


async def require_sign_in(
    authorization: Optional[str] = Header(None),
) -> Dict[str, Any]:
    """
    Verify the request's token and return its decoded payload

    Raises:
        HTTPException: 401 if the header is missing or the token does not verify
    """
    token = get_token_from_header(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)

    try:
        return decode_access_token(token)
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected access token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")


async def require_admin(
    payload: Dict[str, Any] = Depends(require_sign_in),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    """
    Load the signed-in user and require the admin role

    Returns:
        The admin's user document

    Raises:
        HTTPException: 401 if the user is unknown or not an admin
    """
    user_id = payload.get("_id")
    if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)

    user = await db.users.find_one({"_id": ObjectId(user_id)})
    if not user or user.get("role") != ADMIN_ROLE:
        logger.warning(f"Admin access denied for user {user_id}")
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)

    return user


async def get_category_map(db: AsyncIOMotorDatabase, category_ids) -> Dict[ObjectId, Dict[str, Any]]:
    """Fetch the referenced categories in a single query, keyed by id"""
    ids = list({cid for cid in category_ids if isinstance(cid, ObjectId)})
    if not ids:
        return {}
    cursor = db.categories.find({"_id": {"$in": ids}})
    categories = await cursor.to_list(length=None)
    return {category["_id"]: category for category in categories}


async def populate_categories(db: AsyncIOMotorDatabase, products: list) -> list:
    """Replace each product's category id with the category document"""
    category_map = await get_category_map(db, [p.get("category") for p in products])
    for product in products:
        category_id = product.get("category")
        product["category"] = category_map.get(category_id, category_id)
    return products
