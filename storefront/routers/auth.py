"""
Account routes: registration, login, password reset, profile and guard probes.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from bson import ObjectId

from ..config.database import get_database
from ..models.user import UserDocument
from ..schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
)
from ..schemas.common import GuardResponse
from ..utils.dependencies import UNAUTHORIZED, require_admin, require_sign_in
from ..utils.security import create_access_token, hash_password, verify_password
from ..utils.serializers import serialize_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

INVALID_LOGIN = "Invalid email or password has been entered or email is not registered"


@router.post("/register", status_code=201)
async def register(user: RegisterRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Create a customer account"""
    try:
        existing_user = await db.users.find_one({"email": user.email})
        if existing_user:
            raise HTTPException(status_code=409, detail="Already Register please login")

        user_doc = UserDocument(
            name=user.name,
            email=user.email,
            password=hash_password(user.password),
            phone=user.phone,
            address=user.address,
            answer=user.answer,
        ).model_dump()

        result = await db.users.insert_one(user_doc)
        created_user = await db.users.find_one({"_id": result.inserted_id})

        logger.info(f"User registered: {user.email} (ID: {result.inserted_id})")
        return {
            "success": True,
            "message": "User Register Successfully",
            "user": serialize_user(created_user),
        }

    except HTTPException:
        raise
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="Already Register please login")
    except Exception as e:
        logger.error(f"Failed to register user: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in Registration")


@router.post("/login")
async def login(credentials: LoginRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Exchange email and password for an access token"""
    try:
        if not credentials.email or not credentials.password:
            raise HTTPException(status_code=400, detail=INVALID_LOGIN)

        user = await db.users.find_one({"email": credentials.email})
        if not user or not verify_password(credentials.password, user.get("password", "")):
            raise HTTPException(status_code=400, detail=INVALID_LOGIN)

        token = create_access_token(str(user["_id"]))

        logger.info(f"User logged in: {user['email']}")
        return {
            "success": True,
            "message": "login successfully",
            "user": {
                "_id": str(user["_id"]),
                "name": user["name"],
                "email": user["email"],
                "phone": user["phone"],
                "address": user["address"],
                "role": user.get("role", 0),
            },
            "token": token,
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to log in: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in login")


@router.post("/forgot-password")
async def forgot_password(request: ForgotPasswordRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Reset a password after checking the security answer"""
    try:
        user = await db.users.find_one({"email": request.email, "answer": request.answer})
        if not user:
            raise HTTPException(status_code=404, detail="Wrong Email Or Answer")

        hashed = hash_password(request.new_password)
        if hashed is None:
            raise HTTPException(status_code=400, detail="New Password is required")

        await db.users.update_one(
            {"_id": user["_id"]},
            {"$set": {
                "password": hashed,
                "updated_at": datetime.now(timezone.utc),
            }},
        )

        logger.info(f"Password reset for user {user['_id']}")
        return {"success": True, "message": "Password Reset Successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to reset password: {str(e)}")
        raise HTTPException(status_code=500, detail="Something went wrong")


@router.get("/test", response_class=PlainTextResponse)
async def protected_test(admin: dict = Depends(require_admin)):
    """Admin-only probe"""
    return "Protected Routes"


@router.get("/user-auth", response_model=GuardResponse)
async def user_auth(payload: dict = Depends(require_sign_in)):
    """Tells the web client whether its stored token is still accepted"""
    return GuardResponse(ok=True)


@router.get("/admin-auth", response_model=GuardResponse)
async def admin_auth(admin: dict = Depends(require_admin)):
    """Tells the web client whether its user may open the dashboard"""
    return GuardResponse(ok=True)


@router.put("/profile")
async def update_profile(
    profile: UpdateProfileRequest,
    payload: dict = Depends(require_sign_in),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Update the signed-in user's profile"""
    try:
        user_id = payload.get("_id")
        user = None
        if isinstance(user_id, str) and ObjectId.is_valid(user_id):
            user = await db.users.find_one({"_id": ObjectId(user_id)})
        if not user:
            raise HTTPException(status_code=401, detail=UNAUTHORIZED)

        update_doc = {"updated_at": datetime.now(timezone.utc)}
        if profile.name:
            update_doc["name"] = profile.name
        if profile.phone:
            update_doc["phone"] = profile.phone
        if profile.address:
            update_doc["address"] = profile.address
        if profile.password:
            update_doc["password"] = hash_password(profile.password) or user["password"]

        updated_user = await db.users.find_one_and_update(
            {"_id": user["_id"]},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )

        logger.info(f"Profile updated for user {user_id}")
        return {
            "success": True,
            "message": "Profile Updated Successfully",
            "updatedUser": serialize_user(updated_user),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update profile: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While Updating profile")
