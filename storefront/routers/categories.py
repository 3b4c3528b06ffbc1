"""
Category routes: public listing and lookup, admin create/rename/delete.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from bson import ObjectId

from ..config.database import get_database
from ..models.category import CategoryDocument
from ..schemas.category import CategoryRequest
from ..utils.dependencies import require_admin, validate_object_id
from ..utils.serializers import serialize_doc, serialize_docs
from ..utils.validators import exact_match_pattern, slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/category", tags=["Categories"])

DUPLICATE_CATEGORY = "The name of the category already exists"


async def category_name_taken(db: AsyncIOMotorDatabase, name: str, exclude_id: Optional[ObjectId] = None) -> bool:
    """Case-insensitive check for another category with this name"""
    query = {"name": {"$regex": exact_match_pattern(name), "$options": "i"}}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return await db.categories.find_one(query) is not None


@router.post("/create-category", status_code=201)
async def create_category(
    category: CategoryRequest,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a category"""
    try:
        if await category_name_taken(db, category.name):
            raise HTTPException(status_code=400, detail=DUPLICATE_CATEGORY)

        category_doc = CategoryDocument(name=category.name, slug=slugify(category.name)).model_dump()
        result = await db.categories.insert_one(category_doc)
        created_category = await db.categories.find_one({"_id": result.inserted_id})

        logger.info(f"Category created: {category.name} (ID: {result.inserted_id})")
        return {
            "success": True,
            "message": "new category created",
            "category": serialize_doc(created_category),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create category: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in Category")


@router.put("/update-category/{category_id}")
async def update_category(
    category_id: str,
    category: CategoryRequest,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Rename a category and refresh its slug"""
    try:
        object_id = validate_object_id(category_id, "The Category id is invalid")

        if await category_name_taken(db, category.name, exclude_id=object_id):
            raise HTTPException(status_code=400, detail=DUPLICATE_CATEGORY)

        updated_category = await db.categories.find_one_and_update(
            {"_id": object_id},
            {"$set": {
                "name": category.name,
                "slug": slugify(category.name),
                "updated_at": datetime.now(timezone.utc),
            }},
            return_document=ReturnDocument.AFTER,
        )
        if not updated_category:
            raise HTTPException(status_code=400, detail="Unable to find and update the category")

        logger.info(f"Category updated: {category_id} -> {category.name}")
        return {
            "success": True,
            "message": "Category Updated Successfully",
            "category": serialize_doc(updated_category),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update category {category_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error while updating category")


@router.get("/get-category")
async def list_categories(db: AsyncIOMotorDatabase = Depends(get_database)):
    """List all categories"""
    try:
        categories = await db.categories.find({}).to_list(length=None)
        return {
            "success": True,
            "message": "All Categories List",
            "category": serialize_docs(categories),
        }

    except Exception as e:
        logger.error(f"Failed to fetch categories: {str(e)}")
        raise HTTPException(status_code=500, detail="Error while getting all categories")


@router.get("/single-category/{slug}")
async def get_category(slug: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Get a category by slug"""
    try:
        category = await db.categories.find_one({"slug": slug})
        if not category:
            raise HTTPException(status_code=400, detail="Unable to find the category with provided slug")

        return {
            "success": True,
            "message": "Get Single Category Successfully",
            "category": serialize_doc(category),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch category {slug}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While getting Single Category")


@router.delete("/delete-category/{category_id}")
async def delete_category(
    category_id: str,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Delete a category"""
    try:
        object_id = validate_object_id(category_id, "The Category id is invalid")

        deleted = await db.categories.find_one_and_delete({"_id": object_id})
        if not deleted:
            raise HTTPException(status_code=400, detail="Unable to find the category to delete")

        logger.info(f"Category deleted: {category_id}")
        return {"success": True, "message": "Category Deleted Successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete category {category_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="error while deleting category")
