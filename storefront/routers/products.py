"""
Product routes: catalog browsing for everyone, product management for admins.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional, Type

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo import ReturnDocument
from bson import ObjectId

from ..config.database import get_database
from ..config.settings import get_settings
from ..errors import validation_message
from ..models.product import ProductDocument, ProductPhoto
from ..schemas.product import CreateProductForm, ProductFiltersRequest, UpdateProductForm
from ..utils.dependencies import populate_categories, require_admin, validate_object_id
from ..utils.serializers import serialize_doc, serialize_product
from ..utils.validators import MAX_KEYWORD_LENGTH, exact_match_pattern, is_blank, slugify

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/product", tags=["Products"])

# Photos are served from /product-photo only
NO_PHOTO = {"photo": 0}


def parse_product_form(form_class: Type[CreateProductForm], **values) -> CreateProductForm:
    """Validate multipart product fields, reporting the first failure as a 400"""
    try:
        return form_class(max_photo_size=settings.max_photo_size, **values)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=validation_message(e))


async def read_photo(photo: Optional[UploadFile]) -> Optional[ProductPhoto]:
    if photo is None:
        return None
    data = await photo.read()
    if not data:
        return None
    return ProductPhoto(data=data, content_type=photo.content_type or "application/octet-stream")


async def check_product_unique(db: AsyncIOMotorDatabase, name: str, slug: str, exclude_id: Optional[ObjectId] = None):
    """Reject a product whose name (ignoring case) or slug is already used by another product"""
    not_self = {"_id": {"$ne": exclude_id}} if exclude_id is not None else {}

    same_name = await db.products.find_one(
        {"name": {"$regex": exact_match_pattern(name), "$options": "i"}, **not_self}, NO_PHOTO
    )
    if same_name:
        raise HTTPException(status_code=400, detail="Product with this name already exists")

    same_slug = await db.products.find_one({"slug": slug, **not_self}, NO_PHOTO)
    if same_slug:
        raise HTTPException(
            status_code=400,
            detail=f"Product with this name format or slug already exists: {slug}"
        )


async def check_category_exists(db: AsyncIOMotorDatabase, category_id: ObjectId):
    if not await db.categories.find_one({"_id": category_id}):
        raise HTTPException(status_code=400, detail="Category given does not exist")


@router.post("/create-product", status_code=201)
async def create_product(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    shipping: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a product from a multipart form with an optional photo"""
    try:
        product_photo = await read_photo(photo)
        form = parse_product_form(
            CreateProductForm,
            name=name,
            description=description,
            price=price,
            category=category,
            quantity=quantity,
            shipping=shipping,
            photo_size=len(product_photo.data) if product_photo else 0,
        )
        fields = form.to_fields()
        slug = slugify(fields["name"])

        await check_category_exists(db, fields["category"])
        await check_product_unique(db, fields["name"], slug)

        product_doc = ProductDocument(**fields, slug=slug, photo=product_photo).model_dump(exclude_none=True)
        result = await db.products.insert_one(product_doc)
        created_product = await db.products.find_one({"_id": result.inserted_id}, NO_PHOTO)

        logger.info(f"Product created: {fields['name']} (ID: {result.inserted_id})")
        return {
            "success": True,
            "message": "Product Created Successfully",
            "products": serialize_product(created_product),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create product: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in creating product")


@router.put("/update-product/{pid}", status_code=201)
async def update_product(
    pid: str,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    shipping: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Replace a product's fields; the photo changes only when a new one is uploaded"""
    try:
        object_id = validate_object_id(pid, "Product not found", status_code=404)
        if not await db.products.find_one({"_id": object_id}, NO_PHOTO):
            raise HTTPException(status_code=404, detail="Product not found")

        product_photo = await read_photo(photo)
        form = parse_product_form(
            UpdateProductForm,
            name=name,
            description=description,
            price=price,
            category=category,
            quantity=quantity,
            shipping=shipping,
            photo_size=len(product_photo.data) if product_photo else 0,
        )
        fields = form.to_fields()
        slug = slugify(fields["name"])

        await check_category_exists(db, fields["category"])
        await check_product_unique(db, fields["name"], slug, exclude_id=object_id)

        update_doc = {**fields, "slug": slug, "updated_at": datetime.now(timezone.utc)}
        if product_photo:
            update_doc["photo"] = product_photo.model_dump()

        updated_product = await db.products.find_one_and_update(
            {"_id": object_id},
            {"$set": update_doc},
            projection=NO_PHOTO,
            return_document=ReturnDocument.AFTER,
        )
        if not updated_product:
            raise HTTPException(status_code=404, detail="Product not found")

        logger.info(f"Product updated: {pid}")
        return {
            "success": True,
            "message": "Product Updated Successfully",
            "product": serialize_product(updated_product),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update product {pid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in Update product")


@router.get("/get-product")
async def list_products(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Newest products with their categories"""
    try:
        cursor = db.products.find({}, NO_PHOTO).sort("created_at", -1).limit(settings.product_limit)
        products = await cursor.to_list(length=settings.product_limit)
        await populate_categories(db, products)

        return {
            "success": True,
            "counTotal": len(products),
            "message": "AllProducts",
            "products": [serialize_product(p) for p in products],
        }

    except Exception as e:
        logger.error(f"Failed to fetch products: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in getting products")


@router.get("/get-product/{slug}")
async def get_product(slug: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Get a single product by slug"""
    try:
        if is_blank(slug):
            raise HTTPException(status_code=400, detail="Invalid product slug provided")

        product = await db.products.find_one({"slug": slug}, NO_PHOTO)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        await populate_categories(db, [product])

        return {
            "success": True,
            "message": "Single Product Fetched",
            "product": serialize_product(product),
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch product {slug}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error while getting single product")


@router.get("/product-photo/{pid}")
async def get_product_photo(pid: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Serve a product's photo with its stored content type"""
    try:
        object_id = validate_object_id(pid, "Invalid Product id format")

        product = await db.products.find_one({"_id": object_id}, {"photo": 1})
        photo = (product or {}).get("photo") or {}
        if not photo.get("data"):
            raise HTTPException(status_code=404, detail="Photo not found")

        return Response(content=bytes(photo["data"]), media_type=photo.get("content_type"))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch photo for product {pid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error while getting photo")


@router.delete("/delete-product/{pid}")
async def delete_product(
    pid: str,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Delete a product"""
    try:
        object_id = validate_object_id(pid, "Invalid Product format")

        deleted = await db.products.find_one_and_delete({"_id": object_id}, projection=NO_PHOTO)
        if not deleted:
            raise HTTPException(status_code=404, detail="Product not found")

        logger.info(f"Product deleted: {pid}")
        return {"success": True, "message": "Product Deleted successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete product {pid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error while deleting product")


@router.post("/product-filters")
async def filter_products(filters: ProductFiltersRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Products in the checked categories and price range"""
    try:
        products = await db.products.find(filters.to_query(), NO_PHOTO).to_list(length=None)
        return {
            "success": True,
            "products": [serialize_product(p) for p in products],
        }

    except Exception as e:
        logger.error(f"Failed to filter products: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While Filtering Products")


@router.get("/product-count")
async def count_products(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Total number of products"""
    try:
        total = await db.products.count_documents({})
        return {"success": True, "total": total}

    except Exception as e:
        logger.error(f"Failed to count products: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in product count")


@router.get("/product-list/{page}")
async def list_products_page(page: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """One page of products, newest first"""
    try:
        if not re.fullmatch(r"\d+", page.strip()) or int(page) < 1:
            raise HTTPException(status_code=400, detail="Invalid page number. Page must be positive integer")
        page_number = int(page)
        per_page = settings.per_page_limit

        cursor = (
            db.products.find({}, NO_PHOTO)
            .sort("created_at", -1)
            .skip((page_number - 1) * per_page)
            .limit(per_page)
        )
        products = await cursor.to_list(length=per_page)

        return {
            "success": True,
            "products": [serialize_product(p) for p in products],
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch product page {page}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error in per page products")


@router.get("/search/{keyword}")
async def search_products(keyword: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Case-insensitive keyword search over product names and descriptions"""
    try:
        if is_blank(keyword):
            raise HTTPException(status_code=400, detail="Keyword must not be empty")
        if len(keyword) > MAX_KEYWORD_LENGTH:
            raise HTTPException(status_code=400, detail="Keyword is too long")

        pattern = re.escape(keyword)
        results = await db.products.find(
            {"$or": [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"description": {"$regex": pattern, "$options": "i"}},
            ]},
            NO_PHOTO,
        ).to_list(length=None)

        return {
            "success": True,
            "results": [serialize_product(p) for p in results],
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to search products for '{keyword}': {str(e)}")
        raise HTTPException(status_code=500, detail="Error In Search Product API")


@router.get("/related-product/{pid}/{cid}")
async def related_products(pid: str, cid: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Other products from the same category"""
    try:
        if not ObjectId.is_valid(pid) or not ObjectId.is_valid(cid):
            raise HTTPException(status_code=400, detail="Pid and Cid must be in a valid format")

        cursor = db.products.find(
            {"category": ObjectId(cid), "_id": {"$ne": ObjectId(pid)}}, NO_PHOTO
        ).limit(settings.related_product_limit)
        products = await cursor.to_list(length=settings.related_product_limit)
        await populate_categories(db, products)

        return {
            "success": True,
            "products": [serialize_product(p) for p in products],
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch products related to {pid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error while getting related product")


@router.get("/product-category/{slug}")
async def products_by_category(slug: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """A category together with all of its products"""
    try:
        if is_blank(slug):
            raise HTTPException(status_code=400, detail="Invalid category slug provided")

        category = await db.categories.find_one({"slug": slug})
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")

        products = await db.products.find({"category": category["_id"]}, NO_PHOTO).to_list(length=None)
        for product in products:
            product["category"] = category

        return {
            "success": True,
            "category": serialize_doc(category),
            "products": [serialize_product(p) for p in products],
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch products for category {slug}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While Getting products")
