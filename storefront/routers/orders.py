"""
Order routes: a customer's own orders and the admin order desk.

Orders live under /auth alongside the account routes, where the web client expects them.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from ..config.database import get_database
from ..schemas.order import UpdateOrderStatusRequest
from ..utils.dependencies import UNAUTHORIZED, require_admin, require_sign_in, validate_object_id
from ..utils.serializers import serialize_doc, serialize_docs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Orders"])

ORDER_NOT_FOUND = "Invalid order id was provided and order cannot be found"


async def populate_orders(db: AsyncIOMotorDatabase, orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Swap product ids for product documents (without photos) and the buyer id for {_id, name}"""
    product_ids = {pid for order in orders for pid in order.get("products", [])}
    buyer_ids = {order.get("buyer") for order in orders if order.get("buyer") is not None}

    products = await db.products.find(
        {"_id": {"$in": list(product_ids)}}, {"photo": 0}
    ).to_list(length=None)
    buyers = await db.users.find(
        {"_id": {"$in": list(buyer_ids)}}, {"name": 1}
    ).to_list(length=None)

    product_map = {product["_id"]: product for product in products}
    buyer_map = {buyer["_id"]: buyer for buyer in buyers}

    for order in orders:
        order["products"] = [product_map[pid] for pid in order.get("products", []) if pid in product_map]
        order["buyer"] = buyer_map.get(order.get("buyer"), order.get("buyer"))
    return orders


@router.get("/orders")
async def get_orders(
    payload: dict = Depends(require_sign_in),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """List the signed-in user's orders"""
    try:
        user_id = validate_object_id(payload.get("_id"), UNAUTHORIZED, status_code=401)

        cursor = db.orders.find({"buyer": user_id}).sort("created_at", -1)
        orders = await cursor.to_list(length=None)

        return serialize_docs(await populate_orders(db, orders))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch orders for user {payload.get('_id')}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While Getting Orders")


@router.get("/all-orders")
async def get_all_orders(
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """List every order, newest first"""
    try:
        cursor = db.orders.find({}).sort("created_at", -1)
        orders = await cursor.to_list(length=None)

        return serialize_docs(await populate_orders(db, orders))

    except Exception as e:
        logger.error(f"Failed to fetch all orders: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While Getting Orders")


@router.put("/order-status/{order_id}")
async def update_order_status(
    order_id: str,
    status_update: UpdateOrderStatusRequest,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Move an order to a new fulfilment status"""
    try:
        object_id = validate_object_id(order_id, ORDER_NOT_FOUND)

        updated_order = await db.orders.find_one_and_update(
            {"_id": object_id},
            {"$set": {
                "status": status_update.status,
                "updated_at": datetime.now(timezone.utc),
            }},
            return_document=ReturnDocument.AFTER,
        )
        if not updated_order:
            raise HTTPException(status_code=400, detail=ORDER_NOT_FOUND)

        logger.info(f"Order status updated: {order_id} -> {status_update.status}")
        return serialize_doc(updated_order)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update order status {order_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error While Updating Order")
