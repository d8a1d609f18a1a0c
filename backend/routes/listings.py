"""
Listing Routes - توليد أوصاف العقارات وسجلها
"""
from fastapi import APIRouter, Depends
from typing import Optional
from database import db
from models.property import PropertyInput
from services.content_generator import generate_content
from services.listing_vocabulary import (
    PROPERTY_TYPES, CATEGORIES, LISTING_TYPES, FURNISHING_STATUSES, KITCHEN_TYPES,
    get_amenities, is_valid_amenity_set, translate_kitchen_type,
)
from utils.auth import get_current_user, require_roles, can_view_all_branches
from utils.error_codes import ErrorCode, api_error
from datetime import datetime, timezone
import logging
import uuid

router = APIRouter(prefix="/api/listings", tags=["listings"])
logger = logging.getLogger(__name__)


def _branch_query(user: dict, branch: Optional[str]) -> dict:
    """admin / accountant: any branch; others: own branch only"""
    if can_view_all_branches(user):
        return {"branch": branch} if branch and branch != 'all' else {}
    return {"branch": user.get('branch')}


@router.get("/vocabulary")
async def get_vocabulary():
    return {
        "property_types": list(PROPERTY_TYPES),
        "categories": list(CATEGORIES),
        "listing_types": list(LISTING_TYPES),
        "furnishing_statuses": list(FURNISHING_STATUSES),
        "kitchen_types": list(KITCHEN_TYPES),
        "kitchen_types_ar": {k: translate_kitchen_type(k) for k in KITCHEN_TYPES},
    }


@router.get("/amenities")
async def list_amenities(property_type: str = "", category: str = ""):
    return {"amenities": list(get_amenities(property_type, category))}


@router.post("/generate")
async def generate(prop: PropertyInput, user=Depends(get_current_user)):
    """توليد المحتوى وحفظه في السجل"""
    if not is_valid_amenity_set(prop.property_type, prop.category, prop.amenities):
        raise api_error(400, ErrorCode.LISTING_INVALID_AMENITIES)

    content = generate_content(prop)

    record = {
        "id": str(uuid.uuid4()),
        "branch": user.get('branch'),
        "property_type": prop.property_type,
        "category": prop.category,
        "location": prop.location,
        "input": prop.model_dump(),
        "content": content.model_dump(),
        "created_by": user['user_id'],
        "created_by_name": user.get('full_name', ''),
        "created_at": datetime.now(timezone.utc).isoformat(),
        "deleted_at": None,
        "deleted_by": None,
    }
    await db.property_descriptions.insert_one(record)
    logger.info(f"Listing generated: {prop.property_type} in {prop.location} ({record['id']})")
    record.pop("_id", None)
    return record


@router.get("/history")
async def list_history(branch: Optional[str] = None, user=Depends(get_current_user)):
    query = {"deleted_at": None, **_branch_query(user, branch)}
    return await db.property_descriptions.find(query, {"_id": 0}).sort("created_at", -1).to_list(500)


@router.get("/deleted")
async def list_deleted(user=Depends(require_roles('admin'))):
    return await db.property_descriptions.find(
        {"deleted_at": {"$ne": None}}, {"_id": 0}
    ).sort("deleted_at", -1).to_list(500)


@router.get("/{listing_id}")
async def get_listing(listing_id: str, user=Depends(get_current_user)):
    record = await db.property_descriptions.find_one(
        {"id": listing_id, "deleted_at": None, **_branch_query(user, None)}, {"_id": 0}
    )
    if not record:
        raise api_error(404, ErrorCode.LISTING_NOT_FOUND)
    return record


@router.delete("/{listing_id}")
async def soft_delete_listing(listing_id: str, user=Depends(get_current_user)):
    result = await db.property_descriptions.update_one(
        {"id": listing_id, "deleted_at": None, **_branch_query(user, None)},
        {"$set": {"deleted_at": datetime.now(timezone.utc).isoformat(), "deleted_by": user['user_id']}}
    )
    if result.matched_count == 0:
        raise api_error(404, ErrorCode.LISTING_NOT_FOUND)
    return {"success": True}


@router.post("/{listing_id}/restore")
async def restore_listing(listing_id: str, user=Depends(require_roles('admin'))):
    result = await db.property_descriptions.update_one(
        {"id": listing_id, "deleted_at": {"$ne": None}},
        {"$set": {"deleted_at": None, "deleted_by": None}}
    )
    if result.matched_count == 0:
        raise api_error(404, ErrorCode.LISTING_NOT_DELETED)
    return {"success": True}


@router.delete("/{listing_id}/permanent")
async def permanent_delete_listing(listing_id: str, user=Depends(require_roles('admin'))):
    result = await db.property_descriptions.delete_one({"id": listing_id, "deleted_at": {"$ne": None}})
    if result.deleted_count == 0:
        raise api_error(404, ErrorCode.LISTING_NOT_DELETED)
    logger.info(f"Listing {listing_id} permanently deleted by {user.get('email')}")
    return {"success": True}
