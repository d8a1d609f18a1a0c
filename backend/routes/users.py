"""
User Management Routes - IT Support manages staff accounts
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional
from database import db
from utils.auth import require_roles, hash_password, ROLES
from utils.branches import is_valid_branch
from utils.error_codes import ErrorCode, api_error
from datetime import datetime, timezone
import logging
import uuid

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserCreate(BaseModel):
    email: str
    password: str
    full_name: str
    role: str = "user"
    branch: Optional[str] = None


class PasswordReset(BaseModel):
    new_password: str


class EmailUpdate(BaseModel):
    new_email: str


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    branch: Optional[str] = None


class RoleUpdate(BaseModel):
    new_role: str


def _check_password(password: str):
    if len(password) < MIN_PASSWORD_LENGTH:
        raise api_error(400, ErrorCode.USER_WEAK_PASSWORD)


def _check_role(role: str):
    if role not in ROLES:
        raise api_error(400, ErrorCode.USER_INVALID_ROLE, f"Allowed roles: {', '.join(ROLES)}")


def _check_branch(branch):
    if branch is not None and not is_valid_branch(branch):
        raise api_error(400, ErrorCode.USER_INVALID_BRANCH)


async def _update_user(user_id: str, updates: dict, actor: dict, action: str):
    existing = await db.users.find_one({"id": user_id})
    if not existing:
        raise api_error(404, ErrorCode.USER_NOT_FOUND)

    updates["updated_at"] = datetime.now(timezone.utc).isoformat()
    updates["updated_by"] = actor['user_id']
    await db.users.update_one({"id": user_id}, {"$set": updates})
    logger.info(f"{action} for user {user_id} by {actor.get('email')}")
    return {"success": True}


@router.get("")
async def list_users(user=Depends(require_roles('it_support', 'admin'))):
    """قائمة المستخدمين بدون كلمات المرور"""
    users = await db.users.find({}, {"_id": 0, "password_hash": 0}).to_list(500)
    users.sort(key=lambda u: (u.get('full_name') or '').lower())
    return users


@router.post("")
async def create_user(req: UserCreate, user=Depends(require_roles('it_support', 'admin'))):
    email = req.email.strip().lower()
    _check_password(req.password)
    _check_role(req.role)
    _check_branch(req.branch)

    if await db.users.find_one({"email": email}):
        raise api_error(400, ErrorCode.USER_EMAIL_EXISTS)

    new_user = {
        "id": str(uuid.uuid4()),
        "email": email,
        "password_hash": hash_password(req.password),
        "full_name": req.full_name,
        "role": req.role,
        "branch": req.branch,
        "is_active": True,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "created_by": user['user_id'],
    }
    await db.users.insert_one(new_user)
    logger.info(f"User created: {email} ({req.role})")
    return {k: v for k, v in new_user.items() if k not in ("_id", "password_hash")}


@router.put("/{user_id}/password")
async def reset_password(user_id: str, req: PasswordReset, user=Depends(require_roles('it_support'))):
    _check_password(req.new_password)
    return await _update_user(user_id, {"password_hash": hash_password(req.new_password)}, user, "Password reset")


@router.put("/{user_id}/email")
async def update_email(user_id: str, req: EmailUpdate, user=Depends(require_roles('it_support'))):
    email = req.new_email.strip().lower()
    taken = await db.users.find_one({"email": email, "id": {"$ne": user_id}})
    if taken:
        raise api_error(400, ErrorCode.USER_EMAIL_EXISTS)
    return await _update_user(user_id, {"email": email}, user, "Email update")


@router.put("/{user_id}/profile")
async def update_profile(user_id: str, req: ProfileUpdate, user=Depends(require_roles('it_support'))):
    updates = req.model_dump(exclude_unset=True)
    _check_branch(updates.get('branch'))
    return await _update_user(user_id, updates, user, "Profile update")


@router.put("/{user_id}/role")
async def update_role(user_id: str, req: RoleUpdate, user=Depends(require_roles('it_support'))):
    # مستخدم واحد = دور واحد
    _check_role(req.new_role)
    return await _update_user(user_id, {"role": req.new_role}, user, "Role update")
