from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from database import db
from utils.auth import verify_password, create_access_token, get_current_user, hash_password, role_flags
from utils.error_codes import ErrorCode, api_error
from datetime import datetime, timezone, timedelta
import logging

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)

# Rate Limiting - تتبع محاولات تسجيل الدخول
login_attempts = {}  # {ip: {"count": int, "last_attempt": datetime, "blocked_until": datetime}}
MAX_LOGIN_ATTEMPTS = 5
BLOCK_DURATION_MINUTES = 15
ATTEMPT_WINDOW_SECONDS = 300


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def check_rate_limit(request: Request) -> bool:
    """التحقق من Rate Limiting"""
    client_ip = _client_ip(request)
    now = datetime.now(timezone.utc)

    if client_ip in login_attempts:
        data = login_attempts[client_ip]

        if data.get("blocked_until") and now < data["blocked_until"]:
            remaining = (data["blocked_until"] - now).seconds // 60 + 1
            raise api_error(
                429, ErrorCode.AUTH_RATE_LIMITED,
                f"Try again in {remaining} minutes",
                f"حاول بعد {remaining} دقيقة",
            )

        # إعادة تعيين إذا مر وقت كافٍ
        if (now - data["last_attempt"]).total_seconds() > ATTEMPT_WINDOW_SECONDS:
            login_attempts[client_ip] = {"count": 0, "last_attempt": now}

    return True


def record_failed_attempt(request: Request):
    """تسجيل محاولة فاشلة"""
    client_ip = _client_ip(request)
    now = datetime.now(timezone.utc)

    entry = login_attempts.setdefault(client_ip, {"count": 0, "last_attempt": now})
    entry["count"] += 1
    entry["last_attempt"] = now

    if entry["count"] >= MAX_LOGIN_ATTEMPTS:
        entry["blocked_until"] = now + timedelta(minutes=BLOCK_DURATION_MINUTES)
        logger.warning(f"Login blocked for {client_ip} after {entry['count']} failed attempts")


def clear_failed_attempts(request: Request):
    """مسح المحاولات الفاشلة بعد تسجيل دخول ناجح"""
    login_attempts.pop(_client_ip(request), None)


class LoginRequest(BaseModel):
    email: str
    password: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


def public_user(user: dict) -> dict:
    """بيانات المستخدم مع صلاحياته - بدون كلمة المرور"""
    data = {k: v for k, v in user.items() if k not in ("_id", "password_hash")}
    data.update(role_flags(user))
    return data


@router.post("/login")
async def login(req: LoginRequest, request: Request):
    """
    تسجيل الدخول مع:
    - Rate Limiting (5 محاولات / 15 دقيقة حظر)
    - جلسات محدودة المدة حسب الدور
    """
    check_rate_limit(request)

    user = await db.users.find_one({"email": req.email.strip().lower()}, {"_id": 0})
    if not user or not verify_password(req.password, user['password_hash']):
        record_failed_attempt(request)
        raise api_error(401, ErrorCode.AUTH_INVALID_CREDENTIALS)

    if not user.get('is_active', True):
        raise api_error(403, ErrorCode.AUTH_ACCOUNT_DISABLED)

    clear_failed_attempts(request)

    role = user.get('role', 'user')
    token = create_access_token({
        "user_id": user['id'],
        "email": user['email'],
        "full_name": user.get('full_name', ''),
        "role": role,
        "branch": user.get('branch'),
    }, role=role)

    logger.info(f"Login: {user['email']} ({role})")
    return {"token": token, "user": public_user(user)}


@router.get("/me")
async def get_me(user=Depends(get_current_user)):
    db_user = await db.users.find_one({"id": user['user_id']}, {"_id": 0, "password_hash": 0})
    if not db_user:
        raise api_error(404, ErrorCode.USER_NOT_FOUND)
    return public_user(db_user)


@router.post("/change-password")
async def change_password(req: ChangePasswordRequest, user=Depends(get_current_user)):
    db_user = await db.users.find_one({"id": user['user_id']}, {"_id": 0})
    if not db_user:
        raise api_error(404, ErrorCode.USER_NOT_FOUND)
    if not verify_password(req.current_password, db_user['password_hash']):
        raise api_error(400, ErrorCode.AUTH_WRONG_PASSWORD)
    if len(req.new_password) < 6:
        raise api_error(400, ErrorCode.USER_WEAK_PASSWORD)
    await db.users.update_one(
        {"id": user['user_id']},
        {"$set": {
            "password_hash": hash_password(req.new_password),
            "updated_at": datetime.now(timezone.utc).isoformat()
        }}
    )
    return {"message": "Password changed", "message_ar": "تم تغيير كلمة المرور بنجاح"}
