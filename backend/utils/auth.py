from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext
from utils.error_codes import ErrorCode, api_error
from datetime import datetime, timezone, timedelta
import os

SECRET_KEY = os.environ.get('JWT_SECRET', 'carlton-backoffice-2026-r7p4q')
ALGORITHM = "HS256"

ROLES = ("user", "admin", "accountant", "it_support")

# مدة الجلسة حسب الدور (بالساعات)
TOKEN_EXPIRE_HOURS = {
    "admin": 12,
    "accountant": 10,
    "it_support": 10,
    "user": 8,
}
DEFAULT_TOKEN_EXPIRE = 8

# الأدوار التي ترى كل الفروع
ALL_BRANCH_ROLES = ("admin", "accountant")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
security = HTTPBearer()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(data: dict, role: str = "user") -> str:
    """إنشاء توكن مع مدة صلاحية حسب الدور"""
    to_encode = data.copy()
    expire_hours = TOKEN_EXPIRE_HOURS.get(role, DEFAULT_TOKEN_EXPIRE)
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(hours=expire_hours)
    to_encode["iat"] = datetime.now(timezone.utc)
    to_encode["jti"] = os.urandom(16).hex()
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def role_flags(user: dict) -> dict:
    role = user.get('role')
    return {
        "is_admin": role == "admin",
        "is_accountant": role == "accountant",
        "is_it_support": role == "it_support",
    }


def can_view_all_branches(user: dict) -> bool:
    return user.get('role') in ALL_BRANCH_ROLES


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """التحقق من التوكن وأن الحساب ما زال فعالاً"""
    try:
        payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise api_error(401, ErrorCode.AUTH_TOKEN_INVALID)

    from database import db
    user_id = payload.get("user_id")
    if user_id:
        user = await db.users.find_one({"id": user_id}, {"_id": 0, "is_active": 1, "role": 1, "branch": 1})
        if not user or not user.get("is_active", True):
            raise api_error(401, ErrorCode.AUTH_ACCOUNT_DISABLED)
        # الدور والفرع من قاعدة البيانات - قد يغيرها الدعم الفني بعد إصدار التوكن
        payload["role"] = user.get("role", payload.get("role"))
        payload["branch"] = user.get("branch", payload.get("branch"))

    return payload


def require_roles(*roles):
    async def checker(user=Depends(get_current_user)):
        if user.get('role') not in roles:
            raise api_error(403, ErrorCode.GENERAL_FORBIDDEN)
        return user
    return checker
