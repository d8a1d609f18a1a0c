from fastapi import APIRouter
from utils.branches import BRANCHES

router = APIRouter(prefix="/api/branches", tags=["branches"])


@router.get("")
async def list_branches():
    """الفروع الأربعة - بيانات ثابتة"""
    return list(BRANCHES)
