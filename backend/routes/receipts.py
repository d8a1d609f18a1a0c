"""
Receipt Routes - سندات القبض
============================================================
- CRUD مع الحذف الناعم (deleted_at / deleted_by)
- المستخدم العادي يرى فرعه فقط، المدير والمحاسب يرون كل الفروع
- PDF: عرض مباشر أو تنزيل
- تحليل السندات
- مرفقات إيصال الدفع
"""
from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import StreamingResponse, FileResponse
from typing import Optional
from database import db
from models.receipt import ReceiptCreate, ReceiptUpdate, merge_receipt_update
from services.receipt_analysis import filter_receipts, search_receipts, compute_analytics
from utils.auth import get_current_user, require_roles, can_view_all_branches
from utils.error_codes import ErrorCode, api_error
from utils.receipt_pdf import generate_receipt_pdf, save_receipt_pdf, receipt_pdf_filename, content_disposition
from starlette.background import BackgroundTask
from datetime import datetime, timezone
from pathlib import Path
import io
import logging
import mimetypes
import os
import shutil
import tempfile
import uuid

router = APIRouter(prefix="/api/receipts", tags=["receipts"])
logger = logging.getLogger(__name__)

UPLOAD_DIR = os.environ.get('UPLOAD_DIR', str(Path(__file__).parent.parent / 'uploads'))
ATTACHMENTS_DIR = os.path.join(UPLOAD_DIR, 'receipts')
PDF_DIR = os.path.join(UPLOAD_DIR, 'receipt_pdfs')

ALLOWED_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.heic', '.pdf', '.doc', '.docx')
MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _scope(user: dict, branch: Optional[str] = None) -> dict:
    """فلتر الفرع حسب الدور"""
    if can_view_all_branches(user):
        return {"branch": branch} if branch and branch != 'all' else {}
    return {"branch": user.get('branch')}


async def _get_live_receipt(receipt_id: str, user: dict) -> dict:
    receipt = await db.receipts.find_one({"id": receipt_id, "deleted_at": None, **_scope(user)}, {"_id": 0})
    if not receipt:
        raise api_error(404, ErrorCode.RECEIPT_NOT_FOUND)
    return receipt


async def _check_unique_number(receipt_number: Optional[str], exclude_id: Optional[str] = None):
    if not receipt_number:
        return
    query = {"receipt_number": receipt_number}
    if exclude_id:
        query["id"] = {"$ne": exclude_id}
    if await db.receipts.find_one(query):
        raise api_error(400, ErrorCode.RECEIPT_DUPLICATE_NUMBER)


@router.get("")
async def list_receipts(receipt_type: Optional[str] = None, branch: Optional[str] = None,
                        user=Depends(get_current_user)):
    query = {"deleted_at": None, **_scope(user, branch)}
    if receipt_type and receipt_type != 'all':
        query["receipt_type"] = receipt_type
    return await db.receipts.find(query, {"_id": 0}).sort("created_at", -1).to_list(1000)


@router.get("/analytics")
async def receipt_analytics(from_date: Optional[str] = None, to_date: Optional[str] = None,
                            branch: Optional[str] = None, user=Depends(get_current_user)):
    """تحليل السندات الحية ضمن الفترة والفرع"""
    receipts = await db.receipts.find({"deleted_at": None, **_scope(user)}, {"_id": 0}).to_list(5000)
    if not can_view_all_branches(user):
        branch = None
    filtered = filter_receipts(receipts, from_date, to_date, branch)
    return compute_analytics(filtered, datetime.now(timezone.utc))


@router.get("/deleted")
async def list_deleted_receipts(q: str = "", receipt_type: str = "all", branch: str = "all",
                                user=Depends(require_roles('admin', 'accountant'))):
    receipts = await db.receipts.find(
        {"deleted_at": {"$ne": None}}, {"_id": 0}
    ).sort("deleted_at", -1).to_list(1000)
    matched = search_receipts(receipts, q, receipt_type, branch)
    return {"total": len(receipts), "receipts": matched}


@router.post("/upload")
async def upload_payment_receipt(file: UploadFile = File(...), user=Depends(get_current_user)):
    """إرفاق إيصال الدفع - صورة أو PDF أو Word"""
    extension = os.path.splitext(file.filename or '')[1].lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise api_error(400, ErrorCode.RECEIPT_FILE_INVALID, f"Allowed: {', '.join(ALLOWED_EXTENSIONS)}")

    contents = await file.read()
    if len(contents) > MAX_UPLOAD_BYTES:
        raise api_error(400, ErrorCode.RECEIPT_FILE_TOO_LARGE, "Max 10 MB", "الحد الأقصى 10 ميجابايت")

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"payment_{timestamp}_{uuid.uuid4().hex[:8]}{extension}"

    os.makedirs(ATTACHMENTS_DIR, exist_ok=True)
    with open(os.path.join(ATTACHMENTS_DIR, filename), "wb") as f:
        f.write(contents)

    logger.info(f"Payment receipt uploaded: {filename} ({len(contents)} bytes)")
    return {"url": f"/api/receipts/files/{filename}", "filename": filename, "size": len(contents)}


@router.get("/files/{filename}")
async def get_payment_receipt_file(filename: str, user=Depends(get_current_user)):
    # تأمين: منع path traversal
    if ".." in filename or "/" in filename or "\\" in filename:
        raise api_error(400, ErrorCode.RECEIPT_FILE_INVALID)

    file_path = os.path.join(ATTACHMENTS_DIR, filename)
    if not os.path.exists(file_path):
        raise api_error(404, ErrorCode.GENERAL_NOT_FOUND)

    media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return FileResponse(file_path, media_type=media_type, filename=filename)


@router.get("/{receipt_id}")
async def get_receipt(receipt_id: str, user=Depends(get_current_user)):
    return await _get_live_receipt(receipt_id, user)


@router.post("")
async def create_receipt(req: ReceiptCreate, user=Depends(get_current_user)):
    data = req.model_dump()
    # الموظف ينشئ سندات فرعه فقط
    if not can_view_all_branches(user) or not data.get('branch'):
        data['branch'] = user.get('branch')

    await _check_unique_number(data.get('receipt_number'))

    now = datetime.now(timezone.utc).isoformat()
    receipt = {
        "id": str(uuid.uuid4()),
        **data,
        "created_by": user['user_id'],
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
        "deleted_by": None,
    }
    await db.receipts.insert_one(receipt)
    receipt.pop("_id", None)
    logger.info(f"Receipt created: {receipt['receipt_type']} {receipt.get('receipt_number')} ({receipt['id']})")
    return receipt


@router.put("/{receipt_id}")
async def update_receipt(receipt_id: str, req: ReceiptUpdate, user=Depends(get_current_user)):
    existing = await _get_live_receipt(receipt_id, user)

    updates = req.model_dump(exclude_unset=True)
    if not can_view_all_branches(user):
        updates.pop('branch', None)
    if 'receipt_number' in updates:
        await _check_unique_number(updates['receipt_number'], exclude_id=receipt_id)

    try:
        updates = merge_receipt_update(existing, updates)
    except ValueError:
        raise api_error(400, ErrorCode.RECEIPT_CHEQUE_REQUIRED)

    updates["updated_at"] = datetime.now(timezone.utc).isoformat()
    await db.receipts.update_one({"id": receipt_id}, {"$set": updates})
    return {**existing, **updates}


@router.delete("/{receipt_id}")
async def soft_delete_receipt(receipt_id: str, user=Depends(get_current_user)):
    await _get_live_receipt(receipt_id, user)
    await db.receipts.update_one(
        {"id": receipt_id},
        {"$set": {"deleted_at": datetime.now(timezone.utc).isoformat(), "deleted_by": user.get('email')}}
    )
    logger.info(f"Receipt {receipt_id} moved to deleted by {user.get('email')}")
    return {"success": True}


@router.post("/{receipt_id}/restore")
async def restore_receipt(receipt_id: str, user=Depends(require_roles('admin', 'accountant'))):
    result = await db.receipts.update_one(
        {"id": receipt_id, "deleted_at": {"$ne": None}},
        {"$set": {"deleted_at": None, "deleted_by": None}}
    )
    if result.matched_count == 0:
        raise api_error(404, ErrorCode.RECEIPT_NOT_DELETED)
    return {"success": True}


@router.delete("/{receipt_id}/permanent")
async def permanent_delete_receipt(receipt_id: str, user=Depends(require_roles('admin'))):
    result = await db.receipts.delete_one({"id": receipt_id, "deleted_at": {"$ne": None}})
    if result.deleted_count == 0:
        raise api_error(404, ErrorCode.RECEIPT_NOT_DELETED)
    logger.info(f"Receipt {receipt_id} permanently deleted by {user.get('email')}")
    return {"success": True}


@router.get("/{receipt_id}/pdf")
async def receipt_pdf(receipt_id: str, download: bool = False, user=Depends(get_current_user)):
    """
    download=false: عرض مباشر في المتصفح
    download=true: حفظ الملف في مجلد مؤقت خاص بالطلب وتنزيله ثم حذفه
    """
    receipt = await _get_live_receipt(receipt_id, user)
    filename = receipt_pdf_filename(receipt)

    try:
        if download:
            os.makedirs(PDF_DIR, exist_ok=True)
            directory = tempfile.mkdtemp(prefix="receipt_", dir=PDF_DIR)
            path = save_receipt_pdf(receipt, directory)
            return FileResponse(
                path, media_type="application/pdf", filename=filename,
                background=BackgroundTask(shutil.rmtree, directory, ignore_errors=True),
            )
        return StreamingResponse(
            io.BytesIO(generate_receipt_pdf(receipt)),
            media_type="application/pdf",
            headers={"Content-Disposition": content_disposition(filename)}
        )
    except Exception:
        logger.exception(f"PDF generation failed for receipt {receipt_id}")
        raise api_error(500, ErrorCode.RECEIPT_PDF_FAILED)
