# Error Codes System for Carlton Real Estate Back Office
# نظام رموز الأخطاء

from datetime import datetime, timezone
import uuid

from fastapi import HTTPException

class ErrorCode:
    """نظام رموز الأخطاء الموحد"""

    # Authentication Errors (1xxx)
    AUTH_INVALID_CREDENTIALS = ("E1001", "Invalid email or password", "البريد الإلكتروني أو كلمة المرور غير صحيحة")
    AUTH_TOKEN_INVALID = ("E1003", "Invalid or expired token", "رمز الجلسة غير صالح")
    AUTH_ACCOUNT_DISABLED = ("E1004", "Account is disabled", "الحساب معطل")
    AUTH_RATE_LIMITED = ("E1005", "Too many login attempts", "عدد محاولات تسجيل الدخول تجاوز الحد المسموح")
    AUTH_WRONG_PASSWORD = ("E1006", "Current password is incorrect", "كلمة المرور الحالية غير صحيحة")

    # Receipt Errors (2xxx)
    RECEIPT_NOT_FOUND = ("E2001", "Receipt not found", "السند غير موجود")
    RECEIPT_DUPLICATE_NUMBER = ("E2002", "Receipt number already exists", "رقم السند موجود مسبقاً")
    RECEIPT_NOT_DELETED = ("E2003", "Receipt is not in the deleted list", "السند غير موجود في قائمة المحذوفات")
    RECEIPT_CHEQUE_REQUIRED = ("E2004", "Cheque number is required for cheque payments", "رقم الشيك مطلوب عند الدفع بالشيك")
    RECEIPT_PDF_FAILED = ("E2005", "Failed to generate receipt PDF", "فشل إنشاء ملف السند")
    RECEIPT_FILE_INVALID = ("E2006", "File type not allowed", "نوع الملف غير مسموح")
    RECEIPT_FILE_TOO_LARGE = ("E2007", "File is too large", "حجم الملف كبير جداً")

    # Listing Errors (3xxx)
    LISTING_NOT_FOUND = ("E3001", "Property description not found", "وصف العقار غير موجود")
    LISTING_NOT_DELETED = ("E3002", "Property description is not in the deleted list", "وصف العقار غير موجود في قائمة المحذوفات")
    LISTING_INVALID_AMENITIES = ("E3003", "Amenities not offered for this property type and category", "المرافق غير متاحة لهذا النوع والفئة")

    # User Errors (4xxx)
    USER_NOT_FOUND = ("E4001", "User not found", "المستخدم غير موجود")
    USER_EMAIL_EXISTS = ("E4002", "Email already in use", "البريد الإلكتروني مستخدم مسبقاً")
    USER_INVALID_ROLE = ("E4003", "Invalid role", "الدور غير صالح")
    USER_INVALID_BRANCH = ("E4004", "Invalid branch", "الفرع غير صالح")
    USER_WEAK_PASSWORD = ("E4005", "Password must be at least 6 characters", "كلمة المرور يجب أن تكون 6 أحرف على الأقل")

    # General Errors (9xxx)
    GENERAL_NOT_FOUND = ("E9001", "Resource not found", "المورد غير موجود")
    GENERAL_FORBIDDEN = ("E9002", "Access denied", "الوصول مرفوض")


def create_error_response(error_code: tuple, details: str = None, details_ar: str = None):
    """
    إنشاء استجابة خطأ موحدة

    Args:
        error_code: tuple من (code, message_en, message_ar)
        details: تفاصيل إضافية بالإنجليزية
        details_ar: تفاصيل إضافية بالعربية

    Returns:
        dict: استجابة الخطأ الموحدة
    """
    code, msg_en, msg_ar = error_code

    # معرف فريد للخطأ للرجوع إليه في السجلات
    error_id = f"{code}-{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6].upper()}"

    return {
        "error": True,
        "error_code": code,
        "error_id": error_id,
        "message": msg_en,
        "message_ar": msg_ar,
        "details": details,
        "details_ar": details_ar,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "support_message": f"If this error persists, contact IT support with reference: {error_id}",
        "support_message_ar": f"إذا استمر هذا الخطأ، تواصل مع الدعم الفني مع الرقم المرجعي: {error_id}"
    }


def api_error(status_code: int, error_code: tuple, details: str = None, details_ar: str = None):
    """HTTPException جاهز بجسم خطأ موحد"""
    return HTTPException(status_code=status_code, detail=create_error_response(error_code, details, details_ar))
