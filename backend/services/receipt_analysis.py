"""
Receipt Analysis - تحليل السندات
============================================================
- الفلترة بالتاريخ (شامل اليوم كاملاً) وبالفرع
- البحث في السندات المحذوفة
- الإيرادات = مجموع amount_paid_bd (القيمة الفارغة = 0)
- الاتجاه الشهري لآخر 6 أشهر، الأقدم أولاً
- لا يتم تخزين - يحسب ديناميكياً من السندات المُمرّرة
"""

from datetime import date, datetime
from typing import Optional

UNKNOWN = "Unknown"
TREND_MONTHS = 6


def _parse_date(value) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def receipt_date(receipt: dict) -> Optional[date]:
    """تاريخ الدفع، وإلا تاريخ الإنشاء"""
    return _parse_date(receipt.get('payment_date') or receipt.get('created_at'))


def _amount(receipt: dict) -> float:
    return receipt.get('amount_paid_bd') or 0


def filter_receipts(receipts, from_date=None, to_date=None, branch=None) -> list:
    """
    Args:
        from_date / to_date: YYYY-MM-DD, both inclusive
        branch: branch id, None or 'all' for every branch

    A receipt whose date can't be parsed is never excluded by the date range.
    """
    start = _parse_date(from_date)
    end = _parse_date(to_date)

    result = []
    for receipt in receipts:
        day = receipt_date(receipt)
        if day is not None:
            if start and day < start:
                continue
            if end and day > end:
                continue
        if branch not in (None, 'all') and receipt.get('branch') != branch:
            continue
        result.append(receipt)
    return result


def search_receipts(receipts, query: str = "", receipt_type: str = "all", branch: str = "all") -> list:
    """بحث بالاسم / رقم السند / الوسيط / رقم الفاتورة - بدون حساسية لحالة الأحرف"""
    needle = (query or "").strip().lower()

    def matches(receipt):
        if not needle:
            return True
        for key in ('client_name', 'receipt_number', 'agent_name', 'invoice_number'):
            if needle in str(receipt.get(key) or '').lower():
                return True
        return False

    return [
        r for r in receipts
        if matches(r)
        and (receipt_type in (None, 'all') or r.get('receipt_type') == receipt_type)
        and (branch in (None, 'all') or r.get('branch') == branch)
    ]


def _month_start(year: int, month: int, back: int) -> date:
    index = year * 12 + (month - 1) - back
    return date(index // 12, index % 12 + 1, 1)


def _same_month(day: Optional[date], month_start: date) -> bool:
    return day is not None and (day.year, day.month) == (month_start.year, month_start.month)


def compute_analytics(receipts, now: datetime) -> dict:
    """Totals, breakdowns and the six-month trend for the given receipts"""
    commission = [r for r in receipts if r.get('receipt_type') == 'commission']
    deposit = [r for r in receipts if r.get('receipt_type') == 'deposit']

    total_revenue = sum(_amount(r) for r in receipts)

    payment_methods = {}
    property_types = {}
    branch_stats = {}
    agent_stats = {}
    for r in receipts:
        method = r.get('payment_method') or UNKNOWN
        payment_methods[method] = payment_methods.get(method, 0) + 1

        ptype = r.get('property_type') or UNKNOWN
        property_types[ptype] = property_types.get(ptype, 0) + 1

        for stats, key in ((branch_stats, r.get('branch')), (agent_stats, r.get('agent_name'))):
            entry = stats.setdefault(key or UNKNOWN, {"count": 0, "revenue": 0})
            entry["count"] += 1
            entry["revenue"] = round(entry["revenue"] + _amount(r), 3)

    # آخر 6 أشهر - الأقدم أولاً
    monthly = []
    for back in range(TREND_MONTHS - 1, -1, -1):
        start = _month_start(now.year, now.month, back)
        in_month = [r for r in receipts if _same_month(receipt_date(r), start)]
        monthly.append({
            "month": start.strftime("%b %Y"),
            "commission": round(sum(_amount(r) for r in in_month if r.get('receipt_type') == 'commission'), 3),
            "deposit": round(sum(_amount(r) for r in in_month if r.get('receipt_type') == 'deposit'), 3),
        })

    return {
        "total_receipts": len(receipts),
        "commission_count": len(commission),
        "deposit_count": len(deposit),
        "total_revenue": round(total_revenue, 3),
        "commission_revenue": round(sum(_amount(r) for r in commission), 3),
        "deposit_revenue": round(sum(_amount(r) for r in deposit), 3),
        "avg_receipt_value": round(total_revenue / len(receipts), 3) if receipts else 0,
        "payment_methods": payment_methods,
        "branch_stats": branch_stats,
        "agent_stats": agent_stats,
        "property_types": property_types,
        "monthly_data": monthly,
    }
