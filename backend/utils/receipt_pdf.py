"""
Receipt PDF Generator - سند القبض (عمولة / عربون)
============================================================
- صفحة واحدة A4 عمودية فقط
- Fixed positions reproducing the paper receipt voucher
- All coordinates in mm measured from the top-left corner
- Header bar 0-30, footer band from 260, bottom bar from 287
- invariant=1: same receipt -> same bytes
"""
import io
import logging
import os
import re
from urllib.parse import quote

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
import arabic_reshaper
from bidi.algorithm import get_display

from utils.branches import get_branch_name

logger = logging.getLogger(__name__)

# Constants
PAGE_WIDTH, PAGE_HEIGHT = A4
LEFT = 10           # mm
RIGHT = 200         # mm
CONTENT_WIDTH = RIGHT - LEFT

HEADER_HEIGHT = 30
BANNER_Y = 33
FOOTER_Y = 260
BOTTOM_BAR_Y = 287

# Footer band 260-287: info boxes, signature cells, disclaimer
INFO_BOX_HEIGHT = 12
SIGNATURE_Y = 273
SIGNATURE_HEIGHT = 8
DISCLAIMER_Y = 283
FOOTER_BOX_WIDTH = 60

# Checkbox rows: x = CHECKBOX_BASE_X + i * CHECKBOX_STRIDE
CHECKBOX_SIZE = 3.5
CHECKBOX_BASE_X = 50
CHECKBOX_STRIDE = 30
PAYMENT_METHOD_Y = 88
PROPERTY_TYPE_Y = 98
PAID_BY_Y = 108
TRANSACTION_TYPE_Y = 108
CHEQUE_NUMBER_X = 165

# Colors
NAVY = colors.Color(0.118, 0.227, 0.373)  # #1E3A5F
LIGHT_GRAY = colors.Color(0.95, 0.95, 0.95)
BORDER_GRAY = colors.Color(0.8, 0.8, 0.8)
TEXT_GRAY = colors.Color(0.4, 0.4, 0.45)
RED = colors.Color(0.75, 0.1, 0.1)

BRAND_EN = "CARLTON REAL ESTATE"
BRAND_AR = "كارلتون العقارية"
BRAND_FOOTER = "CARLTON REAL ESTATE W.L.L.  |  KINGDOM OF BAHRAIN"

BANNERS = {
    "commission": ("COMMISSION AMOUNT", "مبلغ العمولة"),
    "deposit": ("DEPOSIT AMOUNT", "مبلغ العربون"),
}

# (value, English label, Arabic label) - value compared by exact equality
PAYMENT_METHOD_OPTIONS = (
    ("BENEFIT", "BENEFIT", "بنفت"),
    ("BANK TT", "BANK TT", "تحويل بنكي"),
    ("CASH", "CASH", "نقداً"),
    ("CHEQUE", "CHEQUE", "شيك"),
)
PROPERTY_TYPE_OPTIONS = (
    ("LAND", "LAND", "أرض"),
    ("VILLA", "VILLA", "فيلا"),
    ("FLAT", "FLAT", "شقة"),
    ("BUILDING", "BUILDING", "مبنى"),
    ("OTHER", "OTHER", "أخرى"),
)
PAID_BY_OPTIONS = (
    ("BUYER", "BUYER", "المشتري"),
    ("SELLER", "SELLER", "البائع"),
    ("LANDLORD", "LANDLORD", "المالك"),
    ("LANDLORD REP.", "LANDLORD REP.", "ممثل المالك"),
)
TRANSACTION_TYPE_OPTIONS = (
    ("HOLDING DEPOSIT", "HOLDING DEPOSIT", "عربون حجز"),
    ("PARTIAL PAYMENT", "PARTIAL PAYMENT", "دفعة جزئية"),
)

# Deposit block: five rows, 4/4/4/5/5 fields = 22
DEPOSIT_ROWS = (
    (116, (
        ("property_details", "PROPERTY DETAILS", "تفاصيل العقار"),
        ("title_number", "TITLE No", "رقم الوثيقة"),
        ("case_number", "CASE No", "رقم الحالة"),
        ("plot_number", "PLOT No", "رقم القطعة"),
    )),
    (128, (
        ("property_size", "PROPERTY SIZE", "مساحة العقار"),
        ("size_m2", "SIZE (M2)", "المساحة بالمتر"),
        ("size_f2", "SIZE (F2)", "المساحة بالقدم"),
        ("number_of_roads", "No OF ROADS", "عدد الشوارع"),
    )),
    (140, (
        ("reservation_amount", "RESERVATION AMOUNT", "مبلغ الحجز"),
        ("price_per_m2", "PRICE PER M2", "سعر المتر"),
        ("price_per_f2", "PRICE PER F2", "سعر القدم"),
        ("total_sales_price", "TOTAL SALES PRICE", "إجمالي سعر البيع"),
    )),
    (152, (
        ("property_address", "ADDRESS", "عنوان العقار"),
        ("unit_number", "UNIT No", "رقم الوحدة"),
        ("building_number", "BLDG No", "رقم المبنى"),
        ("road_number", "ROAD No", "رقم الطريق"),
        ("block_number", "BLOCK No", "رقم المجمع"),
    )),
    (164, (
        ("property_location", "LOCATION", "موقع العقار"),
        ("land_number", "LAND No", "رقم الأرض"),
        ("project_name", "PROJECT", "اسم المشروع"),
        ("area_name", "AREA", "المنطقة"),
        ("governorate", "GOVERNORATE", "المحافظة"),
    )),
)
FIELD_GAP = 3

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")

COMMISSION_DISCLOSURE_Y = 180
COMMISSION_DISCLOSURE_EN = "TOTAL BUYER COMMISSION (2% OF THE SALES PRICE + 10% VAT)"
COMMISSION_DISCLOSURE_AR = "إجمالي عمولة المشتري (2% من سعر البيع + 10% ضريبة القيمة المضافة)"

DISCLAIMER_EN = "All cheques are subject to realization. This receipt is void if the cheque is dishonored."
DISCLAIMER_AR = "جميع الشيكات خاضعة للتحصيل. يعتبر هذا السند لاغياً في حال ارتجاع الشيك."

# Font Registration - تسجيل الخطوط العربية
FONTS_DIR = os.environ.get(
    'FONTS_DIR', os.path.join(os.path.dirname(os.path.dirname(__file__)), 'fonts')
)

ARABIC_FONT = 'Helvetica'
ARABIC_FONT_BOLD = 'Helvetica-Bold'
ENGLISH_FONT = 'Helvetica'
ENGLISH_FONT_BOLD = 'Helvetica-Bold'


def register_arabic_fonts():
    """تسجيل أول خط عربي متوفر - NotoNaskh ثم NotoSans"""
    global ARABIC_FONT, ARABIC_FONT_BOLD

    font_pairs = [
        ('NotoNaskhArabic', 'NotoNaskhArabic-Regular.ttf', 'NotoNaskhArabic-Bold.ttf'),
        ('NotoSansArabic', 'NotoSansArabic-Regular.ttf', 'NotoSansArabic-Bold.ttf'),
    ]

    for font_name, regular_file, bold_file in font_pairs:
        regular_path = os.path.join(FONTS_DIR, regular_file)
        bold_path = os.path.join(FONTS_DIR, bold_file)
        if not os.path.exists(regular_path):
            continue
        try:
            pdfmetrics.registerFont(TTFont(font_name, regular_path))
            # Fallback: use regular as bold
            bold_source = bold_path if os.path.exists(bold_path) else regular_path
            pdfmetrics.registerFont(TTFont(f'{font_name}Bold', bold_source))
        except Exception as e:
            logger.warning(f"Failed to register {font_name}: {e}")
            continue
        ARABIC_FONT = font_name
        ARABIC_FONT_BOLD = f'{font_name}Bold'
        logger.info(f"Arabic font set to: {font_name}")
        return True

    logger.warning(f"No Arabic font found in {FONTS_DIR}, falling back to Helvetica")
    return False


_fonts_registered = register_arabic_fonts()


def has_arabic(text):
    if not text:
        return False
    return any('\u0600' <= ch <= '\u06FF' for ch in str(text))


def reshape_arabic(text):
    """تحويل النص العربي للعرض الصحيح"""
    if not text:
        return ''
    return get_display(arabic_reshaper.reshape(str(text)))


def format_value(value) -> str:
    """None -> ''; amounts -> 1,234.500 (three decimals for BD); anything else as text"""
    if value is None:
        return ''
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{value:,.3f}"
    return str(value)


def _y(y_mm):
    """Top-left mm -> reportlab points from the bottom"""
    return PAGE_HEIGHT - y_mm * mm


def _value_font(text):
    return ARABIC_FONT if has_arabic(text) else ENGLISH_FONT


def _visual(text):
    return reshape_arabic(text) if has_arabic(text) else text


# ============================================================
# PRIMITIVES
# ============================================================

def draw_field_row(c, label_en, label_ar, value, x, y, width):
    """
    One labelled field:
      y     Arabic caption, right aligned
      y+4   English label, bold
      y+6   value baseline, after the English label
      y+7   rule across the field width
    """
    c.setFillColor(TEXT_GRAY)
    c.setFont(ARABIC_FONT, 6.5)
    c.drawRightString((x + width) * mm, _y(y), reshape_arabic(label_ar))

    c.setFillColor(colors.black)
    c.setFont(ENGLISH_FONT_BOLD, 7)
    c.drawString(x * mm, _y(y + 4), label_en)

    text = format_value(value)
    if text:
        value_x = x * mm + pdfmetrics.stringWidth(label_en, ENGLISH_FONT_BOLD, 7) + 3 * mm
        c.setFont(_value_font(text), 8)
        c.drawString(value_x, _y(y + 6), _visual(text))

    c.setStrokeColor(BORDER_GRAY)
    c.setLineWidth(0.5)
    c.line(x * mm, _y(y + 7), (x + width) * mm, _y(y + 7))


def draw_checkbox_group(c, label_en, label_ar, options, selected, y,
                        base_x=CHECKBOX_BASE_X, stride=CHECKBOX_STRIDE):
    """Bilingual caption at the left, then one box per option; filled when selected == value"""
    c.setFillColor(colors.black)
    c.setFont(ENGLISH_FONT_BOLD, 7)
    c.drawString(LEFT * mm, _y(y), label_en)
    c.setFont(ARABIC_FONT, 6.5)
    c.drawString(LEFT * mm, _y(y + 3.5), reshape_arabic(label_ar))

    c.setStrokeColor(NAVY)
    c.setLineWidth(0.6)
    for i, (value, option_en, option_ar) in enumerate(options):
        x = base_x + i * stride
        checked = selected == value
        c.setFillColor(NAVY)
        c.rect(x * mm, _y(y), CHECKBOX_SIZE * mm, CHECKBOX_SIZE * mm,
               stroke=1, fill=1 if checked else 0)

        c.setFillColor(colors.black)
        label_x = (x + CHECKBOX_SIZE + 1.5) * mm
        c.setFont(ENGLISH_FONT, 7)
        c.drawString(label_x, _y(y), option_en)
        c.setFont(ARABIC_FONT, 6)
        c.drawString(label_x, _y(y + 3.5), reshape_arabic(option_ar))


def _box(c, x, y, width, height, fill_color=None):
    c.setStrokeColor(BORDER_GRAY)
    c.setLineWidth(0.6)
    if fill_color is not None:
        c.setFillColor(fill_color)
    c.rect(x * mm, _y(y + height), width * mm, height * mm,
           stroke=1, fill=1 if fill_color is not None else 0)


def _box_title(c, x, y, width, title_en, title_ar):
    c.setFillColor(NAVY)
    c.setFont(ENGLISH_FONT_BOLD, 7.5)
    c.drawString((x + 2) * mm, _y(y + 4.5), title_en)
    c.setFont(ARABIC_FONT_BOLD, 7)
    c.drawRightString((x + width - 2) * mm, _y(y + 4.5), reshape_arabic(title_ar))


def _wrapped(c, text, x, y, width, max_lines, size=7.5, leading=4):
    """Wrap free text inside a box, from y down; extra lines are dropped"""
    if not text:
        return
    font = _value_font(text)
    c.setFillColor(colors.black)
    c.setFont(font, size)
    lines = []
    for paragraph in str(text).split('\n'):
        lines.extend(simpleSplit(paragraph, font, size, width * mm) or [''])
    for i, line in enumerate(lines[:max_lines]):
        c.drawString(x * mm, _y(y + i * leading), _visual(line))


def _row_layout(count):
    """x / width of each field in a row filling the content width"""
    width = (CONTENT_WIDTH - FIELD_GAP * (count - 1)) / count
    return [(LEFT + i * (width + FIELD_GAP), width) for i in range(count)]


# ============================================================
# SECTIONS
# ============================================================

def _draw_header(c):
    c.setFillColor(NAVY)
    c.rect(0, _y(HEADER_HEIGHT), PAGE_WIDTH, HEADER_HEIGHT * mm, stroke=0, fill=1)

    c.setFillColor(colors.white)
    c.setFont(ENGLISH_FONT_BOLD, 16)
    c.drawString(LEFT * mm, _y(13), BRAND_EN)
    c.setFont(ARABIC_FONT_BOLD, 14)
    c.drawRightString(RIGHT * mm, _y(13), reshape_arabic(BRAND_AR))

    c.setFont(ENGLISH_FONT, 10)
    c.drawString(LEFT * mm, _y(23), "RECEIPT VOUCHER")
    c.setFont(ARABIC_FONT, 10)
    c.drawRightString(RIGHT * mm, _y(23), reshape_arabic("سند قبض"))


def _draw_banner(c, receipt_type):
    title_en, title_ar = BANNERS.get(receipt_type, ("", ""))
    c.setStrokeColor(NAVY)
    c.setFillColor(LIGHT_GRAY)
    c.rect(LEFT * mm, _y(BANNER_Y + 9), CONTENT_WIDTH * mm, 9 * mm, stroke=1, fill=1)

    c.setFillColor(NAVY)
    c.setFont(ENGLISH_FONT_BOLD, 11)
    c.drawString((LEFT + 3) * mm, _y(BANNER_Y + 6), title_en)
    c.setFont(ARABIC_FONT_BOLD, 11)
    c.drawRightString((RIGHT - 3) * mm, _y(BANNER_Y + 6), reshape_arabic(title_ar))


def _draw_common_fields(c, receipt):
    draw_field_row(c, "RECEIPT No", "رقم السند", receipt.get('receipt_number'), 10, 46, 60)
    draw_field_row(c, "PAYMENT DATE", "تاريخ الدفع", receipt.get('payment_date'), 75, 46, 60)
    draw_field_row(c, "CR / CPR No", "رقم السجل / البطاقة", receipt.get('client_id_number'), 140, 46, 60)

    draw_field_row(c, "CLIENT NAME", "اسم العميل", receipt.get('client_name'), 10, 56, 190)

    draw_field_row(c, "FULL AMOUNT DUE IN BD", "المبلغ المستحق بالدينار", receipt.get('full_amount_due_bd'), 10, 66, 60)
    draw_field_row(c, "AMOUNT PAID IN BD", "المبلغ المدفوع بالدينار", receipt.get('amount_paid_bd'), 75, 66, 60)
    draw_field_row(c, "BALANCE IN BD", "المبلغ المتبقي بالدينار", receipt.get('balance_amount_bd'), 140, 66, 60)

    draw_field_row(c, "AMOUNT PAID IN WORDS", "المبلغ المدفوع كتابةً", receipt.get('amount_paid_words'), 10, 76, 190)


def _draw_payment_method(c, receipt):
    method = receipt.get('payment_method')
    draw_checkbox_group(c, "PAYMENT METHOD", "طريقة الدفع", PAYMENT_METHOD_OPTIONS, method, PAYMENT_METHOD_Y)
    if method == "CHEQUE":
        cheque = format_value(receipt.get('cheque_number'))
        c.setFillColor(colors.black)
        c.setFont(ENGLISH_FONT_BOLD, 7)
        c.drawString(CHEQUE_NUMBER_X * mm, _y(PAYMENT_METHOD_Y), "CHEQUE No:")
        c.setFont(ENGLISH_FONT, 8)
        c.drawString((CHEQUE_NUMBER_X + 16) * mm, _y(PAYMENT_METHOD_Y), cheque)


def _draw_commission_block(c, receipt):
    draw_checkbox_group(c, "PAID BY", "مدفوع من", PAID_BY_OPTIONS, receipt.get('paid_by'), PAID_BY_Y)

    draw_field_row(c, "PAID AGAINST INVOICE No", "مقابل الفاتورة رقم", receipt.get('invoice_number'), 10, 116, 90)
    draw_field_row(c, "INVOICE DATE", "تاريخ الفاتورة", receipt.get('invoice_date'), 105, 116, 95)

    _box(c, LEFT, 128, CONTENT_WIDTH, 40)
    _box_title(c, LEFT, 128, CONTENT_WIDTH, "TRANSACTION DETAILS", "تفاصيل المعاملة")
    _wrapped(c, receipt.get('transaction_details'), LEFT + 3, 138, CONTENT_WIDTH - 6, max_lines=7)


def _draw_deposit_block(c, receipt):
    draw_checkbox_group(c, "TRANSACTION TYPE", "نوع المعاملة", TRANSACTION_TYPE_OPTIONS,
                        receipt.get('transaction_type'), TRANSACTION_TYPE_Y)

    for y, fields in DEPOSIT_ROWS:
        for (key, label_en, label_ar), (x, width) in zip(fields, _row_layout(len(fields))):
            draw_field_row(c, label_en, label_ar, receipt.get(key), x, y, width)

    y = COMMISSION_DISCLOSURE_Y
    c.setFillColor(NAVY)
    c.setFont(ENGLISH_FONT_BOLD, 7.5)
    c.drawString(LEFT * mm, _y(y), COMMISSION_DISCLOSURE_EN)
    c.setFont(ARABIC_FONT, 7)
    c.drawString(LEFT * mm, _y(y + 4), reshape_arabic(COMMISSION_DISCLOSURE_AR))
    c.setFillColor(colors.black)
    c.setFont(ENGLISH_FONT_BOLD, 9)
    c.drawRightString(RIGHT * mm, _y(y), f"BD {format_value(receipt.get('buyer_commission_bd'))}".rstrip())
    c.setStrokeColor(BORDER_GRAY)
    c.line(LEFT * mm, _y(y + 6), RIGHT * mm, _y(y + 6))


def _draw_info_boxes(c, receipt):
    y, height, width = FOOTER_Y, INFO_BOX_HEIGHT, FOOTER_BOX_WIDTH

    # شكراً
    _box(c, 10, y, width, height, fill_color=LIGHT_GRAY)
    c.setFillColor(NAVY)
    c.setFont(ENGLISH_FONT_BOLD, 8)
    c.drawCentredString(40 * mm, _y(y + 5.5), "THANK YOU FOR YOUR BUSINESS")
    c.setFont(ARABIC_FONT_BOLD, 8)
    c.drawCentredString(40 * mm, _y(y + 10), reshape_arabic("شكراً لتعاملكم معنا"))

    # الحسابات - ختم الفرع
    _box(c, 75, y, width, height)
    _box_title(c, 75, y, width, "ACCOUNTS", "الحسابات")
    c.setFillColor(colors.black)
    c.setFont(ENGLISH_FONT, 7.5)
    c.drawString(78 * mm, _y(y + 9.5), f"Branch: {get_branch_name(receipt.get('branch'))}")
    c.setFont(ENGLISH_FONT, 5.5)
    c.drawRightString(132 * mm, _y(y + 9.5), "STAMP")

    # ملاحظة خاصة
    _box(c, 140, y, width, height)
    _box_title(c, 140, y, width, "SPECIAL NOTE", "ملاحظة خاصة")
    _wrapped(c, receipt.get('special_note'), 143, y + 8, width - 6, max_lines=2, size=6.5, leading=3)


def _draw_signatures(c, receipt):
    cells = (
        (10, "CLIENT SIGNATURE", "توقيع العميل", None),
        (75, "ACCOUNTANT SIGNATURE", "توقيع المحاسب", None),
        (140, "AGENT NAME", "اسم الوسيط", receipt.get('agent_name')),
    )
    for x, title_en, title_ar, value in cells:
        _box(c, x, SIGNATURE_Y, FOOTER_BOX_WIDTH, SIGNATURE_HEIGHT)
        _box_title(c, x, SIGNATURE_Y - 1.5, FOOTER_BOX_WIDTH, title_en, title_ar)
        text = format_value(value)
        if text:
            c.setFillColor(colors.black)
            c.setFont(_value_font(text), 7.5)
            c.drawCentredString((x + FOOTER_BOX_WIDTH / 2) * mm, _y(SIGNATURE_Y + 7), _visual(text))


def _draw_disclaimer_and_bottom_bar(c):
    c.setFillColor(RED)
    c.setFont(ENGLISH_FONT, 6)
    c.drawCentredString(PAGE_WIDTH / 2, _y(DISCLAIMER_Y), DISCLAIMER_EN)
    c.setFont(ARABIC_FONT, 6)
    c.drawCentredString(PAGE_WIDTH / 2, _y(DISCLAIMER_Y + 2.7), reshape_arabic(DISCLAIMER_AR))

    c.setFillColor(NAVY)
    c.rect(0, 0, PAGE_WIDTH, (297 - BOTTOM_BAR_Y) * mm, stroke=0, fill=1)
    c.setFillColor(colors.white)
    c.setFont(ENGLISH_FONT_BOLD, 8)
    c.drawCentredString(PAGE_WIDTH / 2, _y(293), BRAND_FOOTER)


# ============================================================
# MAIN
# ============================================================

def draw_receipt(c, receipt: dict):
    """Draw one receipt on the current page; missing values render empty"""
    receipt_type = receipt.get('receipt_type')

    _draw_header(c)
    _draw_banner(c, receipt_type)
    _draw_common_fields(c, receipt)
    _draw_payment_method(c, receipt)
    draw_checkbox_group(c, "PROPERTY TYPE", "نوع العقار", PROPERTY_TYPE_OPTIONS,
                        receipt.get('property_type'), PROPERTY_TYPE_Y)

    if receipt_type == "commission":
        _draw_commission_block(c, receipt)
    elif receipt_type == "deposit":
        _draw_deposit_block(c, receipt)

    _draw_info_boxes(c, receipt)
    _draw_signatures(c, receipt)
    _draw_disclaimer_and_bottom_bar(c)


def receipt_pdf_filename(receipt: dict) -> str:
    """{type}_receipt_{number or id[:8]}.pdf, reduced to [A-Za-z0-9._-] so it is safe as a path and a header"""
    suffix = receipt.get('receipt_number') or (receipt.get('id') or '')[:8]
    name = f"{receipt.get('receipt_type')}_receipt_{suffix}.pdf"
    return _UNSAFE_FILENAME_CHARS.sub('_', name)


def content_disposition(filename: str, disposition: str = "inline") -> str:
    """Content-Disposition with an ASCII fallback and the RFC 5987 UTF-8 name"""
    fallback = _UNSAFE_FILENAME_CHARS.sub('_', filename)
    return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def generate_receipt_pdf(receipt: dict) -> bytes:
    """Render the receipt and return PDF bytes (inline preview)"""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    c.setTitle(receipt_pdf_filename(receipt))
    c.setAuthor(BRAND_EN)

    draw_receipt(c, receipt)
    c.showPage()
    c.save()

    pdf = buffer.getvalue()
    logger.info(f"Generated {receipt_pdf_filename(receipt)} ({len(pdf)} bytes)")
    return pdf


def save_receipt_pdf(receipt: dict, directory: str) -> str:
    """Render the receipt into directory and return the file path (download)"""
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, receipt_pdf_filename(receipt))
    with open(path, 'wb') as f:
        f.write(generate_receipt_pdf(receipt))
    return path
