"""
Listing Content Generator - مولّد محتوى الإعلانات
============================================================
Builds six listing texts from one property record:
- Property Finder  EN / AR : long structured text, bullet sections, no emojis
- Instagram        EN / AR : short caption, emoji led, hashtags at the end
- Website          EN / AR : SEO prose with a dash list of key features

Deterministic: the same input always gives the same output. Arabic text is
written from its own templates and the curated tables in listing_vocabulary;
digits stay Western in both languages.
"""
import math
import re
from types import MappingProxyType

from models.property import PropertyInput, GeneratedContent
from services.listing_vocabulary import (
    VILLA_TYPES,
    ROAD_TYPES,
    LAND_TYPES,
    LISTING_TYPES_AR,
    translate_property_type,
    translate_category,
    translate_furnishing,
    translate_amenity,
    translate_location,
    currency_label_en,
    currency_label_ar,
    amenity_emoji,
)

INSTAGRAM_MAX_AMENITIES = 5

HASHTAGS_EN = ("#RealEstate", "#Bahrain", "#CarltonRealEstate", "#CarltonBahrain")
HASHTAGS_AR = ("#عقارات", "#البحرين", "#كارلتون_العقارية")

PURPOSE_HASHTAG_EN = MappingProxyType({
    "Sale": "#PropertyForSale",
    "Rent": "#PropertyForRent",
    "Investment": "#RealEstateInvestment",
})
PURPOSE_HASHTAG_AR = MappingProxyType({
    "Sale": "#عقار_للبيع",
    "Rent": "#عقار_للإيجار",
    "Investment": "#استثمار_عقاري",
})


# ============================================================
# BEDROOM / BATHROOM PHRASES
# keyed by (has_bedrooms, has_bathrooms); (False, False) has no phrase
# ============================================================

BED_BATH_LINE_EN = MappingProxyType({
    (True, True): "• {bedrooms} Bedrooms | {bathrooms} Bathrooms",
    (True, False): "• {bedrooms} Bedrooms",
    (False, True): "• {bathrooms} Bathrooms",
})
BED_BATH_LINE_AR = MappingProxyType({
    (True, True): "• {bedrooms} غرف نوم | {bathrooms} حمامات",
    (True, False): "• {bedrooms} غرف نوم",
    (False, True): "• {bathrooms} حمامات",
})

BED_BATH_SHORT_EN = MappingProxyType({
    (True, True): "🛏️ {bedrooms} BR | {bathrooms} BA",
    (True, False): "🛏️ {bedrooms} BR",
    (False, True): "🚿 {bathrooms} BA",
})
BED_BATH_SHORT_AR = MappingProxyType({
    (True, True): "🛏️ {bedrooms} غرف نوم | {bathrooms} حمام",
    (True, False): "🛏️ {bedrooms} غرف نوم",
    (False, True): "🚿 {bathrooms} حمام",
})

BED_BATH_SENTENCE_EN = MappingProxyType({
    (True, True): "It features {bedrooms} spacious bedrooms and {bathrooms} modern bathrooms.",
    (True, False): "It features {bedrooms} spacious bedrooms.",
    (False, True): "It features {bathrooms} modern bathrooms.",
})
BED_BATH_SENTENCE_AR = MappingProxyType({
    (True, True): "ويضم {bedrooms} غرف نوم واسعة و{bathrooms} حمامات عصرية.",
    (True, False): "ويضم {bedrooms} غرف نوم واسعة.",
    (False, True): "ويضم {bathrooms} حمامات عصرية.",
})


# Optional detail lines: field, property types that show it, English, Arabic
DETAIL_FIELDS = (
    ("building_size", VILLA_TYPES, "Built-up Area: {} sqm", "المساحة المبنية: {} متر مربع"),
    ("number_of_roads", ROAD_TYPES, "Number of Roads: {}", "عدد الشوارع: {}"),
    ("land_classification", LAND_TYPES, "Land Classification: {}", "تصنيف الأرض: {}"),
    ("number_of_entrances", VILLA_TYPES, "Entrances: {}", "المداخل: {}"),
    ("number_of_family_halls", VILLA_TYPES, "Family Halls: {}", "صالات العائلة: {}"),
    ("number_of_living_areas", VILLA_TYPES, "Living Areas: {}", "مناطق المعيشة: {}"),
)


# ============================================================
# HELPERS
# ============================================================

def _has(value) -> bool:
    return bool(value and str(value).strip())


def format_price(price) -> str:
    """150000 -> '150,000'; up to three decimals kept; non-numeric -> 'NaN'"""
    try:
        value = float(str(price).replace(",", "").strip())
    except ValueError:
        return "NaN"
    if not math.isfinite(value):
        return "NaN"
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def normalize_whitespace(text: str) -> str:
    """Trim, blank out whitespace-only lines, collapse 3+ newlines to 2"""
    lines = [line.rstrip() for line in text.strip().split("\n")]
    text = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", text)


def _join_sections(*sections) -> str:
    """Each section is a list of lines; None / empty lines are dropped, empty sections vanish"""
    blocks = []
    for section in sections:
        lines = [line for line in section if line]
        if lines:
            blocks.append("\n".join(lines))
    return normalize_whitespace("\n\n".join(blocks))


def _bed_bath(table, prop: PropertyInput):
    key = (_has(prop.bedrooms), _has(prop.bathrooms))
    template = table.get(key)
    if template is None:
        return None
    return template.format(bedrooms=prop.bedrooms.strip(), bathrooms=prop.bathrooms.strip())


def _purpose(prop: PropertyInput) -> str:
    if prop.category == "Investment":
        return "Investment"
    return "Rent" if prop.listing_type == "Rent" else "Sale"


def _first_sentence(text: str) -> str:
    return text.split(".")[0].strip()


def _detail_lines(prop: PropertyInput, lang: str) -> list:
    """Villa / land specific lines without bullets"""
    lines = []
    # size is the plot when a villa also has a built-up area
    if prop.property_type in VILLA_TYPES and _has(prop.building_size) and _has(prop.size):
        size = prop.size.strip()
        lines.append(f"Plot Size: {size} sqm" if lang == "en" else f"مساحة الأرض: {size} متر مربع")
    for field, types, label_en, label_ar in DETAIL_FIELDS:
        value = getattr(prop, field)
        if prop.property_type in types and _has(value):
            lines.append((label_en if lang == "en" else label_ar).format(value.strip()))

    if prop.property_type in VILLA_TYPES:
        internal = prop.number_of_internal_kitchens.strip()
        external = prop.number_of_external_kitchens.strip()
        if prop.kitchen_type == "Both" and (internal or external):
            if lang == "en":
                lines.append(f"Kitchens: {internal or '0'} Internal, {external or '0'} External")
            else:
                lines.append(f"المطابخ: {internal or '0'} داخلي، {external or '0'} خارجي")
        elif prop.kitchen_type == "Internal" and internal:
            lines.append(f"Internal Kitchens: {internal}" if lang == "en" else f"المطابخ الداخلية: {internal}")
        elif prop.kitchen_type == "External" and external:
            lines.append(f"External Kitchens: {external}" if lang == "en" else f"المطابخ الخارجية: {external}")
        if prop.outside_quarters:
            lines.append("Outside Quarters: Yes" if lang == "en" else "ملحق خارجي: نعم")
    return lines


class _Context:
    """Values shared by every channel, computed once per property"""

    def __init__(self, prop: PropertyInput):
        self.prop = prop
        self.purpose = _purpose(prop)
        self.property_type = prop.property_type or "Property"
        self.type_ar = translate_property_type(prop.property_type)
        self.category_ar = translate_category(prop.category)
        self.furnishing_ar = translate_furnishing(prop.furnishing_status)
        self.location = prop.location.strip()
        self.location_ar = translate_location(self.location)
        self.purpose_ar = LISTING_TYPES_AR[self.purpose]
        self.size = prop.size.strip()
        self.is_rent = self.purpose == "Rent"

        self.price_en = None
        self.price_ar = None
        if _has(prop.price):
            amount = format_price(prop.price)
            self.price_en = f"{currency_label_en(prop.currency)} {amount}"
            self.price_ar = f"{amount} {currency_label_ar(prop.currency)}"

        self.ewa_en = "EWA included" if prop.ewa_included else "EWA not included"
        self.ewa_ar = "شامل الكهرباء والماء" if prop.ewa_included else "غير شامل الكهرباء والماء"
        self.amenities = [a for a in prop.amenities if a]
        self.usp = prop.unique_selling_points.strip()


# ============================================================
# PROPERTY FINDER
# ============================================================

def _property_finder_en(ctx: _Context) -> str:
    prop = ctx.prop
    title = f"{ctx.property_type} for {ctx.purpose}"
    if _has(prop.bedrooms):
        title = f"{prop.bedrooms.strip()}-Bedroom {title}"
    if ctx.location:
        title += f" in {ctx.location}"
    if ctx.size:
        title += f" | {ctx.size} SQM"
    if prop.furnishing_status:
        title += f" | {prop.furnishing_status}"

    intro = f"We are pleased to present this distinguished {ctx.property_type.lower()}"
    if ctx.location:
        intro += f" located in {ctx.location}"
    intro += ", an exceptional "
    intro += f"{prop.category.lower()} opportunity." if prop.category else "opportunity."

    purpose_text = {"Sale": "For Sale", "Rent": "For Rent", "Investment": "Investment Opportunity"}[ctx.purpose]
    details = [
        "PROPERTY DETAILS",
        f"• Property Type: {ctx.property_type}",
        f"• Category: {prop.category}" if prop.category else None,
        f"• Location: {ctx.location}" if ctx.location else None,
        f"• Purpose: {purpose_text}",
        _bed_bath(BED_BATH_LINE_EN, prop),
        f"• Total Area: {ctx.size} sqm" if ctx.size else None,
    ]
    details += [f"• {line}" for line in _detail_lines(prop, "en")]
    details += [
        f"• Furnishing: {prop.furnishing_status}" if prop.furnishing_status else None,
        f"• {ctx.ewa_en}",
    ]

    amenities = ["AMENITIES & FEATURES"] + [f"• {a}" for a in ctx.amenities] if ctx.amenities else []
    highlights = ["ADDITIONAL HIGHLIGHTS", ctx.usp] if ctx.usp else []
    price = []
    if ctx.price_en:
        label = "Monthly Rent" if ctx.is_rent else "Asking Price"
        price = ["PRICE", f"{label}: {ctx.price_en}"]

    closing = [
        "For further information, property viewings, or to discuss this opportunity, "
        "please contact our property consultants at your earliest convenience."
    ]
    return _join_sections([title], [intro], details, amenities, highlights, price, closing)


def _property_finder_ar(ctx: _Context) -> str:
    prop = ctx.prop
    title = ctx.type_ar
    if _has(prop.bedrooms):
        title += f" {prop.bedrooms.strip()} غرف نوم"
    title += f" {ctx.purpose_ar}"
    if ctx.location_ar:
        title += f" في {ctx.location_ar}"
    if ctx.size:
        title += f" | {ctx.size} متر مربع"
    if ctx.furnishing_ar:
        title += f" | {ctx.furnishing_ar}"

    intro = f"يسرنا أن نقدم لكم هذا {ctx.type_ar} المتميز"
    if ctx.location_ar:
        intro += f" الواقع في {ctx.location_ar}"
    intro += "."
    if ctx.category_ar:
        intro += f" يمثل هذا العقار فرصة استثنائية في القطاع ال{ctx.category_ar}."

    purpose_text = {"Sale": "للبيع", "Rent": "للإيجار", "Investment": "فرصة استثمارية"}[ctx.purpose]
    details = [
        "تفاصيل العقار",
        f"• نوع العقار: {ctx.type_ar}",
        f"• الفئة: {ctx.category_ar}" if ctx.category_ar else None,
        f"• الموقع: {ctx.location_ar}" if ctx.location_ar else None,
        f"• الغرض: {purpose_text}",
        _bed_bath(BED_BATH_LINE_AR, prop),
        f"• المساحة الإجمالية: {ctx.size} متر مربع" if ctx.size else None,
    ]
    details += [f"• {line}" for line in _detail_lines(prop, "ar")]
    details += [
        f"• التأثيث: {ctx.furnishing_ar}" if ctx.furnishing_ar else None,
        f"• {ctx.ewa_ar}",
    ]

    amenities = ["المرافق والمميزات"] + [f"• {translate_amenity(a)}" for a in ctx.amenities] if ctx.amenities else []
    highlights = ["مميزات إضافية", ctx.usp] if ctx.usp else []
    price = []
    if ctx.price_ar:
        label = "الإيجار الشهري" if ctx.is_rent else "السعر المطلوب"
        price = ["السعر", f"{label}: {ctx.price_ar}"]

    closing = ["للمزيد من المعلومات أو لترتيب موعد معاينة، يرجى التواصل مع مستشاري العقارات لدينا في أقرب وقت ممكن."]
    return _join_sections([title], [intro], details, amenities, highlights, price, closing)


# ============================================================
# INSTAGRAM
# ============================================================

def _hashtags(fixed, purpose_tag, type_tag, location_tag) -> str:
    tags = [fixed[0]]
    if location_tag:
        tags.append(location_tag)
    tags.append(purpose_tag)
    if type_tag:
        tags.append(type_tag)
    tags.extend(fixed[1:])
    return " ".join(tags)


def _tag(text: str):
    stripped = re.sub(r"\s", "", text or "")
    return f"#{stripped}" if stripped else None


def _instagram_en(ctx: _Context) -> str:
    prop = ctx.prop
    headline = [f"🏡 {ctx.property_type.upper()} FOR {ctx.purpose.upper()}"]
    facts = [
        f"📍 {ctx.location}" if ctx.location else None,
        _bed_bath(BED_BATH_SHORT_EN, prop),
        f"📐 {ctx.size} sqm" if ctx.size else None,
        f"🛋️ {prop.furnishing_status}" if prop.furnishing_status else None,
        "⚡💧 EWA included" if prop.ewa_included else None,
    ]
    if ctx.price_en:
        facts.append(f"💰 {ctx.price_en}" + (" / month" if ctx.is_rent else ""))

    top = ctx.amenities[:INSTAGRAM_MAX_AMENITIES]
    highlights = ["✨ Highlights:"] + [f"{amenity_emoji(a)} {a}" for a in top] if top else []
    usp = [f"🌟 {_first_sentence(ctx.usp)}"] if ctx.usp else []

    tags = _hashtags(HASHTAGS_EN, PURPOSE_HASHTAG_EN[ctx.purpose], _tag(prop.property_type), _tag(ctx.location))
    return _join_sections(headline, facts, highlights, usp, ["📩 DM us for more details!"], [tags])


def _instagram_ar(ctx: _Context) -> str:
    prop = ctx.prop
    headline = [f"🏡 {ctx.type_ar} {ctx.purpose_ar}"]
    facts = [
        f"📍 {ctx.location_ar}" if ctx.location_ar else None,
        _bed_bath(BED_BATH_SHORT_AR, prop),
        f"📐 {ctx.size} م²" if ctx.size else None,
        f"🛋️ {ctx.furnishing_ar}" if ctx.furnishing_ar else None,
        "⚡💧 شامل الكهرباء والماء" if prop.ewa_included else None,
    ]
    if ctx.price_ar:
        facts.append(f"💰 {ctx.price_ar}" + (" شهرياً" if ctx.is_rent else ""))

    top = ctx.amenities[:INSTAGRAM_MAX_AMENITIES]
    highlights = ["✨ المميزات:"] + [f"{amenity_emoji(a)} {translate_amenity(a)}" for a in top] if top else []
    usp = [f"🌟 {_first_sentence(ctx.usp)}"] if ctx.usp else []

    type_tag = _tag(ctx.type_ar) if prop.property_type else None
    tags = _hashtags(HASHTAGS_AR, PURPOSE_HASHTAG_AR[ctx.purpose], type_tag, _tag(ctx.location_ar))
    return _join_sections(headline, facts, highlights, usp, ["📩 راسلنا للمزيد من التفاصيل!"], [tags])


# ============================================================
# WEBSITE
# ============================================================

def _website_en(ctx: _Context) -> str:
    prop = ctx.prop
    heading = f"{ctx.property_type} for {ctx.purpose}"
    if ctx.location:
        heading += f" in {ctx.location}"
    if prop.category:
        heading += f" | {prop.category} Property"

    intro = f"Discover this remarkable {ctx.property_type.lower()}"
    if ctx.location:
        intro += f" situated in {ctx.location}, one of the most sought-after locations in the region"
    intro += "."
    if ctx.size:
        intro += f" The property spans {ctx.size} square meters."
    sentence = _bed_bath(BED_BATH_SENTENCE_EN, prop)
    if sentence:
        intro += f" {sentence}"

    features = [
        "Key Features:",
        f"- Property Type: {ctx.property_type}",
        f"- Category: {prop.category}" if prop.category else None,
        f"- Total Area: {ctx.size} sqm" if ctx.size else None,
        f"- Bedrooms: {prop.bedrooms.strip()}" if _has(prop.bedrooms) else None,
        f"- Bathrooms: {prop.bathrooms.strip()}" if _has(prop.bathrooms) else None,
    ]
    features += [f"- {line}" for line in _detail_lines(prop, "en")]
    features += [
        f"- Furnishing: {prop.furnishing_status}" if prop.furnishing_status else None,
        f"- Utilities: {ctx.ewa_en}",
    ]

    amenities = ["Amenities Include:"] + [f"- {a}" for a in ctx.amenities] if ctx.amenities else []
    special = [f"Special Features: {ctx.usp}"] if ctx.usp else []

    seeking = f"quality {prop.category.lower()} real estate" if prop.category else "quality real estate"
    where = f" in {ctx.location}" if ctx.location else ""
    if ctx.price_en and ctx.is_rent:
        value = f"Available at {ctx.price_en} per month, this property represents excellent value for those seeking {seeking}{where}."
    elif ctx.price_en:
        value = f"Listed at {ctx.price_en}, this property represents excellent value for those seeking {seeking}{where}."
    else:
        value = f"This property represents excellent value for those seeking {seeking}{where}."

    closing = ["Contact our team today for more information or to arrange a private viewing."]
    return _join_sections([heading], [intro], features, amenities, special, [value], closing)


def _website_ar(ctx: _Context) -> str:
    prop = ctx.prop
    heading = f"{ctx.type_ar} {ctx.purpose_ar}"
    if ctx.location_ar:
        heading += f" في {ctx.location_ar}"
    if ctx.category_ar:
        heading += f" | عقار {ctx.category_ar}"

    intro = f"اكتشف هذا {ctx.type_ar} الرائع"
    if ctx.location_ar:
        intro += f" الواقع في {ctx.location_ar}، إحدى أكثر المناطق المرغوبة في المنطقة"
    intro += "."
    if ctx.size:
        intro += f" يمتد العقار على مساحة {ctx.size} متر مربع."
    sentence = _bed_bath(BED_BATH_SENTENCE_AR, prop)
    if sentence:
        intro += f" {sentence}"

    features = [
        "المواصفات الرئيسية:",
        f"- نوع العقار: {ctx.type_ar}",
        f"- الفئة: {ctx.category_ar}" if ctx.category_ar else None,
        f"- المساحة الإجمالية: {ctx.size} متر مربع" if ctx.size else None,
        f"- غرف النوم: {prop.bedrooms.strip()}" if _has(prop.bedrooms) else None,
        f"- الحمامات: {prop.bathrooms.strip()}" if _has(prop.bathrooms) else None,
    ]
    features += [f"- {line}" for line in _detail_lines(prop, "ar")]
    features += [
        f"- التأثيث: {ctx.furnishing_ar}" if ctx.furnishing_ar else None,
        f"- المرافق: {ctx.ewa_ar}",
    ]

    amenities = ["المرافق تشمل:"] + [f"- {translate_amenity(a)}" for a in ctx.amenities] if ctx.amenities else []
    special = [f"مميزات خاصة: {ctx.usp}"] if ctx.usp else []

    seeking = f"عقار {ctx.category_ar} عالي الجودة" if ctx.category_ar else "عقار عالي الجودة"
    where = f" في {ctx.location_ar}" if ctx.location_ar else ""
    if ctx.price_ar and ctx.is_rent:
        value = f"متاح بإيجار شهري {ctx.price_ar}، يمثل هذا العقار قيمة ممتازة لمن يبحث عن {seeking}{where}."
    elif ctx.price_ar:
        value = f"مدرج بسعر {ctx.price_ar}، يمثل هذا العقار قيمة ممتازة لمن يبحث عن {seeking}{where}."
    else:
        value = f"يمثل هذا العقار قيمة ممتازة لمن يبحث عن {seeking}{where}."

    closing = ["تواصل مع فريقنا اليوم للحصول على مزيد من المعلومات أو لترتيب معاينة خاصة."]
    return _join_sections([heading], [intro], features, amenities, special, [value], closing)


# ============================================================
# MAIN
# ============================================================

def generate_content(prop: PropertyInput) -> GeneratedContent:
    """Generate all listing texts for a property. Never raises on missing fields."""
    ctx = _Context(prop)

    title_en = f"{ctx.property_type} for {ctx.purpose}"
    if ctx.location:
        title_en += f" in {ctx.location}"
    title_ar = f"{ctx.type_ar} {ctx.purpose_ar}"
    if ctx.location_ar:
        title_ar += f" في {ctx.location_ar}"

    return GeneratedContent(
        property_finder_title_en=title_en,
        property_finder_title_ar=title_ar,
        property_finder_en=_property_finder_en(ctx),
        property_finder_ar=_property_finder_ar(ctx),
        instagram_en=_instagram_en(ctx),
        instagram_ar=_instagram_ar(ctx),
        website_en=_website_en(ctx),
        website_ar=_website_ar(ctx),
    )
