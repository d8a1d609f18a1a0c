"""
Listing Vocabulary - المفردات المعتمدة للإعلانات العقارية
============================================================
Controlled vocabulary offered on the listing form and the curated
English -> Arabic tables used by the content generator.

Translation is table driven on purpose: every Arabic phrase that can appear
in a generated listing is listed here and can be reviewed by branch staff.
Values missing from a table pass through untranslated.
"""
import re
from types import MappingProxyType


PROPERTY_TYPES = (
    "Land", "Villa", "Apartment", "Office", "Shop", "Store",
    "Land Planning", "Building", "Compound", "Farm", "Projects",
    "Factory", "Medical Facility",
)
CATEGORIES = ("Residential", "Commercial", "Investment")
LISTING_TYPES = ("Sale", "Rent")
FURNISHING_STATUSES = ("Furnished", "Semi-Furnished", "Unfurnished")
KITCHEN_TYPES = ("Internal", "External", "Both")

# Types whose extra fields show on the form
VILLA_TYPES = ("Villa",)
ROAD_TYPES = ("Land", "Land Planning", "Villa")
LAND_TYPES = ("Land", "Land Planning")


# ============================================================
# AMENITIES BY (PROPERTY TYPE, CATEGORY)
# ============================================================

FALLBACK_AMENITIES = (
    "Swimming Pool", "Gym", "Parking", "Security", "Garden",
    "Balcony", "Central AC", "Maid Room", "Storage", "Elevator",
    "City View", "Private Pool", "Smart Home", "Terrace", "Hospital", "Mosque",
)

_VILLA = (
    "Swimming Pool", "Private Pool", "Garden", "Maid Room", "Driver Room", "Majlis", "Central AC",
    "Covered Parking", "Storage", "Balcony", "Terrace", "Smart Home", "Security",
    "Sea View", "BBQ Area",
)
_APARTMENT = (
    "Swimming Pool", "Gym", "Parking", "Security", "Balcony", "Central AC",
    "Elevator", "Sea View", "City View", "Maid Room", "Storage", "Concierge",
    "Kids Play Area", "Sauna",
)
_COMPOUND = (
    "Swimming Pool", "Gym", "Parking", "Security", "Garden", "Kids Play Area",
    "Clubhouse", "Central AC", "BBQ Area", "Maid Room", "Mosque", "Supermarket",
)
_LAND_PLANNING = (
    "Infrastructure Ready", "Road Access", "Utilities Connected",
    "Subdivision Approved", "Sea View", "Mosque", "Near Schools",
)
_OFFICE = (
    "Parking", "Security", "Elevator", "Central AC", "Reception Area",
    "Meeting Rooms", "Pantry", "Fiber Internet", "City View", "Fitted Office",
)
_SHOP = (
    "Main Road Frontage", "Parking", "Storage", "Central AC", "Display Window",
    "High Footfall Area", "Mezzanine",
)
_STORE = (
    "Loading Bay", "Storage", "Security", "Parking", "High Ceiling",
    "Road Access", "Office Space",
)
_FARM = (
    "Garden", "Water Well", "Majlis", "Swimming Pool", "Farm House",
    "Livestock Area", "Road Access", "Storage",
)
_PROJECTS = (
    "Swimming Pool", "Gym", "Parking", "Security", "Elevator", "Central AC",
    "Sea View", "Kids Play Area", "Payment Plan", "Off-Plan",
)
_FACTORY = (
    "Loading Bay", "High Ceiling", "Office Space", "Power Supply", "Storage",
    "Security", "Parking", "Road Access", "Labour Accommodation",
)
_MEDICAL = (
    "Parking", "Elevator", "Central AC", "Reception Area", "Security",
    "Main Road Frontage", "Disabled Access", "Pharmacy Space",
)

AMENITY_VOCABULARY = MappingProxyType({
    ("Villa", "Residential"): _VILLA,
    ("Villa", "Investment"): _VILLA,
    ("Apartment", "Residential"): _APARTMENT,
    ("Apartment", "Investment"): _APARTMENT,
    ("Compound", "Residential"): _COMPOUND,
    ("Compound", "Investment"): _COMPOUND,
    ("Land", "Residential"): (
        "Corner Plot", "Road Access", "Utilities Connected", "Sea View",
        "Near Schools", "Mosque", "Hospital",
    ),
    ("Land", "Commercial"): (
        "Corner Plot", "Main Road Frontage", "Road Access", "Utilities Connected",
        "High Footfall Area", "Parking",
    ),
    ("Land", "Investment"): (
        "Corner Plot", "Main Road Frontage", "Road Access", "Utilities Connected",
        "Sea View", "Title Deed Ready",
    ),
    ("Land Planning", "Residential"): _LAND_PLANNING,
    ("Land Planning", "Investment"): _LAND_PLANNING,
    ("Office", "Commercial"): _OFFICE,
    ("Office", "Investment"): _OFFICE,
    ("Shop", "Commercial"): _SHOP,
    ("Store", "Commercial"): _STORE,
    ("Building", "Residential"): (
        "Elevator", "Parking", "Security", "Central AC", "Swimming Pool", "Gym",
        "Balcony", "Maid Room", "Storage",
    ),
    ("Building", "Commercial"): (
        "Elevator", "Parking", "Security", "Central AC", "Reception Area",
        "Main Road Frontage", "Fiber Internet",
    ),
    ("Building", "Investment"): (
        "Elevator", "Parking", "Security", "Central AC", "Fully Leased",
        "Main Road Frontage", "Swimming Pool", "Gym",
    ),
    ("Farm", "Residential"): _FARM,
    ("Farm", "Investment"): _FARM,
    ("Projects", "Residential"): _PROJECTS,
    ("Projects", "Commercial"): _PROJECTS,
    ("Projects", "Investment"): _PROJECTS,
    ("Factory", "Commercial"): _FACTORY,
    ("Factory", "Investment"): _FACTORY,
    ("Medical Facility", "Commercial"): _MEDICAL,
    ("Medical Facility", "Investment"): _MEDICAL,
})


def get_amenities(property_type: str, category: str) -> tuple:
    """Amenity labels offered for a (type, category) pair; generic list otherwise"""
    return AMENITY_VOCABULARY.get((property_type, category), FALLBACK_AMENITIES)


def is_valid_amenity_set(property_type: str, category: str, amenities) -> bool:
    allowed = set(get_amenities(property_type, category))
    return all(a in allowed for a in amenities)


# ============================================================
# ARABIC TABLES
# ============================================================

PROPERTY_TYPES_AR = MappingProxyType({
    "Villa": "فيلا",
    "Apartment": "شقة",
    "Land": "أرض",
    "Office": "مكتب",
    "Shop": "محل",
    "Store": "مخزن",
    "Building": "مبنى",
    "Compound": "مجمع",
    "Farm": "مزرعة",
    "Factory": "مصنع",
    "Medical Facility": "منشأة طبية",
    "Land Planning": "مخطط أرض",
    "Projects": "مشاريع",
})

CATEGORIES_AR = MappingProxyType({
    "Residential": "سكني",
    "Commercial": "تجاري",
    "Investment": "استثماري",
})

FURNISHING_AR = MappingProxyType({
    "Furnished": "مفروش",
    "Semi-Furnished": "نصف مفروش",
    "Unfurnished": "غير مفروش",
})

LISTING_TYPES_AR = MappingProxyType({
    "Sale": "للبيع",
    "Rent": "للإيجار",
    "Investment": "للاستثمار",
})

KITCHEN_TYPES_AR = MappingProxyType({
    "Internal": "داخلي",
    "External": "خارجي",
    "Both": "داخلي وخارجي",
})

AMENITIES_AR = MappingProxyType({
    "Swimming Pool": "مسبح",
    "Gym": "صالة رياضية",
    "Parking": "موقف سيارات",
    "Security": "أمن وحراسة",
    "Garden": "حديقة",
    "Balcony": "شرفة",
    "Central AC": "تكييف مركزي",
    "Maid Room": "غرفة خادمة",
    "Storage": "مخزن",
    "Elevator": "مصعد",
    "Sea View": "إطلالة بحرية",
    "City View": "إطلالة على المدينة",
    "Private Pool": "مسبح خاص",
    "Smart Home": "منزل ذكي",
    "Terrace": "تراس",
    "Hospital": "مستشفى",
    "Mosque": "مسجد",
    "Driver Room": "غرفة سائق",
    "Majlis": "مجلس",
    "Covered Parking": "موقف مظلل",
    "BBQ Area": "منطقة شواء",
    "Concierge": "خدمة الكونسيرج",
    "Kids Play Area": "منطقة ألعاب للأطفال",
    "Sauna": "ساونا",
    "Clubhouse": "نادي اجتماعي",
    "Supermarket": "سوبرماركت",
    "Corner Plot": "أرض على زاوية",
    "Road Access": "وصول مباشر للشارع",
    "Utilities Connected": "خدمات موصولة",
    "Near Schools": "بالقرب من المدارس",
    "Main Road Frontage": "واجهة على شارع رئيسي",
    "High Footfall Area": "منطقة ذات حركة عالية",
    "Title Deed Ready": "وثيقة الملكية جاهزة",
    "Infrastructure Ready": "بنية تحتية جاهزة",
    "Subdivision Approved": "تقسيم معتمد",
    "Reception Area": "منطقة استقبال",
    "Meeting Rooms": "غرف اجتماعات",
    "Pantry": "مطبخ صغير",
    "Fiber Internet": "إنترنت ألياف بصرية",
    "Fitted Office": "مكتب مجهز",
    "Display Window": "واجهة عرض",
    "Mezzanine": "ميزانين",
    "Loading Bay": "منصة تحميل",
    "High Ceiling": "سقف مرتفع",
    "Office Space": "مساحة مكتبية",
    "Fully Leased": "مؤجر بالكامل",
    "Water Well": "بئر ماء",
    "Farm House": "بيت مزرعة",
    "Livestock Area": "حظيرة مواشي",
    "Payment Plan": "خطة سداد",
    "Off-Plan": "على الخارطة",
    "Power Supply": "تغذية كهربائية",
    "Labour Accommodation": "سكن عمال",
    "Disabled Access": "مدخل لذوي الإعاقة",
    "Pharmacy Space": "مساحة صيدلية",
})

# Order matters: longer names are tried before their prefixes (Amwaj Islands / Amwaj)
LOCATIONS_AR = MappingProxyType({
    # Bahrain
    "Juffair": "الجفير",
    "Manama": "المنامة",
    "Seef": "السيف",
    "Riffa": "الرفاع",
    "Diyar Al Muharraq": "ديار المحرق",
    "Muharraq": "المحرق",
    "Amwaj Islands": "جزر أمواج",
    "Amwaj Island": "جزر أمواج",
    "Amwaj": "أمواج",
    "Budaiya": "البديع",
    "Hamala": "الهملة",
    "Saar": "سار",
    "Janabiya": "الجنبية",
    "Tubli": "توبلي",
    "Isa Town": "مدينة عيسى",
    "Hamad Town": "مدينة حمد",
    "Busaiteen": "البسيتين",
    "Hidd": "الحد",
    "Bahrain Bay": "خليج البحرين",
    "Sanabis": "السنابس",
    "Adliya": "العدلية",
    "Hoora": "الحورة",
    "Gudaibiya": "القضيبية",
    "Zinj": "الزنج",
    "Salmaniya": "السلمانية",
    "Diplomatic Area": "المنطقة الدبلوماسية",
    # UAE
    "Downtown Dubai": "وسط دبي",
    "Dubai Marina": "مرسى دبي",
    "Dubai": "دبي",
    "Abu Dhabi": "أبوظبي",
    "Sharjah": "الشارقة",
    "Ajman": "عجمان",
    "Palm Jumeirah": "نخلة جميرا",
    "Business Bay": "الخليج التجاري",
    # Saudi Arabia
    "Riyadh": "الرياض",
    "Jeddah": "جدة",
    "Dammam": "الدمام",
    "Khobar": "الخبر",
    # General
    "City Center": "وسط المدينة",
    "Waterfront": "الواجهة البحرية",
})

CURRENCIES_EN = MappingProxyType({"BHD": "BD"})
CURRENCIES_AR = MappingProxyType({
    "BHD": "دينار بحريني",
    "SAR": "ريال سعودي",
    "AED": "درهم إماراتي",
    "USD": "دولار أمريكي",
})

AMENITY_EMOJI = MappingProxyType({
    "Swimming Pool": "🏊",
    "Gym": "🏋️",
    "Parking": "🚗",
    "Covered Parking": "🚗",
    "Security": "🔒",
    "Garden": "🌳",
    "Balcony": "🪟",
    "Central AC": "❄️",
    "Maid Room": "👤",
    "Storage": "📦",
    "Elevator": "🛗",
    "Sea View": "🌅",
    "City View": "🏙️",
    "Private Pool": "🏊",
    "Smart Home": "📱",
    "Terrace": "🌿",
    "Mosque": "🕌",
    "Hospital": "🏥",
    "Kids Play Area": "🧸",
    "BBQ Area": "🍖",
})
DEFAULT_EMOJI = "🔸"


def _lookup(table, value: str, default: str = "") -> str:
    """Arabic value from a table; unmapped values pass through"""
    if not value:
        return default
    return table.get(value, value)


def translate_property_type(value: str) -> str:
    return _lookup(PROPERTY_TYPES_AR, value, "عقار")


def translate_category(value: str) -> str:
    return _lookup(CATEGORIES_AR, value)


def translate_furnishing(value: str) -> str:
    return _lookup(FURNISHING_AR, value)


def translate_amenity(value: str) -> str:
    return _lookup(AMENITIES_AR, value)


def translate_kitchen_type(value: str) -> str:
    return _lookup(KITCHEN_TYPES_AR, value)


def translate_location(location: str) -> str:
    """
    Exact match first, then the first known place name found inside the
    text (case-insensitive) is replaced in place: "Seef Area" -> "السيف Area"
    """
    if not location:
        return ""
    if location in LOCATIONS_AR:
        return LOCATIONS_AR[location]
    lowered = location.lower()
    for name_en, name_ar in LOCATIONS_AR.items():
        if name_en.lower() in lowered:
            return re.sub(re.escape(name_en), name_ar, location, count=1, flags=re.IGNORECASE)
    return location


def currency_label_en(code: str) -> str:
    return CURRENCIES_EN.get(code, code or "BD")


def currency_label_ar(code: str) -> str:
    return CURRENCIES_AR.get(code, code or "دينار بحريني")


def amenity_emoji(amenity: str) -> str:
    return AMENITY_EMOJI.get(amenity, DEFAULT_EMOJI)
