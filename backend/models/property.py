"""
Property Models - بيانات العقار والمحتوى المُولّد
"""
from typing import List
from pydantic import BaseModel, ConfigDict


class PropertyInput(BaseModel):
    """
    One property as entered on the listing form.
    Numeric values arrive as strings; an empty string means "not provided"
    and the matching phrase is left out of every generated text.
    """
    category: str = ""             # Residential | Commercial | Investment
    property_type: str = ""        # one of PROPERTY_TYPES
    listing_type: str = "Sale"     # Sale | Rent
    location: str = ""

    size: str = ""                 # sqm (plot size for villas)
    building_size: str = ""        # villa only
    bedrooms: str = ""
    bathrooms: str = ""
    price: str = ""
    currency: str = "BHD"

    furnishing_status: str = ""    # Furnished | Semi-Furnished | Unfurnished
    amenities: List[str] = []
    ewa_included: bool = False     # الكهرباء والماء
    unique_selling_points: str = ""

    # Villa / Land only
    number_of_entrances: str = ""
    number_of_family_halls: str = ""
    number_of_living_areas: str = ""
    number_of_internal_kitchens: str = ""
    number_of_external_kitchens: str = ""
    kitchen_type: str = ""         # Internal | External | Both
    outside_quarters: bool = False
    number_of_roads: str = ""
    land_classification: str = ""


class GeneratedContent(BaseModel):
    """Six channel texts plus the Property Finder titles - immutable"""
    model_config = ConfigDict(frozen=True)

    property_finder_title_en: str
    property_finder_title_ar: str
    property_finder_en: str
    property_finder_ar: str
    instagram_en: str
    instagram_ar: str
    website_en: str
    website_ar: str
