"""
Listing content generator - Property Finder / Instagram / Website (EN + AR)
"""
import re

import pytest

from models.property import PropertyInput
from services.content_generator import generate_content, format_price, normalize_whitespace

CHANNELS_EN = ("property_finder_en", "instagram_en", "website_en")
CHANNELS_AR = ("property_finder_ar", "instagram_ar", "website_ar")
ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"


def _with(prop: PropertyInput, **changes) -> PropertyInput:
    return prop.model_copy(update=changes)


class TestVillaScenario:
    """Villa / Residential / 3 bed / 2 bath / 280 sqm / BD 150,000"""

    def test_property_finder_en_literal_lines(self, villa_input):
        text = generate_content(villa_input).property_finder_en
        assert "• 3 Bedrooms | 2 Bathrooms" in text.split("\n")
        assert "Total Area: 280 sqm" in text
        assert "EWA included" in text

    def test_property_finder_en_sections(self, villa_input):
        text = generate_content(villa_input).property_finder_en
        for heading in ("PROPERTY DETAILS", "AMENITIES & FEATURES", "ADDITIONAL HIGHLIGHTS", "PRICE"):
            assert heading in text
        assert text.startswith("3-Bedroom Villa for Sale in Seef | 280 SQM | Furnished")
        assert "Asking Price: BD 150,000" in text
        assert "• Garden" in text
        assert "• Swimming Pool" in text

    def test_property_finder_has_no_emojis(self, villa_input):
        content = generate_content(villa_input)
        for text in (content.property_finder_en, content.property_finder_ar):
            assert "🏡" not in text
            assert "💰" not in text

    def test_property_finder_ar(self, villa_input):
        text = generate_content(villa_input).property_finder_ar
        assert "• 3 غرف نوم | 2 حمامات" in text
        assert "• المساحة الإجمالية: 280 متر مربع" in text
        assert "• شامل الكهرباء والماء" in text
        assert "السعر المطلوب: 150,000 دينار بحريني" in text
        assert "• حديقة" in text
        assert "• مسبح" in text

    def test_titles(self, villa_input):
        content = generate_content(villa_input)
        assert content.property_finder_title_en == "Villa for Sale in Seef"
        assert content.property_finder_title_ar == "فيلا للبيع في السيف"

    def test_instagram_en(self, villa_input):
        text = generate_content(villa_input).instagram_en
        assert text.startswith("🏡 VILLA FOR SALE")
        assert "🛏️ 3 BR | 2 BA" in text
        assert "💰 BD 150,000" in text
        assert "🌳 Garden" in text
        assert "🌟 Corner plot with sea view" in text
        assert "Walking distance" not in text
        assert text.endswith(
            "#RealEstate #Seef #PropertyForSale #Villa #Bahrain #CarltonRealEstate #CarltonBahrain"
        )

    def test_instagram_ar_hashtags(self, villa_input):
        text = generate_content(villa_input).instagram_ar
        assert text.endswith("#عقارات #السيف #عقار_للبيع #فيلا #البحرين #كارلتون_العقارية")

    def test_website_en(self, villa_input):
        text = generate_content(villa_input).website_en
        assert text.startswith("Villa for Sale in Seef | Residential Property")
        assert "It features 3 spacious bedrooms and 2 modern bathrooms." in text
        assert "- Total Area: 280 sqm" in text
        assert "- Utilities: EWA included" in text
        assert "Listed at BD 150,000" in text

    def test_website_ar(self, villa_input):
        text = generate_content(villa_input).website_ar
        assert "ويضم 3 غرف نوم واسعة و2 حمامات عصرية." in text
        assert "- المساحة الإجمالية: 280 متر مربع" in text
        assert "- حديقة" in text


class TestBedroomBathroomPhrases:
    """Presence pair selects the phrase; nothing dangling when omitted"""

    def test_both_absent_removes_phrase_from_all_six_outputs(self, villa_input):
        content = generate_content(_with(villa_input, bedrooms="", bathrooms=""))
        for field in CHANNELS_EN:
            text = getattr(content, field)
            assert "Bedroom" not in text, field
            assert "Bathroom" not in text, field
            assert "bedroom" not in text, field
            assert "bathroom" not in text, field
            assert not re.search(r"\bBR\b|\bBA\b", text), field
            assert "|  |" not in text and "| |" not in text, field
        for field in CHANNELS_AR:
            text = getattr(content, field)
            assert "غرف نوم" not in text, field
            assert "غرف النوم" not in text, field
            assert "حمام" not in text, field
        assert "🛏️" not in content.instagram_en
        assert "🚿" not in content.instagram_en

    def test_bedrooms_only(self, villa_input):
        content = generate_content(_with(villa_input, bathrooms=""))
        assert "• 3 Bedrooms" in content.property_finder_en.split("\n")
        assert "Bathrooms" not in content.property_finder_en
        assert "🛏️ 3 BR" in content.instagram_en.split("\n")
        assert "It features 3 spacious bedrooms." in content.website_en
        assert "• 3 غرف نوم" in content.property_finder_ar.split("\n")

    def test_bathrooms_only(self, villa_input):
        content = generate_content(_with(villa_input, bedrooms=""))
        assert "• 2 Bathrooms" in content.property_finder_en.split("\n")
        assert "Bedrooms" not in content.property_finder_en
        assert "🚿 2 BA" in content.instagram_en.split("\n")
        assert "It features 2 modern bathrooms." in content.website_en
        assert "• 2 حمامات" in content.property_finder_ar.split("\n")

    def test_whitespace_only_counts_as_absent(self, villa_input):
        content = generate_content(_with(villa_input, bedrooms="  ", bathrooms=" "))
        assert "Bedrooms" not in content.property_finder_en


class TestListingTypes:

    def test_rent_uses_monthly_rent(self, villa_input):
        content = generate_content(_with(villa_input, listing_type="Rent", price="1200"))
        assert "Monthly Rent: BD 1,200" in content.property_finder_en
        assert "الإيجار الشهري: 1,200 دينار بحريني" in content.property_finder_ar
        assert "VILLA FOR RENT" in content.instagram_en
        assert "💰 BD 1,200 / month" in content.instagram_en
        assert "#PropertyForRent" in content.instagram_en
        assert "Available at BD 1,200 per month" in content.website_en
        assert content.property_finder_title_ar == "فيلا للإيجار في السيف"

    def test_investment_category_overrides_purpose(self, land_input):
        content = generate_content(land_input)
        assert content.property_finder_title_en == "Land for Investment in Hamad Town"
        assert "#RealEstateInvestment" in content.instagram_en
        assert "للاستثمار" in content.property_finder_title_ar


class TestOptionalDetails:

    def test_land_shows_roads_and_classification(self, land_input):
        text = generate_content(land_input).property_finder_en
        assert "• Number of Roads: 2" in text
        assert "• Land Classification: RA" in text

    def test_villa_hides_land_classification(self, villa_input):
        text = generate_content(_with(villa_input, land_classification="RA")).property_finder_en
        assert "Land Classification" not in text

    def test_villa_only_fields(self, villa_input):
        prop = _with(
            villa_input,
            building_size="350",
            number_of_entrances="2",
            kitchen_type="Both",
            number_of_internal_kitchens="1",
            outside_quarters=True,
        )
        text = generate_content(prop).property_finder_en
        assert "• Built-up Area: 350 sqm" in text
        assert "• Total Area: 280 sqm" in text
        assert "• Plot Size: 280 sqm" in text
        assert "• Entrances: 2" in text
        assert "• Kitchens: 1 Internal, 0 External" in text
        assert "• Outside Quarters: Yes" in text

    def test_plot_size_only_with_built_up_area(self, villa_input):
        content = generate_content(villa_input)
        assert "Plot Size" not in content.property_finder_en
        assert "مساحة الأرض" not in content.property_finder_ar

        content = generate_content(_with(villa_input, building_size="350"))
        assert "• مساحة الأرض: 280 متر مربع" in content.property_finder_ar
        assert "- Plot Size: 280 sqm" in content.website_en

    def test_villa_fields_ignored_for_apartment(self, villa_input):
        prop = _with(villa_input, property_type="Apartment", building_size="350", outside_quarters=True)
        text = generate_content(prop).property_finder_en
        assert "Built-up Area" not in text
        assert "Outside Quarters" not in text

    def test_ewa_not_included(self, villa_input):
        content = generate_content(_with(villa_input, ewa_included=False))
        assert "• EWA not included" in content.property_finder_en
        assert "• غير شامل الكهرباء والماء" in content.property_finder_ar
        assert "EWA" not in content.instagram_en

    def test_instagram_lists_at_most_five_amenities(self, villa_input):
        amenities = ["Garden", "Swimming Pool", "Gym", "Parking", "Security", "Balcony", "Elevator"]
        content = generate_content(_with(villa_input, amenities=amenities))
        assert "Security" in content.instagram_en
        assert "Balcony" not in content.instagram_en
        assert "Elevator" not in content.instagram_en
        assert "• Elevator" in content.property_finder_en

    def test_empty_location_has_no_location_hashtag(self, villa_input):
        content = generate_content(_with(villa_input, location=""))
        assert "#RealEstate #PropertyForSale #Villa #Bahrain" in content.instagram_en
        assert " in " not in content.property_finder_title_en

    def test_multi_word_location_hashtag(self, land_input):
        assert "#HamadTown" in generate_content(land_input).instagram_en


class TestArabicTranslation:

    def test_unmapped_values_pass_through(self, villa_input):
        prop = _with(villa_input, property_type="Chalet", amenities=["Rooftop Cinema"])
        content = generate_content(prop)
        assert "Chalet" in content.property_finder_ar
        assert "Rooftop Cinema" in content.property_finder_ar

    def test_arabic_keeps_western_digits(self, villa_input):
        content = generate_content(villa_input)
        for field in CHANNELS_AR:
            text = getattr(content, field)
            assert not any(d in text for d in ARABIC_INDIC_DIGITS), field
            assert "150,000" in text, field


class TestTotality:

    def test_empty_input_never_raises(self):
        content = generate_content(PropertyInput())
        for field in CHANNELS_EN + CHANNELS_AR:
            assert getattr(content, field).strip(), field

    def test_malformed_price_renders_nan(self, villa_input):
        text = generate_content(_with(villa_input, price="call us")).property_finder_en
        assert "Asking Price: BD NaN" in text

    def test_empty_price_omits_price_section(self, villa_input):
        content = generate_content(_with(villa_input, price=""))
        assert "PRICE" not in content.property_finder_en
        assert "💰" not in content.instagram_en

    def test_no_triple_newlines(self, villa_input):
        sparse = PropertyInput(property_type="Office", category="Commercial")
        for prop in (villa_input, sparse):
            content = generate_content(prop)
            for field in CHANNELS_EN + CHANNELS_AR:
                text = getattr(content, field)
                assert "\n\n\n" not in text, field
                assert text == text.strip(), field

    def test_deterministic(self, villa_input):
        assert generate_content(villa_input) == generate_content(villa_input)

    def test_output_is_immutable(self, villa_input):
        content = generate_content(villa_input)
        with pytest.raises(Exception):
            content.instagram_en = "changed"


class TestFormatPrice:

    @pytest.mark.parametrize("raw, expected", [
        ("150000", "150,000"),
        ("1250.5", "1,250.5"),
        ("99.125", "99.125"),
        ("1,500", "1,500"),
        (" 75000 ", "75,000"),
        ("abc", "NaN"),
        ("inf", "NaN"),
    ])
    def test_format(self, raw, expected):
        assert format_price(raw) == expected


class TestNormalizeWhitespace:

    def test_collapses_blank_runs(self):
        assert normalize_whitespace("\n\nA\n\n\n\nB  \n   \n\n\nC\n") == "A\n\nB\n\nC"
