"""
Amenity vocabulary and Arabic lookup tables
"""
import pytest

from services.listing_vocabulary import (
    PROPERTY_TYPES, CATEGORIES, AMENITY_VOCABULARY, FALLBACK_AMENITIES, AMENITIES_AR,
    PROPERTY_TYPES_AR, CATEGORIES_AR, FURNISHING_AR, FURNISHING_STATUSES,
    get_amenities, is_valid_amenity_set,
    translate_property_type, translate_amenity, translate_location,
    currency_label_en, currency_label_ar, amenity_emoji, DEFAULT_EMOJI,
    translate_kitchen_type,
)


class TestAmenityVocabulary:

    def test_fallback_literal_list(self):
        assert list(FALLBACK_AMENITIES) == [
            "Swimming Pool", "Gym", "Parking", "Security", "Garden", "Balcony",
            "Central AC", "Maid Room", "Storage", "Elevator", "City View",
            "Private Pool", "Smart Home", "Terrace", "Hospital", "Mosque",
        ]

    def test_thirteen_property_types(self):
        assert len(PROPERTY_TYPES) == 13
        assert set(CATEGORIES) == {"Residential", "Commercial", "Investment"}

    def test_every_valid_pair_has_its_own_list(self):
        for (ptype, category), amenities in AMENITY_VOCABULARY.items():
            assert ptype in PROPERTY_TYPES
            assert category in CATEGORIES
            assert get_amenities(ptype, category) == amenities
            assert tuple(amenities) != FALLBACK_AMENITIES

    def test_same_pair_same_list(self):
        assert get_amenities("Villa", "Residential") is get_amenities("Villa", "Residential")

    @pytest.mark.parametrize("ptype, category", [
        ("Castle", "Residential"),
        ("Villa", "Industrial"),
        ("Shop", "Residential"),
        ("", ""),
    ])
    def test_unknown_pairs_fall_back(self, ptype, category):
        assert get_amenities(ptype, category) == FALLBACK_AMENITIES

    def test_amenity_set_validation(self):
        assert is_valid_amenity_set("Villa", "Residential", ["Garden", "Swimming Pool"])
        assert is_valid_amenity_set("Villa", "Residential", [])
        assert not is_valid_amenity_set("Office", "Commercial", ["Private Pool"])
        # unknown pair checks against the generic list
        assert is_valid_amenity_set("Castle", "Residential", ["Hospital", "Mosque"])

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            AMENITY_VOCABULARY[("Villa", "Commercial")] = ()
        with pytest.raises(TypeError):
            AMENITIES_AR["Gym"] = "x"


class TestArabicTables:

    def test_every_property_type_translated(self):
        for ptype in PROPERTY_TYPES:
            assert ptype in PROPERTY_TYPES_AR

    def test_every_category_and_furnishing_translated(self):
        for category in CATEGORIES:
            assert category in CATEGORIES_AR
        for status in FURNISHING_STATUSES:
            assert status in FURNISHING_AR

    def test_every_vocabulary_amenity_translated(self):
        offered = set(FALLBACK_AMENITIES)
        for amenities in AMENITY_VOCABULARY.values():
            offered.update(amenities)
        missing = sorted(a for a in offered if a not in AMENITIES_AR)
        assert missing == []

    def test_passthrough(self):
        assert translate_amenity("Helipad") == "Helipad"
        assert translate_property_type("Chalet") == "Chalet"
        assert translate_property_type("") == "عقار"

    def test_location_exact_and_partial(self):
        assert translate_location("Seef") == "السيف"
        assert translate_location("seef district") == "السيف district"
        assert translate_location("Atlantis") == "Atlantis"
        assert translate_location("") == ""

    def test_kitchen_types(self):
        assert translate_kitchen_type("Both") == "داخلي وخارجي"
        assert translate_kitchen_type("Outdoor") == "Outdoor"

    def test_currency_labels(self):
        assert currency_label_en("BHD") == "BD"
        assert currency_label_ar("BHD") == "دينار بحريني"
        assert currency_label_en("USD") == "USD"

    def test_amenity_emoji(self):
        assert amenity_emoji("Garden") == "🌳"
        assert amenity_emoji("Helipad") == DEFAULT_EMOJI
