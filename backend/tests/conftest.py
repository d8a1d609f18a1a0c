"""
Shared fixtures - عينات عقار وسندات للاختبار
"""
import pytest

from models.property import PropertyInput


@pytest.fixture
def villa_input():
    """Villa / Residential / 3 bed / 2 bath / 280 sqm / BD 150,000"""
    return PropertyInput(
        property_type="Villa",
        category="Residential",
        listing_type="Sale",
        location="Seef",
        bedrooms="3",
        bathrooms="2",
        size="280",
        price="150000",
        currency="BHD",
        furnishing_status="Furnished",
        amenities=["Garden", "Swimming Pool"],
        ewa_included=True,
        unique_selling_points="Corner plot with sea view. Walking distance to the mall.",
    )


@pytest.fixture
def land_input():
    return PropertyInput(
        property_type="Land",
        category="Investment",
        location="Hamad Town",
        size="1200",
        price="95000",
        number_of_roads="2",
        land_classification="RA",
    )


@pytest.fixture
def commission_receipt():
    return {
        "id": "7f3c1a52-0000-4000-8000-000000000001",
        "receipt_type": "commission",
        "branch": "seef",
        "receipt_number": "C-2026-0042",
        "client_name": "Ahmed Al Khalifa",
        "client_id_number": "880112345",
        "full_amount_due_bd": 3300.0,
        "payment_date": "2026-03-15",
        "amount_paid_bd": 3300.0,
        "balance_amount_bd": 0.0,
        "amount_paid_words": "Three thousand three hundred dinars only",
        "payment_method": "CASH",
        "cheque_number": None,
        "property_type": "VILLA",
        "agent_name": "Sara Hassan",
        "special_note": "Commission for villa sale in Saar",
        "invoice_number": "INV-771",
        "invoice_date": "2026-03-10",
        "paid_by": "BUYER",
        "transaction_details": "Sale of villa 1234, block 527, road 2711, Saar.",
    }


@pytest.fixture
def deposit_receipt():
    return {
        "id": "9a8b7c6d-0000-4000-8000-000000000002",
        "receipt_type": "deposit",
        "branch": "amwaj-island",
        "receipt_number": "D-2026-0007",
        "client_name": "Mariam Yusuf",
        "client_id_number": "910223344",
        "full_amount_due_bd": 5000.0,
        "payment_date": "2026-04-02",
        "amount_paid_bd": 2000.0,
        "balance_amount_bd": 3000.0,
        "amount_paid_words": "Two thousand dinars only",
        "payment_method": "CHEQUE",
        "cheque_number": "004512",
        "property_type": "FLAT",
        "agent_name": "Omar Ali",
        "special_note": "",
        "transaction_type": "HOLDING DEPOSIT",
        "reservation_amount": 2000.0,
        "property_details": "Sea view flat",
        "title_number": "T-5561",
        "plot_number": "88",
        "size_m2": "145",
        "total_sales_price": "98,000",
        "building_number": "1021",
        "road_number": "5410",
        "block_number": "256",
        "area_name": "Amwaj Island",
        "governorate": "Muharraq",
        "buyer_commission_bd": "2,156.000",
    }
