"""
Receipt Models - سندات القبض (عمولة / عربون)
"""
from typing import Optional, Literal
from pydantic import BaseModel, model_validator

from utils.branches import is_valid_branch


RECEIPT_TYPES = ("commission", "deposit")

# Option values are compared by exact string equality when rendering checkboxes
PAYMENT_METHODS = ("BENEFIT", "BANK TT", "CASH", "CHEQUE")
PAID_BY_OPTIONS = ("BUYER", "SELLER", "LANDLORD", "LANDLORD REP.")
TRANSACTION_TYPES = ("HOLDING DEPOSIT", "PARTIAL PAYMENT")
RECEIPT_PROPERTY_TYPES = ("LAND", "VILLA", "FLAT", "BUILDING", "OTHER")


class ReceiptBase(BaseModel):
    branch: Optional[str] = None
    receipt_number: Optional[str] = None
    client_name: Optional[str] = None
    client_id_number: Optional[str] = None       # CR or CPR
    full_amount_due_bd: Optional[float] = None
    payment_date: Optional[str] = None           # YYYY-MM-DD
    amount_paid_bd: Optional[float] = None
    balance_amount_bd: Optional[float] = None
    amount_paid_words: Optional[str] = None
    payment_method: Optional[str] = None
    cheque_number: Optional[str] = None
    property_type: Optional[str] = None
    agent_name: Optional[str] = None
    special_note: Optional[str] = None

    # Commission
    invoice_number: Optional[str] = None
    invoice_date: Optional[str] = None
    paid_by: Optional[str] = None
    transaction_details: Optional[str] = None

    # Deposit
    transaction_type: Optional[str] = None
    reservation_amount: Optional[float] = None
    property_details: Optional[str] = None
    title_number: Optional[str] = None
    case_number: Optional[str] = None
    plot_number: Optional[str] = None
    property_size: Optional[str] = None
    size_m2: Optional[str] = None
    size_f2: Optional[str] = None
    number_of_roads: Optional[str] = None
    price_per_m2: Optional[str] = None
    price_per_f2: Optional[str] = None
    total_sales_price: Optional[str] = None
    property_address: Optional[str] = None
    unit_number: Optional[str] = None
    building_number: Optional[str] = None
    road_number: Optional[str] = None
    block_number: Optional[str] = None
    property_location: Optional[str] = None
    land_number: Optional[str] = None
    project_name: Optional[str] = None
    area_name: Optional[str] = None
    governorate: Optional[str] = None
    buyer_commission_bd: Optional[str] = None

    payment_receipt_url: Optional[str] = None

    @model_validator(mode="after")
    def check_payment_and_branch(self):
        if self.payment_method is not None:
            if self.payment_method == "CHEQUE":
                if not (self.cheque_number or "").strip():
                    raise ValueError("cheque_number is required when payment_method is CHEQUE")
            else:
                # رقم الشيك فقط مع الدفع بالشيك
                self.cheque_number = None
        if self.branch is not None and not is_valid_branch(self.branch):
            raise ValueError(f"Unknown branch: {self.branch}")
        return self


class ReceiptCreate(ReceiptBase):
    receipt_type: Literal["commission", "deposit"]

    @model_validator(mode="after")
    def clear_cheque_without_cheque_payment(self):
        if self.payment_method != "CHEQUE":
            self.cheque_number = None
        return self


class ReceiptUpdate(ReceiptBase):
    receipt_type: Optional[Literal["commission", "deposit"]] = None

    @model_validator(mode="after")
    def keep_receipt_type(self):
        # النوع يمكن تغييره لكن لا يمكن حذفه
        if "receipt_type" in self.model_fields_set and self.receipt_type is None:
            raise ValueError("receipt_type cannot be null")
        return self


def merge_receipt_update(existing: dict, updates: dict) -> dict:
    """
    Apply the cheque rule to a partial update against the stored receipt.
    Returns the fields to $set; raises ValueError when the merged receipt
    is paid by CHEQUE without a cheque number.
    """
    updates = dict(updates)
    merged = {**existing, **updates}
    if merged.get('payment_method') == "CHEQUE":
        if not (merged.get('cheque_number') or "").strip():
            raise ValueError("cheque_number is required when payment_method is CHEQUE")
    else:
        # رقم الشيك فقط مع الدفع بالشيك
        updates['cheque_number'] = None
    return updates
