"""
Branches - الفروع
Four fixed business locations used to tag receipts and listings.
"""

BRANCHES = (
    {"id": "manama", "name": "Manama", "name_ar": "المنامة"},
    {"id": "seef", "name": "Seef", "name_ar": "السيف"},
    {"id": "saar", "name": "Saar", "name_ar": "سار"},
    {"id": "amwaj-island", "name": "Amwaj Island", "name_ar": "جزر أمواج"},
)

BRANCH_IDS = tuple(b["id"] for b in BRANCHES)

UNKNOWN_BRANCH = "Unknown Branch"


def is_valid_branch(branch_id) -> bool:
    return branch_id in BRANCH_IDS


def get_branch(branch_id):
    for branch in BRANCHES:
        if branch["id"] == branch_id:
            return branch
    return None


def get_branch_name(branch_id) -> str:
    """Display name for a branch id, 'Unknown Branch' when not found"""
    branch = get_branch(branch_id)
    return branch["name"] if branch else UNKNOWN_BRANCH


def get_branch_name_ar(branch_id) -> str:
    branch = get_branch(branch_id)
    return branch["name_ar"] if branch else "فرع غير معروف"
