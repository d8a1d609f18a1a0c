import os
import uuid
from datetime import datetime, timezone
from utils.auth import hash_password

DEFAULT_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD', 'Carlton2026!')

SEED_USERS = [
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "admin.carlton")),
        "email": "admin@carlton.bh",
        "password_hash": None,
        "full_name": "System Administrator",
        "role": "admin",
        "branch": "manama",
        "is_active": True,
    },
    {
        "id": str(uuid.uuid5(uuid.NAMESPACE_DNS, "itsupport.carlton")),
        "email": "it@carlton.bh",
        "password_hash": None,
        "full_name": "IT Support",
        "role": "it_support",
        "branch": "manama",
        "is_active": True,
    },
]


async def seed_database(db):
    existing = await db.users.count_documents({})
    if existing > 0:
        return {"message": "Database already seeded", "seeded": False}

    hashed = hash_password(DEFAULT_PASSWORD)
    now = datetime.now(timezone.utc).isoformat()
    users = [{**u, "password_hash": hashed, "created_at": now} for u in SEED_USERS]
    await db.users.insert_many(users)

    await db.users.create_index("email", unique=True)
    await db.receipts.create_index("id", unique=True)
    await db.property_descriptions.create_index("id", unique=True)

    return {"message": "Database seeded successfully", "seeded": True}
