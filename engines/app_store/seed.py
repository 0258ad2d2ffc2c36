"""
Wegesa App Store — Demo Seed Data
===================================
The starter records the dashboard ships with: three users, five
items across both stores and two employees.
"""

from __future__ import annotations

import logging

from engines.hr.models import Gender
from engines.inventory.models import StoreId
from engines.users.models import Role

logger = logging.getLogger("wegesa.app")


DEMO_USERS = (
    {"name": "Asha M.", "email": "asha@wegesa.co", "role": Role.SUPER_ADMIN},
    {"name": "Jonas K.", "email": "jonas@wegesa.co", "role": Role.OPERATION},
    {"name": "Neema D.", "email": "neema@wegesa.co", "role": Role.STORE_KEEPER},
)

DEMO_ITEMS = (
    {"name": "Plastic Chairs", "brand": "Generic", "item_type": "Seating",
     "quantity": 500, "store": StoreId.BOBA},
    {"name": "Banquet Tables", "brand": "Classic", "item_type": "Tables",
     "quantity": 50, "store": StoreId.MIKOCHENI},
    {"name": '15" Speakers', "brand": "Yamaha", "item_type": "Audio",
     "quantity": 12, "store": StoreId.BOBA},
    {"name": "LED Par Lights", "brand": "Chauvet", "item_type": "Lighting",
     "quantity": 30, "store": StoreId.MIKOCHENI},
    {"name": "Generators 5kVA", "brand": "Honda", "item_type": "Power",
     "quantity": 4, "store": StoreId.BOBA},
)

DEMO_EMPLOYEES = (
    {
        "full_name": "John Mwangi",
        "date_of_birth": "1990-05-15",
        "gender": Gender.MALE,
        "position": "Event Coordinator",
        "mobile_contact": "+255 712 345 678",
        "contract_start_date": "2023-01-15",
        "contract_end_date": "2025-01-14",
    },
    {
        "full_name": "Sarah Komba",
        "date_of_birth": "1992-08-22",
        "gender": Gender.FEMALE,
        "position": "Store Manager",
        "mobile_contact": "+255 713 456 789",
        "contract_start_date": "2023-03-01",
        "contract_end_date": "2025-02-28",
    },
)


def seed_demo_data(store) -> None:
    """Load the demo records into an empty AppStore."""
    if len(store.users) or len(store.hr) or store.inventory.list_items():
        raise ValueError("demo data can only be seeded into an empty store.")

    for user in DEMO_USERS:
        store.users.add_user(**user)
    for item in DEMO_ITEMS:
        store.inventory.add_item(**item)
    for employee in DEMO_EMPLOYEES:
        store.hr.add_employee(**employee)

    logger.info(
        f"Demo data seeded: {len(DEMO_USERS)} users, "
        f"{len(DEMO_ITEMS)} items, {len(DEMO_EMPLOYEES)} employees"
    )
