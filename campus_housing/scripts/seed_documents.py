"""
Seed Documents Script
Wipes the person, group, listing and application collections and fills them
with random sample data for local development.

Counts come from SEED_PERSONS, SEED_GROUPS, SEED_LISTINGS and
SEED_APPLICATIONS (defaults 10/3/5/8) and can be overridden on the command
line, e.g. ``python -m campus_housing.scripts.seed_documents persons=40 listings=12``.
"""

import os
import random
import sys
import uuid
from pathlib import Path
from typing import Dict, List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from campus_housing.database.mongo_client import COLLECTIONS, get_mongo_db, MongoConnection
from pymongo.database import Database
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_COUNTS = {
    "persons": 10,
    "groups": 3,
    "listings": 5,
    "applications": 8,
}

RENTAL_TYPES = ["floor", "basement", "house", "app", "room"]
GENDER_OPTIONS = ["male", "female", "any"]

FIRST_NAMES = [
    "Ava", "Liam", "Maya", "Noah", "Priya", "Omar", "Chloe", "Mateo",
    "Hana", "Lucas", "Zoe", "Ethan", "Amara", "Kenji", "Sofia", "Jonah",
]
LAST_NAMES = [
    "Nguyen", "Smith", "Patel", "Garcia", "Kim", "Okafor", "Martin",
    "Rossi", "Cohen", "Silva", "Tremblay", "Singh", "Brown", "Lopez",
]
STREETS = [
    "University Ave", "King St", "Albert St", "Columbia St", "Phillip St",
    "Lester St", "Regina St", "Erb St", "Weber St", "Seagram Dr",
]
BLURBS = [
    "Quiet third-year student, mostly at the library.",
    "Looking for roommates close to campus.",
    "Co-op student, away every other term.",
    "Early riser, likes cooking and board games.",
    "Grad student, non-smoker, no pets.",
]


def parse_counts(argv: List[str], environ: Optional[Dict[str, str]] = None) -> Dict[str, int]:
    """Counts from SEED_* env vars, overridden by key=value arguments"""
    environ = os.environ if environ is None else environ
    counts = {
        key: int(environ.get(f"SEED_{key.upper()}", default))
        for key, default in DEFAULT_COUNTS.items()
    }
    for arg in argv:
        key, _, value = arg.partition("=")
        if key in counts and value:
            counts[key] = int(value)
    return counts


def make_person(rng: random.Random, landlord: bool) -> dict:
    first = rng.choice(FIRST_NAMES)
    last = rng.choice(LAST_NAMES)
    return {
        "userId": str(uuid.uuid4()),
        "name": f"{first} {last}",
        "email": f"{first}.{last}{rng.randint(1, 999)}@example.com".lower(),
        "password": "plaintext-for-now",
        "phone": f"519-{rng.randint(200, 999)}-{rng.randint(1000, 9999)}",
        "description": "Property owner" if landlord else rng.choice(BLURBS),
        "profilePicture": f"https://i.pravatar.cc/150?u={first}{last}",
        "groupId": None,
        "landlord": landlord,
    }


def make_listing(rng: random.Random, landlord_id: str) -> dict:
    return {
        "listingId": str(uuid.uuid4()),
        "onCampus": rng.random() < 0.5,
        "price": rng.randint(600, 3200),
        "address": f"{rng.randint(1, 400)} {rng.choice(STREETS)}",
        "bedrooms": rng.randint(1, 6),
        "bathrooms": rng.randint(1, 4),
        "gender": rng.choice(GENDER_OPTIONS),
        "rentalType": rng.choice(RENTAL_TYPES),
        "verified": rng.random() < 0.5,
        "imageUrls": [
            f"https://picsum.photos/seed/{uuid.uuid4().hex[:8]}/640/480"
            for _ in range(rng.randint(1, 4))
        ],
        "landlordId": landlord_id,
    }


def build_seed_data(counts: Dict[str, int], rng: Optional[random.Random] = None) -> Dict[str, List[dict]]:
    """Generate linked documents: at least one landlord and one tenant, groups of 2-4 tenants"""
    rng = rng or random.Random()

    landlord_count = max(1, int(counts["persons"] * 0.2))
    tenant_count = max(1, counts["persons"] - landlord_count)
    landlords = [make_person(rng, landlord=True) for _ in range(landlord_count)]
    tenants = [make_person(rng, landlord=False) for _ in range(tenant_count)]

    groups = []
    for _ in range(counts["groups"]):
        size = min(rng.randint(2, 4), len(tenants))
        members = rng.sample(tenants, size)
        group = {"groupId": str(uuid.uuid4()), "userIds": [m["userId"] for m in members]}
        # A tenant drawn into a later group moves there
        for member in members:
            member["groupId"] = group["groupId"]
        groups.append(group)

    listings = [
        make_listing(rng, rng.choice(landlords)["userId"])
        for _ in range(counts["listings"])
    ]

    applications = []
    if listings and groups:
        for _ in range(counts["applications"]):
            applications.append({
                "applicationId": str(uuid.uuid4()),
                "listingId": rng.choice(listings)["listingId"],
                "groupId": rng.choice(groups)["groupId"],
            })

    return {
        "person": landlords + tenants,
        "group": groups,
        "listing": listings,
        "application": applications,
    }


def seed(db: Database, data: Dict[str, List[dict]]) -> Dict[str, int]:
    """Replace every collection's contents with the generated documents"""
    for name in COLLECTIONS.values():
        db[name].delete_many({})

    inserted = {}
    for name, docs in data.items():
        if docs:
            db[COLLECTIONS[name]].insert_many(docs)
        inserted[name] = len(docs)
    return inserted


def main():
    """Main function to seed the document collections"""
    try:
        counts = parse_counts(sys.argv[1:])
        logger.info(f"Starting document seeding with counts {counts}...")

        inserted = seed(get_mongo_db(), build_seed_data(counts))

        logger.info("Seeded collections:")
        for name, count in inserted.items():
            logger.info(f"  {name}: {count}")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)
    finally:
        MongoConnection.reset_client()


if __name__ == "__main__":
    main()
