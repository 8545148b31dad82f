"""
Seed script - populates the database with sample companies and jobs.

Usage:
    python -m scripts.seed

Goes through the repositories, so the same duplicate checks apply as over
HTTP. Running it twice does not create duplicates: existing companies and
jobs are skipped.

Prints an admin token at the end for trying the write endpoints locally.
"""
import asyncio

from jobly.core.database import connect, init_db, close_db
from jobly.core.exceptions import BadRequestException
from jobly.core.security import create_admin_token
from jobly.repositories.company_repository import CompanyRepository
from jobly.repositories.job_repository import JobRepository


# ─── Companies ─────────────────────────────────────────────────

COMPANIES = [
    {
        "handle": "anderson-arias-morrow",
        "name": "Anderson, Arias and Morrow",
        "description": "Somebody program how I. Face give away discussion view act inside.",
        "numEmployees": 245,
        "logoUrl": "/logos/logo3.png",
    },
    {
        "handle": "bauer-gallagher",
        "name": "Bauer-Gallagher",
        "description": "Difficult ready trip question produce produce someone.",
        "numEmployees": 862,
        "logoUrl": None,
    },
    {
        "handle": "hall-mills",
        "name": "Hall-Mills",
        "description": "Change my ago out effort.",
        "numEmployees": 266,
        "logoUrl": "/logos/logo2.png",
    },
    {
        "handle": "watson-davis",
        "name": "Watson-Davis",
        "description": "Year join loss.",
        "numEmployees": 819,
        "logoUrl": "/logos/logo3.png",
    },
    {
        "handle": "sellers-bryant",
        "name": "Sellers-Bryant",
        "description": "Language now attorney cultural.",
        "numEmployees": None,
        "logoUrl": None,
    },
]


# ─── Jobs ──────────────────────────────────────────────────────
# Equity covers every case the hasEquity filter cares about: positive, zero, null.

JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": "0", "companyHandle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": "0", "companyHandle": "hall-mills"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": "0.082", "companyHandle": "sellers-bryant"},
    {"title": "Early years practitioner", "salary": 55000, "equity": None, "companyHandle": "bauer-gallagher"},
    {"title": "Intelligence analyst", "salary": 77000, "equity": "0.075", "companyHandle": "anderson-arias-morrow"},
    {"title": "Accounting technician", "salary": None, "equity": "0.012", "companyHandle": "watson-davis"},
]


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    await init_db()
    print("  Tables created")

    async with connect() as db:
        companies = CompanyRepository(db)
        jobs = JobRepository(db)

        # ── Companies ──────────────────────────────────────
        created = 0
        for data in COMPANIES:
            try:
                await companies.create(data)
                created += 1
            except BadRequestException:
                print(f"  Company '{data['handle']}' already exists, skipping...")
        print(f"  Created {created} companies")

        # ── Jobs ───────────────────────────────────────────
        created = 0
        for data in JOBS:
            try:
                await jobs.create(data)
                created += 1
            except BadRequestException as exc:
                print(f"  Skipping job '{data['title']}': {exc.message}")
        print(f"  Created {created} jobs")

    await close_db()

    token = create_admin_token()
    print("\nDone! Admin token for local testing:")
    print(f"  Authorization: Bearer {token}")


if __name__ == "__main__":
    asyncio.run(seed())
