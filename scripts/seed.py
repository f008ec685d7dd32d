# scripts/seed.py
"""
Load a small sample data set into the BizTime database.

Safe to re-run: companies, industries and links that already exist are
skipped, and invoices are only added to an empty invoices table.

    python -m scripts.init_db
    python -m scripts.seed
"""

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from biztime.db.engine import DB_URL, create_db_engine
from biztime.db.schema import companies, company_industries, industries, invoices

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


COMPANIES = [
    {"code": "apple", "name": "Apple Computer", "description": "Maker of OSX."},
    {"code": "ibm", "name": "IBM", "description": "Big blue."},
]

INVOICES = [
    {"comp_code": "apple", "amt": 100, "paid": False, "paid_date": None},
    {"comp_code": "apple", "amt": 200, "paid": False, "paid_date": None},
    {"comp_code": "apple", "amt": 300, "paid": True, "paid_date": date(2018, 1, 1)},
    {"comp_code": "ibm", "amt": 400, "paid": False, "paid_date": None},
]

INDUSTRIES = [
    {"code": "tech", "industry": "Technology"},
    {"code": "acct", "industry": "Accounting"},
]

COMPANY_INDUSTRIES = [
    {"company_code": "apple", "industry_code": "tech"},
    {"company_code": "ibm", "industry_code": "tech"},
    {"company_code": "ibm", "industry_code": "acct"},
]


def insert_missing(conn, table, rows) -> int:
    """
    Insert rows, skipping any that collide with an existing key.
    Returns how many rows were actually inserted.
    """
    insert = pg_insert if conn.dialect.name == "postgresql" else sqlite_insert

    inserted = 0
    for row in rows:
        stmt = insert(table).values(**row).on_conflict_do_nothing()
        inserted += conn.execute(stmt).rowcount
    return inserted


def insert_invoices(conn, rows) -> int:
    # invoices have no natural key, so only seed an empty table
    existing = conn.execute(select(func.count()).select_from(invoices)).scalar_one()
    if existing:
        return 0
    conn.execute(invoices.insert(), rows)
    return len(rows)


def main():
    engine = create_db_engine(DB_URL)

    with engine.begin() as conn:
        counts = {
            "companies": insert_missing(conn, companies, COMPANIES),
            "invoices": insert_invoices(conn, INVOICES),
            "industries": insert_missing(conn, industries, INDUSTRIES),
            "company_industries": insert_missing(conn, company_industries, COMPANY_INDUSTRIES),
        }

    for table_name, n in counts.items():
        logger.info("%-20s %d new rows", table_name, n)


if __name__ == "__main__":
    main()
