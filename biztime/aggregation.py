# biztime/aggregation.py
"""
Turn flat outer-join rows into nested response objects.

Both functions are pure: they take any sequence of mappings (SQLAlchemy
RowMapping objects or plain dicts) and never touch the database.
"""

from typing import Iterable, List, Mapping, Optional

from biztime.models.companies import CompanyDetail, CompanyInvoice
from biztime.models.industries import IndustrySummary


def nest_company_rows(rows: Iterable[Mapping]) -> Optional[CompanyDetail]:
    """
    Build a company with its invoices and industry names.

    Expected keys per row: company_code, company_name, company_description,
    invoice_id, invoice_amt, invoice_paid, invoice_add_date,
    invoice_paid_date, industry_name.

    Returns None when there are no rows (unknown company).
    """
    rows = list(rows)
    if not rows:
        return None

    first = rows[0]

    invoices: List[CompanyInvoice] = []
    seen_invoice_ids = set()
    industries: List[str] = []

    for row in rows:
        invoice_id = row["invoice_id"]
        # one row per (invoice, industry) pair, so ids repeat
        if invoice_id is not None and invoice_id not in seen_invoice_ids:
            seen_invoice_ids.add(invoice_id)
            invoices.append(
                CompanyInvoice(
                    id=invoice_id,
                    amt=row["invoice_amt"],
                    paid=row["invoice_paid"],
                    add_date=row["invoice_add_date"],
                    paid_date=row["invoice_paid_date"],
                )
            )

        industry_name = row["industry_name"]
        if industry_name is not None and industry_name not in industries:
            industries.append(industry_name)

    return CompanyDetail(
        code=first["company_code"],
        name=first["company_name"],
        description=first["company_description"],
        industries=industries,
        invoices=invoices,
    )


def group_industry_rows(rows: Iterable[Mapping]) -> List[IndustrySummary]:
    """
    Group (industry_code, industry_name, company_code) rows by industry.

    Industries without associations come back from the outer join with a
    NULL company_code; those never show up in `companies`.
    """
    grouped = {}

    for row in rows:
        code = row["industry_code"]
        if code not in grouped:
            grouped[code] = {
                "code": code,
                "name": row["industry_name"],
                "companies": [],
            }

        company_code = row["company_code"]
        companies = grouped[code]["companies"]
        if company_code is not None and company_code not in companies:
            companies.append(company_code)

    return [IndustrySummary(**entry) for entry in grouped.values()]
