# biztime/api/companies.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine

from biztime.aggregation import nest_company_rows
from biztime.db.engine import get_engine
from biztime.db.schema import companies, company_industries, industries, invoices
from biztime.errors import BadRequestError, NotFoundError
from biztime.models.companies import (
    CompanyDetailResponse,
    CompanyIn,
    CompanyListResponse,
    CompanyOut,
    CompanyResponse,
    CompanySummary,
    StatusResponse,
)
from biztime.slug import make_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


def _company_not_found(code: str) -> NotFoundError:
    return NotFoundError(f"Company with code '{code}' not found")


def _require_name_and_description(payload: Optional[CompanyIn]) -> CompanyIn:
    if payload is None or not payload.name or not payload.description:
        raise BadRequestError("Both 'name' and 'description' are required")
    return payload


@router.get("", response_model=CompanyListResponse)
def list_companies(engine: Engine = Depends(get_engine)) -> CompanyListResponse:
    """
    Return every company as a {code, name} pair.
    """
    with engine.connect() as conn:
        stmt = select(companies.c.code, companies.c.name)
        rows = conn.execute(stmt).mappings().all()

    return CompanyListResponse(
        companies=[CompanySummary(code=row["code"], name=row["name"]) for row in rows]
    )


@router.get("/{code}", response_model=CompanyDetailResponse)
def get_company(code: str, engine: Engine = Depends(get_engine)) -> CompanyDetailResponse:
    """
    Return one company together with its invoices and industry names.
    """
    with engine.connect() as conn:
        stmt = (
            select(
                companies.c.code.label("company_code"),
                companies.c.name.label("company_name"),
                companies.c.description.label("company_description"),
                invoices.c.id.label("invoice_id"),
                invoices.c.amt.label("invoice_amt"),
                invoices.c.paid.label("invoice_paid"),
                invoices.c.add_date.label("invoice_add_date"),
                invoices.c.paid_date.label("invoice_paid_date"),
                industries.c.industry.label("industry_name"),
            )
            .select_from(
                companies
                .outerjoin(invoices, invoices.c.comp_code == companies.c.code)
                .outerjoin(
                    company_industries,
                    company_industries.c.company_code == companies.c.code,
                )
                .outerjoin(
                    industries,
                    industries.c.code == company_industries.c.industry_code,
                )
            )
            .where(companies.c.code == code)
            .order_by(invoices.c.id, industries.c.code)
        )

        rows = conn.execute(stmt).mappings().all()

    company = nest_company_rows(rows)
    if company is None:
        raise _company_not_found(code)

    return CompanyDetailResponse(company=company)


@router.post("", response_model=CompanyResponse, status_code=201)
def create_company(
    payload: Optional[CompanyIn] = None,
    engine: Engine = Depends(get_engine),
) -> CompanyResponse:
    """
    Create a company; its code is derived from the name.
    """
    payload = _require_name_and_description(payload)
    code = make_code(payload.name)
    if not code:
        raise BadRequestError("'name' must contain at least one letter or digit")

    with engine.begin() as conn:
        stmt = (
            insert(companies)
            .values(code=code, name=payload.name, description=payload.description)
            .returning(companies.c.code, companies.c.name, companies.c.description)
        )
        row = conn.execute(stmt).mappings().one()

    logger.info("Created company %s", code)
    return CompanyResponse(company=CompanyOut(**row))


@router.put("/{code}", response_model=CompanyResponse)
def update_company(
    code: str,
    payload: Optional[CompanyIn] = None,
    engine: Engine = Depends(get_engine),
) -> CompanyResponse:
    """
    Replace a company's name and description. The code never changes.
    """
    payload = _require_name_and_description(payload)

    with engine.begin() as conn:
        stmt = (
            update(companies)
            .where(companies.c.code == code)
            .values(name=payload.name, description=payload.description)
            .returning(companies.c.code, companies.c.name, companies.c.description)
        )
        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise _company_not_found(code)

    logger.info("Updated company %s", code)
    return CompanyResponse(company=CompanyOut(**row))


@router.delete("/{code}", response_model=StatusResponse)
def delete_company(code: str, engine: Engine = Depends(get_engine)) -> StatusResponse:
    """
    Delete a company. Its invoices and industry links go with it (ON DELETE CASCADE).
    """
    with engine.begin() as conn:
        stmt = delete(companies).where(companies.c.code == code).returning(companies.c.code)
        row = conn.execute(stmt).first()

    if row is None:
        raise _company_not_found(code)

    logger.info("Deleted company %s", code)
    return StatusResponse(status="deleted")
