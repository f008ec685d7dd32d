# biztime/api/industries.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection, Engine

from biztime.aggregation import group_industry_rows
from biztime.db.engine import get_engine
from biztime.db.schema import companies, company_industries, industries
from biztime.errors import BadRequestError, NotFoundError
from biztime.models.industries import (
    AssociationIn,
    IndustryIn,
    IndustryListResponse,
    IndustryOut,
    IndustryResponse,
    MessageResponse,
)
from biztime.slug import make_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/industries", tags=["industries"])


def link_company_to_industry(conn: Connection, company_code: str, industry_code: str) -> None:
    """
    Insert the (company, industry) pair; an existing pair is left alone.
    """
    if conn.dialect.name == "postgresql":
        stmt = pg_insert(company_industries)
    else:
        stmt = sqlite_insert(company_industries)

    stmt = stmt.values(company_code=company_code, industry_code=industry_code)
    conn.execute(stmt.on_conflict_do_nothing())


@router.get("", response_model=IndustryListResponse)
def list_industries(engine: Engine = Depends(get_engine)) -> IndustryListResponse:
    """
    Return every industry with the codes of the companies linked to it.
    """
    with engine.connect() as conn:
        stmt = (
            select(
                industries.c.code.label("industry_code"),
                industries.c.industry.label("industry_name"),
                company_industries.c.company_code,
            )
            .select_from(
                industries.outerjoin(
                    company_industries,
                    company_industries.c.industry_code == industries.c.code,
                )
            )
            .order_by(industries.c.code, company_industries.c.company_code)
        )

        rows = conn.execute(stmt).mappings().all()

    return IndustryListResponse(industries=group_industry_rows(rows))


@router.post("", response_model=IndustryResponse, status_code=201)
def create_industry(
    payload: Optional[IndustryIn] = None,
    engine: Engine = Depends(get_engine),
) -> IndustryResponse:
    if payload is None or not payload.industry:
        raise BadRequestError("Industry name is required")

    code = make_code(payload.industry)
    if not code:
        raise BadRequestError("'industry' must contain at least one letter or digit")

    with engine.begin() as conn:
        conn.execute(insert(industries).values(code=code, industry=payload.industry))

    logger.info("Created industry %s", code)
    return IndustryResponse(industry=IndustryOut(code=code, industry=payload.industry))


@router.post("/{code}", response_model=MessageResponse, status_code=201)
def associate_company(
    code: str,
    payload: Optional[AssociationIn] = None,
    engine: Engine = Depends(get_engine),
) -> MessageResponse:
    """
    Link a company (body `company_code`) to the industry in the path.
    Linking the same pair twice is not an error.
    """
    if payload is None or not payload.company_code:
        raise BadRequestError("'company_code' is required")

    company_code = payload.company_code

    with engine.begin() as conn:
        industry = conn.execute(
            select(industries.c.code).where(industries.c.code == code)
        ).first()
        if industry is None:
            raise NotFoundError(f"Industry with code '{code}' not found")

        company = conn.execute(
            select(companies.c.code).where(companies.c.code == company_code)
        ).first()
        if company is None:
            raise NotFoundError(f"Company with code '{company_code}' not found")

        link_company_to_industry(conn, company_code, code)

    logger.info("Linked company %s to industry %s", company_code, code)
    return MessageResponse(
        message=f"Company '{company_code}' associated with industry '{code}'"
    )
