# biztime/api/invoices.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine

from biztime.db.engine import get_engine
from biztime.db.schema import companies, invoices
from biztime.errors import BadRequestError, NotFoundError
from biztime.models.companies import CompanyOut, StatusResponse
from biztime.models.invoices import (
    InvoiceCreateIn,
    InvoiceDetail,
    InvoiceDetailResponse,
    InvoiceListResponse,
    InvoiceOut,
    InvoiceResponse,
    InvoiceUpdateIn,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])

INVOICE_COLUMNS = (
    invoices.c.id,
    invoices.c.comp_code,
    invoices.c.amt,
    invoices.c.paid,
    invoices.c.add_date,
    invoices.c.paid_date,
)


def _invoice_not_found(invoice_id: int) -> NotFoundError:
    return NotFoundError(f"Invoice with ID '{invoice_id}' not found")


def _require_positive_amount(amt: Optional[float]) -> float:
    if amt is None or amt <= 0:
        raise BadRequestError("Amount must be a positive number")
    return amt


@router.get("", response_model=InvoiceListResponse)
def list_invoices(engine: Engine = Depends(get_engine)) -> InvoiceListResponse:
    """
    Return every invoice, raw columns, no join.
    """
    with engine.connect() as conn:
        rows = conn.execute(select(*INVOICE_COLUMNS)).mappings().all()

    return InvoiceListResponse(invoices=[InvoiceOut(**row) for row in rows])


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse)
def get_invoice(invoice_id: int, engine: Engine = Depends(get_engine)) -> InvoiceDetailResponse:
    """
    Return one invoice with a summary of the company it belongs to.
    """
    with engine.connect() as conn:
        stmt = (
            select(
                invoices.c.id,
                invoices.c.amt,
                invoices.c.paid,
                invoices.c.add_date,
                invoices.c.paid_date,
                companies.c.code,
                companies.c.name,
                companies.c.description,
            )
            .select_from(invoices.join(companies, invoices.c.comp_code == companies.c.code))
            .where(invoices.c.id == invoice_id)
        )

        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise _invoice_not_found(invoice_id)

    return InvoiceDetailResponse(
        invoice=InvoiceDetail(
            id=row["id"],
            amt=row["amt"],
            paid=row["paid"],
            add_date=row["add_date"],
            paid_date=row["paid_date"],
            company=CompanyOut(
                code=row["code"],
                name=row["name"],
                description=row["description"],
            ),
        )
    )


@router.post("", response_model=InvoiceResponse, status_code=201)
def create_invoice(
    payload: Optional[InvoiceCreateIn] = None,
    engine: Engine = Depends(get_engine),
) -> InvoiceResponse:
    """
    Create an unpaid invoice for an existing company.

    The company is checked before the amount, so an unknown company is a
    404 whatever the amount.
    """
    payload = payload or InvoiceCreateIn()
    if not payload.comp_code:
        raise BadRequestError("'comp_code' is required")

    with engine.begin() as conn:
        company = conn.execute(
            select(companies.c.code).where(companies.c.code == payload.comp_code)
        ).first()

        if company is None:
            raise NotFoundError(f"Company with code '{payload.comp_code}' not found")

        amt = _require_positive_amount(payload.amt)

        stmt = (
            insert(invoices)
            .values(comp_code=payload.comp_code, amt=amt)
            .returning(*INVOICE_COLUMNS)
        )
        row = conn.execute(stmt).mappings().one()

    logger.info("Created invoice %s for %s", row["id"], row["comp_code"])
    return InvoiceResponse(invoice=InvoiceOut(**row))


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: int,
    payload: Optional[InvoiceUpdateIn] = None,
    engine: Engine = Depends(get_engine),
) -> InvoiceResponse:
    """
    Update an invoice's amount and paid state.

    paid_date follows `paid`:
      - paid sent and truthy -> today (re-paying refreshes the date)
      - paid sent and falsy/null -> NULL
      - paid not sent -> paid and paid_date stay as they were
    """
    payload = payload or InvoiceUpdateIn()
    amt = _require_positive_amount(payload.amt)

    with engine.begin() as conn:
        current = conn.execute(
            select(*INVOICE_COLUMNS).where(invoices.c.id == invoice_id)
        ).mappings().first()

        if current is None:
            raise _invoice_not_found(invoice_id)

        paid = current["paid"]
        paid_date = current["paid_date"]

        if "paid" in payload.model_fields_set:
            paid = bool(payload.paid)
            # store clock, same as the add_date default
            paid_date = func.current_date() if paid else None

        stmt = (
            update(invoices)
            .where(invoices.c.id == invoice_id)
            .values(amt=amt, paid=paid, paid_date=paid_date)
            .returning(*INVOICE_COLUMNS)
        )
        row = conn.execute(stmt).mappings().one()

    logger.info("Updated invoice %s (paid=%s)", invoice_id, row["paid"])
    return InvoiceResponse(invoice=InvoiceOut(**row))


@router.delete("/{invoice_id}", response_model=StatusResponse)
def delete_invoice(invoice_id: int, engine: Engine = Depends(get_engine)) -> StatusResponse:
    with engine.begin() as conn:
        stmt = delete(invoices).where(invoices.c.id == invoice_id).returning(invoices.c.id)
        row = conn.execute(stmt).first()

    if row is None:
        raise _invoice_not_found(invoice_id)

    logger.info("Deleted invoice %s", invoice_id)
    return StatusResponse(status="deleted")
