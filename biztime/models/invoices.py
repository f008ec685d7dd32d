# biztime/models/invoices.py

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from biztime.models.companies import CompanyOut


class InvoiceCreateIn(BaseModel):
    model_config = ConfigDict(strict=True)

    comp_code: Optional[str] = None
    amt: Optional[float] = Field(default=None, allow_inf_nan=False)


class InvoiceUpdateIn(BaseModel):
    model_config = ConfigDict(strict=True)

    amt: Optional[float] = Field(default=None, allow_inf_nan=False)
    # absent and null mean different things; see update_invoice
    paid: Optional[bool] = None


class InvoiceOut(BaseModel):
    id: int
    comp_code: str
    amt: float
    paid: bool
    add_date: date
    paid_date: Optional[date] = None


class InvoiceDetail(BaseModel):
    id: int
    amt: float
    paid: bool
    add_date: date
    paid_date: Optional[date] = None
    company: CompanyOut


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceOut]


class InvoiceResponse(BaseModel):
    invoice: InvoiceOut


class InvoiceDetailResponse(BaseModel):
    invoice: InvoiceDetail
