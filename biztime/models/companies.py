# biztime/models/companies.py

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CompanyIn(BaseModel):
    model_config = ConfigDict(strict=True)

    name: Optional[str] = None
    description: Optional[str] = None


class CompanySummary(BaseModel):
    code: str
    name: str


class CompanyOut(BaseModel):
    code: str
    name: str
    description: Optional[str] = None


class CompanyInvoice(BaseModel):
    id: int
    amt: float
    paid: bool
    add_date: date
    paid_date: Optional[date] = None


class CompanyDetail(CompanyOut):
    industries: List[str]
    invoices: List[CompanyInvoice]


class CompanyListResponse(BaseModel):
    companies: List[CompanySummary]


class CompanyResponse(BaseModel):
    company: CompanyOut


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail


class StatusResponse(BaseModel):
    status: str
