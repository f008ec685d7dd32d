# biztime/models/industries.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class IndustryIn(BaseModel):
    model_config = ConfigDict(strict=True)

    industry: Optional[str] = None


class AssociationIn(BaseModel):
    model_config = ConfigDict(strict=True)

    company_code: Optional[str] = None


class IndustryOut(BaseModel):
    code: str
    industry: str


class IndustrySummary(BaseModel):
    code: str
    name: str
    companies: List[str]


class IndustryListResponse(BaseModel):
    industries: List[IndustrySummary]


class IndustryResponse(BaseModel):
    industry: IndustryOut


class MessageResponse(BaseModel):
    message: str
