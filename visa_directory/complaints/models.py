from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportType(str, Enum):
    scam = "scam"
    fraud = "fraud"
    poor_service = "poor_service"
    fake_business = "fake_business"
    other = "other"


class ComplaintStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComplaintRequest(_CamelModel):
    company_id: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    report_type: ReportType = ReportType.scam
    issue_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1, max_length=5000)
    reporter_name: str = Field(..., min_length=1)
    reporter_email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    amount_lost: str | None = None
    incident_date: str | None = None


class ComplaintReport(ComplaintRequest):
    id: str
    status: ComplaintStatus = ComplaintStatus.pending
    created_at: float
    approved_at: float | None = None


class PublicComplaint(_CamelModel):
    id: str
    report_type: ReportType
    issue_type: str
    description: str
    incident_date: str | None
    amount_lost: str | None
    created_at: float
    approved_at: float | None
    reporter_name: str


class ComplaintSubmitted(_CamelModel):
    report_id: str
    status: ComplaintStatus
    message: str = "Report submitted successfully"


class CompanyComplaints(_CamelModel):
    company_id: str
    total_reports: int
    reports: list[PublicComplaint]
