from __future__ import annotations

import logging
import time
import uuid
from collections import Counter

from .models import ComplaintReport, ComplaintRequest, ComplaintStatus, PublicComplaint

logger = logging.getLogger(__name__)

_reports: list[ComplaintReport] = []


class ComplaintNotFound(LookupError):
    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Complaint {report_id!r} not found")


def _mask_name(name: str) -> str:
    name = name.strip()
    return name[:1] + "*" * (len(name) - 1) if name else ""


def submit_complaint(request: ComplaintRequest) -> ComplaintReport:
    report = ComplaintReport(
        **request.model_dump(),
        id=f"report_{uuid.uuid4().hex[:12]}",
        created_at=time.time(),
    )
    _reports.append(report)
    logger.info("Complaint %s filed against company %s", report.id, report.company_id)
    return report


def _find(report_id: str) -> int:
    for index, report in enumerate(_reports):
        if report.id == report_id:
            return index
    raise ComplaintNotFound(report_id)


def set_status(report_id: str, status: ComplaintStatus) -> ComplaintReport:
    index = _find(report_id)
    updates: dict = {"status": status}
    if status == ComplaintStatus.approved:
        updates["approved_at"] = time.time()
    report = _reports[index].model_copy(update=updates)
    _reports[index] = report
    logger.info("Complaint %s marked %s", report_id, status.value)
    return report


def approved_for(company_id: str) -> list[PublicComplaint]:
    """Approved complaints for one company, oldest first, reporter masked."""
    return [
        PublicComplaint(
            id=r.id,
            report_type=r.report_type,
            issue_type=r.issue_type,
            description=r.description,
            incident_date=r.incident_date,
            amount_lost=r.amount_lost,
            created_at=r.created_at,
            approved_at=r.approved_at,
            reporter_name=_mask_name(r.reporter_name),
        )
        for r in _reports
        if r.company_id == company_id and r.status == ComplaintStatus.approved
    ]


def report_counts() -> dict[str, int]:
    """Number of approved complaints per company id."""
    return dict(Counter(r.company_id for r in _reports if r.status == ComplaintStatus.approved))


def get_complaints() -> list[ComplaintReport]:
    return _reports


def clear_complaints() -> None:
    _reports.clear()
