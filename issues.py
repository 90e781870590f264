# issues.py

import json
import logging
from typing import List

from sqlalchemy.orm import Session

import calculator
import crud
import models
import schemas

logger = logging.getLogger(__name__)

RULE = "================================"


def format_number(number: int) -> str:
    return f"{number:04d}"


def render_report(report: models.IssueReport) -> str:
    """
    Teks laporan yang tersimpan, untuk ditinjau manual.
    Kalkulasi dijalankan ulang agar peninjau melihat hasil mesin saat ini.
    """
    request = schemas.CalculationInput.model_validate_json(report.request_json)
    estate = "Not specified" if report.estate_value is None else f"{report.estate_value:,.2f}"

    lines: List[str] = [
        f"ISSUE REPORT #{format_number(report.id)}",
        RULE,
        f"Reported: {report.created_at:%Y-%m-%d %H:%M:%S}",
        "",
        "USER COMMENT:",
        report.user_comment,
        "",
        "CALCULATION REQUEST DATA:",
        RULE,
        f"Deceased Gender: {report.deceased_sex.capitalize()}",
        f"Estate Value: {estate}",
        "",
        "HEIRS:",
    ]
    if request.heirs:
        lines.extend(f"- {name}: {count}" for name, count in request.heirs.items())
    else:
        lines.append("(No heirs specified)")

    case, _ = calculator.build_case(request)
    lines += [
        "",
        "CALCULATION RESULT:",
        RULE,
        calculator.calculate(case).summary(),
        "",
        "RAW JSON DATA:",
        RULE,
        json.dumps(json.loads(report.request_json), indent=2),
    ]
    return "\n".join(lines)


def report_issue(db: Session, report: schemas.IssueReportInput) -> int:
    row = crud.create_issue_report(db, report)
    logger.info("issue report %s stored", format_number(row.id))
    return row.id


def to_schema(report: models.IssueReport) -> schemas.IssueReport:
    return schemas.IssueReport(
        number=report.id,
        created_at=report.created_at,
        user_comment=report.user_comment,
        deceased_sex=report.deceased_sex,
        estate_value=report.estate_value,
        request_json=report.request_json,
        report_text=render_report(report),
    )
