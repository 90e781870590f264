# crud.py

from sqlalchemy.orm import Session
import models
import schemas


def create_issue_report(db: Session, report: schemas.IssueReportInput) -> models.IssueReport:
    """
    Simpan satu laporan; nomor laporan = id yang dibuat database.
    """
    request = report.calculation_request
    db_report = models.IssueReport(
        user_comment=report.user_comment,
        deceased_sex=request.deceased_sex.value,
        estate_value=request.estate_value,
        request_json=request.model_dump_json(),
    )
    db.add(db_report)
    db.commit()
    db.refresh(db_report)
    return db_report


def get_issue_report(db: Session, number: int):
    return db.query(models.IssueReport).filter(models.IssueReport.id == number).first()


def get_issue_reports(db: Session, skip: int = 0, limit: int = 100):
    """
    Daftar laporan, urut nomor. 'skip' dan 'limit' untuk paginasi.
    """
    return (
        db.query(models.IssueReport)
        .order_by(models.IssueReport.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
