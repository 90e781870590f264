# main.py

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

import calculator
import crud
import issues
import models
import schemas
from database import SessionLocal, engine

load_dotenv()

def log_level(name: str) -> str:
    level = (name or "").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"  # nama level tidak dikenal
    return level


logging.basicConfig(
    level=log_level(os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Membuat tabel di database (jika belum ada)
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Faraid Calculator",
    description="API for Islamic inheritance share calculation (fixed shares, residuaries, Awl and Radd).",
)

origins = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:3000").split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Dependency untuk Sesi Database ---
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
# -----------------------------------------


@app.get("/")
def read_root():
    return {"message": "Welcome to the Faraid Calculator"}


@app.get("/heirs/", response_model=list[schemas.RelationInfo])
def read_heirs():
    """
    Endpoint untuk membaca daftar jenis ahli waris.
    """
    return calculator.relation_catalogue()


@app.post("/calculate/", response_model=schemas.CalculationResult)
def run_calculation(calculation_data: schemas.CalculationInput):
    """
    Endpoint utama untuk menjalankan perhitungan Faraidh.
    Kegagalan kalkulasi dikembalikan dengan success=false, bukan error HTTP.
    """
    return calculator.calculate_inheritance(calculation_data)


@app.post("/calculate/batch/", response_model=list[schemas.BatchResult])
def run_batch_calculation(batch_data: schemas.BatchInput):
    """Endpoint untuk beberapa kasus terpisah sekaligus."""
    return calculator.calculate_batch(batch_data)


@app.post("/issues/", response_model=schemas.IssueReportCreated)
def create_issue(report: schemas.IssueReportInput, db: Session = Depends(get_db)):
    number = issues.report_issue(db, report)
    return schemas.IssueReportCreated(
        number=number,
        message=f"Issue #{issues.format_number(number)} reported. Thank you.",
    )


@app.get("/issues/", response_model=list[schemas.IssueReport])
def read_issues(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return [issues.to_schema(r) for r in crud.get_issue_reports(db, skip=skip, limit=limit)]


@app.get("/issues/{number}", response_model=schemas.IssueReport)
def read_issue(number: int, db: Session = Depends(get_db)):
    report = crud.get_issue_report(db, number)
    if report is None:
        raise HTTPException(status_code=404, detail="Issue report not found")
    return issues.to_schema(report)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
