# schemas.py

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.rules.relations import Sex


# --- Katalog ahli waris ---
class RelationInfo(BaseModel):
    name: str        # "SonOfSon"
    name_ar: str     # nama Arab
    sex: str
    category: str    # FixedShare / Residuary / Both
    group: str


# --- Skema Input untuk Kalkulasi ---
class CalculationInput(BaseModel):
    deceased_sex: Sex = Sex.MALE
    estate_value: Optional[float] = Field(default=None, ge=0)
    heirs: Dict[str, int] = Field(default_factory=dict)  # nama relasi -> jumlah orang


# --- Skema Output untuk Setiap Ahli Waris ---
class HeirShare(BaseModel):
    relation: str
    name_ar: str
    count: int
    fraction: str              # "n/d" atau bilangan bulat
    fraction_per_head: str
    percentage: float
    amount: Optional[float] = None
    amount_per_head: Optional[float] = None
    explanation: str


class BlockedHeir(BaseModel):
    relation: str
    name_ar: str
    count: int
    reason: str


# --- Skema Output Utama ---
class CalculationResult(BaseModel):
    success: bool
    shares: List[HeirShare] = Field(default_factory=list)
    blocked: List[BlockedHeir] = Field(default_factory=list)
    total_fraction: Optional[str] = None
    total_percentage: Optional[float] = None
    requires_scholarly_review: bool = False
    awl_applied: bool = False
    radd_applied: bool = False
    warnings: List[str] = Field(default_factory=list)
    estate_value: Optional[float] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    errors: List[str] = Field(default_factory=list)


# --- Beberapa kasus sekaligus ---
class BatchProblem(BaseModel):
    problem_name: str
    case: CalculationInput


class BatchInput(BaseModel):
    problems: List[BatchProblem]


class BatchResult(BaseModel):
    problem_name: str
    result: CalculationResult


# --- Laporan masalah ---
class IssueReportInput(BaseModel):
    calculation_request: CalculationInput
    user_comment: str = Field(min_length=10, max_length=2000)


class IssueReport(BaseModel):
    number: int
    created_at: datetime
    user_comment: str
    deceased_sex: str
    estate_value: Optional[float] = None
    request_json: str
    report_text: str


class IssueReportCreated(BaseModel):
    number: int
    message: str
