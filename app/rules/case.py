# app/rules/case.py

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from app.math.fraction import ExactFraction, ONE, ZERO
from app.rules.relations import (
    DESCENDANTS, GRANDCHILDREN, MALE_LINE, SIBLINGS,
    HeirCategory, RelationType, Sex,
    arabic_name, category_of, sex_of,
)


# =========================
# Hasil per ahli waris
# =========================
@dataclass
class ShareGrant:
    fraction: ExactFraction
    explanation: str


@dataclass
class ShareResult:
    """
    Akumulasi semua bagian yang diberikan kepada satu ahli waris.

    Pemberian hanya menambah; catatan alasan disimpan sesuai urutan, sehingga
    furudh yang kemudian ditambah Radd terbaca sebagai satu jejak.
    """
    fraction: ExactFraction = ZERO
    grants: List[ShareGrant] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    blocked: bool = False

    def add(self, fraction: ExactFraction, explanation: str) -> None:
        self.fraction = self.fraction + fraction
        self.grants.append(ShareGrant(fraction, explanation))
        self.notes.append(explanation)

    def rescale(self, divisor: ExactFraction, explanation: str) -> None:
        self.fraction = self.fraction / divisor
        self.notes.append(explanation)

    def block(self, reason: str) -> None:
        self.blocked = True
        self.fraction = ZERO
        self.notes.append(reason)

    @property
    def explanation(self) -> str:
        return "; ".join(n for n in self.notes if n)


@dataclass
class Heir:
    relation: RelationType
    count: int = 1
    result: ShareResult = field(default_factory=ShareResult)

    @property
    def sex(self) -> Sex:
        return sex_of(self.relation)

    @property
    def category(self) -> HeirCategory:
        return category_of(self.relation)

    @property
    def name_ar(self) -> str:
        return arabic_name(self.relation)

    @property
    def fraction(self) -> ExactFraction:
        return self.result.fraction

    def add_share(self, fraction: ExactFraction, explanation: str) -> None:
        self.result.add(fraction, explanation)

    def share_per_head(self) -> ExactFraction:
        if self.count <= 0:
            return ZERO
        return self.result.fraction / self.count

    def __str__(self) -> str:
        label = self.relation.value if self.count == 1 else f"{self.relation.value} x{self.count}"
        if self.result.blocked:
            return f"{label}: blocked ({self.result.explanation})"
        return f"{label}: {self.result.fraction} ({self.result.explanation})"


@dataclass
class DeceasedPerson:
    sex: Sex = Sex.MALE


# =========================
# Kasus waris (aggregate)
# =========================
@dataclass
class InheritanceCase:
    deceased: DeceasedPerson
    heirs: List[Heir] = field(default_factory=list)
    estate_value: Optional[Decimal] = None

    def add_heir(self, heir: Heir) -> None:
        if heir is None:
            raise ValueError("heir cannot be None")
        self.heirs.append(heir)

    def add_heirs(self, *heirs: Heir) -> None:
        for heir in heirs:
            self.add_heir(heir)

    def heir_count(self, relation: RelationType) -> int:
        return sum(h.count for h in self.heirs if h.relation == relation)

    def has_heir(self, relation: RelationType) -> bool:
        return any(h.relation == relation for h in self.heirs)

    def has_any(self, *relations: RelationType) -> bool:
        return any(self.has_heir(r) for r in relations)

    def has_only(self, *relations: RelationType) -> bool:
        allowed = set(relations)
        return bool(self.heirs) and all(h.relation in allowed for h in self.heirs)

    def get_heir(self, relation: RelationType) -> Optional[Heir]:
        return next((h for h in self.heirs if h.relation == relation), None)

    def heirs_of(self, relations: Iterable[RelationType]) -> List[Heir]:
        wanted = set(relations)
        return [h for h in self.heirs if h.relation in wanted]

    # --- predikat yang dipakai tabel hijab & furudh ---
    def has_descendants(self) -> bool:
        return self.has_any(*DESCENDANTS)

    def has_grandchildren(self) -> bool:
        return self.has_any(*GRANDCHILDREN)

    def has_male_descendant_or_ascendant(self) -> bool:
        return self.has_any(*MALE_LINE)

    def has_siblings(self) -> bool:
        return self.has_any(*SIBLINGS)

    def has_spouse(self) -> bool:
        if self.deceased.sex == Sex.MALE:
            return self.has_heir(RelationType.WIFE)
        return self.has_heir(RelationType.HUSBAND)


# =========================
# Hasil kalkulasi
# =========================
class ErrorKind(str, Enum):
    INVALID_CASE = "InvalidCase"
    VALIDATION_FAILED = "ValidationFailed"
    NO_HEIRS_SPECIFIED = "NoHeirsSpecified"
    ALL_HEIRS_BLOCKED = "AllHeirsBlocked"
    UNEXPECTED_CALCULATION_ERROR = "UnexpectedCalculationError"


@dataclass
class CalculationResult:
    success: bool
    heirs: List[Heir] = field(default_factory=list)
    blocked_heirs: List[Heir] = field(default_factory=list)
    total_fraction: ExactFraction = ZERO
    requires_scholarly_review: bool = False
    warnings: List[str] = field(default_factory=list)
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    awl_applied: bool = False
    radd_applied: bool = False

    @classmethod
    def succeeded(cls, heirs: List[Heir], total_fraction: ExactFraction, **kwargs) -> "CalculationResult":
        # ahli waris dengan bagian nol tidak ditampilkan
        return cls(
            success=True,
            heirs=[h for h in heirs if h.result.fraction > ZERO],
            total_fraction=total_fraction,
            **kwargs,
        )

    @classmethod
    def failed(cls, kind: ErrorKind, message: str, errors: Optional[List[str]] = None) -> "CalculationResult":
        return cls(success=False, error_kind=kind, error_message=message, errors=list(errors or []))

    def flag_for_review(self, warning: str) -> None:
        self.requires_scholarly_review = True
        self.warnings.append(warning)

    def get(self, relation: RelationType) -> Optional[Heir]:
        return next((h for h in self.heirs if h.relation == relation), None)

    def fraction_of(self, relation: RelationType) -> ExactFraction:
        heir = self.get(relation)
        return heir.result.fraction if heir else ZERO

    @property
    def is_complete(self) -> bool:
        return self.total_fraction == ONE

    def summary(self) -> str:
        lines: List[str] = []
        if not self.success:
            lines.append(f"Error: {self.error_message}" if self.error_message else "Error")
            return "\n".join(lines)

        if self.requires_scholarly_review:
            lines.append("Requires Scholarly Review")
        lines.append(f"Total: {self.total_fraction}")
        for heir in self.heirs:
            lines.append(str(heir))
        for heir in self.blocked_heirs:
            lines.append(str(heir))
        if self.warnings:
            lines.append("Warnings")
            lines.extend(f"- {w}" for w in self.warnings)
        return "\n".join(lines)
