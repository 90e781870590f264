# calculator.py

from __future__ import annotations
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

import schemas
from app.math.fraction import ExactFraction, ONE, ZERO
from app.rules.blocking import resolve_blocking
from app.rules.case import (
    CalculationResult, DeceasedPerson, ErrorKind, Heir, InheritanceCase,
)
from app.rules.correction import apply_awl, apply_mother_third_of_residue, apply_radd
from app.rules.engine import determine_furudh
from app.rules.relations import (
    RelationType, UnhandledRelation, arabic_name, category_of, group_of, parse_relation, sex_of,
)
from app.rules.residuary import describe_group, determine_residuary_group, distribute_residue
from app.rules.validator import validate_case

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


# ============================================================
#                    PIPELINE UTAMA
# ============================================================
def calculate(case: Optional[InheritanceCase]) -> CalculationResult:
    """
    Jalankan satu kasus melalui seluruh tahap:
    validasi, hijab, furudh, lalu 'Aul atau sisa (ashabah / Radd).

    Tidak pernah melempar exception; kegagalan dikembalikan sebagai hasil gagal.
    """
    if case is None:
        return CalculationResult.failed(ErrorKind.INVALID_CASE, "Inheritance case cannot be null.")

    errors = validate_case(case)
    if errors:
        logger.debug("validation failed: %s", errors)
        return CalculationResult.failed(ErrorKind.VALIDATION_FAILED, "Validation failed.", errors)

    if not case.heirs:
        return CalculationResult.failed(ErrorKind.NO_HEIRS_SPECIFIED, "No heirs specified.")

    try:
        return _run(case)
    except Exception as e:
        logger.exception("calculation failed for case with %d heir records", len(case.heirs))
        return CalculationResult.failed(
            ErrorKind.UNEXPECTED_CALCULATION_ERROR,
            f"Calculation error: {e}",
        )


def _run(case: InheritanceCase) -> CalculationResult:
    # 1) Hijab (pada kasus mentah)
    blocking = resolve_blocking(case)
    blocked = set(blocking)
    logger.debug("blocked relations: %s", sorted(r.value for r in blocked))

    active: List[Heir] = []
    mahjub: List[Heir] = []
    for heir in case.heirs:
        if heir.relation in blocked:
            heir.result.block("; ".join(blocking[heir.relation]))
            mahjub.append(heir)
        else:
            active.append(heir)

    if not active:
        return CalculationResult.failed(ErrorKind.ALL_HEIRS_BLOCKED, "All heirs are blocked.")

    # 2) Furudh
    fixed_heirs: List[Heir] = []
    for heir, fraction, text in determine_furudh(case, active, blocked):
        if fraction > ZERO:
            heir.add_share(fraction, text)
            fixed_heirs.append(heir)
        else:
            heir.result.notes.append(text)

    total_fixed = sum((h.result.fraction for h in fixed_heirs), ZERO)
    logger.debug("total fixed shares: %s", total_fixed)

    awl_applied = False
    radd_applied = False
    residuary: List[Heir] = []

    if total_fixed > ONE:
        # 3a) 'Aul
        logger.debug("awl: %s > 1", total_fixed)
        total_fixed = apply_awl(fixed_heirs, total_fixed)
        awl_applied = True
        total = total_fixed
    else:
        # 3b) sisa
        residue = ONE - total_fixed
        granted, residue = apply_mother_third_of_residue(case.heirs, fixed_heirs, residue)
        total_fixed = total_fixed + granted

        residuary = determine_residuary_group(case, blocked)
        logger.debug("residuary group (%s): %s", describe_group(case, blocked),
                     [h.relation.value for h in residuary])

        total = total_fixed
        if residue > ZERO:
            if residuary:
                distribute_residue(residuary, residue)
                total = total + residue
            elif apply_radd(fixed_heirs, residue):
                radd_applied = True
                total = total + residue
                logger.debug("radd: returned %s to fixed-share heirs", residue)

    heirs = _unique(fixed_heirs + residuary)
    result = CalculationResult.succeeded(
        _in_case_order(case, heirs),
        total,
        blocked_heirs=mahjub,
        awl_applied=awl_applied,
        radd_applied=radd_applied,
    )

    if awl_applied:
        result.flag_for_review("Awl applied: fixed shares exceeded the estate and were reduced proportionally.")
    if radd_applied:
        result.flag_for_review("Radd applied: the residue was returned to the fixed-share heirs.")
    if total != ONE:
        result.flag_for_review(f"Total fraction is {total}, not 1. Manual review required.")
    return result


def _unique(heirs: List[Heir]) -> List[Heir]:
    seen = set()
    out: List[Heir] = []
    for h in heirs:
        if id(h) not in seen:
            seen.add(id(h))
            out.append(h)
    return out


def _in_case_order(case: InheritanceCase, heirs: List[Heir]) -> List[Heir]:
    wanted = {id(h) for h in heirs}
    return [h for h in case.heirs if id(h) in wanted]


# ============================================================
#                    REQUEST → KASUS
# ============================================================
def build_case(calculation_input: schemas.CalculationInput) -> Tuple[InheritanceCase, List[str]]:
    """
    Ubah request menjadi kasus. Jumlah <= 0 dilewati; nama relasi yang tidak
    dikenal dilewati dan dilaporkan sebagai peringatan.
    """
    estate = None
    if calculation_input.estate_value is not None:
        estate = Decimal(str(calculation_input.estate_value))

    case = InheritanceCase(DeceasedPerson(calculation_input.deceased_sex), estate_value=estate)
    warnings: List[str] = []
    for name, count in calculation_input.heirs.items():
        if count <= 0:
            continue
        try:
            relation = parse_relation(name)
        except UnhandledRelation:
            warnings.append(f"Unknown heir type ignored: {name}")
            continue
        case.add_heir(Heir(relation, count))
    return case, warnings


def _amount(estate: Optional[Decimal], fraction: ExactFraction) -> Optional[float]:
    if estate is None:
        return None
    value = estate * fraction.numerator / fraction.denominator
    return float(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def _percentage(fraction: ExactFraction) -> float:
    return float(fraction.to_percentage().quantize(CENTS, rounding=ROUND_HALF_UP))


def _to_share(heir: Heir, estate: Optional[Decimal]) -> schemas.HeirShare:
    fraction = heir.result.fraction
    per_head = heir.share_per_head()
    return schemas.HeirShare(
        relation=heir.relation.value,
        name_ar=heir.name_ar,
        count=heir.count,
        fraction=str(fraction),
        fraction_per_head=str(per_head),
        percentage=_percentage(fraction),
        amount=_amount(estate, fraction),
        amount_per_head=_amount(estate, per_head),
        explanation=heir.result.explanation,
    )


def to_dto(result: CalculationResult, estate: Optional[Decimal] = None,
           extra_warnings: Optional[List[str]] = None) -> schemas.CalculationResult:
    warnings = list(extra_warnings or []) + list(result.warnings)
    if not result.success:
        return schemas.CalculationResult(
            success=False,
            error_kind=result.error_kind.value if result.error_kind else None,
            error_message=result.error_message,
            errors=result.errors,
            warnings=warnings,
        )

    return schemas.CalculationResult(
        success=True,
        shares=[_to_share(h, estate) for h in result.heirs],
        blocked=[
            schemas.BlockedHeir(relation=h.relation.value, name_ar=h.name_ar,
                                count=h.count, reason=h.result.explanation)
            for h in result.blocked_heirs
        ],
        total_fraction=str(result.total_fraction),
        total_percentage=_percentage(result.total_fraction),
        requires_scholarly_review=result.requires_scholarly_review,
        awl_applied=result.awl_applied,
        radd_applied=result.radd_applied,
        warnings=warnings,
        estate_value=float(estate) if estate is not None else None,
    )


# ============================================================
#                    FUNGSI UTAMA
# ============================================================
def calculate_inheritance(calculation_input: schemas.CalculationInput) -> schemas.CalculationResult:
    case, warnings = build_case(calculation_input)
    result = calculate(case)
    if result.success:
        logger.info("calculated %d heir records, total %s", len(case.heirs), result.total_fraction)
    else:
        logger.info("calculation rejected: %s", result.error_kind.value)
    return to_dto(result, case.estate_value, warnings)


def calculate_batch(batch_input: schemas.BatchInput) -> List[schemas.BatchResult]:
    """
    Beberapa kasus terpisah, dihitung satu per satu. Mayit dalam satu
    masalah tidak saling mewarisi.
    """
    results: List[schemas.BatchResult] = []
    for problem in batch_input.problems:
        results.append(schemas.BatchResult(
            problem_name=problem.problem_name,
            result=calculate_inheritance(problem.case),
        ))
    return results


def relation_catalogue() -> List[Dict[str, str]]:
    return [
        {
            "name": r.value,
            "name_ar": arabic_name(r),
            "sex": sex_of(r).value,
            "category": category_of(r).value,
            "group": group_of(r),
        }
        for r in RelationType
    ]
