# app/rules/validator.py

from __future__ import annotations
from collections import Counter
from typing import List

from app.rules.case import InheritanceCase
from app.rules.relations import RelationType as R, Sex

MAX_WIVES = 4

# relasi yang hanya boleh satu orang
SINGLETONS = {
    R.FATHER: "father",
    R.MOTHER: "mother",
    R.GRANDFATHER: "grandfather",
    R.GRANDMOTHER_MATERNAL: "maternal grandmother",
    R.GRANDMOTHER_PATERNAL: "paternal grandmother",
}


def _validate_counts(case: InheritanceCase, errors: List[str]) -> None:
    for heir in case.heirs:
        if heir.count < 1:
            errors.append(f"{heir.relation.value} count must be at least 1.")


def _validate_duplicates(case: InheritanceCase, errors: List[str]) -> None:
    seen = Counter(h.relation for h in case.heirs)
    for relation, n in seen.items():
        if n > 1:
            errors.append(f"{relation.value} is listed {n} times; use a single entry with a count.")


def _validate_wives(case: InheritanceCase, errors: List[str]) -> None:
    wives = case.heir_count(R.WIFE)
    if not case.has_heir(R.WIFE):
        return
    if case.deceased.sex != Sex.MALE:
        errors.append(f"Deceased must be male to have wives. Found: {wives} wives.")
    elif wives > MAX_WIVES:
        errors.append(f"Cannot have more than {MAX_WIVES} wives. Found: {wives}")


def _validate_husband(case: InheritanceCase, errors: List[str]) -> None:
    husbands = case.heir_count(R.HUSBAND)
    if not case.has_heir(R.HUSBAND):
        return
    if case.deceased.sex != Sex.FEMALE:
        errors.append("Deceased must be female to have husband.")
    elif husbands > 1:
        errors.append(f"Cannot have more than 1 husband. Found: {husbands}")


def _validate_singletons(case: InheritanceCase, errors: List[str]) -> None:
    for relation, label in SINGLETONS.items():
        n = case.heir_count(relation)
        if n > 1:
            errors.append(f"Cannot have more than 1 {label}. Found: {n}")


def validate_case(case: InheritanceCase) -> List[str]:
    """
    Kembalikan semua pelanggaran; list kosong berarti kasus valid.
    Tidak pernah melempar exception.
    """
    if case is None:
        return ["Inheritance case cannot be null."]

    errors: List[str] = []
    _validate_counts(case, errors)
    _validate_duplicates(case, errors)
    _validate_wives(case, errors)
    _validate_husband(case, errors)
    _validate_singletons(case, errors)
    return errors
