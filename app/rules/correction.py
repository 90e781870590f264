# app/rules/correction.py

from __future__ import annotations
from typing import List, Tuple

from app.math.fraction import ExactFraction, ONE, THIRD, ZERO
from app.rules.case import Heir
from app.rules.relations import RelationType as R, SPOUSES


# =========================
# 'Aul
# =========================
def apply_awl(fixed_heirs: List[Heir], total_fixed: ExactFraction) -> ExactFraction:
    """
    Perkecil setiap furudh dengan total yang melebihi 1 sehingga jumlahnya 1.
    Mengembalikan total setelah koreksi (selalu ONE).
    """
    for heir in fixed_heirs:
        before = heir.result.fraction
        after = before / total_fixed
        heir.result.rescale(total_fixed, f"Awl applied: {before} reduced to {after}")
    return ONE


# =========================
# Ibu: 1/3 dari sisa (gharrawain)
# =========================
def apply_mother_third_of_residue(heirs: List[Heir], fixed_heirs: List[Heir],
                                  residue: ExactFraction) -> Tuple[ExactFraction, ExactFraction]:
    """
    Ibu mendapat 1/3 dari sisa bila tabel furudh tidak memberinya bagian.
    Mengembalikan ``(diberikan, sisa_akhir)``; diberikan = ZERO bila kaidah
    ini tidak berlaku. Ibu masuk ke ``fixed_heirs`` bila mendapat bagian.
    """
    if residue <= ZERO:
        return ZERO, residue
    mother = next((h for h in heirs if h.relation == R.MOTHER), None)
    if mother is None or mother.result.fraction > ZERO:
        return ZERO, residue

    share = residue * THIRD
    mother.add_share(share, "1/3 of residue")
    if mother not in fixed_heirs:
        fixed_heirs.append(mother)
    return share, residue - share


# =========================
# Radd
# =========================
def radd_eligible(fixed_heirs: List[Heir]) -> List[Heir]:
    return [h for h in fixed_heirs if h.relation not in SPOUSES and h.result.fraction > ZERO]


def apply_radd(fixed_heirs: List[Heir], residue: ExactFraction) -> bool:
    """
    Kembalikan sisa kepada ashab al-furudh sebanding dengan bagian mereka.
    Suami/istri tidak ikut. False bila tidak ada penerima; sisa dibiarkan
    tidak terbagi.
    """
    if residue <= ZERO:
        return False
    eligible = radd_eligible(fixed_heirs)
    if not eligible:
        return False

    base = sum((h.result.fraction for h in eligible), ZERO)
    for heir in eligible:
        portion = heir.result.fraction / base
        heir.add_share(residue * portion, f"Radd ({portion})")
    return True
