# app/rules/engine.py

from __future__ import annotations
from typing import Callable, Collection, Dict, List, Tuple

from app.math.fraction import (
    ExactFraction, ZERO, HALF, THIRD, QUARTER, SIXTH, EIGHTH, TWO_THIRDS,
)
from app.rules.case import Heir, InheritanceCase
from app.rules.relations import RelationType as R, UnhandledRelation

Share = Tuple[ExactFraction, str]
ShareRule = Callable[[InheritanceCase, Collection[R]], Share]

RESIDUARY_TEXT = "Residuary heir (inherits remainder after fixed shares)"


# =========================
# Util kuantitas
# =========================
def _q(case: InheritanceCase, relation: R) -> int:
    return case.heir_count(relation)


def _active_q(case: InheritanceCase, blocked: Collection[R], relation: R) -> int:
    return 0 if relation in blocked else case.heir_count(relation)


# =========================
# Suami / Istri
# =========================
def _husband(case, blocked) -> Share:
    if case.has_descendants():
        return QUARTER, "Husband: 1/4 of estate (with children)"
    return HALF, "Husband: 1/2 of estate (no children)"


def _wife(case, blocked) -> Share:
    # satu bagian untuk semua istri, dibagi rata saat ditampilkan
    if case.has_descendants():
        return EIGHTH, "Wife: 1/8 of estate (with children)"
    return QUARTER, "Wife: 1/4 of estate (no children)"


def _pure_residuary(case, blocked) -> Share:
    return ZERO, RESIDUARY_TEXT


# =========================
# Anak & cucu
# =========================
def _daughter(case, blocked) -> Share:
    n = _q(case, R.DAUGHTER)
    if case.has_heir(R.SON):
        return ZERO, "Daughter: 2:1 ratio with son (residuary)"
    if n == 1:
        return HALF, "Daughter: 1/2 of estate (sole daughter)"
    if n >= 2:
        return TWO_THIRDS, "Daughter: 2/3 of estate (multiple daughters, shared equally)"
    return ZERO, RESIDUARY_TEXT


def _daughter_of_son(case, blocked) -> Share:
    n = _q(case, R.DAUGHTER_OF_SON)
    daughters = _q(case, R.DAUGHTER)
    if n == 0:
        return ZERO, "No daughter of son"
    if case.has_heir(R.SON_OF_SON):
        return ZERO, "Daughter of son: residuary with son of son (2:1)"
    if daughters > 0:
        if daughters == 1:
            return SIXTH, "Daughter of son: 1/6 (completes 2/3 with daughter)"
        return ZERO, "Daughter of son: nothing left (daughters already have 2/3)"
    if n == 1:
        return HALF, "Daughter of son: 1/2 (sole, no daughter)"
    return TWO_THIRDS, "Daughter of son: 2/3 (multiple, no daughter)"


# =========================
# Ayah / Ibu / Kakek / Nenek
# =========================
def _father(case, blocked) -> Share:
    if case.has_descendants():
        return SIXTH, "Father: 1/6 of estate (with children)"
    return ZERO, "Father: Residuary (remainder after fixed shares)"


def _mother(case, blocked) -> Share:
    if case.has_descendants():
        return SIXTH, "Mother: 1/6 of estate (with children)"
    if case.has_siblings():
        return SIXTH, "Mother: 1/6 of estate (with siblings)"
    if not case.has_spouse() and not case.has_heir(R.FATHER):
        return THIRD, "Mother: 1/3 of estate (no children, siblings, spouse or father)"
    return ZERO, "Mother: 1/3 of residue (spouse or father present)"


def _grandfather(case, blocked) -> Share:
    if case.has_descendants():
        return SIXTH, "Grandfather: 1/6 of estate (with children)"
    return ZERO, "Grandfather: Residuary in place of the father"


def _grandmother(other: R) -> ShareRule:
    def rule(case, blocked) -> Share:
        if case.has_heir(other):
            return SIXTH / 2, "Grandmother: 1/12 (both grandmothers share 1/6)"
        return SIXTH, "Grandmother: 1/6 of estate"
    return rule


# =========================
# Saudara seibu (dibagi rata lintas gender)
# =========================
def _uterine(case, blocked, relation: R) -> Share:
    total = _active_q(case, blocked, R.UTERINE_BROTHER) + _active_q(case, blocked, R.UTERINE_SISTER)
    own = _active_q(case, blocked, relation)
    if total == 0 or own == 0:
        return ZERO, "No uterine sibling"
    if total == 1:
        return SIXTH, "Uterine sibling: 1/6 (single uterine sibling)"
    pool = THIRD
    share = pool * own / total
    return share, f"Uterine sibling: {own} of {total} heads in a shared 1/3 (equal per head)"


def _uterine_brother(case, blocked) -> Share:
    return _uterine(case, blocked, R.UTERINE_BROTHER)


def _uterine_sister(case, blocked) -> Share:
    return _uterine(case, blocked, R.UTERINE_SISTER)


# =========================
# Saudari kandung / seayah
# =========================
def _full_sister(case, blocked) -> Share:
    n = _q(case, R.FULL_SISTER)
    if n == 0:
        return ZERO, "No full sister"
    if case.has_heir(R.FULL_BROTHER):
        return ZERO, "Full sister: residuary with full brother (2:1)"
    if case.has_heir(R.DAUGHTER):
        return SIXTH, "Full sister: 1/6 (with daughter)"
    if n == 1:
        return HALF, "Full sister: 1/2 (sole full sister)"
    return TWO_THIRDS, "Full sister: 2/3 (multiple full sisters, shared equally)"


def _consanguine_sister(case, blocked) -> Share:
    n = _q(case, R.CONSANGUINE_SISTER)
    if n == 0:
        return ZERO, "No consanguine sister"
    if case.has_heir(R.FULL_SISTER):
        return ZERO, "Consanguine sister: nothing (full sister present)"
    if case.has_heir(R.CONSANGUINE_BROTHER):
        return ZERO, "Consanguine sister: residuary with consanguine brother (2:1)"
    if n == 1:
        return HALF, "Consanguine sister: 1/2 (sole consanguine sister)"
    return TWO_THIRDS, "Consanguine sister: 2/3 (multiple consanguine sisters, shared equally)"


# =========================
# Tabel furudh
# =========================
SHARE_RULES: Dict[R, ShareRule] = {
    R.HUSBAND: _husband,
    R.WIFE: _wife,
    R.SON: _pure_residuary,
    R.SON_OF_SON: _pure_residuary,
    R.FULL_BROTHER: _pure_residuary,
    R.CONSANGUINE_BROTHER: _pure_residuary,
    R.DAUGHTER: _daughter,
    R.DAUGHTER_OF_SON: _daughter_of_son,
    R.FATHER: _father,
    R.MOTHER: _mother,
    R.GRANDFATHER: _grandfather,
    R.GRANDMOTHER_MATERNAL: _grandmother(R.GRANDMOTHER_PATERNAL),
    R.GRANDMOTHER_PATERNAL: _grandmother(R.GRANDMOTHER_MATERNAL),
    R.UTERINE_BROTHER: _uterine_brother,
    R.UTERINE_SISTER: _uterine_sister,
    R.FULL_SISTER: _full_sister,
    R.CONSANGUINE_SISTER: _consanguine_sister,
}


def fixed_share(relation: R, case: InheritanceCase, blocked: Collection[R] = ()) -> Share:
    """
    Furudh satu relasi dalam konteks kasus.

    ``blocked`` adalah hasil hijab; hanya dipakai untuk bagian saudara seibu,
    yang dibagi di antara saudara seibu yang benar-benar mewarisi.
    """
    try:
        rule = SHARE_RULES[relation]
    except KeyError:
        raise UnhandledRelation("SHARE_RULES", relation) from None
    return rule(case, blocked)


def determine_furudh(case: InheritanceCase, active_heirs: List[Heir],
                     blocked: Collection[R] = ()) -> List[Tuple[Heir, ExactFraction, str]]:
    """
    Hitung furudh setiap ahli waris yang tidak mahjub, sesuai urutan kasus.
    Bagian nol tetap dikembalikan; pemanggil yang menentukan artinya
    (ashabah atau ditunda).
    """
    items: List[Tuple[Heir, ExactFraction, str]] = []
    for heir in active_heirs:
        fraction, text = fixed_share(heir.relation, case, blocked)
        items.append((heir, fraction, text))
    return items
