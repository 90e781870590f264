# app/rules/blocking.py

from __future__ import annotations
from typing import Callable, Dict, FrozenSet, List, Set, Tuple

from app.rules.case import InheritanceCase
from app.rules.relations import RelationType as R

# =========================
# Tabel hijab statis: (penghalang, terhalang)
# =========================
_BROTHERS_AND_SISTERS = (R.FULL_BROTHER, R.FULL_SISTER, R.CONSANGUINE_BROTHER, R.CONSANGUINE_SISTER)
_ALL_SIBLINGS = _BROTHERS_AND_SISTERS + (R.UTERINE_BROTHER, R.UTERINE_SISTER)

STATIC_BLOCKS: List[Tuple[R, R]] = [
    (R.SON, R.GRANDFATHER),
    (R.FATHER, R.GRANDFATHER),
    (R.SON, R.SON_OF_SON),
    *((R.FATHER, b) for b in _BROTHERS_AND_SISTERS),
    *((R.SON, b) for b in _ALL_SIBLINGS),
    *((R.SON_OF_SON, b) for b in _ALL_SIBLINGS),
    (R.FATHER, R.GRANDMOTHER_MATERNAL),
    (R.MOTHER, R.GRANDMOTHER_MATERNAL),
    (R.FATHER, R.GRANDMOTHER_PATERNAL),
    (R.GRANDFATHER, R.GRANDMOTHER_PATERNAL),
    (R.FULL_SISTER, R.CONSANGUINE_SISTER),
]


# =========================
# Kondisi gabungan
# =========================
Condition = Callable[[InheritanceCase], bool]


def _son(c: InheritanceCase) -> bool:
    return c.has_heir(R.SON)


def _two_daughters_no_son(c: InheritanceCase) -> bool:
    return not c.has_heir(R.SON) and c.heir_count(R.DAUGHTER) >= 2


def _daughter_of_son_no_son(c: InheritanceCase) -> bool:
    return not c.has_heir(R.SON) and c.has_heir(R.DAUGHTER_OF_SON)


def _male_line_or_full_brother(c: InheritanceCase) -> bool:
    return c.has_male_descendant_or_ascendant() or c.has_heir(R.FULL_BROTHER)


def _more_than_two_full_sisters(c: InheritanceCase) -> bool:
    return c.heir_count(R.FULL_SISTER) > 2


def _male_line(c: InheritanceCase) -> bool:
    return c.has_male_descendant_or_ascendant()


def _descendants_or_male_line(c: InheritanceCase) -> bool:
    return c.has_descendants() or c.has_male_descendant_or_ascendant()


def _grandchild_and_father(c: InheritanceCase) -> bool:
    return c.has_grandchildren() and c.has_heir(R.FATHER)


COMPOSITE_BLOCKS: List[Tuple[Condition, FrozenSet[R], str]] = [
    (_son, frozenset({R.SON_OF_SON, R.DAUGHTER_OF_SON}),
     "Blocked by a son"),
    (_two_daughters_no_son, frozenset({R.DAUGHTER_OF_SON}),
     "Blocked: two or more daughters already take 2/3"),
    (_daughter_of_son_no_son, frozenset({R.UTERINE_BROTHER, R.UTERINE_SISTER}),
     "Blocked by a son's daughter"),
    (_male_line_or_full_brother, frozenset({R.CONSANGUINE_BROTHER, R.CONSANGUINE_SISTER}),
     "Blocked by a male descendant/ascendant or a full brother"),
    (_more_than_two_full_sisters, frozenset({R.CONSANGUINE_SISTER}),
     "Blocked by more than two full sisters"),
    (_male_line, frozenset({R.FULL_BROTHER, R.FULL_SISTER}),
     "Blocked by a male descendant or ascendant"),
    (_descendants_or_male_line, frozenset({R.UTERINE_BROTHER, R.UTERINE_SISTER}),
     "Blocked by a descendant or a male ascendant"),
    (_grandchild_and_father, frozenset({R.GRANDFATHER, R.GRANDMOTHER_MATERNAL, R.GRANDMOTHER_PATERNAL}),
     "Blocked by the father (grandchildren present)"),
]


def _label(relation: R) -> str:
    return relation.value


def resolve_blocking(case: InheritanceCase) -> Dict[R, List[str]]:
    """
    Petakan setiap relasi yang mahjub ke alasan-alasannya.

    Pasangan statis diterapkan dulu, lalu kondisi gabungan; hasilnya hanya
    memuat relasi yang benar-benar ada dalam kasus.
    """
    reasons: Dict[R, List[str]] = {}

    for blocker, blocked in STATIC_BLOCKS:
        if case.has_heir(blocker):
            reasons.setdefault(blocked, []).append(f"Blocked by {_label(blocker)}")

    for condition, blocked_set, reason in COMPOSITE_BLOCKS:
        if condition(case):
            for blocked in sorted(blocked_set, key=lambda r: r.value):
                bucket = reasons.setdefault(blocked, [])
                if reason not in bucket:
                    bucket.append(reason)

    # ahli waris yang tidak ada tidak perlu dicatat
    return {r: why for r, why in reasons.items() if case.has_heir(r)}


def get_blocked_relations(case: InheritanceCase) -> Set[R]:
    return set(resolve_blocking(case))


def is_blocked(relation: R, case: InheritanceCase) -> bool:
    return relation in resolve_blocking(case)
