# app/rules/residuary.py

from __future__ import annotations
from typing import Callable, Collection, List, Optional, Tuple

from app.math.fraction import ExactFraction, ZERO
from app.rules.case import Heir, InheritanceCase
from app.rules.relations import RelationType as R, Sex, SPOUSES

# =========================
# Prioritas ashabah (aturan pertama yang cocok menang)
# =========================
Trigger = Callable[[Callable[[R], bool]], bool]

ASABAH_PRIORITY: List[Tuple[str, Trigger, Tuple[R, ...]]] = [
    ("son", lambda has: has(R.SON), (R.SON, R.DAUGHTER)),
    ("son of son", lambda has: has(R.SON_OF_SON), (R.SON_OF_SON, R.DAUGHTER_OF_SON)),
    ("father", lambda has: has(R.FATHER), (R.FATHER,)),
    ("grandfather", lambda has: has(R.GRANDFATHER), (R.GRANDFATHER,)),
    ("full brother", lambda has: has(R.FULL_BROTHER), (R.FULL_BROTHER, R.FULL_SISTER)),
    ("consanguine brother", lambda has: has(R.CONSANGUINE_BROTHER), (R.CONSANGUINE_BROTHER, R.CONSANGUINE_SISTER)),
    # asabah ma'a al-ghair
    ("full sister with female descendants",
     lambda has: (has(R.DAUGHTER) or has(R.DAUGHTER_OF_SON)) and has(R.FULL_SISTER),
     (R.FULL_SISTER,)),
]


def determine_residuary_group(case: InheritanceCase, blocked: Collection[R] = ()) -> List[Heir]:
    """
    Ahli waris yang berbagi sisa (ashabah), sesuai urutan kasus.

    Hanya yang ada dan tidak mahjub. Bila tidak ada kerabat nasab dan kasus
    hanya berisi suami/istri, pasangan mengambil sisa; selain itu kelompok
    kosong dan pemanggil beralih ke Radd.
    """
    def has(relation: R) -> bool:
        return relation not in blocked and case.has_heir(relation)

    for _label, trigger, members in ASABAH_PRIORITY:
        if trigger(has):
            return [h for h in case.heirs_of(members) if h.relation not in blocked]

    if case.has_only(*SPOUSES):
        return [h for h in case.heirs_of(SPOUSES) if h.relation not in blocked]

    return []


def describe_group(case: InheritanceCase, blocked: Collection[R] = ()) -> Optional[str]:
    """Nama kaidah prioritas yang menghasilkan kelompok ashabah, bila ada."""
    def has(relation: R) -> bool:
        return relation not in blocked and case.has_heir(relation)

    for label, trigger, _members in ASABAH_PRIORITY:
        if trigger(has):
            return label
    if case.has_only(*SPOUSES):
        return "spouse only"
    return None


# =========================
# Distribusi sisa (2:1)
# =========================
def distribute_residue(heirs: List[Heir], residue: ExactFraction) -> List[Tuple[Heir, ExactFraction, str]]:
    """
    Bagi ``residue`` kepada ashabah dan berikan bagiannya masing-masing.

    Satu anggota mengambil semuanya. Bila laki-laki dan perempuan ada, tiap
    laki-laki dua bagian dan tiap perempuan satu; bila satu jenis saja, dibagi
    rata per kepala. Mengembalikan daftar pemberian.
    """
    grants: List[Tuple[Heir, ExactFraction, str]] = []
    if not heirs or residue <= ZERO:
        return grants

    if len(heirs) == 1:
        heir = heirs[0]
        grants.append((heir, residue, f"Residuary: receives the entire residue ({residue})"))
    else:
        males = [h for h in heirs if h.sex == Sex.MALE]
        females = [h for h in heirs if h.sex == Sex.FEMALE]

        if males and females:
            total_units = sum(h.count * 2 for h in males) + sum(h.count for h in females)
            unit = residue / total_units
            for h in heirs:
                weight = 2 if h.sex == Sex.MALE else 1
                grants.append((
                    h,
                    unit * weight * h.count,
                    f"Residuary: {weight * h.count} of {total_units} units (2:1 male to female)",
                ))
        else:
            heads = sum(h.count for h in heirs)
            for h in heirs:
                grants.append((
                    h,
                    residue / heads * h.count,
                    f"Residuary: {h.count} of {heads} heads, shared equally",
                ))

    for heir, fraction, text in grants:
        heir.add_share(fraction, text)
    return grants
