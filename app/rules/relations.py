# app/rules/relations.py

from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class HeirCategory(str, Enum):
    """
    FixedShare (ashab al-furudh), Residuary (ashabah), atau Both tergantung
    ahli waris lain yang ada.
    """
    FIXED_SHARE = "FixedShare"
    RESIDUARY = "Residuary"
    BOTH = "Both"


class RelationType(str, Enum):
    # Keturunan
    SON = "Son"
    DAUGHTER = "Daughter"
    SON_OF_SON = "SonOfSon"
    DAUGHTER_OF_SON = "DaughterOfSon"

    # Orang tua & kakek/nenek
    FATHER = "Father"
    MOTHER = "Mother"
    GRANDFATHER = "Grandfather"
    GRANDMOTHER_MATERNAL = "GrandmotherMaternal"
    GRANDMOTHER_PATERNAL = "GrandmotherPaternal"

    # Pasangan
    HUSBAND = "Husband"
    WIFE = "Wife"

    # Saudara kandung
    FULL_BROTHER = "FullBrother"
    FULL_SISTER = "FullSister"

    # Saudara seayah
    CONSANGUINE_BROTHER = "ConsanguineBrother"
    CONSANGUINE_SISTER = "ConsanguineSister"

    # Saudara seibu
    UTERINE_BROTHER = "UterineBrother"
    UTERINE_SISTER = "UterineSister"


class UnhandledRelation(LookupError):
    """Tabel kaidah tidak punya entri untuk relasi ini."""

    def __init__(self, table: str, relation):
        super().__init__(f"{table}: no rule for relation {relation!r}")
        self.table = table
        self.relation = relation


R = RelationType

# =========================
# Pengelompokan
# =========================
DESCENDANTS: FrozenSet[RelationType] = frozenset({R.SON, R.DAUGHTER, R.SON_OF_SON, R.DAUGHTER_OF_SON})
GRANDCHILDREN: FrozenSet[RelationType] = frozenset({R.SON_OF_SON, R.DAUGHTER_OF_SON})
MALE_LINE: FrozenSet[RelationType] = frozenset({R.SON, R.SON_OF_SON, R.FATHER, R.GRANDFATHER})
SPOUSES: FrozenSet[RelationType] = frozenset({R.HUSBAND, R.WIFE})
UTERINE_SIBLINGS: FrozenSet[RelationType] = frozenset({R.UTERINE_BROTHER, R.UTERINE_SISTER})
SIBLINGS: FrozenSet[RelationType] = frozenset({
    R.FULL_BROTHER, R.FULL_SISTER,
    R.CONSANGUINE_BROTHER, R.CONSANGUINE_SISTER,
    R.UTERINE_BROTHER, R.UTERINE_SISTER,
})
GRANDMOTHERS: FrozenSet[RelationType] = frozenset({R.GRANDMOTHER_MATERNAL, R.GRANDMOTHER_PATERNAL})


# =========================
# Metadata per relasi
# (sex, category, group, nama Arab)
# =========================
RELATION_INFO: Dict[RelationType, tuple] = {
    R.SON:                  (Sex.MALE,   HeirCategory.RESIDUARY,   "descendant", "ابن"),
    R.DAUGHTER:             (Sex.FEMALE, HeirCategory.BOTH,        "descendant", "بنت"),
    R.SON_OF_SON:           (Sex.MALE,   HeirCategory.RESIDUARY,   "descendant", "ابن ابن"),
    R.DAUGHTER_OF_SON:      (Sex.FEMALE, HeirCategory.BOTH,        "descendant", "بنت ابن"),
    R.FATHER:               (Sex.MALE,   HeirCategory.BOTH,        "ascendant",  "أب"),
    R.MOTHER:               (Sex.FEMALE, HeirCategory.BOTH,        "ascendant",  "أم"),
    R.GRANDFATHER:          (Sex.MALE,   HeirCategory.BOTH,        "ascendant",  "جد"),
    R.GRANDMOTHER_MATERNAL: (Sex.FEMALE, HeirCategory.FIXED_SHARE, "ascendant",  "جدة من الأم"),
    R.GRANDMOTHER_PATERNAL: (Sex.FEMALE, HeirCategory.FIXED_SHARE, "ascendant",  "جدة من الأب"),
    R.HUSBAND:              (Sex.MALE,   HeirCategory.BOTH,        "spouse",     "زوج"),
    R.WIFE:                 (Sex.FEMALE, HeirCategory.FIXED_SHARE, "spouse",     "زوجة"),
    R.FULL_BROTHER:         (Sex.MALE,   HeirCategory.BOTH,        "full_sibling", "أخ لأبوين"),
    R.FULL_SISTER:          (Sex.FEMALE, HeirCategory.BOTH,        "full_sibling", "أخت لأبوين"),
    R.CONSANGUINE_BROTHER:  (Sex.MALE,   HeirCategory.BOTH,        "consanguine_sibling", "أخ لأب"),
    R.CONSANGUINE_SISTER:   (Sex.FEMALE, HeirCategory.BOTH,        "consanguine_sibling", "أخت لأب"),
    R.UTERINE_BROTHER:      (Sex.MALE,   HeirCategory.FIXED_SHARE, "uterine_sibling", "أخ لأم"),
    R.UTERINE_SISTER:       (Sex.FEMALE, HeirCategory.FIXED_SHARE, "uterine_sibling", "أخت لأم"),
}


def _info(relation: RelationType) -> tuple:
    try:
        return RELATION_INFO[relation]
    except KeyError:
        raise UnhandledRelation("RELATION_INFO", relation) from None


def sex_of(relation: RelationType) -> Sex:
    return _info(relation)[0]


def category_of(relation: RelationType) -> HeirCategory:
    return _info(relation)[1]


def group_of(relation: RelationType) -> str:
    return _info(relation)[2]


def arabic_name(relation: RelationType) -> str:
    return _info(relation)[3]


def parse_relation(name: str) -> RelationType:
    """
    Menerima nilai enum ("SonOfSon") atau nama anggota ("SON_OF_SON"),
    tanpa membedakan huruf besar. Selain itu: UnhandledRelation.
    """
    key = (name or "").strip()
    for relation in RelationType:
        if key.lower() in (relation.value.lower(), relation.name.lower()):
            return relation
    raise UnhandledRelation("RelationType", name)
