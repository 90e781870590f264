"""
Tes tabel furudh, penentuan ashabah, dan distribusi sisa.
"""

import pytest

from app.math.fraction import ExactFraction, ZERO, HALF, THIRD, QUARTER, SIXTH, EIGHTH, TWO_THIRDS
from app.rules.blocking import get_blocked_relations
from app.rules.case import DeceasedPerson, Heir, InheritanceCase
from app.rules.correction import apply_awl, apply_mother_third_of_residue, apply_radd
from app.rules.engine import SHARE_RULES, fixed_share
from app.rules.relations import RelationType as R, Sex, UnhandledRelation
from app.rules.residuary import determine_residuary_group, distribute_residue


def make_case(heirs, sex=Sex.MALE):
    case = InheritanceCase(DeceasedPerson(sex))
    for relation, count in heirs.items():
        case.add_heir(Heir(relation, count))
    return case


def share_of(relation, heirs, sex=Sex.MALE):
    case = make_case(heirs, sex)
    fraction, _ = fixed_share(relation, case, get_blocked_relations(case))
    return fraction


# ========== TABEL FURUDH ==========
class TestTabelFurudh:

    def test_tabel_lengkap(self):
        assert set(SHARE_RULES) == set(R)

    def test_relasi_tidak_dikenal(self):
        with pytest.raises(UnhandledRelation):
            fixed_share("Uncle", make_case({R.SON: 1}))

    @pytest.mark.parametrize("heirs,expected", [
        ({R.HUSBAND: 1}, HALF),
        ({R.HUSBAND: 1, R.DAUGHTER: 1}, QUARTER),
        ({R.HUSBAND: 1, R.DAUGHTER_OF_SON: 1}, QUARTER),
    ])
    def test_suami(self, heirs, expected):
        assert share_of(R.HUSBAND, heirs, Sex.FEMALE) == expected

    @pytest.mark.parametrize("heirs,expected", [
        ({R.WIFE: 1}, QUARTER),
        ({R.WIFE: 3}, QUARTER),
        ({R.WIFE: 2, R.SON: 1}, EIGHTH),
    ])
    def test_istri_satu_bagian_untuk_semua(self, heirs, expected):
        assert share_of(R.WIFE, heirs) == expected

    @pytest.mark.parametrize("relation", [R.SON, R.SON_OF_SON, R.FULL_BROTHER, R.CONSANGUINE_BROTHER])
    def test_ashabah_murni(self, relation):
        assert share_of(relation, {relation: 1}) == ZERO

    @pytest.mark.parametrize("heirs,expected", [
        ({R.DAUGHTER: 1}, HALF),
        ({R.DAUGHTER: 3}, TWO_THIRDS),
        ({R.DAUGHTER: 1, R.SON: 1}, ZERO),
    ])
    def test_anak_perempuan(self, heirs, expected):
        assert share_of(R.DAUGHTER, heirs) == expected

    @pytest.mark.parametrize("heirs,expected", [
        ({R.DAUGHTER_OF_SON: 1}, HALF),
        ({R.DAUGHTER_OF_SON: 2}, TWO_THIRDS),
        ({R.DAUGHTER_OF_SON: 1, R.DAUGHTER: 1}, SIXTH),
        ({R.DAUGHTER_OF_SON: 1, R.SON_OF_SON: 1}, ZERO),
    ])
    def test_cucu_perempuan(self, heirs, expected):
        assert share_of(R.DAUGHTER_OF_SON, heirs) == expected

    def test_ayah(self):
        assert share_of(R.FATHER, {R.FATHER: 1, R.SON: 1}) == SIXTH
        assert share_of(R.FATHER, {R.FATHER: 1}) == ZERO

    @pytest.mark.parametrize("heirs,expected", [
        ({R.MOTHER: 1, R.DAUGHTER: 1}, SIXTH),
        ({R.MOTHER: 1, R.FULL_BROTHER: 1}, SIXTH),
        ({R.MOTHER: 1, R.UTERINE_SISTER: 1}, SIXTH),
        ({R.MOTHER: 1}, THIRD),
        ({R.MOTHER: 1, R.FATHER: 1}, ZERO),
        ({R.MOTHER: 1, R.WIFE: 1}, ZERO),
    ])
    def test_ibu(self, heirs, expected):
        assert share_of(R.MOTHER, heirs) == expected

    def test_kakek(self):
        assert share_of(R.GRANDFATHER, {R.GRANDFATHER: 1, R.DAUGHTER: 1}) == SIXTH
        assert share_of(R.GRANDFATHER, {R.GRANDFATHER: 1}) == ZERO

    def test_nenek(self):
        both = {R.GRANDMOTHER_MATERNAL: 1, R.GRANDMOTHER_PATERNAL: 1}
        assert share_of(R.GRANDMOTHER_MATERNAL, both) == ExactFraction(1, 12)
        assert share_of(R.GRANDMOTHER_PATERNAL, both) == ExactFraction(1, 12)
        assert share_of(R.GRANDMOTHER_PATERNAL, {R.GRANDMOTHER_PATERNAL: 1}) == SIXTH

    def test_nenek_tetap_berbagi_walau_satu_terhalang(self):
        heirs = {R.GRANDFATHER: 1, R.GRANDMOTHER_MATERNAL: 1, R.GRANDMOTHER_PATERNAL: 1}
        assert share_of(R.GRANDMOTHER_MATERNAL, heirs) == ExactFraction(1, 12)
        heirs = {R.SON: 1, R.MOTHER: 1, R.GRANDMOTHER_MATERNAL: 1, R.GRANDMOTHER_PATERNAL: 1}
        assert share_of(R.GRANDMOTHER_PATERNAL, heirs) == ExactFraction(1, 12)

    def test_saudara_seibu_satu(self):
        assert share_of(R.UTERINE_SISTER, {R.UTERINE_SISTER: 1}) == SIXTH

    def test_saudara_seibu_berbagi_sepertiga_rata(self):
        heirs = {R.UTERINE_BROTHER: 1, R.UTERINE_SISTER: 2}
        brother = share_of(R.UTERINE_BROTHER, heirs)
        sisters = share_of(R.UTERINE_SISTER, heirs)
        assert brother + sisters == THIRD
        assert brother == sisters / 2  # per kepala sama, tanpa 2:1

    @pytest.mark.parametrize("heirs,expected", [
        ({R.FULL_SISTER: 1}, HALF),
        ({R.FULL_SISTER: 2}, TWO_THIRDS),
        ({R.FULL_SISTER: 1, R.DAUGHTER: 1}, SIXTH),
        ({R.FULL_SISTER: 1, R.FULL_BROTHER: 1}, ZERO),
    ])
    def test_saudari_kandung(self, heirs, expected):
        assert share_of(R.FULL_SISTER, heirs) == expected

    @pytest.mark.parametrize("heirs,expected", [
        ({R.CONSANGUINE_SISTER: 1}, HALF),
        ({R.CONSANGUINE_SISTER: 2}, TWO_THIRDS),
        ({R.CONSANGUINE_SISTER: 1, R.FULL_SISTER: 1}, ZERO),
    ])
    def test_saudari_seayah(self, heirs, expected):
        assert share_of(R.CONSANGUINE_SISTER, heirs) == expected

    def test_penjelasan_selalu_ada(self):
        case = make_case({R.SON: 1, R.WIFE: 1})
        for relation in R:
            _, text = fixed_share(relation, case)
            assert text


# ========== ASHABAH ==========
class TestAshabah:

    def group(self, heirs, sex=Sex.MALE):
        case = make_case(heirs, sex)
        return [h.relation for h in determine_residuary_group(case, get_blocked_relations(case))]

    def test_anak_laki_dan_perempuan(self):
        assert self.group({R.SON: 1, R.DAUGHTER: 2, R.FATHER: 1}) == [R.SON, R.DAUGHTER]

    def test_cucu(self):
        assert self.group({R.SON_OF_SON: 1, R.DAUGHTER_OF_SON: 1}) == [R.SON_OF_SON, R.DAUGHTER_OF_SON]

    def test_ayah(self):
        assert self.group({R.FATHER: 1, R.DAUGHTER: 1}) == [R.FATHER]

    def test_kakek(self):
        assert self.group({R.GRANDFATHER: 1, R.MOTHER: 1}) == [R.GRANDFATHER]

    def test_saudara_kandung_bersama_saudari(self):
        assert self.group({R.FULL_BROTHER: 1, R.FULL_SISTER: 1}) == [R.FULL_BROTHER, R.FULL_SISTER]

    def test_saudara_seayah(self):
        assert self.group({R.CONSANGUINE_BROTHER: 1, R.CONSANGUINE_SISTER: 1, R.MOTHER: 1}) == \
            [R.CONSANGUINE_BROTHER, R.CONSANGUINE_SISTER]

    def test_ashabah_maal_ghair(self):
        assert self.group({R.DAUGHTER: 1, R.FULL_SISTER: 1}) == [R.FULL_SISTER]
        assert self.group({R.DAUGHTER_OF_SON: 1, R.FULL_SISTER: 2}) == [R.FULL_SISTER]

    def test_hanya_pasangan(self):
        assert self.group({R.WIFE: 2}) == [R.WIFE]
        assert self.group({R.HUSBAND: 1}, Sex.FEMALE) == [R.HUSBAND]

    def test_tidak_ada_ashabah(self):
        assert self.group({R.DAUGHTER: 1, R.MOTHER: 1}) == []
        assert self.group({R.WIFE: 1, R.MOTHER: 1}) == []

    def test_yang_terhalang_tidak_ikut(self):
        # ayah menghalangi saudara kandung; ayah sendiri yang jadi ashabah
        assert self.group({R.FATHER: 1, R.FULL_BROTHER: 1}) == [R.FATHER]


# ========== DISTRIBUSI SISA ==========
class TestDistribusiSisa:

    def test_satu_anggota_ambil_semua(self):
        son = Heir(R.SON, 3)
        distribute_residue([son], ExactFraction(7, 8))
        assert son.fraction == ExactFraction(7, 8)

    def test_dua_banding_satu(self):
        son, daughter = Heir(R.SON, 1), Heir(R.DAUGHTER, 2)
        distribute_residue([son, daughter], ExactFraction(3, 4))
        assert son.fraction == ExactFraction(3, 8)
        assert daughter.fraction == ExactFraction(3, 8)
        assert son.share_per_head() == 2 * daughter.share_per_head()

    def test_satu_jenis_kelamin_rata(self):
        a, b = Heir(R.WIFE, 1), Heir(R.WIFE, 3)
        distribute_residue([a, b], HALF)
        assert a.fraction == EIGHTH
        assert b.fraction == ExactFraction(3, 8)

    def test_sisa_nol(self):
        son = Heir(R.SON)
        assert distribute_residue([son], ZERO) == []
        assert son.fraction == ZERO


# ========== KOREKSI ==========
class TestKoreksi:

    def test_aul(self):
        husband, mother, daughters = Heir(R.HUSBAND), Heir(R.MOTHER), Heir(R.DAUGHTER, 2)
        husband.add_share(QUARTER, "Husband")
        mother.add_share(SIXTH, "Mother")
        daughters.add_share(TWO_THIRDS, "Daughters")
        heirs = [husband, mother, daughters]
        total = sum((h.fraction for h in heirs), ZERO)

        assert apply_awl(heirs, total) == 1
        assert [h.fraction for h in heirs] == [
            ExactFraction(3, 13), ExactFraction(2, 13), ExactFraction(8, 13)]
        assert "Awl applied: 1/4 reduced to 3/13" in husband.result.explanation

    def test_sepertiga_sisa_untuk_ibu(self):
        wife, mother = Heir(R.WIFE), Heir(R.MOTHER)
        wife.add_share(QUARTER, "Wife")
        fixed = [wife]
        granted, residue = apply_mother_third_of_residue([wife, mother], fixed, ExactFraction(3, 4))
        assert granted == QUARTER
        assert residue == HALF
        assert mother in fixed
        assert mother.result.explanation == "1/3 of residue"

    def test_ibu_yang_sudah_dapat_bagian(self):
        mother = Heir(R.MOTHER)
        mother.add_share(SIXTH, "Mother")
        granted, residue = apply_mother_third_of_residue([mother], [mother], HALF)
        assert granted == ZERO and residue == HALF

    def test_radd_tanpa_pasangan(self):
        daughter, granddaughter = Heir(R.DAUGHTER), Heir(R.DAUGHTER_OF_SON)
        daughter.add_share(HALF, "Daughter")
        granddaughter.add_share(SIXTH, "DaughterOfSon")
        assert apply_radd([daughter, granddaughter], THIRD)
        assert daughter.fraction == ExactFraction(3, 4)
        assert granddaughter.fraction == QUARTER
        assert daughter.result.notes == ["Daughter", "Radd (3/4)"]

    def test_radd_tidak_menyentuh_pasangan(self):
        husband, mother = Heir(R.HUSBAND), Heir(R.MOTHER)
        husband.add_share(HALF, "Husband")
        mother.add_share(SIXTH, "Mother")
        assert apply_radd([husband, mother], THIRD)
        assert husband.fraction == HALF
        assert mother.fraction == HALF

    def test_radd_tanpa_penerima(self):
        wife = Heir(R.WIFE)
        wife.add_share(QUARTER, "Wife")
        assert not apply_radd([wife], ExactFraction(3, 4))
        assert wife.fraction == QUARTER
