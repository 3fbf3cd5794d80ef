"""Tests pour la gravite des defauts de ronde de securite."""

import pytest

from taxiflow.erreurs import VerificationInconnue
from taxiflow.securite.defauts import (
    REGLES_DEFAUTS,
    SECTIONS,
    Gravite,
    StatutRonde,
    evaluer_ronde,
    gravite_de,
    verifications_en_ordre,
)

MAJEURS = {
    "check_phares_feux",
    "check_pneus",
    "check_direction",
    "check_liquide_frein",
    "check_fuites",
    "check_essuie_glaces",
    "check_ceintures",
}


def _tout_conforme() -> dict[str, bool]:
    return {v: True for v in verifications_en_ordre()}


class TestRegles:
    def test_seize_verifications(self) -> None:
        assert len(REGLES_DEFAUTS) == 16

    def test_chaque_verification_a_une_gravite(self) -> None:
        """Toute verification affichee a une gravite definie."""
        for verification in verifications_en_ordre():
            assert gravite_de(verification) is not None

    def test_majeurs(self) -> None:
        majeurs = {v for v, g in REGLES_DEFAUTS.items() if g == Gravite.MAJEUR}
        assert majeurs == MAJEURS

    def test_mineur(self) -> None:
        assert gravite_de("check_klaxon") == Gravite.MINEUR
        assert gravite_de("check_klaxon").value == "mineur"

    def test_identifiant_inconnu(self) -> None:
        assert gravite_de("check_inexistant") is None

    def test_table_immuable(self) -> None:
        with pytest.raises(TypeError):
            REGLES_DEFAUTS["check_pneus"] = Gravite.MINEUR  # type: ignore[index]


class TestOrdreAffichage:
    def test_ordre_couvre_la_table(self) -> None:
        ordre = verifications_en_ordre()
        assert len(ordre) == 16
        assert set(ordre) == set(REGLES_DEFAUTS)

    def test_ordre_par_section(self) -> None:
        ordre = verifications_en_ordre()
        assert ordre[0] == "check_phares_feux"
        assert ordre[5] == "check_frein_stationnement"
        assert ordre[-1] == "check_trousse"

    def test_sections(self) -> None:
        assert list(SECTIONS) == [
            "Extérieur & Feux",
            "Intérieur & Mécanique",
            "Équipement Taxi",
        ]
        assert [len(ids) for ids in SECTIONS.values()] == [5, 6, 5]

    def test_iteration_reprenable(self) -> None:
        """Deux parcours successifs donnent la meme sequence."""
        assert list(verifications_en_ordre()) == list(verifications_en_ordre())


class TestEvaluerRonde:
    def test_conforme(self) -> None:
        resultat = evaluer_ronde(_tout_conforme())
        assert resultat.statut == StatutRonde.CONFORME
        assert resultat.defauts == []
        assert resultat.peut_circuler

    def test_defaut_mineur(self) -> None:
        verifications = _tout_conforme()
        verifications["check_proprete"] = False
        resultat = evaluer_ronde(verifications)
        assert resultat.statut == StatutRonde.DEFAUT_MINEUR
        assert [d.nom_verification for d in resultat.defauts] == ["check_proprete"]
        assert resultat.defauts[0].repare is False
        assert resultat.peut_circuler

    def test_defaut_majeur_l_emporte(self) -> None:
        """Un seul defaut majeur suffit a interdire de circuler."""
        verifications = _tout_conforme()
        verifications["check_klaxon"] = False
        verifications["check_pneus"] = False
        resultat = evaluer_ronde(verifications)
        assert resultat.statut == StatutRonde.DEFAUT_MAJEUR
        assert not resultat.peut_circuler

    def test_defauts_dans_l_ordre_d_affichage(self) -> None:
        verifications = {
            "check_trousse": False,
            "check_klaxon": False,
            "check_phares_feux": False,
        }
        resultat = evaluer_ronde(verifications)
        assert [d.nom_verification for d in resultat.defauts] == [
            "check_phares_feux",
            "check_klaxon",
            "check_trousse",
        ]
        assert [d.gravite for d in resultat.defauts] == [
            Gravite.MAJEUR,
            Gravite.MINEUR,
            Gravite.MINEUR,
        ]

    def test_ronde_partielle(self) -> None:
        """Les verifications non fournies ne sont pas des defauts."""
        resultat = evaluer_ronde({"check_pneus": True})
        assert resultat.statut == StatutRonde.CONFORME

    def test_identifiant_inconnu_rejete(self) -> None:
        with pytest.raises(VerificationInconnue, match="check_turbo"):
            evaluer_ronde({"check_turbo": False})
