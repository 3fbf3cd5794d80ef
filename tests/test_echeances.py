"""Tests pour le suivi d'expiration des documents obligatoires."""

import datetime

import pytest
from freezegun import freeze_time

from taxiflow.securite.echeances import (
    CONFIG_DOCUMENTS,
    DOCUMENTS_SUIVIS,
    Document,
    StatutExpiration,
    documents_a_traiter,
    doit_renouveler,
    sommaire_documents,
    statut_expiration,
    suggerer_prochaine_expiration,
)

AUJOURD_HUI = datetime.date(2025, 6, 1)


def _doc(type_document: str, date_expiration) -> Document:
    return Document(type=type_document, date_expiration=date_expiration)


def _tous_valides() -> list[Document]:
    return [_doc(t, datetime.date(2026, 6, 1)) for t in DOCUMENTS_SUIVIS]


# ---------------------------------------------------------------------------
# Tests: statut d'un document
# ---------------------------------------------------------------------------


class TestStatutExpiration:
    def test_document_absent(self) -> None:
        etat = statut_expiration(None, AUJOURD_HUI)
        assert etat.statut == StatutExpiration.MANQUANT
        assert etat.jours_restants == 0
        assert etat.message == "Non scanné"

    def test_sans_date(self) -> None:
        etat = statut_expiration(_doc("assurance", None), AUJOURD_HUI)
        assert etat.statut == StatutExpiration.MANQUANT

    def test_expire(self) -> None:
        etat = statut_expiration(_doc("assurance", datetime.date(2025, 5, 30)), AUJOURD_HUI)
        assert etat.statut == StatutExpiration.EXPIRE
        assert etat.jours_restants == -2
        assert etat.message == "Expiré depuis 2 jours"

    def test_expire_aujourd_hui_est_urgent(self) -> None:
        etat = statut_expiration(_doc("assurance", AUJOURD_HUI), AUJOURD_HUI)
        assert etat.statut == StatutExpiration.URGENT
        assert etat.jours_restants == 0

    @pytest.mark.parametrize(
        "type_document, expiration, attendu",
        [
            ("assurance", datetime.date(2025, 6, 15), StatutExpiration.URGENT),
            ("assurance", datetime.date(2025, 6, 16), StatutExpiration.AVERTISSEMENT),
            ("assurance", datetime.date(2025, 7, 1), StatutExpiration.AVERTISSEMENT),
            ("assurance", datetime.date(2025, 7, 2), StatutExpiration.VALIDE),
            ("permis_taxi", datetime.date(2025, 7, 1), StatutExpiration.URGENT),
            ("permis_taxi", datetime.date(2025, 7, 31), StatutExpiration.AVERTISSEMENT),
            ("inspection_mecanique", datetime.date(2025, 6, 8), StatutExpiration.URGENT),
            ("inspection_mecanique", datetime.date(2025, 6, 9), StatutExpiration.AVERTISSEMENT),
        ],
    )
    def test_seuils_par_type(self, type_document, expiration, attendu) -> None:
        """Les seuils d'urgence et d'avertissement sont inclusifs et propres au type."""
        etat = statut_expiration(_doc(type_document, expiration), AUJOURD_HUI)
        assert etat.statut == attendu

    def test_type_inconnu_seuils_par_defaut(self) -> None:
        assert statut_expiration(
            _doc("vignette", datetime.date(2025, 6, 8)), AUJOURD_HUI
        ).statut == StatutExpiration.URGENT
        assert statut_expiration(
            _doc("vignette", datetime.date(2025, 7, 2)), AUJOURD_HUI
        ).statut == StatutExpiration.VALIDE

    def test_formation_seuils_nuls(self) -> None:
        """Un seuil nul prend la valeur par defaut (7 jours)."""
        etat = statut_expiration(_doc("formation_base", datetime.date(2025, 6, 5)), AUJOURD_HUI)
        assert etat.statut == StatutExpiration.URGENT

    def test_message_valide(self) -> None:
        etat = statut_expiration(_doc("assurance", datetime.date(2025, 7, 2)), AUJOURD_HUI)
        assert etat.message == "Valide (exp. 02/07/2025)"
        assert etat.jours_restants == 31

    def test_date_texte(self) -> None:
        etat = statut_expiration(Document(type="assurance", date_expiration="2025-05-30"), AUJOURD_HUI)
        assert etat.statut == StatutExpiration.EXPIRE

    @freeze_time("2025-06-01")
    def test_date_du_jour_par_defaut(self) -> None:
        etat = statut_expiration(_doc("assurance", datetime.date(2025, 6, 10)))
        assert etat.jours_restants == 9
        assert etat.statut == StatutExpiration.URGENT


class TestDoitRenouveler:
    def test_sans_document(self) -> None:
        assert doit_renouveler(None, AUJOURD_HUI)

    def test_expire_ou_urgent(self) -> None:
        assert doit_renouveler(_doc("assurance", datetime.date(2025, 5, 1)), AUJOURD_HUI)
        assert doit_renouveler(_doc("assurance", datetime.date(2025, 6, 10)), AUJOURD_HUI)

    def test_avertissement_ou_valide(self) -> None:
        assert not doit_renouveler(_doc("assurance", datetime.date(2025, 6, 20)), AUJOURD_HUI)
        assert not doit_renouveler(_doc("assurance", datetime.date(2026, 1, 1)), AUJOURD_HUI)

    def test_document_sans_date(self) -> None:
        assert not doit_renouveler(_doc("assurance", None), AUJOURD_HUI)


class TestSuggererProchaineExpiration:
    def test_validite_du_type(self) -> None:
        assert suggerer_prochaine_expiration(
            "permis_taxi", datetime.date(2025, 1, 1)
        ) == datetime.date(2029, 12, 31)

    def test_un_an(self) -> None:
        assert suggerer_prochaine_expiration(
            "assurance", datetime.date(2025, 1, 1)
        ) == datetime.date(2026, 1, 1)

    def test_validite_variable_ou_type_inconnu(self) -> None:
        """Sans duree de validite connue: 365 jours."""
        debut = datetime.date(2024, 3, 1)
        assert suggerer_prochaine_expiration("contrat_location", debut) == datetime.date(2025, 3, 1)
        assert suggerer_prochaine_expiration("vignette", debut) == datetime.date(2025, 3, 1)


# ---------------------------------------------------------------------------
# Tests: ensemble des documents
# ---------------------------------------------------------------------------


class TestSommaireDocuments:
    def test_huit_documents_suivis(self) -> None:
        assert len(DOCUMENTS_SUIVIS) == 8
        assert all(t in CONFIG_DOCUMENTS for t in DOCUMENTS_SUIVIS)

    def test_aucun_document(self) -> None:
        sommaire = sommaire_documents([], AUJOURD_HUI)
        assert sommaire.total == 8
        assert sommaire.numerises == 0
        assert sommaire.manquants == 8
        assert sommaire.statut_global == "critique"

    def test_tous_valides(self) -> None:
        sommaire = sommaire_documents(_tous_valides(), AUJOURD_HUI)
        assert sommaire.valides == 8
        assert sommaire.statut_global == "ok"

    def test_avertissement_seul(self) -> None:
        documents = _tous_valides()
        documents[2] = _doc("assurance", datetime.date(2025, 6, 20))
        sommaire = sommaire_documents(documents, AUJOURD_HUI)
        assert sommaire.avertissements == 1
        assert sommaire.statut_global == "attention"

    def test_types_non_suivis_ignores(self) -> None:
        documents = _tous_valides() + [_doc("formation_base", datetime.date(2020, 1, 1))]
        assert sommaire_documents(documents, AUJOURD_HUI).statut_global == "ok"


class TestDocumentsATraiter:
    def test_ordre_de_priorite(self) -> None:
        documents = [
            _doc("permis_taxi", datetime.date(2025, 7, 20)),
            _doc("pocket_saaq", datetime.date(2025, 6, 5)),
            _doc("assurance", datetime.date(2025, 5, 1)),
            _doc("certificat_immatriculation", datetime.date(2026, 1, 1)),
            _doc("attestation_vehicule", datetime.date(2026, 1, 1)),
            _doc("inspection_mecanique", datetime.date(2026, 1, 1)),
            _doc("inspection_taximetre", datetime.date(2026, 1, 1)),
        ]
        a_traiter = documents_a_traiter(documents, AUJOURD_HUI)
        assert [t for t, _ in a_traiter] == [
            "assurance",
            "pocket_saaq",
            "permis_taxi",
            "contrat_location",
        ]
        assert [e.statut for _, e in a_traiter] == [
            StatutExpiration.EXPIRE,
            StatutExpiration.URGENT,
            StatutExpiration.AVERTISSEMENT,
            StatutExpiration.MANQUANT,
        ]

    def test_rien_a_traiter(self) -> None:
        assert documents_a_traiter(_tous_valides(), AUJOURD_HUI) == []
