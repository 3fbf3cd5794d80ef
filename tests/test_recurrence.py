"""Tests pour les depenses recurrentes."""

import datetime
import logging
from decimal import Decimal

import pytest
from freezegun import freeze_time

from taxiflow.depenses.recurrence import generer_depenses_recurrentes, prochaine_date
from taxiflow.models.transaction import Depense


def _recurrente(**kwargs) -> Depense:
    valeurs = {
        "id": "abonnement-1",
        "driverId": "c1",
        "date": "2025-02-01T08:00:00",
        "categoryId": "PHONE",
        "merchant": "Vidéotron",
        "amountExclTax": Decimal("60.00"),
        "tps": Decimal("3.00"),
        "tvq": Decimal("5.99"),
        "total": Decimal("68.99"),
        "receiptUrl": "https://exemple.test/recu.jpg",
        "isRecurring": True,
        "recurringFrequency": "monthly",
        "nextRecurringDate": "2025-03-01T08:00:00",
    }
    valeurs.update(kwargs)
    return Depense(**valeurs)


class TestProchaineDate:
    def test_hebdomadaire(self) -> None:
        assert prochaine_date(datetime.datetime(2025, 1, 1), "weekly") == datetime.datetime(
            2025, 1, 8
        )

    def test_aux_deux_semaines(self) -> None:
        assert prochaine_date(
            datetime.datetime(2025, 1, 25), "biweekly"
        ) == datetime.datetime(2025, 2, 8)

    def test_mensuel(self) -> None:
        assert prochaine_date(
            datetime.datetime(2025, 1, 15, 9, 0), "monthly"
        ) == datetime.datetime(2025, 2, 15, 9, 0)

    def test_mensuel_fin_de_mois(self) -> None:
        """Le 31 janvier donne le dernier jour de fevrier."""
        assert prochaine_date(datetime.datetime(2025, 1, 31), "monthly") == datetime.datetime(
            2025, 2, 28
        )
        assert prochaine_date(datetime.datetime(2024, 1, 31), "monthly") == datetime.datetime(
            2024, 2, 29
        )

    def test_frequence_inconnue(self) -> None:
        with pytest.raises(ValueError, match="daily"):
            prochaine_date(datetime.datetime(2025, 1, 1), "daily")  # type: ignore[arg-type]


class TestGenererDepensesRecurrentes:
    MAINTENANT = datetime.datetime(2025, 3, 2, 8, 0)

    def test_depense_echue(self) -> None:
        source = _recurrente()
        nouvelles = generer_depenses_recurrentes([source], self.MAINTENANT)

        assert len(nouvelles) == 1
        nouvelle = nouvelles[0]
        assert nouvelle.id != source.id
        assert nouvelle.date == "2025-03-02T08:00:00"
        assert nouvelle.prochaine_recurrence == "2025-04-02T08:00:00"
        assert nouvelle.total == Decimal("68.99")
        assert nouvelle.categorie_id == "PHONE"
        assert nouvelle.recu is None
        assert nouvelle.mode_paiement == "cash"
        assert "abonnement-1" in nouvelle.notes

    def test_source_inchangee(self) -> None:
        source = _recurrente()
        generer_depenses_recurrentes([source], self.MAINTENANT)
        assert source.prochaine_recurrence == "2025-03-01T08:00:00"
        assert source.recu == "https://exemple.test/recu.jpg"

    def test_ids_uniques(self) -> None:
        nouvelles = generer_depenses_recurrentes(
            [_recurrente(), _recurrente(id="abonnement-2")], self.MAINTENANT
        )
        assert len({d.id for d in nouvelles}) == 2

    def test_pas_encore_echue(self) -> None:
        depense = _recurrente(nextRecurringDate="2025-03-15T08:00:00")
        assert generer_depenses_recurrentes([depense], self.MAINTENANT) == []

    def test_echeance_en_horodatage(self) -> None:
        # 2025-03-01T00:00:00Z
        depense = _recurrente(nextRecurringDate={"seconds": 1740787200})
        assert len(generer_depenses_recurrentes([depense], self.MAINTENANT)) == 1

    def test_non_recurrente_ignoree(self) -> None:
        depense = _recurrente(isRecurring=False)
        assert generer_depenses_recurrentes([depense], self.MAINTENANT) == []

    def test_sans_prochaine_date(self, caplog) -> None:
        depense = _recurrente(nextRecurringDate=None)
        with caplog.at_level(logging.WARNING, logger="taxiflow.depenses.recurrence"):
            assert generer_depenses_recurrentes([depense], self.MAINTENANT) == []
        assert "abonnement-1" in caplog.text

    def test_mode_paiement_conserve(self) -> None:
        depense = _recurrente(paymentMethod="debit")
        assert generer_depenses_recurrentes([depense], self.MAINTENANT)[0].mode_paiement == (
            "debit"
        )

    @freeze_time("2025-03-02 08:00:00")
    def test_maintenant_par_defaut(self) -> None:
        nouvelles = generer_depenses_recurrentes([_recurrente()])
        assert nouvelles[0].date == "2025-03-02T08:00:00"
