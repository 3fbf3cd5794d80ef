"""Depenses recurrentes: calcul de la prochaine occurrence et generation des dues.

Les nouvelles depenses sont retournees a l'appelant, qui les persiste.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from collections.abc import Iterable

from dateutil.relativedelta import relativedelta

from taxiflow.models.dates import date_canonique
from taxiflow.models.transaction import Depense, FrequenceRecurrence

logger = logging.getLogger(__name__)

_INTERVALLES: dict[str, relativedelta] = {
    "weekly": relativedelta(days=7),
    "biweekly": relativedelta(days=14),
    "monthly": relativedelta(months=1),
}


def prochaine_date(
    courante: datetime.datetime, frequence: FrequenceRecurrence
) -> datetime.datetime:
    """Date de la prochaine occurrence.

    Mensuel: meme jour le mois suivant, ramene au dernier jour du mois si
    necessaire (31 janvier -> 28 ou 29 fevrier).

    Raises:
        ValueError: Frequence inconnue.
    """
    try:
        return courante + _INTERVALLES[frequence]
    except KeyError:
        raise ValueError(f"Frequence de recurrence inconnue: {frequence!r}") from None


def generer_depenses_recurrentes(
    depenses: Iterable[Depense],
    maintenant: datetime.datetime | None = None,
) -> list[Depense]:
    """Genere les nouvelles occurrences des depenses recurrentes echues.

    Pour chaque depense recurrente dont la prochaine date est atteinte, une
    nouvelle depense est creee: memes montants et categorie, datee de
    maintenant, prochaine date avancee d'un intervalle.

    Args:
        depenses: Depenses du chauffeur.
        maintenant: Instant de reference (defaut: maintenant, UTC naif).

    Returns:
        Nouvelles depenses a enregistrer.
    """
    if maintenant is None:
        maintenant = datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
    nouvelles: list[Depense] = []

    for depense in depenses:
        if not depense.recurrente:
            continue
        if depense.prochaine_recurrence is None or depense.frequence_recurrence is None:
            logger.warning(
                "Depense recurrente sans prochaine date ou frequence: %s", depense.id
            )
            continue

        if date_canonique(depense.prochaine_recurrence) > maintenant:
            continue

        suivante = prochaine_date(maintenant, depense.frequence_recurrence)
        nouvelles.append(
            depense.model_copy(
                update={
                    "id": uuid.uuid4().hex,
                    "date": maintenant.isoformat(),
                    "source": "manual",
                    "recu": None,
                    "chemin_recu": None,
                    "mode_paiement": depense.mode_paiement or "cash",
                    "notes": f"Dépense récurrente auto-générée depuis {depense.id}",
                    "prochaine_recurrence": suivante.isoformat(),
                }
            )
        )
        logger.info("Depense recurrente creee depuis %s", depense.id)

    logger.info("%d depense(s) recurrente(s) a creer", len(nouvelles))
    return nouvelles
