"""Modeles des depenses et revenus tels que fournis par la couche de stockage."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from taxiflow.models import dates
from taxiflow.quebec.taxes.calcul import calculer_depuis_ht


def _rejeter_float(v: Any) -> Any:
    """Refuse les float pour forcer l'utilisation de Decimal ou str."""
    if isinstance(v, float):
        raise ValueError(
            "Les montants doivent etre Decimal ou str, jamais float. "
            "Utilisez Decimal('100.00') ou '100.00'."
        )
    return v


MontantDecimal = Annotated[Decimal, BeforeValidator(_rejeter_float)]

FrequenceRecurrence = Literal["weekly", "biweekly", "monthly"]


class _Enregistrement(BaseModel):
    """Champs communs aux depenses et revenus d'un chauffeur."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    chauffeur_id: str = Field(alias="driverId")
    # Chaine ISO ou horodatage {seconds, nanoseconds}: interprete a l'usage
    date: Any = Field(description="Date stockee (chaine ISO ou horodatage)")
    categorie_id: str = Field(alias="categoryId")
    notes: Optional[str] = None
    mode_paiement: Optional[str] = Field(default=None, alias="paymentMethod")
    source: str = "manual"

    @property
    def date_canonique(self) -> datetime.datetime:
        """Date de la transaction en datetime naif UTC.

        Raises:
            RepresentationDateInvalide: Si la date stockee est illisible.
        """
        return dates.date_canonique(self.date)


class Depense(_Enregistrement):
    """Depense d'affaires d'un chauffeur.

    Les champs de taxes sont ceux enregistres; ils ne sont pas recalcules.
    S'ils manquent, le rapport les deduit du montant HT (ou du total).
    """

    marchand: str = Field(default="", alias="merchant")
    description: Optional[str] = None
    montant_ht: Optional[MontantDecimal] = Field(default=None, alias="amountExclTax")
    tps: Optional[MontantDecimal] = None
    tvq: Optional[MontantDecimal] = None
    total: Optional[MontantDecimal] = None
    recu: Optional[str] = Field(default=None, alias="receiptUrl")
    chemin_recu: Optional[str] = Field(default=None, alias="receiptStoragePath")
    recurrente: bool = Field(default=False, alias="isRecurring")
    frequence_recurrence: Optional[FrequenceRecurrence] = Field(
        default=None, alias="recurringFrequency"
    )
    prochaine_recurrence: Any = Field(default=None, alias="nextRecurringDate")


class Revenu(_Enregistrement):
    """Revenu d'un chauffeur (ex: course). Non taxe dans ce modele."""

    description: Optional[str] = None
    montant: MontantDecimal = Field(alias="amount")


def modifier_montant_depense(depense: Depense, montant_ht: Decimal) -> Depense:
    """Retourne une copie de la depense avec un nouveau montant HT.

    TPS, TVQ et total sont recalcules ensemble; l'original n'est pas modifie.
    """
    repartition = calculer_depuis_ht(montant_ht)
    return depense.model_copy(
        update={
            "montant_ht": repartition.montant_ht,
            "tps": repartition.tps,
            "tvq": repartition.tvq,
            "total": repartition.total,
        }
    )
