"""Modeles de donnees TaxiFlow."""

from taxiflow.models.dates import (
    DateIso,
    DateStockee,
    HorodatageFirestore,
    date_canonique,
    interpreter_date,
    vers_date_canonique,
)
from taxiflow.models.transaction import Depense, Revenu, modifier_montant_depense

__all__ = [
    "DateIso",
    "DateStockee",
    "Depense",
    "HorodatageFirestore",
    "Revenu",
    "date_canonique",
    "interpreter_date",
    "modifier_montant_depense",
    "vers_date_canonique",
]
