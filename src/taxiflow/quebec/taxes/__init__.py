"""Module de calcul TPS/TVQ."""

from taxiflow.quebec.taxes.calcul import (
    RepartitionTaxes,
    arrondir,
    calculer_depuis_ht,
    calculer_depuis_ttc,
    formater_montant,
)

__all__ = [
    "RepartitionTaxes",
    "arrondir",
    "calculer_depuis_ht",
    "calculer_depuis_ttc",
    "formater_montant",
]
