"""Taux de taxes de vente applicables au Quebec.

Toutes les valeurs sont en Decimal -- jamais de float.
Les taux sont des constantes de juridiction, jamais configurables a l'execution.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TauxTaxes:
    """Taux de TPS (federal) et TVQ (Quebec)."""

    tps: Decimal  # 5%
    tvq: Decimal  # 9.975%

    @property
    def combine(self) -> Decimal:
        """Facteur taxes incluses (1.14975)."""
        return Decimal("1") + self.tps + self.tvq


TAUX_QUEBEC = TauxTaxes(
    tps=Decimal("0.05"),
    tvq=Decimal("0.09975"),
)

TPS_TAUX = TAUX_QUEBEC.tps
TVQ_TAUX = TAUX_QUEBEC.tvq


def libelle_taux(taux: Decimal, decimales: int) -> str:
    """Formate un taux en pourcentage pour les en-tetes (ex: '9.975%')."""
    pourcentage = (taux * 100).quantize(Decimal(1).scaleb(-decimales))
    return f"{pourcentage}%"
