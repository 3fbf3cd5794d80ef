"""Calcul TPS/TVQ: repartition d'un montant HT ou TTC en HT, TPS, TVQ et total.

Toute l'arithmetique utilise Decimal avec ROUND_HALF_UP. Le montant HT, la TPS
et la TVQ sont arrondis independamment au cent pres, puis le total est la
somme des trois composantes arrondies. Ne jamais arrondir seulement le total:
les rapports historiques en dependent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from taxiflow.quebec.taux import TAUX_QUEBEC

TWO_PLACES = Decimal("0.01")
ESPACE_INSECABLE = "\u00a0"


@dataclass(frozen=True)
class RepartitionTaxes:
    """Repartition d'un montant en montant HT, TPS, TVQ et total TTC."""

    montant_ht: Decimal
    tps: Decimal
    tvq: Decimal
    total: Decimal


def arrondir(montant: Decimal | int | str) -> Decimal:
    """Arrondit un montant au cent pres (ROUND_HALF_UP)."""
    return Decimal(str(montant)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculer_depuis_ht(montant_ht: Decimal | int | str) -> RepartitionTaxes:
    """Calcule TPS et TVQ sur un montant hors taxes.

    Aucune validation: un montant negatif donne des taxes negatives.

    Args:
        montant_ht: Montant hors taxes.

    Returns:
        RepartitionTaxes dont le total est la somme des composantes arrondies.

    Exemple:
        100 -> HT 100.00, TPS 5.00, TVQ 9.98 (9.975 arrondi), total 114.98.
    """
    base = Decimal(str(montant_ht))
    ht = arrondir(base)
    tps = arrondir(base * TAUX_QUEBEC.tps)
    tvq = arrondir(base * TAUX_QUEBEC.tvq)
    total = arrondir(ht + tps + tvq)
    return RepartitionTaxes(montant_ht=ht, tps=tps, tvq=tvq, total=total)


def calculer_depuis_ttc(total_ttc: Decimal | int | str) -> RepartitionTaxes:
    """Retrouve le montant HT d'un total taxes incluses puis calcule les taxes.

    Le montant HT est estime par total / 1.14975 puis la repartition est
    recalculee. A cause des arrondis independants, le total recalcule peut
    differer du total fourni d'au plus un cent.
    """
    montant_ht = Decimal(str(total_ttc)) / TAUX_QUEBEC.combine
    return calculer_depuis_ht(montant_ht)


def formater_montant(montant: Decimal | int | str, locale: str = "fr") -> str:
    """Formate un montant en dollars canadiens.

    Args:
        montant: Montant a formater.
        locale: 'fr' (ex: '1 234,56 $' avec espaces insecables) ou 'en' ('$1,234.56').

    Returns:
        Le montant formate avec 2 decimales et separateur de milliers.
    """
    valeur = arrondir(montant)
    signe = "-" if valeur < 0 else ""
    texte = f"{abs(valeur):,.2f}"
    if locale == "fr":
        texte = texte.replace(",", ESPACE_INSECABLE).replace(".", ",")
        return f"{signe}{texte}{ESPACE_INSECABLE}$"
    return f"{signe}${texte}"
