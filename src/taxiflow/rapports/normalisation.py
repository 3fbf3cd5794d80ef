"""Conversion des depenses et revenus stockes en lignes de rapport canoniques."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from taxiflow.categories import CATEGORIES_DEFAUT, TablesCategories
from taxiflow.erreurs import MontantManquant
from taxiflow.models.transaction import Depense, Revenu
from taxiflow.quebec.taxes.calcul import arrondir, calculer_depuis_ht, calculer_depuis_ttc

logger = logging.getLogger(__name__)

DESCRIPTION_REVENU_DEFAUT = "Course"


class TypeLigne(str, Enum):
    """Nature d'une ligne de rapport."""

    DEPENSE = "EXPENSE"
    REVENU = "INCOME"


@dataclass(frozen=True)
class LigneRapport:
    """Ligne de rapport canonique.

    La date est toujours au format YYYY-MM-DD: les lignes se trient par
    comparaison de chaines.
    """

    date: str
    type: TypeLigne
    categorie: str
    description: str
    montant_ht: Decimal
    tps: Decimal
    tvq: Decimal
    total: Decimal
    notes: str = ""


def _taxes_depense(depense: Depense) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    """Montants (ht, tps, tvq, total) d'une depense.

    Les montants enregistres sont repris tels quels. Seuls les champs
    manquants sont completes: HT, TPS et TVQ depuis le HT (ou depuis le
    total si le HT manque), puis le total comme somme des trois.

    Raises:
        MontantManquant: Ni montant HT ni total.
    """
    champs = (depense.montant_ht, depense.tps, depense.tvq, depense.total)
    if all(c is not None for c in champs):
        return champs  # type: ignore[return-value]

    if depense.montant_ht is not None:
        repartition = calculer_depuis_ht(depense.montant_ht)
    elif depense.total is not None:
        repartition = calculer_depuis_ttc(depense.total)
    else:
        raise MontantManquant(depense.id)

    montant_ht = depense.montant_ht if depense.montant_ht is not None else repartition.montant_ht
    tps = depense.tps if depense.tps is not None else repartition.tps
    tvq = depense.tvq if depense.tvq is not None else repartition.tvq
    total = depense.total if depense.total is not None else arrondir(montant_ht + tps + tvq)

    logger.debug("Montants completes pour la depense %s", depense.id)
    return montant_ht, tps, tvq, total


def ligne_depuis_depense(
    depense: Depense, categories: TablesCategories = CATEGORIES_DEFAUT
) -> LigneRapport:
    """Convertit une depense en ligne de rapport.

    Raises:
        CategorieInconnue: Categorie absente de la table des libelles.
        RepresentationDateInvalide: Date stockee illisible.
        MontantManquant: Ni montant HT ni total.
    """
    montant_ht, tps, tvq, total = _taxes_depense(depense)
    return LigneRapport(
        date=depense.date_canonique.date().isoformat(),
        type=TypeLigne.DEPENSE,
        categorie=categories.libelle_depense(depense.categorie_id),
        description=depense.marchand,
        montant_ht=montant_ht,
        tps=tps,
        tvq=tvq,
        total=total,
        notes=depense.notes or "",
    )


def ligne_depuis_revenu(
    revenu: Revenu, categories: TablesCategories = CATEGORIES_DEFAUT
) -> LigneRapport:
    """Convertit un revenu en ligne de rapport (TPS et TVQ a zero).

    Raises:
        CategorieInconnue: Categorie absente de la table des libelles.
        RepresentationDateInvalide: Date stockee illisible.
    """
    return LigneRapport(
        date=revenu.date_canonique.date().isoformat(),
        type=TypeLigne.REVENU,
        categorie=categories.libelle_revenu(revenu.categorie_id),
        description=revenu.description or DESCRIPTION_REVENU_DEFAUT,
        montant_ht=revenu.montant,
        tps=Decimal("0"),
        tvq=Decimal("0"),
        total=revenu.montant,
        notes=revenu.notes or "",
    )
