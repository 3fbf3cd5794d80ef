"""Filtrage par periode, construction des rapports et sommaires comptables.

Les bornes de periode sont inclusives: debut a 00:00:00.000, fin a
23:59:59.999. Les dates des enregistrements sont interpretees avec la meme
regle que la normalisation (chaine ISO ou horodatage en secondes).
"""

from __future__ import annotations

import calendar
import datetime
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, TypeVar

from dateutil.relativedelta import relativedelta

from taxiflow.categories import CATEGORIES_DEFAUT, TablesCategories
from taxiflow.erreurs import PlagePersonnaliseeInvalide
from taxiflow.models.transaction import Depense, Revenu
from taxiflow.rapports.normalisation import (
    LigneRapport,
    TypeLigne,
    ligne_depuis_depense,
    ligne_depuis_revenu,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", Depense, Revenu)


# ---------------------------------------------------------------------------
# Plages de dates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Plage:
    """Plage de dates inclusive [debut, fin]."""

    debut: datetime.datetime
    fin: datetime.datetime


def _debut_jour(d: datetime.date) -> datetime.datetime:
    return datetime.datetime(d.year, d.month, d.day)


def _fin_jour(d: datetime.date) -> datetime.datetime:
    return datetime.datetime(d.year, d.month, d.day, 23, 59, 59, 999000)


def plage_mensuelle(annee: int, mois: int) -> Plage:
    """Plage couvrant un mois complet.

    Args:
        annee: Annee (ex: 2025).
        mois: Mois de 1 a 12.
    """
    dernier_jour = calendar.monthrange(annee, mois)[1]
    return Plage(
        debut=_debut_jour(datetime.date(annee, mois, 1)),
        fin=_fin_jour(datetime.date(annee, mois, dernier_jour)),
    )


def plage_annuelle(annee: int) -> Plage:
    """Plage du 1er janvier au 31 decembre."""
    return Plage(
        debut=_debut_jour(datetime.date(annee, 1, 1)),
        fin=_fin_jour(datetime.date(annee, 12, 31)),
    )


def plage_personnalisee(debut: datetime.date, fin: datetime.date) -> Plage:
    """Plage du debut du jour de `debut` a la fin du jour de `fin`.

    Raises:
        PlagePersonnaliseeInvalide: Si fin < debut.
    """
    if _debut_jour(fin) < _debut_jour(debut):
        raise PlagePersonnaliseeInvalide(
            f"Plage invalide: la fin ({fin}) precede le debut ({debut})"
        )
    return Plage(debut=_debut_jour(debut), fin=_fin_jour(fin))


class PeriodeExport(str, Enum):
    """Periodes predefinies pour les exports."""

    JOUR = "jour"
    UN_MOIS = "1mois"
    TROIS_MOIS = "3mois"
    SIX_MOIS = "6mois"
    DOUZE_MOIS = "12mois"
    PERSONNALISEE = "personnalisee"


_RECUL_PERIODE = {
    PeriodeExport.JOUR: relativedelta(),
    PeriodeExport.UN_MOIS: relativedelta(months=1),
    PeriodeExport.TROIS_MOIS: relativedelta(months=3),
    PeriodeExport.SIX_MOIS: relativedelta(months=6),
    PeriodeExport.DOUZE_MOIS: relativedelta(years=1),
}


def plage_pour_periode(
    periode: PeriodeExport,
    debut: Optional[datetime.date] = None,
    fin: Optional[datetime.date] = None,
    aujourd_hui: Optional[datetime.date] = None,
) -> Plage:
    """Plage d'une periode d'export, se terminant aujourd'hui.

    Args:
        periode: Periode predefinie ou 'personnalisee'.
        debut: Debut pour 'personnalisee'.
        fin: Fin pour 'personnalisee'.
        aujourd_hui: Date de reference (defaut: date du jour).

    Raises:
        PlagePersonnaliseeInvalide: 'personnalisee' sans les deux bornes,
            ou fin < debut.
    """
    periode = PeriodeExport(periode)
    if periode == PeriodeExport.PERSONNALISEE:
        if debut is None or fin is None:
            raise PlagePersonnaliseeInvalide(
                "Une periode personnalisee exige une date de debut et de fin"
            )
        return plage_personnalisee(debut, fin)

    jour = aujourd_hui or datetime.date.today()
    return Plage(
        debut=_debut_jour(jour - _RECUL_PERIODE[periode]),
        fin=_fin_jour(jour),
    )


# ---------------------------------------------------------------------------
# Filtrage et construction
# ---------------------------------------------------------------------------


def filtrer_par_periode(
    enregistrements: Iterable[E],
    debut: datetime.datetime,
    fin: datetime.datetime,
) -> list[E]:
    """Garde les enregistrements dont la date est dans [debut, fin].

    Raises:
        RepresentationDateInvalide: Date stockee illisible.
    """
    return [e for e in enregistrements if debut <= e.date_canonique <= fin]


def construire_rapport(
    depenses: Iterable[Depense],
    revenus: Iterable[Revenu],
    debut: datetime.datetime,
    fin: datetime.datetime,
    categories: TablesCategories = CATEGORIES_DEFAUT,
) -> list[LigneRapport]:
    """Construit les lignes de rapport d'une periode, triees par date.

    Le tri compare les dates YYYY-MM-DD comme des chaines et est stable:
    a date egale, les depenses precedent les revenus, chacun dans l'ordre
    fourni. L'heure n'intervient pas dans le tri.
    """
    lignes = [
        ligne_depuis_depense(d, categories)
        for d in filtrer_par_periode(depenses, debut, fin)
    ]
    lignes += [
        ligne_depuis_revenu(r, categories)
        for r in filtrer_par_periode(revenus, debut, fin)
    ]
    lignes.sort(key=lambda ligne: ligne.date)
    logger.debug("Rapport %s a %s: %d lignes", debut, fin, len(lignes))
    return lignes


def rapport_mensuel(
    depenses: Iterable[Depense],
    revenus: Iterable[Revenu],
    annee: int,
    mois: int,
    categories: TablesCategories = CATEGORIES_DEFAUT,
) -> list[LigneRapport]:
    """Lignes de rapport d'un mois (1-12)."""
    plage = plage_mensuelle(annee, mois)
    return construire_rapport(depenses, revenus, plage.debut, plage.fin, categories)


def rapport_annuel(
    depenses: Iterable[Depense],
    revenus: Iterable[Revenu],
    annee: int,
    categories: TablesCategories = CATEGORIES_DEFAUT,
) -> list[LigneRapport]:
    """Lignes de rapport d'une annee civile."""
    plage = plage_annuelle(annee)
    return construire_rapport(depenses, revenus, plage.debut, plage.fin, categories)


# ---------------------------------------------------------------------------
# Sommaire
# ---------------------------------------------------------------------------


@dataclass
class SommaireRapport:
    """Totaux d'une periode. Les categories sont indexees par libelle."""

    total_revenus: Decimal = Decimal("0")
    total_depenses: Decimal = Decimal("0")
    profit_net: Decimal = Decimal("0")
    depenses_par_categorie: dict[str, Decimal] = field(default_factory=dict)
    revenus_par_categorie: dict[str, Decimal] = field(default_factory=dict)
    tps_payee: Decimal = Decimal("0")
    tvq_payee: Decimal = Decimal("0")


def sommariser(lignes: Sequence[LigneRapport]) -> SommaireRapport:
    """Calcule les totaux, la ventilation par categorie et les taxes payees.

    Deux identifiants de categorie qui partagent un libelle sont regroupes.
    Le profit net est calcule une seule fois, a la fin.
    """
    sommaire = SommaireRapport()

    for ligne in lignes:
        if ligne.type == TypeLigne.REVENU:
            sommaire.total_revenus += ligne.total
            sommaire.revenus_par_categorie[ligne.categorie] = (
                sommaire.revenus_par_categorie.get(ligne.categorie, Decimal("0"))
                + ligne.total
            )
        elif ligne.type == TypeLigne.DEPENSE:
            sommaire.total_depenses += ligne.total
            sommaire.tps_payee += ligne.tps
            sommaire.tvq_payee += ligne.tvq
            sommaire.depenses_par_categorie[ligne.categorie] = (
                sommaire.depenses_par_categorie.get(ligne.categorie, Decimal("0"))
                + ligne.total
            )

    sommaire.profit_net = sommaire.total_revenus - sommaire.total_depenses
    return sommaire
