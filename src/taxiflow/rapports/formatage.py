"""Mise en forme des rapports: CSV, rapport texte complet et feuilles de classeur.

Le CSV doit rester compatible octet pour octet avec les chiffriers existants:
ordre des colonnes fixe, montants a 2 decimales, description et notes entre
guillemets avec les guillemets internes doubles.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel

from taxiflow.categories import CATEGORIES_DEFAUT, TablesCategories
from taxiflow.models.transaction import Depense, Revenu
from taxiflow.quebec.taux import TAUX_QUEBEC, libelle_taux
from taxiflow.quebec.taxes.calcul import arrondir
from taxiflow.rapports.agregation import (
    PeriodeExport,
    filtrer_par_periode,
    plage_pour_periode,
    rapport_annuel,
    rapport_mensuel,
    sommariser,
)
from taxiflow.rapports.normalisation import (
    LigneRapport,
    ligne_depuis_depense,
    ligne_depuis_revenu,
)

Locale = Literal["fr", "en"]

EN_TETES_CSV: dict[str, list[str]] = {
    "fr": [
        "Date", "Type", "Catégorie", "Description", "Montant HT",
        "TPS", "TVQ", "Total", "Paiement", "Notes", "Reçu",
    ],
    "en": [
        "Date", "Type", "Category", "Description", "Amount Excl. Tax",
        "GST", "QST", "Total", "Payment", "Notes", "Receipt",
    ],
}

FEUILLE_JOURNAL = "Journal Détaillé"
FEUILLE_SYNTHESE = "Synthèse Catégories"
FEUILLE_FISCAL = "Résumé Fiscal"


def _montant_texte(montant: Decimal) -> str:
    """Montant en point fixe a 2 decimales (ex: '57.49')."""
    return str(arrondir(montant))


def _entre_guillemets(texte: str) -> str:
    return '"' + texte.replace('"', '""') + '"'


def _pourcentage(partie: Decimal, tout: Decimal) -> str:
    """Pourcentage arrondi a 2 decimales, sans zeros inutiles (ex: '12.5%')."""
    valeur = partie / tout * 100 if tout else Decimal("0")
    return f"{arrondir(valeur).normalize():f}%"


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


def vers_csv(lignes: Iterable[LigneRapport], locale: Locale = "fr") -> str:
    """Formate les lignes de rapport en CSV (separateur virgule, fins de ligne LF).

    Les colonnes Paiement et Recu sont reservees et restent vides.
    """
    sortie = [",".join(EN_TETES_CSV[locale])]
    for ligne in lignes:
        valeurs = [
            ligne.date,
            ligne.type.value,
            ligne.categorie,
            _entre_guillemets(ligne.description),
            _montant_texte(ligne.montant_ht),
            _montant_texte(ligne.tps),
            _montant_texte(ligne.tvq),
            _montant_texte(ligne.total),
            "",
            _entre_guillemets(ligne.notes or ""),
            "",
        ]
        sortie.append(",".join(valeurs))
    return "\n".join(sortie)


_LIBELLES_SOMMAIRE = {
    "fr": {
        "titre": "RAPPORT COMPTABLE",
        "revenus": "Total Revenus",
        "depenses": "Total Dépenses",
        "profit": "Profit Net",
        "tps": "TPS Payée",
        "tvq": "TVQ Payée",
        "cat_revenus": "DÉTAILS PAR CATÉGORIE - REVENUS:",
        "cat_depenses": "DÉTAILS PAR CATÉGORIE - DÉPENSES:",
    },
    "en": {
        "titre": "ACCOUNTING REPORT",
        "revenus": "Total Income",
        "depenses": "Total Expenses",
        "profit": "Net Profit",
        "tps": "GST Paid",
        "tvq": "QST Paid",
        "cat_revenus": "BREAKDOWN BY CATEGORY - INCOME:",
        "cat_depenses": "BREAKDOWN BY CATEGORY - EXPENSES:",
    },
}


def _ligne_valeur(libelle: str, montant: Decimal) -> str:
    return f"{libelle}:,{_montant_texte(montant)} $"


def rapport_complet_texte(
    depenses: Sequence[Depense],
    revenus: Sequence[Revenu],
    annee: int,
    mois: Optional[int] = None,
    locale: Locale = "fr",
    categories: TablesCategories = CATEGORIES_DEFAUT,
) -> str:
    """Rapport texte: bloc sommaire suivi du CSV detaille.

    Args:
        depenses: Depenses deja chargees.
        revenus: Revenus deja charges.
        annee: Annee du rapport.
        mois: Mois (1-12); absent -> rapport annuel.
        locale: Langue du sommaire et des en-tetes CSV.
        categories: Tables des libelles de categories.
    """
    if mois:
        lignes = rapport_mensuel(depenses, revenus, annee, mois, categories)
        periode = f"{mois}/{annee}"
    else:
        lignes = rapport_annuel(depenses, revenus, annee, categories)
        periode = str(annee)

    s = sommariser(lignes)
    lib = _LIBELLES_SOMMAIRE[locale]

    sommaire = [
        f"{lib['titre']} - {periode}",
        "",
        _ligne_valeur(lib["revenus"], s.total_revenus),
        _ligne_valeur(lib["depenses"], s.total_depenses),
        _ligne_valeur(lib["profit"], s.profit_net),
        "",
        _ligne_valeur(lib["tps"], s.tps_payee),
        _ligne_valeur(lib["tvq"], s.tvq_payee),
        "",
        lib["cat_revenus"],
        *(_ligne_valeur(cat, total) for cat, total in s.revenus_par_categorie.items()),
        "",
        lib["cat_depenses"],
        *(_ligne_valeur(cat, total) for cat, total in s.depenses_par_categorie.items()),
        "",
        "",
    ]

    return "\n".join(sommaire) + "\n" + vers_csv(lignes, locale)


# ---------------------------------------------------------------------------
# Classeur (trois feuilles)
# ---------------------------------------------------------------------------


class OptionsExport(BaseModel):
    """Options de l'export classeur professionnel."""

    periode: PeriodeExport = PeriodeExport.UN_MOIS
    debut: Optional[datetime.date] = None
    fin: Optional[datetime.date] = None
    nom_chauffeur: Optional[str] = None
    permis_chauffeur: Optional[str] = None
    genere_le: Optional[datetime.datetime] = None


def feuilles_classeur(
    depenses: Sequence[Depense],
    revenus: Sequence[Revenu],
    options: OptionsExport,
    categories: TablesCategories = CATEGORIES_DEFAUT,
) -> dict[str, list[list]]:
    """Construit les trois feuilles de l'export professionnel.

    Les enregistrements hors de la periode des options sont ignores. Les
    cellules numeriques sont arrondies a 2 decimales; les pourcentages sont
    des chaines (ex: '12.5%').

    Returns:
        {"Journal Détaillé": [...], "Synthèse Catégories": [...],
         "Résumé Fiscal": [...]} -- chaque feuille est une liste de lignes.
    """
    genere_le = options.genere_le or datetime.datetime.now()
    plage = plage_pour_periode(
        options.periode, options.debut, options.fin, aujourd_hui=genere_le.date()
    )

    lignes_depenses = sorted(
        (
            ligne_depuis_depense(d, categories)
            for d in filtrer_par_periode(depenses, plage.debut, plage.fin)
        ),
        key=lambda ligne: ligne.date,
    )
    lignes_revenus = sorted(
        (
            ligne_depuis_revenu(r, categories)
            for r in filtrer_par_periode(revenus, plage.debut, plage.fin)
        ),
        key=lambda ligne: ligne.date,
    )

    total_ht = sum((ligne.montant_ht for ligne in lignes_depenses), Decimal("0"))
    total_tps = sum((ligne.tps for ligne in lignes_depenses), Decimal("0"))
    total_tvq = sum((ligne.tvq for ligne in lignes_depenses), Decimal("0"))
    total_ttc = sum((ligne.total for ligne in lignes_depenses), Decimal("0"))
    total_revenus = sum((ligne.total for ligne in lignes_revenus), Decimal("0"))
    solde_net = total_revenus - total_ttc
    taxes_deductibles = total_tps + total_tvq

    libelle_periode = f"Période: {plage.debut:%Y-%m-%d} au {plage.fin:%Y-%m-%d}"
    en_tete_tps = f"TPS {libelle_taux(TAUX_QUEBEC.tps, 2)}"
    en_tete_tvq = f"TVQ {libelle_taux(TAUX_QUEBEC.tvq, 3)}"
    zero = arrondir(0)

    # Feuille 1: journal detaille
    journal: list[list] = [
        ["RAPPORT COMPTABLE TAXIFLOW"],
        [
            f"Chauffeur: {options.nom_chauffeur or 'N/A'} | "
            f"Permis: {options.permis_chauffeur or 'N/A'}"
        ],
        [libelle_periode],
        ["Approuvé pour SAAQ / Comptable"],
        [],
        [
            "Date", "Type", "Catégorie", "Fournisseur/Description", "Montant HT",
            en_tete_tps, en_tete_tvq, "Total TTC", "% du Total",
        ],
    ]
    for ligne in lignes_depenses:
        journal.append([
            ligne.date,
            "Dépense",
            ligne.categorie,
            ligne.description or "N/A",
            arrondir(ligne.montant_ht),
            arrondir(ligne.tps),
            arrondir(ligne.tvq),
            arrondir(ligne.total),
            _pourcentage(ligne.total, total_ttc),
        ])
    journal.append([])
    for ligne in lignes_revenus:
        journal.append([
            ligne.date,
            "Revenu",
            ligne.categorie,
            ligne.description,
            zero,
            zero,
            zero,
            arrondir(ligne.total),
            _pourcentage(ligne.total, total_revenus),
        ])
    journal += [
        [],
        [],
        [
            "TOTAUX DÉPENSES", "", "", "",
            arrondir(total_ht), arrondir(total_tps), arrondir(total_tvq),
            arrondir(total_ttc), "100%",
        ],
        ["TOTAL REVENUS", "", "", "", "", "", "", arrondir(total_revenus), ""],
        ["SOLDE NET", "", "", "", "", "", "", arrondir(solde_net), ""],
        [],
        ["TPS DÉDUCTIBLE", "", "", "", "", arrondir(total_tps), "", "", ""],
        ["TVQ DÉDUCTIBLE", "", "", "", "", "", arrondir(total_tvq), "", ""],
        [],
        [],
        [f"Généré par TaxiFlow le {genere_le:%Y-%m-%d} à {genere_le:%H:%M:%S}"],
        ["Signature du chauffeur: _______________________"],
    ]

    # Feuille 2: synthese par categorie (libelle), decroissante
    par_categorie: dict[str, Decimal] = {}
    for ligne in lignes_depenses:
        par_categorie[ligne.categorie] = (
            par_categorie.get(ligne.categorie, Decimal("0")) + ligne.total
        )

    synthese: list[list] = [
        ["SYNTHÈSE PAR CATÉGORIE"],
        [libelle_periode],
        [],
        ["Catégorie", "Total", "% du Total"],
    ]
    for categorie, total in sorted(
        par_categorie.items(), key=lambda item: item[1], reverse=True
    ):
        synthese.append(
            [categorie, arrondir(total), _pourcentage(total, total_ttc)]
        )
    synthese += [[], ["TOTAL", arrondir(total_ttc), "100%"]]

    # Feuille 3: resume fiscal
    fiscal: list[list] = [
        ["RÉSUMÉ FISCAL - SAAQ"],
        [libelle_periode],
        [],
        ["Description", "Montant"],
        [],
        ["REVENUS"],
        ["Total des courses", arrondir(total_revenus)],
        [],
        ["DÉPENSES"],
        ["Total HT", arrondir(total_ht)],
        [f"TPS ({libelle_taux(TAUX_QUEBEC.tps, 2)})", arrondir(total_tps)],
        [f"TVQ ({libelle_taux(TAUX_QUEBEC.tvq, 3)})", arrondir(total_tvq)],
        ["Total TTC", arrondir(total_ttc)],
        [],
        ["TAXES DÉDUCTIBLES"],
        ["TPS à récupérer", arrondir(total_tps)],
        ["TVQ à récupérer", arrondir(total_tvq)],
        ["Total taxes déductibles", arrondir(taxes_deductibles)],
        [],
        ["RÉSULTAT"],
        ["Solde net (avant taxes)", arrondir(solde_net)],
        ["Taxes à récupérer", arrondir(taxes_deductibles)],
        ["Résultat après déductions", arrondir(solde_net + taxes_deductibles)],
    ]

    return {
        FEUILLE_JOURNAL: journal,
        FEUILLE_SYNTHESE: synthese,
        FEUILLE_FISCAL: fiscal,
    }
