"""Module de generation des rapports comptables (CSV, texte, classeur Excel).

Expose la normalisation des enregistrements, l'agregation par periode et
la mise en forme des exports.
"""

from taxiflow.rapports.agregation import (
    PeriodeExport,
    Plage,
    SommaireRapport,
    construire_rapport,
    filtrer_par_periode,
    plage_annuelle,
    plage_mensuelle,
    plage_personnalisee,
    plage_pour_periode,
    rapport_annuel,
    rapport_mensuel,
    sommariser,
)
from taxiflow.rapports.base import RapportPeriode
from taxiflow.rapports.classeur import ecrire_classeur
from taxiflow.rapports.formatage import (
    OptionsExport,
    feuilles_classeur,
    rapport_complet_texte,
    vers_csv,
)
from taxiflow.rapports.normalisation import (
    LigneRapport,
    TypeLigne,
    ligne_depuis_depense,
    ligne_depuis_revenu,
)

__all__ = [
    "LigneRapport",
    "OptionsExport",
    "PeriodeExport",
    "Plage",
    "RapportPeriode",
    "SommaireRapport",
    "TypeLigne",
    "construire_rapport",
    "ecrire_classeur",
    "feuilles_classeur",
    "filtrer_par_periode",
    "ligne_depuis_depense",
    "ligne_depuis_revenu",
    "plage_annuelle",
    "plage_mensuelle",
    "plage_personnalisee",
    "plage_pour_periode",
    "rapport_annuel",
    "rapport_complet_texte",
    "rapport_mensuel",
    "sommariser",
    "vers_csv",
]
