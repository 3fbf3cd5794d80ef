"""Tables de libelles des categories de depenses et de revenus.

Les enregistrements stockent l'identifiant de categorie (ex: 'carburant',
'FUEL'), jamais la traduction. Les rapports affichent le libelle. Plusieurs
identifiants peuvent partager un libelle: ils sont alors regroupes dans les
sommaires par categorie.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from taxiflow.erreurs import CategorieInconnue

_CATEGORIES_DEFAUT_YAML = """
depenses:
  carburant: "Carburant"
  entretien: "Entretien & Réparation"
  assurance: "Assurance"
  permis_taxi: "Permis & Licences"
  repas: "Repas"
  stationnement: "Stationnement"
  peages: "Péages"
  location_vehicule: "Location véhicule"
  telephonie: "Téléphonie"
  nettoyage: "Nettoyage véhicule"
  fournitures: "Fournitures"
  autre: "Autre"
  # Identifiants stockes par l'application mobile
  FUEL: "Carburant"
  CAR_WASH: "Nettoyage véhicule"
  CLEANING: "Nettoyage véhicule"
  INSURANCE: "Assurance"
  REPAIR: "Entretien & Réparation"
  OIL_CHANGE: "Entretien & Réparation"
  TIRES: "Entretien & Réparation"
  MEALS: "Repas"
  SAAQ: "Permis & Licences"
  PHONE: "Téléphonie"
  OFFICE: "Fournitures"
  PARKING: "Stationnement"
  OTHER: "Autre"

revenus:
  COURSE: "Course taxi"
  MEDICAL: "Transport médical"
  AIRPORT: "Course aéroport"
  POURBOIRE: "Pourboires"
  OTHER: "Autre revenu"
"""


class TablesCategories(BaseModel):
    """Correspondances identifiant de categorie -> libelle d'affichage."""

    depenses: dict[str, str] = Field(default_factory=dict)
    revenus: dict[str, str] = Field(default_factory=dict)

    def libelle_depense(self, categorie_id: str) -> str:
        """Libelle d'une categorie de depense.

        Raises:
            CategorieInconnue: Si l'identifiant n'est pas dans la table.
        """
        try:
            return self.depenses[categorie_id]
        except KeyError:
            raise CategorieInconnue(categorie_id, "depense") from None

    def libelle_revenu(self, categorie_id: str) -> str:
        """Libelle d'une categorie de revenu.

        Raises:
            CategorieInconnue: Si l'identifiant n'est pas dans la table.
        """
        try:
            return self.revenus[categorie_id]
        except KeyError:
            raise CategorieInconnue(categorie_id, "revenu") from None


def categories_par_defaut() -> TablesCategories:
    """Retourne les tables integrees."""
    return TablesCategories.model_validate(yaml.safe_load(_CATEGORIES_DEFAUT_YAML))


CATEGORIES_DEFAUT = categories_par_defaut()


def charger_categories(chemin: Path | str | None = None) -> TablesCategories:
    """Charge les tables de categories depuis un fichier YAML.

    Args:
        chemin: Chemin du fichier YAML. None -> tables integrees.

    Returns:
        Tables validees par Pydantic.

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ValueError: Si le YAML ne respecte pas le schema.
    """
    if chemin is None:
        return CATEGORIES_DEFAUT

    path = Path(chemin)
    if not path.exists():
        raise FileNotFoundError(f"Fichier de categories introuvable: {chemin}")

    donnees = yaml.safe_load(path.read_text(encoding="utf-8"))
    if donnees is None:
        return TablesCategories()

    try:
        return TablesCategories.model_validate(donnees)
    except Exception as e:
        raise ValueError(f"Fichier de categories invalide ({chemin}): {e}") from e
