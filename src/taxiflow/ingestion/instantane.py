"""Lecture d'un instantane JSON des depenses et revenus d'un chauffeur.

Format attendu (cles camelCase du stockage acceptees)::

    {
      "depenses": [{"id": "...", "driverId": "...", "categoryId": "carburant",
                    "date": {"seconds": 1736899200, "nanoseconds": 0}, ...}],
      "revenus": [{"id": "...", "driverId": "...", "categoryId": "COURSE",
                   "date": "2025-01-15T10:30:00Z", "amount": 42.5}]
    }

Les nombres sont lus en Decimal, jamais en float.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, ValidationError

from taxiflow.models.transaction import Depense, Revenu

logger = logging.getLogger(__name__)


@dataclass
class Instantane:
    """Depenses et revenus deja charges pour un chauffeur."""

    depenses: list[Depense] = field(default_factory=list)
    revenus: list[Revenu] = field(default_factory=list)


def _valider(modele: type[BaseModel], bruts: list, genre: str) -> list:
    resultat = []
    for index, brut in enumerate(bruts):
        try:
            resultat.append(modele.model_validate(brut))
        except ValidationError as e:
            raise ValueError(f"{genre} #{index} invalide: {e}") from e
    return resultat


def charger_instantane(chemin: Path) -> Instantane:
    """Charge un instantane JSON.

    Args:
        chemin: Chemin du fichier JSON.

    Returns:
        Instantane avec depenses et revenus valides.

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ValueError: JSON illisible ou enregistrement invalide.
    """
    if not chemin.exists():
        raise FileNotFoundError(f"Fichier de donnees introuvable: {chemin}")

    try:
        donnees = json.loads(chemin.read_text(encoding="utf-8"), parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValueError(f"Fichier de donnees invalide ({chemin}): {e}") from e

    if not isinstance(donnees, dict):
        raise ValueError(f"Fichier de donnees invalide ({chemin}): objet JSON attendu")

    instantane = Instantane(
        depenses=_valider(Depense, donnees.get("depenses", []), "Depense"),
        revenus=_valider(Revenu, donnees.get("revenus", []), "Revenu"),
    )
    logger.info(
        "Instantane %s: %d depenses, %d revenus",
        chemin,
        len(instantane.depenses),
        len(instantane.revenus),
    )
    return instantane
