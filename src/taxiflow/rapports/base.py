"""Rapport comptable d'une periode, exportable en CSV, texte et classeur."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from taxiflow.categories import CATEGORIES_DEFAUT, TablesCategories
from taxiflow.models.transaction import Depense, Revenu
from taxiflow.rapports.agregation import (
    Plage,
    SommaireRapport,
    construire_rapport,
    plage_annuelle,
    plage_mensuelle,
    sommariser,
)
from taxiflow.rapports.classeur import ecrire_classeur
from taxiflow.rapports.formatage import (
    Locale,
    OptionsExport,
    feuilles_classeur,
    rapport_complet_texte,
    vers_csv,
)
from taxiflow.rapports.normalisation import LigneRapport

logger = logging.getLogger(__name__)


class RapportPeriode:
    """Rapport d'une annee ou d'un mois pour un chauffeur.

    Les enregistrements sont des instantanes deja charges; ils ne sont
    jamais modifies. Lignes et sommaire sont calcules au premier acces.
    """

    report_name: str = "rapport"

    def __init__(
        self,
        depenses: Sequence[Depense],
        revenus: Sequence[Revenu],
        annee: int,
        mois: int | None = None,
        categories: TablesCategories = CATEGORIES_DEFAUT,
    ) -> None:
        self.depenses = depenses
        self.revenus = revenus
        self.annee = annee
        self.mois = mois
        self.categories = categories
        self._lignes: list[LigneRapport] | None = None
        self._sommaire: SommaireRapport | None = None

    @property
    def plage(self) -> Plage:
        if self.mois:
            return plage_mensuelle(self.annee, self.mois)
        return plage_annuelle(self.annee)

    @property
    def suffixe(self) -> str:
        """Suffixe de fichier: '2025' ou '2025-02'."""
        return f"{self.annee}-{self.mois:02d}" if self.mois else str(self.annee)

    @property
    def lignes(self) -> list[LigneRapport]:
        """Lignes de rapport triees par date (cache apres premier appel)."""
        if self._lignes is None:
            plage = self.plage
            self._lignes = construire_rapport(
                self.depenses, self.revenus, plage.debut, plage.fin, self.categories
            )
        return self._lignes

    @property
    def sommaire(self) -> SommaireRapport:
        if self._sommaire is None:
            self._sommaire = sommariser(self.lignes)
        return self._sommaire

    def to_csv(self, output_path: Path, locale: Locale = "fr") -> Path:
        """Ecrit le CSV detaille.

        Args:
            output_path: Chemin du fichier CSV de sortie.
            locale: Langue des en-tetes.

        Returns:
            Chemin du fichier CSV cree.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(vers_csv(self.lignes, locale), encoding="utf-8")
        return output_path

    def to_texte(self, output_path: Path, locale: Locale = "fr") -> Path:
        """Ecrit le rapport complet (sommaire + CSV)."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        texte = rapport_complet_texte(
            self.depenses, self.revenus, self.annee, self.mois, locale, self.categories
        )
        output_path.write_text(texte, encoding="utf-8")
        return output_path

    def to_xlsx(self, output_path: Path, options: OptionsExport | None = None) -> Path:
        """Ecrit le classeur trois feuilles couvrant la plage du rapport."""
        if options is None:
            plage = self.plage
            options = OptionsExport(
                periode="personnalisee",
                debut=plage.debut.date(),
                fin=plage.fin.date(),
            )
        feuilles = feuilles_classeur(self.depenses, self.revenus, options, self.categories)
        return ecrire_classeur(feuilles, output_path)

    def generate(self, output_dir: Path, locale: Locale = "fr") -> dict[str, Path]:
        """Genere les trois formats dans le repertoire specifie.

        Returns:
            Dictionnaire {"csv": Path, "texte": Path, "xlsx": Path}.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        base = f"{self.report_name}_{self.suffixe}"
        chemins = {
            "csv": self.to_csv(output_dir / f"{base}.csv", locale),
            "texte": self.to_texte(output_dir / f"{base}_complet.csv", locale),
            "xlsx": self.to_xlsx(output_dir / f"{base}.xlsx"),
        }
        logger.info("Rapport %s genere dans %s", base, output_dir)
        return chemins
