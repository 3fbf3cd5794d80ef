"""Ecriture des feuilles de rapport dans un classeur Excel (.xlsx)."""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)


def _ajuster_colonnes(ws, min_width: int = 10, max_width: int = 45) -> None:
    """Ajuste la largeur des colonnes au contenu (lignes a une seule cellule exclues)."""
    largeurs: dict[int, int] = {}
    for row in ws.iter_rows():
        cellules = [cell for cell in row if cell.value not in (None, "")]
        if len(cellules) <= 1:
            continue
        for cell in cellules:
            largeurs[cell.column] = max(largeurs.get(cell.column, 0), len(str(cell.value)))
    for col, largeur in largeurs.items():
        ws.column_dimensions[get_column_letter(col)].width = max(
            min_width, min(max_width, largeur + 2)
        )


def ecrire_classeur(feuilles: dict[str, list[list]], output_path: Path) -> Path:
    """Ecrit chaque feuille (liste de lignes) dans un classeur .xlsx.

    La premiere ligne de chaque feuille est un titre en gras.

    Args:
        feuilles: {nom_feuille: lignes}, dans l'ordre des onglets.
        output_path: Chemin du fichier .xlsx de sortie.

    Returns:
        Chemin du fichier cree.
    """
    wb = Workbook()
    wb.remove(wb.active)

    for nom, lignes in feuilles.items():
        ws = wb.create_sheet(title=nom)
        for ligne in lignes:
            ws.append(ligne)
        if lignes:
            ws.cell(row=1, column=1).font = Font(bold=True, size=14)
        _ajuster_colonnes(ws)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    logger.info("Classeur ecrit: %s (%d feuilles)", output_path, len(feuilles))
    return output_path
