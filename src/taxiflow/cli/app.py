"""Application CLI principale TaxiFlow."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import taxiflow

app = typer.Typer(
    name="tflow",
    help="TaxiFlow - Comptabilite et conformite pour chauffeurs de taxi au Quebec",
    no_args_is_help=True,
)

console = Console()

# Options globales stockees via le callback
_donnees_path: Path = Path("donnees/instantane.json")
_categories_path: Optional[Path] = None


def get_donnees_path() -> Path:
    """Retourne le chemin de l'instantane JSON des depenses et revenus."""
    return _donnees_path


def get_categories_path() -> Optional[Path]:
    """Retourne le chemin du fichier de categories (None = tables integrees)."""
    return _categories_path


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"TaxiFlow version {taxiflow.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    donnees: Optional[str] = typer.Option(
        "donnees/instantane.json",
        "--donnees",
        "-d",
        help="Chemin vers l'instantane JSON des depenses et revenus",
    ),
    categories: Optional[str] = typer.Option(
        None,
        "--categories",
        "-c",
        help="Fichier YAML des libelles de categories",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Afficher les journaux de debogage"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Afficher la version de TaxiFlow",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """TaxiFlow - Rapports comptables TPS/TVQ et rondes de securite SAAQ."""
    global _donnees_path, _categories_path
    if donnees:
        _donnees_path = Path(donnees)
    _categories_path = Path(categories) if categories else None
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Import et enregistrement des sous-commandes
from taxiflow.cli.rapports import rapport_app, recurrentes  # noqa: E402
from taxiflow.cli.documents import documents_app  # noqa: E402
from taxiflow.cli.ronde import ronde_app  # noqa: E402

app.add_typer(rapport_app, name="rapport", help="Rapports comptables (sommaire, CSV, Excel)")
app.add_typer(ronde_app, name="ronde", help="Rondes de securite (gravite des defauts)")
app.add_typer(documents_app, name="documents", help="Expiration des documents obligatoires")
app.command(name="recurrentes", help="Lister les depenses recurrentes echues")(recurrentes)


@app.command(name="taxes")
def taxes(
    montant: str = typer.Argument(..., help="Montant (ex: 100.00)"),
    ttc: bool = typer.Option(
        False, "--ttc", help="Le montant inclut deja TPS et TVQ"
    ),
) -> None:
    """Calculer la repartition TPS/TVQ d'un montant."""
    from taxiflow.quebec.taxes.calcul import (
        calculer_depuis_ht,
        calculer_depuis_ttc,
        formater_montant,
    )

    try:
        valeur = Decimal(montant.replace(",", "."))
    except InvalidOperation:
        console.print(f"[red]Montant invalide: {montant}[/red]")
        raise typer.Exit(1)

    repartition = calculer_depuis_ttc(valeur) if ttc else calculer_depuis_ht(valeur)

    tableau = Table(title="Repartition TPS/TVQ", show_header=True)
    tableau.add_column("Poste", style="cyan")
    tableau.add_column("Montant", justify="right", style="green")
    tableau.add_row("Montant HT", formater_montant(repartition.montant_ht))
    tableau.add_row("TPS (5%)", formater_montant(repartition.tps))
    tableau.add_row("TVQ (9.975%)", formater_montant(repartition.tvq))
    tableau.add_section()
    tableau.add_row("[bold]Total TTC[/bold]", f"[bold]{formater_montant(repartition.total)}[/bold]")
    console.print(tableau)
