"""Sous-commandes de rapport pour TaxiFlow (sommaire, csv, complet, excel)."""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from taxiflow.categories import TablesCategories, charger_categories
from taxiflow.erreurs import ErreurTaxiFlow
from taxiflow.ingestion.instantane import Instantane, charger_instantane
from taxiflow.quebec.taxes.calcul import formater_montant

rapport_app = typer.Typer(no_args_is_help=True)
console = Console()

_LOCALES = ("fr", "en")


def _charger() -> tuple[Instantane, TablesCategories]:
    """Charge l'instantane et les categories configures par les options globales."""
    from taxiflow.cli.app import get_categories_path, get_donnees_path

    try:
        instantane = charger_instantane(get_donnees_path())
        categories = charger_categories(get_categories_path())
    except FileNotFoundError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)
    return instantane, categories


def _verifier_locale(locale: str) -> None:
    if locale not in _LOCALES:
        console.print(f"[red]Langue non supportee: {locale} (fr ou en)[/red]")
        raise typer.Exit(1)


def _ecrire_ou_afficher(texte: str, sortie: Optional[Path]) -> None:
    if sortie is None:
        typer.echo(texte)
        return
    sortie.parent.mkdir(parents=True, exist_ok=True)
    sortie.write_text(texte, encoding="utf-8")
    console.print(f"[green]Rapport ecrit: {sortie}[/green]")


@rapport_app.command(name="sommaire")
def sommaire(
    annee: int = typer.Option(..., "--annee", "-a", help="Annee du rapport"),
    mois: Optional[int] = typer.Option(None, "--mois", "-m", min=1, max=12, help="Mois (1-12)"),
) -> None:
    """Afficher les totaux de revenus, depenses, taxes et categories."""
    from taxiflow.rapports.base import RapportPeriode

    instantane, categories = _charger()
    rapport = RapportPeriode(
        instantane.depenses, instantane.revenus, annee, mois, categories
    )
    try:
        s = rapport.sommaire
    except ErreurTaxiFlow as e:
        console.print(f"[red]Erreur de donnees:[/red] {e}")
        raise typer.Exit(1)

    if not rapport.lignes:
        console.print("[yellow]Aucune transaction pour cette periode.[/yellow]")
        return

    tableau = Table(title=f"Sommaire {rapport.suffixe}", show_header=True)
    tableau.add_column("Poste", style="cyan", min_width=30)
    tableau.add_column("Montant (CAD)", justify="right")

    tableau.add_row("[bold]REVENUS[/bold]", "")
    for cat, total in s.revenus_par_categorie.items():
        tableau.add_row(f"  {cat}", formater_montant(total))
    tableau.add_row("[bold]DEPENSES[/bold]", "")
    for cat, total in s.depenses_par_categorie.items():
        tableau.add_row(f"  {cat}", formater_montant(total))
    tableau.add_section()
    tableau.add_row("Total revenus", formater_montant(s.total_revenus))
    tableau.add_row("Total depenses", formater_montant(s.total_depenses))
    tableau.add_row("TPS payee", formater_montant(s.tps_payee))
    tableau.add_row("TVQ payee", formater_montant(s.tvq_payee))
    style = "green" if s.profit_net >= 0 else "red"
    tableau.add_row(
        "[bold]Profit net[/bold]",
        f"[bold {style}]{formater_montant(s.profit_net)}[/bold {style}]",
    )
    console.print(tableau)


@rapport_app.command(name="csv")
def csv(
    annee: int = typer.Option(..., "--annee", "-a", help="Annee du rapport"),
    mois: Optional[int] = typer.Option(None, "--mois", "-m", min=1, max=12, help="Mois (1-12)"),
    locale: str = typer.Option("fr", "--locale", "-l", help="Langue: fr ou en"),
    sortie: Optional[Path] = typer.Option(None, "--sortie", "-o", help="Fichier CSV de sortie"),
) -> None:
    """Exporter le journal des transactions en CSV."""
    from taxiflow.rapports.base import RapportPeriode
    from taxiflow.rapports.formatage import vers_csv

    _verifier_locale(locale)
    instantane, categories = _charger()
    rapport = RapportPeriode(
        instantane.depenses, instantane.revenus, annee, mois, categories
    )
    try:
        texte = vers_csv(rapport.lignes, locale)
    except ErreurTaxiFlow as e:
        console.print(f"[red]Erreur de donnees:[/red] {e}")
        raise typer.Exit(1)
    _ecrire_ou_afficher(texte, sortie)


@rapport_app.command(name="complet")
def complet(
    annee: int = typer.Option(..., "--annee", "-a", help="Annee du rapport"),
    mois: Optional[int] = typer.Option(None, "--mois", "-m", min=1, max=12, help="Mois (1-12)"),
    locale: str = typer.Option("fr", "--locale", "-l", help="Langue: fr ou en"),
    sortie: Optional[Path] = typer.Option(None, "--sortie", "-o", help="Fichier de sortie"),
) -> None:
    """Exporter le rapport complet (sommaire + CSV detaille)."""
    from taxiflow.rapports.formatage import rapport_complet_texte

    _verifier_locale(locale)
    instantane, categories = _charger()
    try:
        texte = rapport_complet_texte(
            instantane.depenses, instantane.revenus, annee, mois, locale, categories
        )
    except ErreurTaxiFlow as e:
        console.print(f"[red]Erreur de donnees:[/red] {e}")
        raise typer.Exit(1)
    _ecrire_ou_afficher(texte, sortie)


@rapport_app.command(name="excel")
def excel(
    sortie: Path = typer.Option(..., "--sortie", "-o", help="Fichier .xlsx de sortie"),
    periode: str = typer.Option(
        "1mois", "--periode", "-p",
        help="jour, 1mois, 3mois, 6mois, 12mois ou personnalisee",
    ),
    debut: Optional[str] = typer.Option(None, "--debut", help="Date de debut (AAAA-MM-JJ)"),
    fin: Optional[str] = typer.Option(None, "--fin", help="Date de fin (AAAA-MM-JJ)"),
    chauffeur: Optional[str] = typer.Option(None, "--chauffeur", help="Nom du chauffeur"),
    permis: Optional[str] = typer.Option(None, "--permis", help="Numero de permis"),
) -> None:
    """Exporter le classeur professionnel (journal, synthese, resume fiscal)."""
    from taxiflow.rapports.agregation import PeriodeExport
    from taxiflow.rapports.classeur import ecrire_classeur
    from taxiflow.rapports.formatage import OptionsExport, feuilles_classeur

    try:
        options = OptionsExport(
            periode=PeriodeExport(periode),
            debut=datetime.date.fromisoformat(debut) if debut else None,
            fin=datetime.date.fromisoformat(fin) if fin else None,
            nom_chauffeur=chauffeur,
            permis_chauffeur=permis,
        )
    except ValueError as e:
        console.print(f"[red]Option invalide:[/red] {e}")
        raise typer.Exit(1)

    instantane, categories = _charger()
    try:
        feuilles = feuilles_classeur(
            instantane.depenses, instantane.revenus, options, categories
        )
    except ErreurTaxiFlow as e:
        console.print(f"[red]Erreur de donnees:[/red] {e}")
        raise typer.Exit(1)

    chemin = ecrire_classeur(feuilles, sortie)
    console.print(f"[green]Classeur ecrit: {chemin}[/green]")


def recurrentes() -> None:
    """Lister les depenses recurrentes dont l'occurrence est due."""
    from taxiflow.depenses.recurrence import generer_depenses_recurrentes

    instantane, _ = _charger()
    try:
        nouvelles = generer_depenses_recurrentes(instantane.depenses)
    except ErreurTaxiFlow as e:
        console.print(f"[red]Erreur de donnees:[/red] {e}")
        raise typer.Exit(1)

    if not nouvelles:
        console.print("[green]Aucune depense recurrente a creer.[/green]")
        return

    tableau = Table(title="Depenses recurrentes a creer", show_header=True)
    tableau.add_column("Marchand", style="cyan")
    tableau.add_column("Categorie")
    tableau.add_column("Total", justify="right", style="green")
    tableau.add_column("Prochaine date")
    for depense in nouvelles:
        tableau.add_row(
            depense.marchand,
            depense.categorie_id,
            formater_montant(depense.total) if depense.total is not None else "",
            str(depense.prochaine_recurrence)[:10],
        )
    console.print(tableau)
