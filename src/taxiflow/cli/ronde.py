"""Sous-commandes des rondes de securite (liste des verifications, evaluation)."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from taxiflow.erreurs import VerificationInconnue
from taxiflow.securite.defauts import (
    SECTIONS,
    Gravite,
    StatutRonde,
    evaluer_ronde,
    gravite_de,
)

ronde_app = typer.Typer(no_args_is_help=True)
console = Console()

_STYLES_STATUT = {
    StatutRonde.CONFORME: "green",
    StatutRonde.DEFAUT_MINEUR: "yellow",
    StatutRonde.DEFAUT_MAJEUR: "red",
}


@ronde_app.command(name="verifications")
def verifications() -> None:
    """Afficher les verifications de ronde et leur gravite, par section."""
    tableau = Table(title="Verifications de ronde de securite", show_header=True)
    tableau.add_column("Verification", style="cyan", min_width=30)
    tableau.add_column("Gravite")

    for section, ids in SECTIONS.items():
        tableau.add_row(f"[bold]{section}[/bold]", "")
        for verification_id in ids:
            gravite = gravite_de(verification_id)
            style = "red" if gravite == Gravite.MAJEUR else "yellow"
            tableau.add_row(f"  {verification_id}", f"[{style}]{gravite.value}[/{style}]")

    console.print(tableau)


@ronde_app.command(name="evaluer")
def evaluer(
    fichier: Path = typer.Argument(..., help="Fichier JSON {verification: true/false}"),
) -> None:
    """Evaluer une ronde a partir des verifications cochees."""
    if not fichier.exists():
        console.print(f"[red]Fichier introuvable: {fichier}[/red]")
        raise typer.Exit(1)

    try:
        verifications_cochees = json.loads(fichier.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]JSON invalide:[/red] {e}")
        raise typer.Exit(1)
    if not isinstance(verifications_cochees, dict):
        console.print("[red]Objet JSON {verification: true/false} attendu[/red]")
        raise typer.Exit(1)

    try:
        resultat = evaluer_ronde(verifications_cochees)
    except VerificationInconnue as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    style = _STYLES_STATUT[resultat.statut]
    console.print(f"Statut: [bold {style}]{resultat.statut.value}[/bold {style}]")

    if resultat.defauts:
        tableau = Table(title="Defauts", show_header=True)
        tableau.add_column("Verification", style="cyan")
        tableau.add_column("Gravite")
        for defaut in resultat.defauts:
            tableau.add_row(defaut.nom_verification, defaut.gravite.value)
        console.print(tableau)

    if not resultat.peut_circuler:
        console.print("[red]Defaut majeur: interdiction de circuler.[/red]")
