"""Sous-commande d'etat des documents obligatoires (dates d'expiration)."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from taxiflow.securite.echeances import (
    CONFIG_DOCUMENTS,
    DOCUMENTS_SUIVIS,
    Document,
    StatutExpiration,
    sommaire_documents,
    statut_expiration,
)

documents_app = typer.Typer(no_args_is_help=True)
console = Console()

_STYLES_STATUT = {
    StatutExpiration.VALIDE: "green",
    StatutExpiration.AVERTISSEMENT: "yellow",
    StatutExpiration.URGENT: "red",
    StatutExpiration.EXPIRE: "bold red",
    StatutExpiration.MANQUANT: "dim",
}


@documents_app.command(name="etat")
def etat(
    fichier: Path = typer.Argument(
        ..., help="Fichier JSON {type_document: 'AAAA-MM-JJ' ou null}"
    ),
) -> None:
    """Afficher le statut d'expiration de chaque document suivi."""
    if not fichier.exists():
        console.print(f"[red]Fichier introuvable: {fichier}[/red]")
        raise typer.Exit(1)

    try:
        bruts = json.loads(fichier.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]JSON invalide:[/red] {e}")
        raise typer.Exit(1)
    if not isinstance(bruts, dict):
        console.print("[red]Objet JSON {type_document: date} attendu[/red]")
        raise typer.Exit(1)

    try:
        documents = [
            Document(type=type_document, date_expiration=date)
            for type_document, date in bruts.items()
        ]
    except ValidationError as e:
        console.print(f"[red]Date invalide:[/red] {e}")
        raise typer.Exit(1)

    par_type = {d.type: d for d in documents}
    tableau = Table(title="Documents obligatoires", show_header=True)
    tableau.add_column("Document", style="cyan")
    tableau.add_column("Statut")
    tableau.add_column("Detail")
    for type_document in DOCUMENTS_SUIVIS:
        resultat = statut_expiration(par_type.get(type_document))
        style = _STYLES_STATUT[resultat.statut]
        tableau.add_row(
            CONFIG_DOCUMENTS[type_document].libelle,
            f"[{style}]{resultat.statut.value}[/{style}]",
            resultat.message,
        )
    console.print(tableau)

    sommaire = sommaire_documents(documents)
    console.print(
        f"Statut global: {sommaire.statut_global} "
        f"({sommaire.numerises}/{sommaire.total} numerises)"
    )
