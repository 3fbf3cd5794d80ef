"""Erreurs du noyau comptable TaxiFlow.

Toutes derivent de ValueError: ce sont des fautes de donnees signalees a
l'appelant, jamais corrigees silencieusement.
"""

from __future__ import annotations


class ErreurTaxiFlow(ValueError):
    """Classe de base des erreurs de donnees TaxiFlow."""


class CategorieInconnue(ErreurTaxiFlow):
    """Identifiant de categorie absent de la table des libelles."""

    def __init__(self, categorie_id: str, genre: str) -> None:
        self.categorie_id = categorie_id
        self.genre = genre
        super().__init__(
            f"Categorie de {genre} inconnue: {categorie_id!r}. "
            "Ajouter l'identifiant a la table des categories."
        )


class RepresentationDateInvalide(ErreurTaxiFlow):
    """Date stockee qui n'est ni une chaine ISO ni un horodatage en secondes."""

    def __init__(self, valeur: object) -> None:
        self.valeur = valeur
        super().__init__(
            f"Representation de date invalide: {valeur!r} "
            "(attendu: chaine ISO ou objet avec 'seconds')"
        )


class PlagePersonnaliseeInvalide(ErreurTaxiFlow):
    """Plage personnalisee dont la fin precede le debut (ou bornes manquantes)."""


class VerificationInconnue(ErreurTaxiFlow):
    """Identifiant de verification de ronde de securite inconnu."""

    def __init__(self, verification_id: str) -> None:
        self.verification_id = verification_id
        super().__init__(f"Verification de ronde inconnue: {verification_id!r}")


class MontantManquant(ErreurTaxiFlow):
    """Depense sans montant HT ni total: les taxes ne peuvent etre deduites."""

    def __init__(self, depense_id: str) -> None:
        self.depense_id = depense_id
        super().__init__(f"Depense {depense_id} sans montant HT ni total")
