"""Rondes de securite: regles de gravite des defauts (SAAQ, loi 17)."""

from taxiflow.securite.defauts import (
    REGLES_DEFAUTS,
    SECTIONS,
    Defaut,
    Gravite,
    ResultatRonde,
    StatutRonde,
    evaluer_ronde,
    gravite_de,
    verifications_en_ordre,
)

__all__ = [
    "REGLES_DEFAUTS",
    "SECTIONS",
    "Defaut",
    "Gravite",
    "ResultatRonde",
    "StatutRonde",
    "evaluer_ronde",
    "gravite_de",
    "verifications_en_ordre",
]
