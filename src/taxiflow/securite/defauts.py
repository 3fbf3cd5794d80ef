"""Gravite des defauts de ronde de securite (loi 17 / SAAQ Quebec).

Un defaut MAJEUR interdit de circuler; un defaut MINEUR laisse 48h pour
reparer. La table est statique et consultee en lecture seule.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel

from taxiflow.erreurs import VerificationInconnue


class Gravite(str, Enum):
    """Gravite d'un defaut constate lors d'une ronde."""

    MINEUR = "mineur"
    MAJEUR = "majeur"


class StatutRonde(str, Enum):
    """Statut global d'une ronde de securite."""

    CONFORME = "conforme"
    DEFAUT_MINEUR = "defaut_mineur"
    DEFAUT_MAJEUR = "defaut_majeur"


REGLES_DEFAUTS: Mapping[str, Gravite] = MappingProxyType(
    {
        # Majeurs: interdiction de circuler
        "check_phares_feux": Gravite.MAJEUR,
        "check_pneus": Gravite.MAJEUR,
        "check_direction": Gravite.MAJEUR,
        "check_liquide_frein": Gravite.MAJEUR,
        "check_fuites": Gravite.MAJEUR,
        "check_essuie_glaces": Gravite.MAJEUR,
        "check_ceintures": Gravite.MAJEUR,
        # Mineurs: reparation sous 48h
        "check_retroviseurs": Gravite.MINEUR,
        "check_frein_stationnement": Gravite.MINEUR,
        "check_klaxon": Gravite.MINEUR,
        "check_degivrage": Gravite.MINEUR,
        "check_voyants_tableau": Gravite.MINEUR,
        "check_lanternon": Gravite.MINEUR,
        "check_taximetre": Gravite.MINEUR,
        "check_proprete": Gravite.MINEUR,
        "check_trousse": Gravite.MINEUR,
    }
)

SECTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Extérieur & Feux": (
            "check_phares_feux",
            "check_pneus",
            "check_retroviseurs",
            "check_essuie_glaces",
            "check_fuites",
        ),
        "Intérieur & Mécanique": (
            "check_frein_stationnement",
            "check_liquide_frein",
            "check_direction",
            "check_klaxon",
            "check_degivrage",
            "check_voyants_tableau",
        ),
        "Équipement Taxi": (
            "check_ceintures",
            "check_lanternon",
            "check_taximetre",
            "check_proprete",
            "check_trousse",
        ),
    }
)

_ORDRE_AFFICHAGE: tuple[str, ...] = tuple(
    verification for ids in SECTIONS.values() for verification in ids
)


def gravite_de(verification_id: str) -> Gravite | None:
    """Retourne la gravite d'une verification, ou None si l'identifiant est inconnu.

    L'appelant decide quoi faire d'un identifiant inconnu; aucune gravite
    n'est devinee ici.
    """
    return REGLES_DEFAUTS.get(verification_id)


def verifications_en_ordre() -> tuple[str, ...]:
    """Retourne toutes les verifications dans l'ordre d'affichage."""
    return _ORDRE_AFFICHAGE


class Defaut(BaseModel):
    """Defaut constate sur une verification echouee."""

    nom_verification: str
    gravite: Gravite
    repare: bool = False


class ResultatRonde(BaseModel):
    """Statut d'une ronde et liste de ses defauts."""

    statut: StatutRonde
    defauts: list[Defaut] = []

    @property
    def peut_circuler(self) -> bool:
        """Vrai sauf en presence d'un defaut majeur."""
        return self.statut != StatutRonde.DEFAUT_MAJEUR


def evaluer_ronde(verifications: Mapping[str, bool]) -> ResultatRonde:
    """Determine le statut d'une ronde a partir des verifications cochees.

    Args:
        verifications: {identifiant_verification: True si conforme}.

    Returns:
        ResultatRonde: 'conforme' si tout passe, 'defaut_majeur' si au moins
        un defaut majeur, sinon 'defaut_mineur'. Les defauts suivent l'ordre
        d'affichage.

    Raises:
        VerificationInconnue: Si un identifiant n'a pas de regle de gravite.
    """
    for verification_id in verifications:
        if verification_id not in REGLES_DEFAUTS:
            raise VerificationInconnue(verification_id)

    defauts = [
        Defaut(nom_verification=v, gravite=REGLES_DEFAUTS[v])
        for v in _ORDRE_AFFICHAGE
        if v in verifications and not verifications[v]
    ]

    if not defauts:
        statut = StatutRonde.CONFORME
    elif any(d.gravite == Gravite.MAJEUR for d in defauts):
        statut = StatutRonde.DEFAUT_MAJEUR
    else:
        statut = StatutRonde.DEFAUT_MINEUR

    return ResultatRonde(statut=statut, defauts=defauts)
