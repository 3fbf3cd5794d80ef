"""Suivi de l'expiration des documents obligatoires du chauffeur.

Chaque type de document a ses seuils d'alerte (avertissement, urgence) et sa
duree de validite. Le statut d'un document est calcule par rapport a une date
de reference (defaut: aujourd'hui).
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

JOURS_URGENCE_DEFAUT = 7
JOURS_AVERTISSEMENT_DEFAUT = 30
VALIDITE_DEFAUT_JOURS = 365


# ---------------------------------------------------------------------------
# Types & modeles
# ---------------------------------------------------------------------------


class StatutExpiration(str, Enum):
    """Etat d'un document par rapport a sa date d'expiration."""

    VALIDE = "valide"
    AVERTISSEMENT = "avertissement"
    URGENT = "urgent"
    EXPIRE = "expire"
    MANQUANT = "manquant"


class ConfigDocument(BaseModel):
    """Regles d'un type de document (seuils en jours avant expiration)."""

    model_config = ConfigDict(frozen=True)

    libelle: str
    jours_avertissement: int
    jours_urgence: int
    validite_jours: Optional[int] = None
    requis: bool = True
    reference_legale: str = ""


class Document(BaseModel):
    """Document numerise; sans date d'expiration, il est considere manquant."""

    type: str
    date_expiration: Optional[datetime.date] = None


class EtatExpiration(BaseModel):
    """Statut d'un document, jours restants et message d'affichage."""

    statut: StatutExpiration
    jours_restants: int
    message: str


class SommaireDocuments(BaseModel):
    """Decompte des statuts sur l'ensemble des documents requis."""

    total: int
    numerises: int
    valides: int = 0
    avertissements: int = 0
    urgents: int = 0
    expires: int = 0
    manquants: int = 0
    statut_global: Literal["ok", "attention", "critique"] = "ok"


CONFIG_DOCUMENTS: Mapping[str, ConfigDocument] = MappingProxyType(
    {
        "permis_taxi": ConfigDocument(
            libelle="Permis Taxi (Classe 5)",
            jours_avertissement=60,
            jours_urgence=30,
            validite_jours=1825,
            reference_legale="Code de la sécurité routière, art. 66",
        ),
        "pocket_saaq": ConfigDocument(
            libelle="Pocket SAAQ",
            jours_avertissement=30,
            jours_urgence=14,
            validite_jours=365,
            reference_legale="Règlement du taxi (SAAQ)",
        ),
        "assurance": ConfigDocument(
            libelle="Assurance Véhicule",
            jours_avertissement=30,
            jours_urgence=14,
            validite_jours=365,
            reference_legale="Loi sur l'assurance automobile",
        ),
        "certificat_immatriculation": ConfigDocument(
            libelle="Certificat d'Immatriculation",
            jours_avertissement=30,
            jours_urgence=14,
            validite_jours=365,
            reference_legale="Code de la sécurité routière, art. 31",
        ),
        "attestation_vehicule": ConfigDocument(
            libelle="Attestation Véhicule Autorisé",
            jours_avertissement=30,
            jours_urgence=14,
            validite_jours=365,
            reference_legale="Règlement sur le service de transport par taxi",
        ),
        "contrat_location": ConfigDocument(
            libelle="Contrat de Location",
            jours_avertissement=30,
            jours_urgence=7,
            requis=False,
            reference_legale="Code civil du Québec",
        ),
        "inspection_mecanique": ConfigDocument(
            libelle="Inspection Mécanique",
            jours_avertissement=30,
            jours_urgence=7,
            validite_jours=365,
            reference_legale="Règlement sur les normes de sécurité des véhicules routiers",
        ),
        "inspection_taximetre": ConfigDocument(
            libelle="Inspection Taximètre",
            jours_avertissement=30,
            jours_urgence=7,
            validite_jours=365,
            reference_legale="Règlement concernant le Bureau du taxi de Montréal",
        ),
        # Formations a vie: pas de seuils propres
        "formation_base": ConfigDocument(
            libelle="Formation de Base Chauffeurs Qualifiés",
            jours_avertissement=0,
            jours_urgence=0,
            reference_legale="Règlement sur le transport par taxi",
        ),
        "formation_handicapes": ConfigDocument(
            libelle="Formation Transport Personnes Handicapées",
            jours_avertissement=0,
            jours_urgence=0,
            requis=False,
            reference_legale="Règlement sur le transport adapté",
        ),
    }
)

# Documents suivis par le sommaire, dans l'ordre d'affichage
DOCUMENTS_SUIVIS: tuple[str, ...] = (
    "permis_taxi",
    "pocket_saaq",
    "assurance",
    "certificat_immatriculation",
    "attestation_vehicule",
    "inspection_mecanique",
    "inspection_taximetre",
    "contrat_location",
)

_PRIORITE = {
    StatutExpiration.EXPIRE: 0,
    StatutExpiration.URGENT: 1,
    StatutExpiration.AVERTISSEMENT: 2,
    StatutExpiration.MANQUANT: 3,
}


# ---------------------------------------------------------------------------
# Statut d'un document
# ---------------------------------------------------------------------------


def _seuils(type_document: str) -> tuple[int, int]:
    """(jours_urgence, jours_avertissement); un seuil nul prend la valeur par defaut."""
    config = CONFIG_DOCUMENTS.get(type_document)
    if config is None:
        return JOURS_URGENCE_DEFAUT, JOURS_AVERTISSEMENT_DEFAUT
    return (
        config.jours_urgence or JOURS_URGENCE_DEFAUT,
        config.jours_avertissement or JOURS_AVERTISSEMENT_DEFAUT,
    )


def statut_expiration(
    document: Optional[Document],
    aujourd_hui: Optional[datetime.date] = None,
) -> EtatExpiration:
    """Determine le statut d'expiration d'un document.

    Args:
        document: Document numerise, ou None s'il n'a jamais ete numerise.
        aujourd_hui: Date de reference (defaut: date du jour).

    Returns:
        EtatExpiration: 'manquant' sans date d'expiration, 'expire' si la
        date est passee, 'urgent' ou 'avertissement' sous les seuils du
        type, sinon 'valide'.
    """
    if document is None or document.date_expiration is None:
        return EtatExpiration(
            statut=StatutExpiration.MANQUANT, jours_restants=0, message="Non scanné"
        )

    jour = aujourd_hui or datetime.date.today()
    jours = (document.date_expiration - jour).days
    jours_urgence, jours_avertissement = _seuils(document.type)

    if jours < 0:
        return EtatExpiration(
            statut=StatutExpiration.EXPIRE,
            jours_restants=jours,
            message=f"Expiré depuis {abs(jours)} jours",
        )
    if jours <= jours_urgence:
        return EtatExpiration(
            statut=StatutExpiration.URGENT,
            jours_restants=jours,
            message=f"URGENT: {jours} jours restants",
        )
    if jours <= jours_avertissement:
        return EtatExpiration(
            statut=StatutExpiration.AVERTISSEMENT,
            jours_restants=jours,
            message=f"{jours} jours restants",
        )
    return EtatExpiration(
        statut=StatutExpiration.VALIDE,
        jours_restants=jours,
        message=f"Valide (exp. {document.date_expiration:%d/%m/%Y})",
    )


def doit_renouveler(
    document: Optional[Document], aujourd_hui: Optional[datetime.date] = None
) -> bool:
    """Vrai sans document, ou si le document est expire ou en urgence."""
    if document is None:
        return True
    return statut_expiration(document, aujourd_hui).statut in (
        StatutExpiration.EXPIRE,
        StatutExpiration.URGENT,
    )


def suggerer_prochaine_expiration(
    type_document: str, date_courante: datetime.date
) -> datetime.date:
    """Prochaine date d'expiration: duree de validite du type (defaut 365 jours)."""
    config = CONFIG_DOCUMENTS.get(type_document)
    validite = config.validite_jours if config and config.validite_jours else None
    return date_courante + datetime.timedelta(days=validite or VALIDITE_DEFAUT_JOURS)


# ---------------------------------------------------------------------------
# Ensemble des documents
# ---------------------------------------------------------------------------


def _par_type(documents: Iterable[Document]) -> dict[str, Document]:
    """Premier document de chaque type."""
    resultat: dict[str, Document] = {}
    for document in documents:
        resultat.setdefault(document.type, document)
    return resultat


def sommaire_documents(
    documents: Iterable[Document], aujourd_hui: Optional[datetime.date] = None
) -> SommaireDocuments:
    """Decompte les statuts des documents suivis.

    Statut global 'critique' si un document est expire, urgent ou manquant,
    'attention' s'il y a seulement des avertissements, sinon 'ok'.
    """
    par_type = _par_type(documents)
    compte = {statut: 0 for statut in StatutExpiration}
    for type_document in DOCUMENTS_SUIVIS:
        etat = statut_expiration(par_type.get(type_document), aujourd_hui)
        compte[etat.statut] += 1

    if (
        compte[StatutExpiration.EXPIRE]
        or compte[StatutExpiration.URGENT]
        or compte[StatutExpiration.MANQUANT]
    ):
        statut_global = "critique"
    elif compte[StatutExpiration.AVERTISSEMENT]:
        statut_global = "attention"
    else:
        statut_global = "ok"

    return SommaireDocuments(
        total=len(DOCUMENTS_SUIVIS),
        numerises=len(DOCUMENTS_SUIVIS) - compte[StatutExpiration.MANQUANT],
        valides=compte[StatutExpiration.VALIDE],
        avertissements=compte[StatutExpiration.AVERTISSEMENT],
        urgents=compte[StatutExpiration.URGENT],
        expires=compte[StatutExpiration.EXPIRE],
        manquants=compte[StatutExpiration.MANQUANT],
        statut_global=statut_global,
    )


def documents_a_traiter(
    documents: Iterable[Document], aujourd_hui: Optional[datetime.date] = None
) -> list[tuple[str, EtatExpiration]]:
    """Documents suivis qui demandent une action, du plus au moins prioritaire.

    Ordre: expires, urgents, avertissements, manquants; a priorite egale,
    l'ordre d'affichage est conserve.
    """
    par_type = _par_type(documents)
    a_traiter = []
    for type_document in DOCUMENTS_SUIVIS:
        etat = statut_expiration(par_type.get(type_document), aujourd_hui)
        if etat.statut != StatutExpiration.VALIDE:
            a_traiter.append((type_document, etat))
    a_traiter.sort(key=lambda item: _PRIORITE[item[1].statut])
    return a_traiter
