"""Representations des dates stockees et conversion en date canonique.

Les enregistrements arrivent avec deux formes de date: une chaine ISO, ou un
objet horodatage Firestore portant des secondes depuis l'epoque. Les deux
variantes sont explicites; toute autre forme est rejetee.

La date canonique est un datetime naif exprime en UTC.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from taxiflow.erreurs import RepresentationDateInvalide


class DateIso(BaseModel):
    """Date stockee sous forme de chaine ISO 8601."""

    model_config = ConfigDict(frozen=True)

    valeur: str


class HorodatageFirestore(BaseModel):
    """Date stockee sous forme d'horodatage {seconds, nanoseconds}."""

    model_config = ConfigDict(frozen=True)

    seconds: int
    nanoseconds: int = 0


DateStockee = Union[DateIso, HorodatageFirestore]


def _secondes(brut: Any) -> Any:
    """Extrait le champ 'seconds' d'un mapping ou d'un objet, sinon None."""
    if isinstance(brut, Mapping):
        return brut.get("seconds")
    return getattr(brut, "seconds", None)


def interpreter_date(brut: Any) -> DateStockee:
    """Classe une date brute dans l'une des deux variantes supportees.

    Raises:
        RepresentationDateInvalide: Ni chaine ISO, ni objet avec 'seconds'.
    """
    if isinstance(brut, (DateIso, HorodatageFirestore)):
        return brut
    if isinstance(brut, str):
        return DateIso(valeur=brut)

    secondes = _secondes(brut)
    if secondes is None or isinstance(secondes, bool):
        raise RepresentationDateInvalide(brut)
    try:
        secondes_int = int(secondes)
    except (TypeError, ValueError):
        raise RepresentationDateInvalide(brut) from None
    if secondes_int != secondes:
        raise RepresentationDateInvalide(brut)

    nanos = brut.get("nanoseconds", 0) if isinstance(brut, Mapping) else getattr(
        brut, "nanoseconds", 0
    )
    return HorodatageFirestore(seconds=secondes_int, nanoseconds=int(nanos or 0))


def vers_date_canonique(date_stockee: DateStockee) -> datetime.datetime:
    """Convertit une date stockee en datetime naif UTC.

    Horodatage: secondes * 1000 millisecondes (les nanosecondes sont ignorees).
    Chaine ISO: date seule -> minuit; avec fuseau -> convertie en UTC.
    Les deux formes sont tronquees a la milliseconde.

    Raises:
        RepresentationDateInvalide: Chaine qui n'est pas une date ISO valide.
    """
    if isinstance(date_stockee, HorodatageFirestore):
        millisecondes = date_stockee.seconds * 1000
        return datetime.datetime(1970, 1, 1) + datetime.timedelta(
            milliseconds=millisecondes
        )

    texte = date_stockee.valeur.strip()
    if texte.endswith("Z"):
        texte = texte[:-1] + "+00:00"
    try:
        moment = datetime.datetime.fromisoformat(texte)
    except ValueError:
        raise RepresentationDateInvalide(date_stockee.valeur) from None
    if moment.tzinfo is not None:
        moment = moment.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    # Precision a la milliseconde
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def date_canonique(brut: Any) -> datetime.datetime:
    """Raccourci: interpreter_date puis vers_date_canonique."""
    return vers_date_canonique(interpreter_date(brut))
