"""Gestion des depenses recurrentes."""

from taxiflow.depenses.recurrence import generer_depenses_recurrentes, prochaine_date

__all__ = ["generer_depenses_recurrentes", "prochaine_date"]
