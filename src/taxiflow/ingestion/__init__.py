"""Chargement des instantanes de donnees exportes par la couche de stockage."""

from taxiflow.ingestion.instantane import Instantane, charger_instantane

__all__ = ["Instantane", "charger_instantane"]
