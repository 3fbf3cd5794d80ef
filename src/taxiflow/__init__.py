"""TaxiFlow - Comptabilite et conformite pour chauffeurs de taxi au Quebec."""

__version__ = "0.1.0"
