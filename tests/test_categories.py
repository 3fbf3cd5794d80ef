"""Tests pour les tables de libelles de categories."""

import pytest

from taxiflow.categories import (
    CATEGORIES_DEFAUT,
    TablesCategories,
    charger_categories,
)
from taxiflow.erreurs import CategorieInconnue


class TestCategoriesParDefaut:
    def test_libelle_depense(self) -> None:
        assert CATEGORIES_DEFAUT.libelle_depense("carburant") == "Carburant"

    def test_identifiants_partagent_un_libelle(self) -> None:
        assert CATEGORIES_DEFAUT.libelle_depense("FUEL") == "Carburant"
        assert CATEGORIES_DEFAUT.libelle_depense("REPAIR") == "Entretien & Réparation"
        assert CATEGORIES_DEFAUT.libelle_depense("TIRES") == "Entretien & Réparation"

    def test_libelle_revenu(self) -> None:
        assert CATEGORIES_DEFAUT.libelle_revenu("COURSE") == "Course taxi"
        assert CATEGORIES_DEFAUT.libelle_revenu("MEDICAL") == "Transport médical"

    def test_depense_inconnue(self) -> None:
        with pytest.raises(CategorieInconnue, match="LIMOUSINE") as exc:
            CATEGORIES_DEFAUT.libelle_depense("LIMOUSINE")
        assert exc.value.categorie_id == "LIMOUSINE"
        assert exc.value.genre == "depense"

    def test_revenu_inconnu(self) -> None:
        """Un identifiant de depense n'est pas un identifiant de revenu."""
        with pytest.raises(CategorieInconnue):
            CATEGORIES_DEFAUT.libelle_revenu("carburant")

    def test_charger_sans_chemin(self) -> None:
        assert charger_categories() is CATEGORIES_DEFAUT


class TestChargerCategories:
    def test_fichier_yaml(self, tmp_path) -> None:
        fichier = tmp_path / "categories.yaml"
        fichier.write_text(
            "depenses:\n  GAZ: Essence\nrevenus:\n  UBER: Plateforme\n",
            encoding="utf-8",
        )
        tables = charger_categories(fichier)
        assert tables.libelle_depense("GAZ") == "Essence"
        assert tables.libelle_revenu("UBER") == "Plateforme"
        with pytest.raises(CategorieInconnue):
            tables.libelle_depense("carburant")

    def test_fichier_inexistant(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            charger_categories(tmp_path / "absent.yaml")

    def test_fichier_vide(self, tmp_path) -> None:
        fichier = tmp_path / "vide.yaml"
        fichier.write_text("", encoding="utf-8")
        assert charger_categories(fichier) == TablesCategories()

    def test_schema_invalide(self, tmp_path) -> None:
        fichier = tmp_path / "invalide.yaml"
        fichier.write_text("depenses:\n  - pas\n  - un\n  - dict\n", encoding="utf-8")
        with pytest.raises(ValueError, match="invalide"):
            charger_categories(fichier)
