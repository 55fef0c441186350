"""
SESSIONGUARD - Settings Loader Implementation
Charge la configuration des sessions depuis fichiers YAML.
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError as SchemaError

from .interfaces import ISettingsLoader, SessionSettings


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class SettingsLoader(ISettingsLoader):
    """Chargement des configurations de session depuis fichiers YAML."""

    # Clé racine optionnelle regroupant les réglages
    ROOT_KEY: str = "session"

    def __init__(self, configs_path: str = "config"):
        self.configs_path = Path(configs_path)

    def load(self, name: str) -> SessionSettings:
        """
        Charge la config d'un type de session.

        Args:
            name: Nom du fichier (sans extension .yaml)

        Returns:
            SessionSettings validés

        Raises:
            ConfigIntegrityError: Si fichier inexistant ou structure invalide
        """
        config_file = self.configs_path / f"{name}.yaml"

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée: {name}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}")

        # Fichier vide → valeurs par défaut
        if config is None:
            config = {}

        if not isinstance(config, dict):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        return self.parse(config)

    def parse(self, config: Dict[str, Any]) -> SessionSettings:
        """
        Valide un dictionnaire de configuration.

        Raises:
            ConfigIntegrityError: Si schéma invalide
        """
        if self.ROOT_KEY in config:
            config = config[self.ROOT_KEY] or {}
            if not isinstance(config, dict):
                raise ConfigIntegrityError(f"{self.ROOT_KEY} doit être un objet YAML")

        try:
            return SessionSettings(**config)
        except SchemaError as e:
            raise ConfigIntegrityError(f"Configuration invalide: {e}")
