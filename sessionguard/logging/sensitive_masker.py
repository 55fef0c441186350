"""
SESSIONGUARD - Logging - Sensitive Masker

Masquage des identifiants et secrets avant écriture dans les logs.
"""

from typing import Any, Dict, Iterable, List

from .interfaces import ISensitiveMasker


class SensitiveMasker(ISensitiveMasker):
    """
    Masquage récursif des données sensibles.

    Les attributs de session (login, password, ...) passent par ce masker
    avant d'apparaître dans une entrée de log.

    Example:
        masker = SensitiveMasker(["otp"])
        masker.mask({"login": "bob", "password": "secret123", "otp": "4242"})
        # {"login": "bob", "password": "***MASKED***", "otp": "***MASKED***"}
    """

    def __init__(self, additional_patterns: Iterable[str] = ()) -> None:
        """
        Args:
            additional_patterns: Patterns supplémentaires (ex: settings.sensitive_patterns)
        """
        self._patterns: List[str] = [p.lower() for p in self.SENSITIVE_PATTERNS]
        for pattern in additional_patterns:
            normalized = (pattern or "").strip().lower()
            if normalized and normalized not in self._patterns:
                self._patterns.append(normalized)

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque récursivement les valeurs des clés sensibles.

        Les dicts et listes imbriqués sont parcourus, l'original n'est pas modifié.
        """
        if not isinstance(data, dict):
            return data

        return {
            key: self.MASK_VALUE if self.is_sensitive_key(str(key)) else self._mask_value(value)
            for key, value in data.items()
        }

    def _mask_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.mask(value)
        if isinstance(value, list):
            return [self._mask_value(item) for item in value]
        return value

    def is_sensitive_key(self, key: str) -> bool:
        """True si la clé contient un pattern sensible (insensible à la casse)."""
        if not key:
            return False

        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self._patterns)
