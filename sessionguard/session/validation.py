"""
SESSIONGUARD - Validation Gate

Décide si l'état des champs d'une session est acceptable.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from ..core.interfaces import ValidationError, ValidationResult
from .interfaces import IValidationGate

Rule = Callable[..., Optional[str]]


def presence(field: str, message: Optional[str] = None) -> Rule:
    """
    Règle: le champ doit être renseigné (ni None, ni chaîne vide/blanche).

    Args:
        field: Nom de l'attribut de session
        message: Message personnalisé (défaut: "<Field> cannot be blank")
    """
    error_message = message or f"{field.replace('_', ' ').capitalize()} cannot be blank"

    def check(session) -> Optional[str]:
        value = session.attributes.get(field)
        if value is None:
            return error_message
        if isinstance(value, str) and not value.strip():
            return error_message
        return None

    check.__name__ = f"presence_of_{field}"
    return check


class ValidationGate(IValidationGate):
    """
    Validation par règles, toutes exécutées (pas fail-fast).

    Une règle reçoit la session et retourne un message d'erreur ou None.
    Les erreurs suivent l'ordre d'enregistrement des règles.

    Example:
        gate = ValidationGate()
        gate.add_rule("login", presence("login"))
        gate.add_rule("password", presence("password"))
        result = gate.validate(session)
    """

    def __init__(self, rules: Optional[Dict[str, Rule]] = None):
        self._rules: List[Tuple[str, Rule]] = list((rules or {}).items())

    @property
    def rule_ids(self) -> List[str]:
        return [rule_id for rule_id, _ in self._rules]

    def add_rule(self, rule_id: str, rule: Rule) -> None:
        """
        Ajoute une règle nommée.

        Raises:
            ValueError: Identifiant déjà utilisé
        """
        if rule_id in self.rule_ids:
            raise ValueError(f"Rule already registered: {rule_id}")
        self._rules.append((rule_id, rule))

    def validate(self, session) -> ValidationResult:
        """
        Vide session.errors puis exécute toutes les règles.

        Returns:
            ValidationResult avec TOUTES les erreurs
        """
        session.errors.clear()
        errors = []

        for rule_id, rule in self._rules:
            message = rule(session)
            if message:
                errors.append(ValidationError(rule_id=rule_id, message=message, location=rule_id))
                session.errors.add(message, field=rule_id)

        return ValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            checked_at=datetime.now(timezone.utc),
        )
