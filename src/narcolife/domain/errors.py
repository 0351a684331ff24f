from __future__ import annotations


class GameRuleError(ValueError):
    """A gameplay action was rejected before any state changed."""

    kind = "rule_violation"


class PreconditionFailed(GameRuleError):
    kind = "precondition_failed"

    def __init__(self, message: str, *, reason: str = "") -> None:
        super().__init__(message)
        self.reason = str(reason or "")


class IneligibleAction(GameRuleError):
    kind = "ineligible_action"


class NotFound(GameRuleError):
    kind = "not_found"

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"Unknown {entity}: {key}")
        self.entity = entity
        self.key = key


class CatalogError(ValueError):
    """Static catalog data failed validation at load time."""
