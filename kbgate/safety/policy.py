"""Access levels and the policy deciding which statement kinds may run."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from loguru import logger

from kbgate.errors import AccessDenied
from kbgate.safety.classify import DMLKind, StatementKind


class AccessLevel(enum.IntEnum):
    """Ordered permission tiers. A level satisfies every level ranked at or below it."""

    READONLY = 0
    READWRITE = 1
    FULL = 2
    ADMIN = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: object) -> AccessLevel:
        """Resolve a configured level name, falling back to READONLY.

        Unknown values are logged, never raised.
        """
        if isinstance(value, AccessLevel):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        name = str(value if value is not None else "readonly").strip().lower()
        for level in cls:
            if level.label == name:
                return level
        logger.warning("Invalid access mode '{}', falling back to 'readonly'.", name)
        return cls.READONLY


_REQUIRED_BY_KIND = {
    StatementKind.READ_ONLY: AccessLevel.READONLY,
    StatementKind.INSERT: AccessLevel.READWRITE,
    StatementKind.UPDATE: AccessLevel.READWRITE,
    StatementKind.OTHER_DML: AccessLevel.READWRITE,
    StatementKind.DELETE: AccessLevel.FULL,
    StatementKind.DDL: AccessLevel.ADMIN,
    StatementKind.DANGEROUS_DDL: AccessLevel.ADMIN,
}


def required_access(kind: StatementKind) -> AccessLevel:
    """Minimum level needed to run a statement of the given kind."""
    return _REQUIRED_BY_KIND[kind]


def required_for_dml(kind: DMLKind) -> AccessLevel:
    """Level the DML tool requires: DELETE needs FULL, everything else READWRITE."""
    return AccessLevel.FULL if kind is DMLKind.DELETE else AccessLevel.READWRITE


@dataclass(frozen=True)
class AccessPolicy:
    """The access level active for this process."""

    level: AccessLevel = AccessLevel.READONLY

    def has_access(self, required: AccessLevel) -> bool:
        return self.level >= required

    def check(self, required: AccessLevel, operation: str) -> None:
        """Raise AccessDenied when the active level ranks below ``required``."""
        if not self.has_access(required):
            logger.warning(
                "Access denied for {}: requires {}, current {}",
                operation, required.label, self.level.label,
            )
            raise AccessDenied(operation, required, self.level)
