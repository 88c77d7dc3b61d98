"""Safety layer: statement classification, schema qualification, access policy, confirmation."""

from kbgate.safety.classify import (
    DMLKind,
    StatementKind,
    classify,
    classify_dml,
    is_dangerous_ddl,
    is_read_only,
)
from kbgate.safety.confirm import ConfirmationGate, GatedStatement, GateState
from kbgate.safety.policy import AccessLevel, AccessPolicy, required_access, required_for_dml
from kbgate.safety.qualify import qualify_table_names

__all__ = [
    "AccessLevel",
    "AccessPolicy",
    "ConfirmationGate",
    "DMLKind",
    "GateState",
    "GatedStatement",
    "StatementKind",
    "classify",
    "classify_dml",
    "is_dangerous_ddl",
    "is_read_only",
    "qualify_table_names",
    "required_access",
    "required_for_dml",
]
