"""Ledger error taxonomy.

None of these ever reach a Ledger caller: every public operation catches
them at its boundary, logs, and falls back to a safe default.

LedgerError  — common base
StoreFault   — the backing store failed to read / write / remove / clear
DecodeFault  — stored text is not a valid number
"""


class LedgerError(Exception):
    pass


class StoreFault(LedgerError):
    """Raised by KeyValueStore implementations (quota, I/O, access denied)."""


class DecodeFault(LedgerError):
    """Raised by codec.decode_number for malformed or non-numeric text."""
