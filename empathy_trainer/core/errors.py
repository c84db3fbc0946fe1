"""Errors raised by the challenge engine. Lookups of missing rows return None instead."""


class TrainerError(Exception):
    """Base class for per-call failures; none of them is fatal to the process."""


class InvalidInput(TrainerError):
    """Rejected before any write: blank text, out-of-range rating/difficulty, unknown scenario."""


class PersistenceError(TrainerError):
    """The store failed mid-transaction. Nothing was committed; the caller may retry."""
