"""Base contract enforcement utilities.

``require()`` guards pipeline invariants and ``reject()`` raises typed
descriptor errors. Every check in the resolver goes through one of them.
"""

from typing import Optional

from rider.contracts.failure import ContractViolation, ErrorKind, ERROR_TYPES


def require(condition: bool, message: str, kind: Optional[ErrorKind] = None) -> None:
    """Enforce a pipeline contract.

    This is called at stage boundaries to verify the preceding stage
    produced the guaranteed invariants. It is fail-fast: no recovery,
    no fallback, no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    kind : ErrorKind, optional
        Error kind the violated invariant corresponds to, if any.

    Raises
    ------
    ContractViolation
        If condition is False. This indicates a bug in resolution logic.

    Examples
    --------
    >>> require(len(istride) == len(lengths), "Stride contract: istride rank", ErrorKind.STRIDE_LENGTH_MISMATCH)
    """
    if not condition:
        raise ContractViolation(message, kind)


def reject(kind: ErrorKind, message: str):
    """Raise the ``DescriptorError`` subclass registered for ``kind``."""
    raise ERROR_TYPES[kind](message)
