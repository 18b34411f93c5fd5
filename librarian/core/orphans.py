"""Orphan resolution — deciding what happens to entries with no backing file.

Reconciliation asks an ``OrphanResolver`` about every orphan and removes the
entry only when the resolver says so.  The interactive prompt is just one
resolver; tests and non-interactive runs plug in the fixed policies.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Protocol, runtime_checkable

from librarian.errors import InvalidOrphanResponse
from librarian.models.resource import Resource


class OrphanPolicy(str, Enum):
    """What to do with catalog entries whose resource has disappeared."""

    KEEP = "keep"
    REMOVE = "remove"
    ASK = "ask"


@runtime_checkable
class OrphanResolver(Protocol):
    """Protocol for orphan decisions.

    Any object with a ``resolve_orphan(resource) -> bool`` method satisfies
    this protocol.  ``True`` means remove the entry from the catalog.
    """

    def resolve_orphan(self, resource: Resource) -> bool:
        ...


class KeepOrphans:
    """Keep every orphan."""

    def resolve_orphan(self, resource: Resource) -> bool:
        return False


class RemoveOrphans:
    """Remove every orphan."""

    def resolve_orphan(self, resource: Resource) -> bool:
        return True


def parse_response(response: str) -> bool:
    """Interpret an answer to the orphan prompt.

    Raises
    ------
    InvalidOrphanResponse
        If the answer is neither ``y`` nor ``n``.
    """
    answer = response.strip().lower()
    if answer == "y":
        return True
    if answer == "n":
        return False
    raise InvalidOrphanResponse(f"invalid response {response.strip()!r}")


class PromptOrphanResolver:
    """Ask the operator about each orphan, re-asking until the answer is y or n.

    Parameters
    ----------
    ask:
        Shows a prompt and returns the operator's answer.  Defaults to
        ``input``.
    say:
        Prints a message to the operator.  Defaults to ``print``.
    """

    def __init__(
        self,
        ask: Callable[[str], str] = input,
        say: Callable[[str], None] = print,
    ) -> None:
        self._ask = ask
        self._say = say

    def resolve_orphan(self, resource: Resource) -> bool:
        question = (
            f"Remove orphan {resource.original_checksum} ({resource.title})? (y/n): "
        )
        while True:
            try:
                return parse_response(self._ask(question))
            except InvalidOrphanResponse:
                self._say("Invalid response, please enter 'y' or 'n'.")


def resolver_for(
    policy: OrphanPolicy | str,
    *,
    ask: Callable[[str], str] = input,
    say: Callable[[str], None] = print,
) -> OrphanResolver:
    """Build the resolver that implements ``policy``."""
    policy = OrphanPolicy(policy)
    if policy is OrphanPolicy.KEEP:
        return KeepOrphans()
    if policy is OrphanPolicy.REMOVE:
        return RemoveOrphans()
    return PromptOrphanResolver(ask=ask, say=say)
