"""Snapshot-based undo history for a song sequence."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.song import Song


@dataclass
class SongNode:
    """A link in the song chain: the song plus the handle of its successor."""

    song: Song
    next: Optional[int] = None


@dataclass(frozen=True)
class Snapshot:
    """Full copy of a chain and its cursor taken before a mutation."""

    label: str
    nodes: Dict[int, SongNode]
    head: Optional[int]
    cursor: Optional[int]


def copy_nodes(nodes: Dict[int, SongNode]) -> Dict[int, SongNode]:
    """Copy every node of an arena; songs are shared since they are values."""
    return {handle: SongNode(node.song, node.next) for handle, node in nodes.items()}


class UndoLedger:
    """Stack of snapshots, most recent last."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize an empty ledger.

        Args:
            logger: Logger instance (defaults to the module logger)
        """
        self.logger = logger or logging.getLogger(__name__)
        self._stack: List[Snapshot] = []

    def __len__(self) -> int:
        return len(self._stack)

    def save_state(
        self,
        label: str,
        nodes: Dict[int, SongNode],
        head: Optional[int],
        cursor: Optional[int]
    ) -> Snapshot:
        """Push a deep copy of the given chain state.

        Handles are stable across copies, so the cursor handle carries over
        as-is.

        Args:
            label: Name of the action about to run
            nodes: Live node arena
            head: Handle of the first node
            cursor: Handle of the currently playing node

        Returns:
            The snapshot that was pushed
        """
        snapshot = Snapshot(
            label=label,
            nodes=copy_nodes(nodes),
            head=head,
            cursor=cursor
        )
        self._stack.append(snapshot)
        self.logger.debug(f"Saved undo state '{label}' ({len(self._stack)} on stack)")
        return snapshot

    def pop(self) -> Optional[Snapshot]:
        """Remove and return the most recent snapshot, or None if empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek_label(self) -> Optional[str]:
        """Label of the action the next undo would revert."""
        return self._stack[-1].label if self._stack else None

    def clear(self) -> None:
        self._stack.clear()
