"""Legend visibility state machine.

A :class:`VisibilitySelection` is the set of group labels currently shown.
Toggling is the only transition and is self-inverse.  Groups without a
``group_label`` are always visible.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Iterable, Iterator, List, Optional, Sequence, Union

from .groups import MarkerGroup
from .utils.logging import get_logger

log = get_logger("visibility")

InitiallyVisible = Union[str, Iterable[str], None]


@dataclass(frozen=True)
class VisibilitySelection:
    labels: frozenset = field(default_factory=frozenset)

    @classmethod
    def all_of(cls, groups: Iterable[MarkerGroup]) -> "VisibilitySelection":
        return cls(frozenset(g.group_label for g in groups if g.group_label is not None))

    @classmethod
    def none(cls) -> "VisibilitySelection":
        return cls(frozenset())

    def toggle(self, label: str) -> "VisibilitySelection":
        if label in self.labels:
            return VisibilitySelection(self.labels - {label})
        return VisibilitySelection(self.labels | {label})

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.labels))

    def __len__(self) -> int:
        return len(self.labels)


def initial_selection(
    groups: Iterable[MarkerGroup], initially_visible: InitiallyVisible = "all"
) -> VisibilitySelection:
    """``"all"`` (default), ``"none"`` or an explicit list of group labels."""
    if initially_visible is None or initially_visible == "all":
        return VisibilitySelection.all_of(groups)
    if initially_visible == "none":
        return VisibilitySelection.none()
    if isinstance(initially_visible, str):
        return VisibilitySelection(frozenset([initially_visible]))
    return VisibilitySelection(frozenset(str(label) for label in initially_visible))


def toggle(selection: VisibilitySelection, label: str) -> VisibilitySelection:
    return selection.toggle(label)


def is_visible(group: MarkerGroup, selection: VisibilitySelection) -> bool:
    return group.group_label is None or group.group_label in selection


def visible_groups(
    groups: Iterable[MarkerGroup], selection: VisibilitySelection
) -> List[MarkerGroup]:
    return [g for g in groups if is_visible(g, selection)]


@dataclass(frozen=True)
class ToggleNotification:
    """Sent to the owning collaborator after each applied toggle."""

    group_toggled: bool
    label: str
    now_visible: bool


class VisibilitySession:
    """Selection state owned by one interactive session.

    Toggle events are queued with :meth:`post` and applied one at a time, in
    arrival order, by :meth:`drain`.
    """

    def __init__(
        self,
        groups: Sequence[MarkerGroup],
        initially_visible: InitiallyVisible = "all",
        *,
        on_toggle: bool = False,
    ):
        self.groups: List[MarkerGroup] = list(groups)
        self.selection = initial_selection(self.groups, initially_visible)
        self.on_toggle = bool(on_toggle)
        self._queue: Deque[str] = deque()

    def post(self, label: Any) -> None:
        self._queue.append(str(label))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def drain(self) -> List[ToggleNotification]:
        sent: List[ToggleNotification] = []
        while self._queue:
            label = self._queue.popleft()
            self.selection = self.selection.toggle(label)
            now_visible = label in self.selection
            log.debug("toggled %r -> %s", label, "visible" if now_visible else "hidden")
            if self.on_toggle:
                sent.append(ToggleNotification(True, label, now_visible))
        return sent

    def toggle(self, label: Any) -> Optional[ToggleNotification]:
        """Apply one toggle now; returns the notification when ``on_toggle`` is set."""
        self.post(label)
        sent = self.drain()
        return sent[-1] if sent else None

    def visible_groups(self) -> List[MarkerGroup]:
        return visible_groups(self.groups, self.selection)

    def is_visible(self, group: MarkerGroup) -> bool:
        return is_visible(group, self.selection)


__all__ = [
    "VisibilitySelection",
    "ToggleNotification",
    "VisibilitySession",
    "initial_selection",
    "toggle",
    "is_visible",
    "visible_groups",
]
