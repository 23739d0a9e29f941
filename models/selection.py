"""
Data model for a customer's in-progress option selection on one product view.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .catalog import Option


@dataclass(frozen=True)
class SelectionState:
    """
    Immutable axis -> option mapping in selection order.

    Every mutator returns a new state. Re-selecting an axis replaces its option
    but keeps the axis in its original position.
    """

    choices: tuple[tuple[int, Option], ...] = ()

    @classmethod
    def from_options(cls, options: Iterable[Option]) -> "SelectionState":
        """Build a state from options, keyed by each option's own axis."""
        state = cls()
        for opt in options:
            state = state.select(opt.axis_id, opt)
        return state

    def select(self, axis_id: int, option: Option) -> "SelectionState":
        if self.is_axis_selected(axis_id):
            return SelectionState(
                tuple((aid, option if aid == axis_id else opt) for aid, opt in self.choices)
            )
        return SelectionState(self.choices + ((axis_id, option),))

    def deselect(self, axis_id: int) -> "SelectionState":
        return SelectionState(tuple((aid, opt) for aid, opt in self.choices if aid != axis_id))

    def clear(self) -> "SelectionState":
        return SelectionState()

    def is_axis_selected(self, axis_id: int) -> bool:
        return any(aid == axis_id for aid, _ in self.choices)

    def option_for(self, axis_id: int) -> Option | None:
        for aid, opt in self.choices:
            if aid == axis_id:
                return opt
        return None

    @property
    def axis_ids(self) -> tuple[int, ...]:
        return tuple(aid for aid, _ in self.choices)

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(opt for _, opt in self.choices)

    @property
    def option_ids(self) -> tuple[int, ...]:
        return tuple(opt.option_id for _, opt in self.choices)

    def __len__(self) -> int:
        return len(self.choices)
