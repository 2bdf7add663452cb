"""
Editable Cell State
===================
Qt-free state machine behind an inline-editable table cell.

The cell never owns the authoritative value. It holds the committed value it
was last given by its owner and a transient working copy (the buffer) used
while editing. Committing hands the buffer to the owner's save callback;
the owner decides whether to accept it and pushes the result back via sync().

States:
    VIEWING -> EDITING   begin_edit() (click / double click, not read-only)
    EDITING -> VIEWING   commit()     (confirm key / focus lost), calls on_save
    EDITING -> VIEWING   cancel()     (cancel key), discards the buffer
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum
from numbers import Real
from typing import Any, Callable, List, Optional

from surveyeditor.config import DISPLAY_PRECISION

CellValue = Any


class CellKind(StrEnum):
    TEXT = "text"
    NUMERIC = "numeric"
    CHOICE = "choice"


class CellMode(Enum):
    VIEWING = "viewing"
    EDITING = "editing"


class CellKey(Enum):
    """Keys the cell reacts to while editing. Views translate their native keys."""
    CONFIRM = "confirm"
    CANCEL = "cancel"
    OTHER = "other"


@dataclass(frozen=True)
class ChoiceOption:
    value: str
    label: str


@dataclass
class CellConfig:
    kind: CellKind = CellKind.TEXT
    options: List[ChoiceOption] = field(default_factory=list)
    placeholder: str = ""
    precision: int = DISPLAY_PRECISION  # display only
    min_value: Optional[float] = None  # advisory editor bounds
    max_value: Optional[float] = None
    read_only: bool = False

    def __post_init__(self) -> None:
        self.kind = CellKind(self.kind)
        self.options = [o if isinstance(o, ChoiceOption) else ChoiceOption(*o) for o in self.options]
        if self.kind == CellKind.CHOICE and not self.options:
            raise ValueError("A choice cell requires at least one option.")

    def option_values(self) -> List[str]:
        return [o.value for o in self.options]


@dataclass
class EditableCellState:
    value: CellValue
    config: CellConfig = field(default_factory=CellConfig)
    on_save: Optional[Callable[[CellValue], None]] = None
    editing: bool = False
    buffer: CellValue = field(init=False)

    def __post_init__(self) -> None:
        self.buffer = self.value

    @property
    def mode(self) -> CellMode:
        return CellMode.EDITING if self.editing else CellMode.VIEWING

    def begin_edit(self) -> bool:
        """Enter edit mode. Returns False when the cell is read-only."""
        if self.config.read_only:
            return False
        if not self.editing:
            self.buffer = self.value
            self.editing = True
        return True

    def set_buffer(self, value: CellValue) -> None:
        if not self.editing:
            return
        if self.config.kind == CellKind.CHOICE and value not in self.config.option_values():
            raise ValueError(f"'{value}' is not one of the available options.")
        self.buffer = value

    def commit(self) -> bool:
        """
        Leave edit mode and hand the working value to the owner.
        Returns False when there was nothing to commit (already viewing).
        """
        if not self.editing:
            return False
        self.editing = False
        if self.on_save is not None:
            self.on_save(self.buffer)
        return True

    def cancel(self) -> None:
        self.buffer = self.value
        self.editing = False

    def sync(self, value: CellValue) -> None:
        """Receive a new committed value from the owner."""
        self.value = value
        if not self.editing:
            self.buffer = value

    def handle_key(self, key: CellKey) -> bool:
        """Returns True if the key was consumed."""
        if not self.editing:
            return False
        if key == CellKey.CONFIRM:
            return self.commit()
        if key == CellKey.CANCEL:
            self.cancel()
            return True
        return False

    def display_text(self) -> str:
        value = self.value
        if value is None:
            return ""
        if self.config.kind == CellKind.NUMERIC and isinstance(value, Real) and not isinstance(value, bool):
            return f"{value:.{self.config.precision}f}"
        return str(value)
