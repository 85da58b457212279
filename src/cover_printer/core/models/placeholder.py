"""
Module: placeholder

Purpose:
    Placeholder geometry and per-placeholder image state.

    A Placeholder's state is a tagged variant, either EmptyState or
    FilledState(image, transform). An empty placeholder has no
    transform of its own; it reports IDENTITY.

Key Classes:
    - PlaceholderSlot: Position and size on the paper (millimetres)
    - EmptyState / FilledState: Variant for image state
    - Placeholder: Mutable record combining a slot and its state

Dependencies:
    - dataclasses (std)
    - core.models.image: ImageRef, Transform

Used By:
    - layout.grid: Emits PlaceholderSlots
    - sheet.controller: Owns the Placeholder collection
    - output.renderer: Reads filled placeholders
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .image import IDENTITY, ImageRef, Transform


@dataclass(frozen=True, slots=True)
class PlaceholderSlot:
    """
    Placeholder geometry on the paper (immutable).

    Attributes:
        id: Stable row-major index within the current grid
        left_mm: Distance from the paper's left edge
        top_mm: Distance from the paper's top edge
        width_mm: Slot width
        height_mm: Slot height

    Example:
        >>> slot = PlaceholderSlot(0, left_mm=4, top_mm=4.5, width_mm=45, height_mm=45)
        >>> slot.right_mm
        49.0
    """

    id: int
    left_mm: float
    top_mm: float
    width_mm: float
    height_mm: float

    @property
    def right_mm(self) -> float:
        """Right edge (left + width)."""
        return float(self.left_mm + self.width_mm)

    @property
    def bottom_mm(self) -> float:
        """Bottom edge (top + height)."""
        return float(self.top_mm + self.height_mm)


@dataclass(frozen=True, slots=True)
class EmptyState:
    """Placeholder holds no image."""


@dataclass(frozen=True, slots=True)
class FilledState:
    """Placeholder holds an image placed by a transform."""

    image: ImageRef
    transform: Transform


PlaceholderState = Union[EmptyState, FilledState]

EMPTY = EmptyState()


class Placeholder:
    """
    One grid slot and the image placed in it.

    Mutated only with transforms produced by the fit solver, the pan
    constraint or the zoom anchor. Transform writes on an empty
    placeholder are no-ops.

    Example:
        >>> ph = Placeholder(slot)
        >>> ph.transform is IDENTITY
        True
        >>> ph.set_transform(Transform(1, 2, 3))
        False
    """

    __slots__ = ("_slot", "_state")

    def __init__(self, slot: PlaceholderSlot, state: PlaceholderState = EMPTY) -> None:
        self._slot = slot
        self._state = state

    def __repr__(self) -> str:
        return f"Placeholder(id={self.id}, state={self._state!r})"

    @property
    def id(self) -> int:
        return self._slot.id

    @property
    def slot(self) -> PlaceholderSlot:
        return self._slot

    @property
    def state(self) -> PlaceholderState:
        return self._state

    @property
    def is_filled(self) -> bool:
        return isinstance(self._state, FilledState)

    @property
    def image(self) -> Optional[ImageRef]:
        """The placed image, or None when empty."""
        if isinstance(self._state, FilledState):
            return self._state.image
        return None

    @property
    def transform(self) -> Transform:
        """Current transform; IDENTITY when empty."""
        if isinstance(self._state, FilledState):
            return self._state.transform
        return IDENTITY

    def fill(self, image: ImageRef, transform: Transform) -> None:
        """Place an image, replacing any previous one."""
        self._state = FilledState(image, transform)

    def set_transform(self, transform: Transform) -> bool:
        """
        Replace the transform of a filled placeholder.

        Returns:
            True if the transform changed, False when empty or unchanged
        """
        if not isinstance(self._state, FilledState):
            return False
        if self._state.transform == transform:
            return False
        self._state = FilledState(self._state.image, transform)
        return True

    def clear(self) -> bool:
        """Drop the image. Returns True if there was one."""
        if not self.is_filled:
            return False
        self._state = EMPTY
        return True
