"""
Module: sheet.controller

Purpose:
    Own the placeholder collection of one sheet and route parameter,
    pointer and wheel events through the layout solver and the
    transform engine.

    parameter change -> compute_grid -> reconcile placeholders
    image assigned   -> fit_image
    pointer down     -> DragSession.begin
    pointer move     -> DragSession.candidate_offset -> constrain_offset
    pointer up       -> DragSession.end
    wheel            -> zoom_at (constrains internally)

    Coordinates passed in are screen pixels (SCREEN_DPI) relative to the
    paper's top-left corner. Every handler returns True when something
    visible changed so the surface knows to redraw.

Key Classes:
    - SheetController: Sheet state and event routing
    - SheetError: Unknown placeholder requested

Dependencies:
    - layout: compute_grid
    - transform: fit, pan, zoom, drag
    - core.units: Slot millimetres to screen pixels

Used By:
    - gui.widgets.sheet_canvas: Event wiring and painting
    - output.renderer: Export
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, List, Optional, Tuple

from cover_printer.core.models import (
    PAPER_SIZES,
    GridParameters,
    ImageRef,
    PaperSize,
    Placeholder,
    Transform,
)
from cover_printer.core.units import cm_to_mm, mm_to_screen_px
from cover_printer.layout import GridLayout, compute_grid
from cover_printer.transform import (
    DragSession,
    constrain_offset,
    direction_from_wheel_delta,
    fit_image,
    fit_mode_for,
    minimum_cover_scale,
    zoom_at,
)

from .config import ReconcilePolicy, SheetConfig

logger = logging.getLogger(__name__)


class SheetError(Exception):
    """Unknown placeholder or invalid sheet operation."""
    pass


class SheetController:
    """
    State of one printable sheet.

    Attributes:
        paper: Current paper size
        params: Current grid parameters
        config: Reconciliation behaviour
        layout: Grid computed for paper + params
        placeholders: One Placeholder per layout slot
        drag: The single drag slot

    Example:
        >>> sheet = SheetController()
        >>> sheet.assign_image(0, image_ref)
        True
        >>> sheet.pointer_down(60, 60)
        True
        >>> sheet.pointer_move(40, 60)
        True
        >>> sheet.pointer_up()
        True
    """

    def __init__(
        self,
        paper: PaperSize = PAPER_SIZES[0],
        params: Optional[GridParameters] = None,
        config: Optional[SheetConfig] = None,
    ) -> None:
        self._paper = paper
        self._params = params if params is not None else GridParameters()
        self._config = config if config is not None else SheetConfig()
        self._drag = DragSession()
        self._layout: GridLayout = compute_grid(self._paper, self._params)
        self._placeholders: List[Placeholder] = [Placeholder(slot) for slot in self._layout.slots]

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def paper(self) -> PaperSize:
        return self._paper

    @property
    def params(self) -> GridParameters:
        return self._params

    @property
    def config(self) -> SheetConfig:
        return self._config

    @config.setter
    def config(self, value: SheetConfig) -> None:
        self._config = value

    @property
    def layout(self) -> GridLayout:
        return self._layout

    @property
    def placeholders(self) -> Tuple[Placeholder, ...]:
        return tuple(self._placeholders)

    @property
    def drag(self) -> DragSession:
        return self._drag

    @property
    def allow_whitespace(self) -> bool:
        return self._params.allow_whitespace

    @property
    def filled_count(self) -> int:
        """Number of placeholders holding an image."""
        return sum(1 for ph in self._placeholders if ph.is_filled)

    @property
    def page_size_px(self) -> Tuple[float, float]:
        """Paper size in screen pixels."""
        return (
            mm_to_screen_px(cm_to_mm(self._paper.width_cm)),
            mm_to_screen_px(cm_to_mm(self._paper.height_cm)),
        )

    def placeholder(self, placeholder_id: int) -> Placeholder:
        """
        Get a placeholder by id.

        Raises:
            SheetError: If id is not in the current grid
        """
        if not 0 <= placeholder_id < len(self._placeholders):
            raise SheetError(
                f"No placeholder {placeholder_id} "
                f"(grid has {len(self._placeholders)})"
            )
        return self._placeholders[placeholder_id]

    # ─────────────────────────────────────────────────────────────────────────
    # Parameter changes
    # ─────────────────────────────────────────────────────────────────────────

    def set_paper(self, paper: PaperSize) -> bool:
        """Select a paper size. Returns True if the grid was regenerated."""
        if paper == self._paper:
            return False
        self._paper = paper
        self._regenerate()
        return True

    def set_parameters(self, params: GridParameters) -> bool:
        """Replace grid parameters. Returns True if the grid was regenerated."""
        if params == self._params:
            return False
        self._params = params
        self._regenerate()
        return True

    def set_allow_whitespace(self, allow: bool) -> bool:
        """Shortcut for set_parameters() changing only the whitespace policy."""
        return self.set_parameters(dataclasses.replace(self._params, allow_whitespace=allow))

    def _regenerate(self) -> None:
        """Recompute the grid and rebuild the placeholder collection."""
        # The dragged placeholder may not survive
        self._drag.end()

        previous = self._placeholders
        self._layout = compute_grid(self._paper, self._params)
        self._placeholders = [Placeholder(slot) for slot in self._layout.slots]

        kept = 0
        if self._config.reconcile_policy is ReconcilePolicy.PRESERVE_BY_INDEX:
            kept = self._preserve_images(previous)
        discarded = sum(1 for ph in previous if ph.is_filled) - kept

        logger.info(
            f"Grid regenerated on {self._paper.label}: "
            f"{self._layout.rows}x{self._layout.columns} placeholders"
            + (f", {discarded} image(s) discarded" if discarded else "")
            + (f", {kept} image(s) kept" if kept else "")
        )

    def _preserve_images(self, previous: List[Placeholder]) -> int:
        """Carry images over by placeholder id. Returns how many were kept."""
        kept = 0
        for old in previous:
            image = old.image
            if image is None or old.id >= len(self._placeholders):
                continue
            new = self._placeholders[old.id]
            if self._config.refit_on_change:
                new.fill(image, self._fit(new.id, image))
            else:
                new.fill(image, self._ensure_coverage(new.id, image, old.transform))
            kept += 1
        return kept

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    def container_size_px(self, placeholder_id: int) -> Tuple[float, float]:
        """Placeholder size in screen pixels."""
        slot = self.placeholder(placeholder_id).slot
        return (mm_to_screen_px(slot.width_mm), mm_to_screen_px(slot.height_mm))

    def slot_rect_px(self, placeholder_id: int) -> Tuple[float, float, float, float]:
        """(x, y, width, height) of a placeholder on the page in screen pixels."""
        slot = self.placeholder(placeholder_id).slot
        return (
            mm_to_screen_px(slot.left_mm),
            mm_to_screen_px(slot.top_mm),
            mm_to_screen_px(slot.width_mm),
            mm_to_screen_px(slot.height_mm),
        )

    def placeholder_at(self, x: float, y: float) -> Optional[int]:
        """
        Hit-test a page point.

        Returns:
            Placeholder id under (x, y), or None over margins and gaps
        """
        for ph in self._placeholders:
            left, top, width, height = self.slot_rect_px(ph.id)
            if left <= x < left + width and top <= y < top + height:
                return ph.id
        return None

    def _fit(self, placeholder_id: int, image: ImageRef) -> Transform:
        container_w, container_h = self.container_size_px(placeholder_id)
        return fit_image(
            container_w,
            container_h,
            image.natural_width,
            image.natural_height,
            fit_mode_for(self.allow_whitespace),
        )

    def _ensure_coverage(self, placeholder_id: int, image: ImageRef, transform: Transform) -> Transform:
        """Raise scale and clamp offset so a no-whitespace sheet stays covered."""
        if self.allow_whitespace:
            return transform
        container_w, container_h = self.container_size_px(placeholder_id)
        scale = max(
            transform.scale,
            minimum_cover_scale(container_w, container_h, image.natural_width, image.natural_height),
        )
        offset_x, offset_y = constrain_offset(
            transform.offset_x,
            transform.offset_y,
            container_w,
            container_h,
            image.natural_width * scale,
            image.natural_height * scale,
            allow_whitespace=False,
        )
        return Transform(offset_x, offset_y, scale)

    # ─────────────────────────────────────────────────────────────────────────
    # Images
    # ─────────────────────────────────────────────────────────────────────────

    def assign_image(self, placeholder_id: int, image: ImageRef) -> bool:
        """
        Place an image and fit it.

        Args:
            placeholder_id: Target placeholder
            image: Decoded image (owned by this placeholder from now on)

        Returns:
            True if placed, False if the id is not in the current grid
            (e.g. the grid changed while the image was decoding)
        """
        if not 0 <= placeholder_id < len(self._placeholders):
            logger.warning(f"Dropping image for missing placeholder {placeholder_id}")
            return False
        if self._drag.target_id == placeholder_id:
            self._drag.end()
        placeholder = self._placeholders[placeholder_id]
        transform = self._fit(placeholder_id, image)
        placeholder.fill(image, transform)
        logger.info(
            f"Placed {image.source or 'image'} ({image.natural_width}x{image.natural_height}) "
            f"in placeholder {placeholder_id} at scale {transform.scale:.3f}"
        )
        return True

    def refit(self, placeholder_id: int) -> bool:
        """Reset a filled placeholder to its initial fit."""
        placeholder = self.placeholder(placeholder_id)
        image = placeholder.image
        if image is None:
            return False
        return placeholder.set_transform(self._fit(placeholder_id, image))

    def clear_image(self, placeholder_id: int) -> bool:
        """Remove the image from one placeholder."""
        if self._drag.target_id == placeholder_id:
            self._drag.end()
        return self.placeholder(placeholder_id).clear()

    def clear_all(self) -> int:
        """Remove every image. Returns how many were removed."""
        self._drag.end()
        return sum(1 for ph in self._placeholders if ph.clear())

    # ─────────────────────────────────────────────────────────────────────────
    # Pointer events
    # ─────────────────────────────────────────────────────────────────────────

    def pointer_down(self, x: float, y: float) -> bool:
        """
        Start a drag when pressing on an image-bearing placeholder.

        Returns:
            True if a drag session started
        """
        if self._drag.active:
            return False
        placeholder_id = self.placeholder_at(x, y)
        if placeholder_id is None:
            return False
        placeholder = self._placeholders[placeholder_id]
        if not placeholder.is_filled:
            return False
        transform = placeholder.transform
        return self._drag.begin(placeholder_id, (x, y), (transform.offset_x, transform.offset_y))

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Pan the dragged placeholder, wherever the pointer is.

        Returns:
            True if the placeholder's transform changed
        """
        candidate = self._drag.candidate_offset((x, y))
        if candidate is None:
            return False
        placeholder = self._placeholders[self._drag.target_id]
        image = placeholder.image
        if image is None:
            return False
        transform = placeholder.transform
        container_w, container_h = self.container_size_px(placeholder.id)
        scaled_w, scaled_h = transform.scaled_size(image)
        offset_x, offset_y = constrain_offset(
            candidate[0],
            candidate[1],
            container_w,
            container_h,
            scaled_w,
            scaled_h,
            self.allow_whitespace,
        )
        return placeholder.set_transform(Transform(offset_x, offset_y, transform.scale))

    def pointer_up(self) -> bool:
        """End any drag. Returns True if one was active."""
        return self._drag.end() is not None

    def wheel(self, x: float, y: float, delta: float) -> bool:
        """
        Zoom the placeholder under the pointer by one step.

        Args:
            x: Pointer x on the page
            y: Pointer y on the page
            delta: Wheel delta; sign selects the direction

        Returns:
            True if the placeholder's transform changed
        """
        direction = direction_from_wheel_delta(delta)
        if direction is None:
            return False
        placeholder_id = self.placeholder_at(x, y)
        if placeholder_id is None:
            return False
        placeholder = self._placeholders[placeholder_id]
        image = placeholder.image
        if image is None:
            return False

        left, top, container_w, container_h = self.slot_rect_px(placeholder_id)
        transform = zoom_at(
            x - left,
            y - top,
            placeholder.transform,
            direction,
            image.natural_width,
            image.natural_height,
            container_w,
            container_h,
            self.allow_whitespace,
        )
        changed = placeholder.set_transform(transform)
        if changed:
            logger.debug(f"Zoom {direction.value} on placeholder {placeholder_id}: scale {transform.scale:.3f}")
        return changed

    def summary(self) -> Dict[str, object]:
        """Short description of the sheet for status displays."""
        return {
            "paper": self._paper.label,
            "rows": self._layout.rows,
            "columns": self._layout.columns,
            "placeholders": self._layout.placeholder_count,
            "filled": self.filled_count,
            "warnings": list(self._layout.warnings),
        }
