"""
Module: sheet.config

Purpose:
    Behavioural configuration for the sheet controller.

Key Classes:
    - ReconcilePolicy: What happens to placed images on regeneration
    - SheetConfig: Immutable controller configuration

Dependencies:
    - dataclasses (std)

Used By:
    - sheet.controller: Regeneration policy
    - gui.models.settings: Persisted preferences
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ReconcilePolicy(Enum):
    """
    Placeholder reconciliation after a paper or parameter change.

    RESET replaces the whole collection and discards every image.
    PRESERVE_BY_INDEX keeps the image of each placeholder whose id
    still exists in the new grid.
    """

    RESET = "reset"
    PRESERVE_BY_INDEX = "preserve_by_index"


@dataclass(frozen=True)
class SheetConfig:
    """
    Configuration for the sheet controller (immutable).

    Attributes:
        reconcile_policy: Image handling on regeneration
        refit_on_change: With PRESERVE_BY_INDEX, re-run the fit for
            kept images using the new whitespace policy. When False the
            transform is kept and only re-constrained so that a sheet
            without whitespace still has full coverage.

    Example:
        >>> SheetConfig(reconcile_policy=ReconcilePolicy.PRESERVE_BY_INDEX)
    """

    reconcile_policy: ReconcilePolicy = ReconcilePolicy.RESET
    refit_on_change: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.reconcile_policy, ReconcilePolicy):
            raise ValueError(f"reconcile_policy must be a ReconcilePolicy: {self.reconcile_policy!r}")
