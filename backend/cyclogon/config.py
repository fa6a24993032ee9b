"""
Configuration values for the cyclogon backend.

The generator never reads global state: callers build a
:class:`GeneratorConfig` (or use :data:`DEFAULT_CONFIG`) and pass it in
explicitly.  ``GeneratorConfig.from_env`` lets a deployment tune the
sampling resolution without code changes.

Environment variables:

- ``CYCLOGON_POINTS_PER_SIDE`` – cyclogon sub-samples per side sweep.
- ``CYCLOGON_POINTS_PER_RADIAN`` – cycloid samples per radian.
- ``CYCLOGON_PRECISION`` – decimal places used by the CSV export.
- ``CYCLOGON_DEBUG`` – when truthy, services emit verbose debug logs.
"""

from __future__ import annotations

import math
import numbers
import os
from dataclasses import dataclass, replace
from typing import Mapping

from .services.errors import InvalidParameter

# Shape defaults used when a request omits a value.
DEFAULT_RADIUS: float = 1.0
DEFAULT_SIDES: int = 3
MIN_SIDES: int = 3
MAX_SIDES: int = 20
DEFAULT_CYCLES: float = 1.0
MAX_CYCLES: float = 5.0

# Upper bounds on sampling resolution and on the samples of one curve.
MAX_POINTS_PER_SIDE: int = 1000
MAX_POINTS_PER_RADIAN: float = 1000.0
MAX_CURVE_SAMPLES: int = 200_000

# Angle (radians, from the origin) of the initial trace point on a circle.
DEFAULT_TRACE_ANGLE: float = math.pi / 2

# Maximum number of generated curves kept in the in-memory registry.
MAX_CURVE_ENTRIES: int = 64

# Curves with more samples than this are subsampled in API responses.
MAX_RESPONSE_POINTS: int = 5000


def _is_finite(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_count(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class GeneratorConfig:
    """Read-only resolution settings for :class:`CurveGenerator`.

    Attributes:
        points_per_side: Sub-samples along one full side sweep of a
            rolling polygon.
        points_per_radian: Samples per radian of rotation of a rolling
            circle.
        precision: Decimal places used when formatting exported values.
        side_fraction_epsilon: Distance from an integer below which
            ``cycles * sides`` is treated as a whole number of sides.
        max_samples: Largest number of samples a single generation may
            plan; larger requests are rejected before sampling starts.
    """

    points_per_side: int = 50
    points_per_radian: float = 30.0
    precision: int = 6
    side_fraction_epsilon: float = 1e-9
    max_samples: int = MAX_CURVE_SAMPLES

    def __post_init__(self) -> None:
        if not _is_count(self.points_per_side) or self.points_per_side <= 0:
            raise InvalidParameter(f"points_per_side must be a positive integer, got {self.points_per_side!r}")
        if not _is_finite(self.points_per_radian) or self.points_per_radian <= 0:
            raise InvalidParameter(
                f"points_per_radian must be a positive finite number, got {self.points_per_radian!r}"
            )
        if not _is_count(self.precision) or self.precision < 0:
            raise InvalidParameter(f"precision must be a non-negative integer, got {self.precision!r}")
        if not _is_count(self.max_samples) or self.max_samples <= 0:
            raise InvalidParameter(f"max_samples must be a positive integer, got {self.max_samples!r}")

    def with_resolution(
        self,
        points_per_side: int | None = None,
        points_per_radian: float | None = None,
    ) -> "GeneratorConfig":
        """Return a copy with the given resolution overrides applied."""
        changes: dict[str, float] = {}
        if points_per_side is not None:
            changes["points_per_side"] = int(points_per_side)
        if points_per_radian is not None:
            changes["points_per_radian"] = float(points_per_radian)
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GeneratorConfig":
        """Build a config from ``CYCLOGON_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        try:
            return cls(
                points_per_side=int(env.get("CYCLOGON_POINTS_PER_SIDE", defaults.points_per_side)),
                points_per_radian=float(
                    env.get("CYCLOGON_POINTS_PER_RADIAN", defaults.points_per_radian)
                ),
                precision=int(env.get("CYCLOGON_PRECISION", defaults.precision)),
            )
        except ValueError as exc:
            if isinstance(exc, InvalidParameter):
                raise
            raise InvalidParameter(f"invalid CYCLOGON_* environment value: {exc}") from exc


def debug_enabled() -> bool:
    """Return True when ``CYCLOGON_DEBUG`` requests verbose logging."""
    return os.getenv("CYCLOGON_DEBUG", "").strip().lower() not in ("", "0", "false", "no")


DEFAULT_CONFIG = GeneratorConfig()
