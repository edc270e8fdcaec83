"""
Drawing Primitives

Value types emitted by the placement planner and consumed by the painter.
Primitives carry geometry and palette roles only; concrete colors are
resolved at paint time.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from .geometry import Rect

Point = Tuple[float, float]


class TraceColor(Enum):
    """Palette roles for line primitives."""
    COPPER = "copper"                # Regular traces
    COPPER_BOLD = "copper_bold"      # Buses
    ACCENT = "accent"                # Signal L-bends
    ACCENT_MUTED = "accent_muted"    # Narrow layout stubs


class PackageShape(Enum):
    """IC package outlines."""
    DUAL_ROW = "dual_row"    # SOIC style, pins on left and right
    QUAD_FLAT = "quad_flat"  # QFP style, pins on all four sides


class PassiveKind(Enum):
    """Discrete two-terminal parts."""
    TWO_PAD = "two_pad"      # SMD resistor footprint
    CAPACITOR = "capacitor"


class Orientation(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Via:
    """Plated through-hole: copper ring with a drilled centre."""
    x: float
    y: float
    radius: float = 5.0

    tag = "via"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.tag, **_plain(asdict(self))}


@dataclass(frozen=True)
class Line:
    """Straight trace segment with round caps."""
    x1: float
    y1: float
    x2: float
    y2: float
    color: TraceColor = TraceColor.COPPER
    width: float = 1.0

    tag = "line"

    @property
    def is_vertical(self) -> bool:
        return self.x1 == self.x2

    @property
    def is_horizontal(self) -> bool:
        return self.y1 == self.y2

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.tag, **_plain(asdict(self))}


@dataclass(frozen=True)
class ICPackage:
    """Integrated circuit body with pins.

    For DUAL_ROW packages ``size`` is (width, height) of the body and
    ``pin_count`` is pins per side row. For QUAD_FLAT packages ``size`` is
    (side, side) and ``pin_count`` is pins per side.
    """
    shape: PackageShape
    center: Point
    size: Tuple[float, float]
    pin_count: int
    label: str = ""

    tag = "ic_package"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.tag, **_plain(asdict(self))}


@dataclass(frozen=True)
class PassiveComponent:
    """Small two-terminal SMD part."""
    kind: PassiveKind
    center: Point
    orientation: Orientation = Orientation.HORIZONTAL

    tag = "passive"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.tag, **_plain(asdict(self))}


@dataclass(frozen=True)
class Label:
    """Silkscreen text, centred on ``position``."""
    text: str
    position: Point
    size: float = 7.0

    tag = "label"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.tag, **_plain(asdict(self))}


@dataclass(frozen=True)
class FadeMask:
    """Translucent white overlay over ``rect``.

    ``gradient_stops`` are (offset, alpha) pairs along a vertical gradient
    running from the top of ``rect`` to its bottom.
    """
    rect: Rect
    gradient_stops: Tuple[Tuple[float, float], ...]

    tag = "fade_mask"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.tag, **_plain(asdict(self))}


Primitive = Union[Via, Line, ICPackage, PassiveComponent, Label, FadeMask]

P = TypeVar("P")


class PlacementPlan:
    """Ordered, immutable sequence of drawing primitives.

    Order is paint order: later primitives are drawn over earlier ones.
    """

    def __init__(self, primitives: Sequence[Primitive] = ()):
        self._primitives: Tuple[Primitive, ...] = tuple(primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def __getitem__(self, index):
        return self._primitives[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlacementPlan):
            return NotImplemented
        return self._primitives == other._primitives

    def __hash__(self) -> int:
        return hash(self._primitives)

    def __repr__(self) -> str:
        return f"PlacementPlan({len(self._primitives)} primitives)"

    @property
    def primitives(self) -> Tuple[Primitive, ...]:
        return self._primitives

    def of_type(self, cls: Type[P]) -> List[P]:
        """All primitives of a given class, in plan order."""
        return [p for p in self._primitives if isinstance(p, cls)]

    def count(self, cls: Type) -> int:
        return len(self.of_type(cls))

    @property
    def fade_mask(self) -> Optional[FadeMask]:
        masks = self.of_type(FadeMask)
        return masks[0] if masks else None

    def summary(self) -> Dict[str, int]:
        """Primitive counts keyed by tag."""
        counts: Dict[str, int] = {}
        for p in self._primitives:
            counts[p.tag] = counts.get(p.tag, 0) + 1
        return counts

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._primitives]
