"""Clock face geometry and rasterizer.

Turns a wall-clock time and a terminal size (in character cells) into a
CharacterBuffer holding the dial outline, the hour/minute labels and the three
hands. Everything here is pure computation: no terminal access, no clock reads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional


# Smallest width/height (in cells) that still gets a real dial
MIN_SIZE = 4

# Cells kept free between the dial and the window border
MARGIN = 1

# Typical terminal cell is about twice as tall as it is wide
CELL_ASPECT = 2.0

GLYPH = "█"
PLACEHOLDER = "•"
BACKGROUND = " "

# Style roles a cell can carry (None means background)
ROLES = ("face", "label", "second", "minute", "hour")

SHAPES = ("fill", "round")


@dataclass(frozen=True)
class ClockTime:
    """A single reading of the wall clock."""

    hour: int
    minute: int
    second: int
    fraction: float = 0.0

    @classmethod
    def from_datetime(cls, dt: datetime, smooth: bool = False) -> "ClockTime":
        """Build from a datetime; keep the sub-second part only when smooth."""
        fraction = dt.microsecond / 1_000_000 if smooth else 0.0
        return cls(dt.hour, dt.minute, dt.second, fraction)


@dataclass(frozen=True)
class TerminalDimensions:
    width: int
    height: int


@dataclass(frozen=True)
class DialGeometry:
    center_x: int
    center_y: int
    radius_x: float
    radius_y: float

    @property
    def empty(self) -> bool:
        return self.radius_x <= 0 or self.radius_y <= 0


@dataclass(frozen=True)
class HandAngles:
    """Hand angles in degrees: 0 is 12 o'clock, clockwise positive."""

    hour: float
    minute: float
    second: float


@dataclass(frozen=True)
class HandLengths:
    """Hand lengths as fractions of the dial radius."""

    hour: float = 0.5
    minute: float = 0.75
    second: float = 0.9

    def validate(self) -> None:
        """Raise ValueError unless 0 < hour < minute < second <= 1."""
        if not (0 < self.hour < self.minute < self.second <= 1):
            raise ValueError(
                "Hand lengths must satisfy 0 < hour < minute < second <= 1 "
                f"(got hour={self.hour}, minute={self.minute}, second={self.second})"
            )


@dataclass(frozen=True)
class FaceOptions:
    """What to draw and how to fit the dial into the window."""

    show_second_hand: bool = True
    show_hour_labels: bool = True
    show_minute_labels: bool = False
    lengths: HandLengths = field(default_factory=HandLengths)
    shape: str = "fill"
    cell_aspect: float = CELL_ASPECT
    scale: float = 1.0


@dataclass(frozen=True)
class Cell:
    char: str = BACKGROUND
    role: Optional[str] = None


BLANK = Cell()


@dataclass(frozen=True)
class CharacterBuffer:
    """Immutable width x height grid of cells, rows top to bottom."""

    width: int
    height: int
    rows: tuple[tuple[Cell, ...], ...]

    def cell(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def lines(self) -> list[str]:
        """Plain text rows, styles dropped."""
        return ["".join(c.char for c in row) for row in self.rows]


# --- Time -> angles ---------------------------------------------------------

def hand_angles(t: ClockTime) -> HandAngles:
    """Compute the three hand angles for a clock reading.

    The second hand moves smoothly with the fraction, the minute hand advances
    with whole seconds and the hour hand with whole minutes.
    """
    second = (t.second + t.fraction) / 60 * 360
    minute = (t.minute + t.second / 60) / 60 * 360
    hour = ((t.hour % 12) + t.minute / 60) / 12 * 360
    return HandAngles(hour=hour % 360, minute=minute % 360, second=second % 360)


# --- Window -> dial ---------------------------------------------------------

def dial_geometry(
    dims: TerminalDimensions,
    shape: str = "fill",
    cell_aspect: float = CELL_ASPECT,
    scale: float = 1.0,
    margin: int = MARGIN,
) -> DialGeometry:
    """Fit the dial ellipse into a window of the given size.

    Args:
        dims: Terminal size in cells. Negative values count as zero.
        shape: "fill" stretches the dial over the whole window; "round" keeps
            it visually circular using cell_aspect.
        cell_aspect: Height of a cell divided by its width.
        scale: Multiplier applied to both radii.
        margin: Cells left free between the dial and the window edge.
    """
    if shape not in SHAPES:
        raise ValueError(f"Unknown dial shape: {shape!r}")

    width = max(0, dims.width)
    height = max(0, dims.height)

    radius_x = float(max(0, (width - 1) // 2 - margin))
    radius_y = float(max(0, (height - 1) // 2 - margin))

    if shape == "round" and cell_aspect > 0:
        # Work in cell widths: a vertical cell is cell_aspect widths tall
        radius = min(radius_x, radius_y * cell_aspect)
        radius_x, radius_y = radius, radius / cell_aspect

    return DialGeometry(
        center_x=max(0, (width - 1) // 2),
        center_y=max(0, (height - 1) // 2),
        radius_x=radius_x * scale,
        radius_y=radius_y * scale,
    )


def point_on_dial(geometry: DialGeometry, degree: float, fraction: float) -> tuple[int, int]:
    """Cell at `fraction` of the radius along `degree`, mapped through the ellipse."""
    theta = math.radians(degree)
    x = geometry.center_x + fraction * geometry.radius_x * math.sin(theta)
    y = geometry.center_y - fraction * geometry.radius_y * math.cos(theta)
    return _round(x), _round(y)


# --- Rasterizer -------------------------------------------------------------

def render_face(
    t: ClockTime,
    dims: TerminalDimensions,
    options: Optional[FaceOptions] = None,
) -> CharacterBuffer:
    """Rasterize a full clock face for time `t` into a buffer of size `dims`.

    Never raises for non-negative dimensions. Windows smaller than MIN_SIZE in
    either direction get a single placeholder glyph instead of a dial.
    """
    options = options or FaceOptions()
    width = max(0, dims.width)
    height = max(0, dims.height)
    grid = [[BLANK] * width for _ in range(height)]

    if width == 0 or height == 0:
        return _freeze(width, height, grid)

    geometry = dial_geometry(
        TerminalDimensions(width, height),
        shape=options.shape,
        cell_aspect=options.cell_aspect,
        scale=options.scale,
    )

    if width < MIN_SIZE or height < MIN_SIZE:
        _plot(grid, geometry.center_x, geometry.center_y, Cell(PLACEHOLDER, "face"))
        return _freeze(width, height, grid)

    if geometry.empty:
        return _freeze(width, height, grid)

    face = Cell(GLYPH, "face")
    for x, y in ellipse_points(geometry):
        _plot(grid, x, y, face)

    label = Cell(GLYPH, "label")
    if options.show_minute_labels:
        for n in range(60):
            _draw_tick(grid, geometry, n / 60 * 360, 0.05, label)
    if options.show_hour_labels:
        for n in range(12):
            _draw_tick(grid, geometry, n / 12 * 360, 0.15, label)

    angles = hand_angles(t)
    lengths = options.lengths
    if options.show_second_hand:
        _draw_hand(grid, geometry, angles.second, lengths.second, Cell(GLYPH, "second"))
    _draw_hand(grid, geometry, angles.minute, lengths.minute, Cell(GLYPH, "minute"))
    _draw_hand(grid, geometry, angles.hour, lengths.hour, Cell(GLYPH, "hour"))

    return _freeze(width, height, grid)


def ellipse_points(geometry: DialGeometry) -> Iterator[tuple[int, int]]:
    """Walk the dial outline without gaps.

    The ellipse is sampled parametrically and neighbouring samples are joined
    with Bresenham segments, so a coarse sample count never leaves holes.
    """
    steps = max(16, int(math.ceil(2 * math.pi * max(geometry.radius_x, geometry.radius_y))))
    previous = point_on_dial(geometry, 0.0, 1.0)
    for i in range(1, steps + 1):
        current = point_on_dial(geometry, i / steps * 360, 1.0)
        yield from bresenham(previous[0], previous[1], current[0], current[1])
        previous = current


def bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Integer cells on the segment (x0, y0)-(x1, y1), both ends included."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_hand(grid, geometry: DialGeometry, degree: float, length: float, cell: Cell) -> None:
    x1, y1 = point_on_dial(geometry, degree, length)
    for x, y in bresenham(geometry.center_x, geometry.center_y, x1, y1):
        _plot(grid, x, y, cell)


def _draw_tick(grid, geometry: DialGeometry, degree: float, length: float, cell: Cell) -> None:
    # Ticks run from the circumference inward
    x0, y0 = point_on_dial(geometry, degree, 1.0 - length)
    x1, y1 = point_on_dial(geometry, degree, 1.0)
    for x, y in bresenham(x0, y0, x1, y1):
        _plot(grid, x, y, cell)


def _plot(grid, x: int, y: int, cell: Cell) -> None:
    # Silently clip anything outside the window
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        grid[y][x] = cell


def _round(value: float) -> int:
    # Half-up, unlike round()
    return int(math.floor(value + 0.5))


def _freeze(width: int, height: int, grid) -> CharacterBuffer:
    return CharacterBuffer(width=width, height=height, rows=tuple(tuple(row) for row in grid))
