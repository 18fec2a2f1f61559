"""A circular knob widget that is dragged vertically to change a value.

The widget draws through a ``ui`` object supplied by the host, which must
provide these methods:

* ``text_size(text, font_size) -> (width, height)``
* ``add_space(amount)``
* ``allocate(width, height) -> (Rect, Interaction)``
* ``circle_stroke(center, radius, width, color)``
* ``circle_filled(center, radius, color)``
* ``line_segment(start, end, width, color)``
* ``text(pos, anchor, text, font_size, color)``

Points are ``(x, y)`` tuples; anchors are ``"CENTER_TOP"``,
``"CENTER_BOTTOM"`` or ``"LEFT_CENTER"``.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional, Protocol

from fancyknob.normalise import KnobSpec, normalised_from_value, value_from_normalised

Point = tuple[float, float]

KNOB_FINE_DRAG_RATIO = 0.2
LABEL_PADDING = 2.0
VERTICAL_MARGIN = 4.0
DEFAULT_STEP = 0.005
# Range of motion of the knob; 1.0 is a full rotation.
MOTION_RANGE = 0.85
# 0.0 points right, 0.25 points down.
DOWN = 0.25


class LabelPosition(enum.Enum):
    """Position of the label relative to the knob."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class KnobStyle(enum.Enum):
    """Visual style of the knob indicator."""

    WIPER = "wiper"  # a line from the centre towards the edge
    DOT = "dot"  # a dot near the edge


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    GRAY: ClassVar[Color]
    DARK_GRAY: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]


Color.GRAY = Color(160, 160, 160)
Color.DARK_GRAY = Color(96, 96, 96)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its minimum and maximum corners."""

    min: Point
    max: Point

    @classmethod
    def from_min_size(cls, min_point: Point, size: Point) -> Rect:
        return cls(min_point, (min_point[0] + size[0], min_point[1] + size[1]))

    @property
    def width(self) -> float:
        return self.max[0] - self.min[0]

    @property
    def height(self) -> float:
        return self.max[1] - self.min[1]

    @property
    def center(self) -> Point:
        return ((self.min[0] + self.max[0]) / 2, (self.min[1] + self.max[1]) / 2)


@dataclass(frozen=True)
class Interaction:
    """Pointer and keyboard input on the widget for one frame."""

    double_clicked: bool = False
    dragged: bool = False
    drag_delta_y: float = 0.0
    fine: bool = False  # ctrl, shift or alt held
    drag_stopped: bool = False
    lost_focus: bool = False


@dataclass
class Response:
    """The outcome of showing a widget for one frame."""

    rect: Rect
    interaction: Interaction = field(default_factory=Interaction)
    changed: bool = False

    @property
    def dragged(self) -> bool:
        return self.interaction.dragged

    @property
    def double_clicked(self) -> bool:
        return self.interaction.double_clicked

    @property
    def drag_stopped(self) -> bool:
        return self.interaction.drag_stopped

    @property
    def lost_focus(self) -> bool:
        return self.interaction.lost_focus


class _Ui(Protocol):
    def text_size(self, text: str, font_size: float) -> Point: ...

    def add_space(self, amount: float) -> None: ...

    def allocate(self, width: float, height: float) -> tuple[Rect, Interaction]: ...

    def circle_stroke(
        self, center: Point, radius: float, width: float, color: Color
    ) -> None: ...

    def circle_filled(self, center: Point, radius: float, color: Color) -> None: ...

    def line_segment(
        self, start: Point, end: Point, width: float, color: Color
    ) -> None: ...

    def text(
        self, pos: Point, anchor: str, text: str, font_size: float, color: Color
    ) -> None: ...


def default_label_format(value: float) -> str:
    """Two decimals, or signed scientific notation for values close to zero."""
    if abs(value) > 1e-2 or value == 0.0:
        return f"{value:.2f}"
    if math.isnan(value):
        return "NaN"
    mantissa, exponent = f"{value:+.1e}".split("e")
    return f"{mantissa}e{int(exponent)}"


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def add_knob(ui: _Ui, knob: Knob, on_release: Callable[[], None]) -> None:
    """Show ``knob`` and call ``on_release`` when a drag ends or focus is lost."""
    response = knob.show(ui)
    if response.drag_stopped or response.lost_focus:
        on_release()


class Knob:
    """A circular knob controlling a value through a setter callback."""

    def __init__(
        self,
        value: float,
        set_value: Callable[[float], None],
        value_range: tuple[float, float],
        style: KnobStyle,
    ) -> None:
        lo, hi = value_range
        if math.isnan(lo) or math.isnan(hi) or lo > hi:
            raise ValueError(f"invalid knob range {lo!r}..={hi!r}")
        self.value = value if math.isnan(value) else min(max(value, lo), hi)
        self.set_value = set_value
        self.range = (lo, hi)
        self.spec = KnobSpec()
        self.size = 40.0
        self.font_size = 12.0
        self.stroke_width = 2.0
        self.knob_color = Color.GRAY
        self.knob_dragging_color = Color.WHITE
        self.line_color = Color.GRAY
        self.text_color = Color.WHITE
        self.label: Optional[str] = None
        self.label_position = LabelPosition.BOTTOM
        self.style = style
        self.label_offset = 1.0
        self.label_format: Callable[[float], str] = default_label_format
        self.step: Optional[float] = None
        self.neutral: Optional[float] = None
        self.is_enabled = True

    def with_size(self, size: float) -> Knob:
        self.size = size
        return self

    def with_font_size(self, size: float) -> Knob:
        self.font_size = size
        return self

    def with_stroke_width(self, width: float) -> Knob:
        self.stroke_width = width
        return self

    def with_colors(
        self,
        knob_color: Color,
        knob_dragging_color: Color,
        line_color: Color,
        text_color: Color,
    ) -> Knob:
        self.knob_color = knob_color
        self.knob_dragging_color = knob_dragging_color
        self.line_color = line_color
        self.text_color = text_color
        return self

    def with_label(self, label: str, position: LabelPosition) -> Knob:
        self.label = str(label)
        self.label_position = position
        return self

    def with_label_offset(self, offset: float) -> Knob:
        self.label_offset = offset
        return self

    def with_label_format(self, fmt: Callable[[float], str]) -> Knob:
        self.label_format = fmt
        return self

    def with_step(self, step: float) -> Knob:
        """Snap the value to discrete steps while dragging."""
        self.step = step
        return self

    def with_neutral(self, neutral: float) -> Knob:
        """Value the knob resets to on double click."""
        self.neutral = neutral
        return self

    def enabled(self, enabled: bool) -> Knob:
        self.is_enabled = enabled
        return self

    def logarithmic(self, logarithmic: bool) -> Knob:
        self.spec.logarithmic = logarithmic
        return self

    def smallest_finite(self, smallest_finite: float) -> Knob:
        """Smallest magnitude selectable before a logarithmic knob goes to zero."""
        self.spec.smallest_finite = abs(smallest_finite)
        return self

    def largest_finite(self, largest_finite: float) -> Knob:
        """Largest magnitude selectable before a logarithmic knob goes to infinity."""
        self.spec.largest_finite = abs(largest_finite)
        return self

    def _normalised(self) -> float:
        return normalised_from_value(self.value, *self.range, self.spec)

    def label_text(self) -> Optional[str]:
        """The text shown in the label, or None when the knob has no label."""
        if self.label is None:
            return None
        value_string = self.label_format(self.value)
        if not self.label:
            return value_string
        return f"{self.label}: {value_string}"

    def indicator_angle(self) -> float:
        """Angle of the indicator in radians; 0 points right, clockwise positive."""
        start_angle = DOWN + (1.0 - MOTION_RANGE) * 0.5
        return math.tau * (self._normalised() * MOTION_RANGE + start_angle)

    def _handle_input(self, interaction: Interaction, response: Response) -> None:
        lo, hi = self.range
        if interaction.double_clicked:
            if self.neutral is not None and self.neutral != self.value:
                self.set_value(self.neutral)
                response.changed = True
        elif interaction.dragged:
            delta = interaction.drag_delta_y
            if interaction.fine:
                delta *= KNOB_FINE_DRAG_RATIO
            step = self.step / abs(hi - lo) if self.step is not None else DEFAULT_STEP
            new_value = self._normalised() - delta * step
            if self.step is not None:
                steps = _round_half_away(new_value / step)
                new_value = min(max(steps * step, 0.0), 1.0)
            if new_value != self.value:
                self.set_value(value_from_normalised(new_value, lo, hi, self.spec))
                response.changed = True

    def _knob_rect(self, rect: Rect) -> Rect:
        size = (self.size, self.size)
        position = self.label_position
        if position is LabelPosition.LEFT:
            return Rect.from_min_size((rect.max[0] - self.size, rect.min[1]), size)
        if position is LabelPosition.RIGHT:
            return Rect.from_min_size(rect.min, size)
        x = rect.min[0] + (rect.width - self.size) / 2
        if position is LabelPosition.TOP:
            return Rect.from_min_size((x, rect.max[1] - self.size), size)
        return Rect.from_min_size((x, rect.min[1]), size)

    def _label_placement(self, rect: Rect, label_width: float) -> tuple[Point, str]:
        cx, cy = rect.center
        position = self.label_position
        if position is LabelPosition.TOP:
            return (cx, rect.min[1] - self.label_offset + LABEL_PADDING), "CENTER_TOP"
        if position is LabelPosition.BOTTOM:
            return (cx, rect.max[1] + self.label_offset), "CENTER_BOTTOM"
        if position is LabelPosition.LEFT:
            return (rect.min[0] - self.label_offset, cy), "LEFT_CENTER"
        return (rect.max[0] - label_width, cy), "LEFT_CENTER"

    def show(self, ui: _Ui) -> Response:
        """Lay out, handle input and paint the knob; return the response."""
        lo, hi = self.range
        if self.label is not None:
            label_w, label_h = ui.text_size(
                f"{self.label}: {self.label_format(hi)}", self.font_size
            )
        else:
            label_w, label_h = 0.0, 0.0

        ui.add_space(VERTICAL_MARGIN)

        if self.label_position in (LabelPosition.TOP, LabelPosition.BOTTOM):
            width = max(self.size, label_w + LABEL_PADDING * 2)
            height = self.size + label_h + LABEL_PADDING * 2 + self.label_offset
        else:
            width = self.size + label_w + LABEL_PADDING * 2 + self.label_offset
            height = max(self.size, label_h + LABEL_PADDING * 2)

        rect, interaction = ui.allocate(width, height)
        response = Response(rect, interaction)

        if self.is_enabled:
            self._handle_input(interaction, response)

        is_dragging = interaction.dragged and self.is_enabled
        center = self._knob_rect(rect).center
        radius = self.size * (0.55 if is_dragging else 0.5)
        angle = self.indicator_angle()
        knob_color = self.knob_dragging_color if is_dragging else self.knob_color
        ui.circle_stroke(center, radius, self.stroke_width, knob_color)

        tip = (
            center[0] + math.cos(angle) * radius * 0.7,
            center[1] + math.sin(angle) * radius * 0.7,
        )
        if self.style is KnobStyle.WIPER:
            ui.line_segment(center, tip, self.stroke_width * 1.5, self.line_color)
        else:
            ui.circle_filled(tip, self.stroke_width * 1.5, self.line_color)

        text = self.label_text()
        if text is not None:
            pos, anchor = self._label_placement(rect, label_w)
            ui.text(pos, anchor, text, self.font_size, self.text_color)

        ui.add_space(VERTICAL_MARGIN)
        return response