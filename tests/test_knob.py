import math

import pytest

from fancyknob.knob import (
    Color,
    Interaction,
    Knob,
    KnobStyle,
    LabelPosition,
    Rect,
    add_knob,
    default_label_format,
)


class FakeUi:
    def __init__(self, interaction=None):
        self.interaction = interaction or Interaction()
        self.allocated = None
        self.spaces = []
        self.strokes = []
        self.fills = []
        self.lines = []
        self.texts = []

    def text_size(self, text, font_size):
        return (len(text) * 6.0, 10.0)

    def add_space(self, amount):
        self.spaces.append(amount)

    def allocate(self, width, height):
        self.allocated = Rect.from_min_size((0.0, 0.0), (width, height))
        return self.allocated, self.interaction

    def circle_stroke(self, center, radius, width, color):
        self.strokes.append((center, radius, width, color))

    def circle_filled(self, center, radius, color):
        self.fills.append((center, radius, color))

    def line_segment(self, start, end, width, color):
        self.lines.append((start, end, width, color))

    def text(self, pos, anchor, text, font_size, color):
        self.texts.append((pos, anchor, text, font_size, color))


class Recorder:
    def __init__(self):
        self.values = []

    def __call__(self, value):
        self.values.append(value)


def test_default_format_regular():
    assert default_label_format(50.0) == "50.00"


def test_default_format_zero():
    assert default_label_format(0.0) == "0.00"


def test_default_format_small_scientific():
    assert default_label_format(0.005) == "+5.0e-3"


def test_constructor_clamps_value():
    assert Knob(150.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).value == 100.0
    assert Knob(-5.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).value == 0.0


def test_constructor_rejects_reversed_range():
    with pytest.raises(ValueError):
        Knob(1.0, Recorder(), (10.0, 0.0), KnobStyle.DOT)


def test_builders_chain_and_store():
    knob = (
        Knob(1.0, Recorder(), (0.0, 10.0), KnobStyle.WIPER)
        .with_size(60.0)
        .with_font_size(16.0)
        .with_stroke_width(3.0)
        .smallest_finite(-1e-3)
        .largest_finite(-1e3)
        .logarithmic(True)
    )
    assert knob.size == 60.0
    assert knob.font_size == 16.0
    assert knob.stroke_width == 3.0
    assert knob.spec.smallest_finite == 1e-3
    assert knob.spec.largest_finite == 1e3
    assert knob.spec.logarithmic is True


def test_label_text():
    knob = Knob(1.0, Recorder(), (0.0, 10.0), KnobStyle.DOT)
    assert knob.label_text() is None
    knob.with_label("Vol", LabelPosition.BOTTOM).with_label_format(lambda v: "x")
    assert knob.label_text() == "Vol: x"
    knob.with_label("", LabelPosition.BOTTOM)
    assert knob.label_text() == "x"


def test_indicator_angle_sweep():
    lo = Knob(0.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).indicator_angle()
    mid = Knob(50.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).indicator_angle()
    hi = Knob(100.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).indicator_angle()
    assert hi - lo == pytest.approx(math.tau * 0.85)
    assert mid == pytest.approx((lo + hi) / 2)


def test_double_click_resets_to_neutral():
    rec = Recorder()
    ui = FakeUi(Interaction(double_clicked=True))
    knob = Knob(10.0, rec, (0.0, 100.0), KnobStyle.DOT).with_neutral(50.0)
    response = knob.show(ui)
    assert rec.values == [50.0]
    assert response.changed is True


def test_double_click_at_neutral_does_nothing():
    rec = Recorder()
    ui = FakeUi(Interaction(double_clicked=True))
    response = Knob(50.0, rec, (0.0, 100.0), KnobStyle.DOT).with_neutral(50.0).show(ui)
    assert rec.values == []
    assert response.changed is False


def test_disabled_ignores_input():
    rec = Recorder()
    ui = FakeUi(Interaction(dragged=True, drag_delta_y=-10.0))
    response = Knob(50.0, rec, (0.0, 100.0), KnobStyle.DOT).enabled(False).show(ui)
    assert rec.values == []
    assert response.changed is False
    assert ui.strokes[0][1] == pytest.approx(40.0 * 0.5)


def test_drag_up_increases_and_fine_is_slower():
    normal, fine = Recorder(), Recorder()
    Knob(50.0, normal, (0.0, 100.0), KnobStyle.DOT).show(
        FakeUi(Interaction(dragged=True, drag_delta_y=-10.0))
    )
    Knob(50.0, fine, (0.0, 100.0), KnobStyle.DOT).show(
        FakeUi(Interaction(dragged=True, drag_delta_y=-10.0, fine=True))
    )
    big = normal.values[0] - 50.0
    small = fine.values[0] - 50.0
    assert big > small > 0
    assert small / big == pytest.approx(0.2)


def test_drag_clamps_to_range():
    rec = Recorder()
    Knob(50.0, rec, (0.0, 100.0), KnobStyle.DOT).show(
        FakeUi(Interaction(dragged=True, drag_delta_y=-100000.0))
    )
    assert rec.values == [100.0]


def test_drag_with_step_snaps():
    rec = Recorder()
    Knob(50.0, rec, (0.0, 100.0), KnobStyle.DOT).with_step(10.0).show(
        FakeUi(Interaction(dragged=True, drag_delta_y=-3.0))
    )
    value = rec.values[0]
    assert value > 50.0
    assert value / 10.0 == pytest.approx(round(value / 10.0))


def test_dragging_enlarges_and_recolours():
    ui = FakeUi(Interaction(dragged=True))
    knob = Knob(50.0, Recorder(), (0.0, 100.0), KnobStyle.WIPER).with_size(40.0)
    knob.show(ui)
    _, radius, _, color = ui.strokes[0]
    assert radius == pytest.approx(40.0 * 0.55)
    assert color == Color.WHITE


def test_styles_draw_indicator():
    dot_ui, wiper_ui = FakeUi(), FakeUi()
    Knob(50.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).show(dot_ui)
    Knob(50.0, Recorder(), (0.0, 100.0), KnobStyle.WIPER).show(wiper_ui)
    assert len(dot_ui.fills) == 1 and dot_ui.lines == []
    assert len(wiper_ui.lines) == 1 and wiper_ui.fills == []
    start, end, _, _ = wiper_ui.lines[0]
    assert math.dist(start, end) == pytest.approx(40.0 * 0.5 * 0.7)


def test_layout_keeps_knob_inside_rect():
    for position in LabelPosition:
        ui = FakeUi()
        Knob(50.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).with_label(
            "Gain", position
        ).show(ui)
        (cx, cy), radius, _, _ = ui.strokes[0]
        rect = ui.allocated
        assert rect.min[0] <= cx - radius and cx + radius <= rect.max[0] + 1e-9
        assert rect.min[1] <= cy - radius and cy + radius <= rect.max[1] + 1e-9
        assert ui.spaces == [4.0, 4.0]


def test_right_label_knob_at_left_top():
    ui = FakeUi()
    Knob(50.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).with_size(30.0).with_label(
        "Basic", LabelPosition.RIGHT
    ).show(ui)
    center = ui.strokes[0][0]
    assert center == pytest.approx((15.0, ui.allocated.center[1]))
    assert ui.texts[0][1] == "LEFT_CENTER"


def test_label_painted_with_text():
    ui = FakeUi()
    knob = Knob(25.0, Recorder(), (0.0, 100.0), KnobStyle.DOT).with_label(
        "Top", LabelPosition.TOP
    )
    knob.show(ui)
    _, anchor, text, font_size, color = ui.texts[0]
    assert anchor == "CENTER_TOP"
    assert text == knob.label_text()
    assert font_size == 12.0
    assert color == Color.WHITE


def test_add_knob_calls_release_on_drag_stop():
    released = []
    add_knob(
        FakeUi(Interaction(drag_stopped=True)),
        Knob(1.0, Recorder(), (0.0, 10.0), KnobStyle.DOT),
        lambda: released.append(True),
    )
    add_knob(
        FakeUi(Interaction(lost_focus=True)),
        Knob(1.0, Recorder(), (0.0, 10.0), KnobStyle.DOT),
        lambda: released.append(True),
    )
    assert released == [True, True]


def test_add_knob_no_release_without_event():
    released = []
    add_knob(
        FakeUi(),
        Knob(1.0, Recorder(), (0.0, 10.0), KnobStyle.DOT),
        lambda: released.append(True),
    )
    assert released == []