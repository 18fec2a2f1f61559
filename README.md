# fancyknob

A circular knob widget that is dragged vertically to change a value. It supports
linear and logarithmic ranges, logarithmic ranges that reach zero or infinity,
step snapping, a neutral value that a double click returns to, and configurable
labels, sizes and colours.

The value mapping is in `fancyknob.normalise` and can be used on its own. The
widget is in `fancyknob.knob`.

## Installing

```
pip install fancyknob
```

## Mapping values to and from knob positions

`normalised_from_value(value, range_min, range_max, spec)` turns a value into a
knob position between 0 and 1. `value_from_normalised(normalised, range_min,
range_max, spec)` does the reverse. Both clamp to the range. A range whose
minimum equals its maximum gives position 0.5; a range given the other way
round is mirrored.

```python
from fancyknob.normalise import KnobSpec, normalised_from_value, value_from_normalised

linear = KnobSpec()
normalised_from_value(25.0, 0.0, 100.0, linear)   # 0.25
value_from_normalised(0.5, 0.0, 100.0, linear)    # 50.0

log = KnobSpec(logarithmic=True, smallest_finite=1e-3, largest_finite=1e3)
value_from_normalised(0.5, 0.0, float("inf"), log)  # 1.0
```

`KnobSpec` has three fields: `logarithmic` (default `False`),
`smallest_finite` (default `1e-6`) and `largest_finite` (default `1e6`). A
logarithmic range may include zero or infinity: `smallest_finite` is the
smallest magnitude reached before the knob goes to zero, and `largest_finite`
the largest before it goes to infinity. A linear range with an infinite end
raises `ValueError`.

The helpers `lerp`, `remap` and `remap_clamp` are also available.

## Building a knob

A knob is set up with chained calls, each of which returns the knob:

```python
from fancyknob.knob import Color, Knob, KnobStyle, LabelPosition

state = {"volume": 0.0}

def set_volume(value):
    state["volume"] = value

knob = (
    Knob(state["volume"], set_volume, (0.0, 100.0), KnobStyle.WIPER)
    .with_label("Volume", LabelPosition.BOTTOM)
    .with_size(50.0)
    .with_font_size(14.0)
    .with_stroke_width(3.0)
    .with_colors(
        Color(60, 30, 80),
        Color(200, 100, 255),
        Color(200, 100, 255),
        Color(230, 150, 255),
    )
    .with_step(0.1)
    .with_neutral(50.0)
)

knob.label_text()       # "Volume: 0.00"
knob.indicator_angle()  # angle of the indicator in radians
```

The initial value is clamped into the range. A range with a NaN end or with its
minimum above its maximum raises `ValueError`.

A logarithmic knob:

```python
log_knob = (
    Knob(1.0, print, (0.0, float("inf")), KnobStyle.DOT)
    .logarithmic(True)
    .smallest_finite(1e-3)
    .largest_finite(1e3)
)
```

Other settings: `with_label_offset`, `with_label_format` and `enabled`.
`with_label_format` replaces the function that turns the value into label text.
The default, `default_label_format`, shows two decimals, and values very close to
zero in signed scientific notation (for example `+5.0e-3`). An empty label shows
only the value.

## Showing a knob

`Knob.show(ui)` lays the knob out, handles one frame of input and draws it
through `ui`, then returns a `Response`. The `ui` object is supplied by the host
and must provide:

* `text_size(text, font_size) -> (width, height)`
* `add_space(amount)`
* `allocate(width, height) -> (Rect, Interaction)`
* `circle_stroke(center, radius, width, color)`
* `circle_filled(center, radius, color)`
* `line_segment(start, end, width, color)`
* `text(pos, anchor, text, font_size, color)`

Points are `(x, y)` tuples; anchors are `"CENTER_TOP"`, `"CENTER_BOTTOM"` or
`"LEFT_CENTER"`.

`Interaction` describes the input for the frame: `double_clicked`, `dragged`,
`drag_delta_y`, `fine` (Ctrl, Shift or Alt held), `drag_stopped` and
`lost_focus`. Dragging up (negative `drag_delta_y`) raises the value; `fine`
makes the movement five times smaller. A double click sets the neutral value, if
one is set and differs from the current value. New values are passed to the
knob's setter, and `Response.changed` is then `True`. A disabled knob is drawn
but ignores input.

`add_knob(ui, knob, on_release)` shows the knob and calls `on_release()` when the
response reports that dragging stopped or focus was lost.

## What this package does not do

It draws nothing on its own and reads no mouse or keyboard. There is no window,
rendering backend or event loop; the host application supplies the `ui` object
and the `Interaction` for each frame.