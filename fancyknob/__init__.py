"""Circular knob widget with linear and logarithmic value mapping."""

__version__ = "0.2.0"
__all__ = ["knob", "normalise"]