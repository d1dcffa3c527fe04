"""Easing functions for reel animation.

Every function has the signature ``(elapsed, start, distance, duration)`` and
returns the position reached after ``elapsed`` milliseconds. They are pure.
See https://spicyyoghurt.com/tools/easing-functions for the formulas.
"""

from typing import Callable, Dict

EasingFunction = Callable[[float, float, float, float], float]


def linear(t: float, b: float, c: float, d: float) -> float:
    return c * t / d + b


def ease_out_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return -c * t * (t - 2) + b


def ease_in_out_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t + b
    t -= 1
    return -c / 2 * (t * (t - 2) - 1) + b


def ease_out_cubic(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return c * (t * t * t + 1) + b


EASINGS: Dict[str, EasingFunction] = {
    "linear": linear,
    "ease-out-quad": ease_out_quad,
    "ease-in-out-quad": ease_in_out_quad,
    "ease-out-cubic": ease_out_cubic,
}


def get_easing(name: str) -> EasingFunction:
    """Look up a built-in easing function by name (``_`` and ``-`` both work)."""
    key = name.strip().lower().replace("_", "-")
    try:
        return EASINGS[key]
    except KeyError:
        raise KeyError(f"Unknown easing function: {name!r}") from None
