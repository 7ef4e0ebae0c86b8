"""
Easing functions: pure [0, 1] -> [0, 1] progress mappings.

Catalog entries are all monotonic non-decreasing with f(0) = 0 and f(1) = 1.
Arbitrary timing curves are expressed as cubic Beziers, which are solved
numerically for y given x.
"""
import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple


class EasingError(ValueError):
    """Unknown easing name or malformed Bezier definition."""


@dataclass(frozen=True)
class Easing:
    """Named easing function. Calling it clamps input to [0, 1] and pins the endpoints."""
    name: str
    func: Callable[[float], float]
    identity: bool = False

    def __call__(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return self.func(t)


def _power_in(p: int) -> Callable[[float], float]:
    return lambda t: t ** p


def _power_out(p: int) -> Callable[[float], float]:
    return lambda t: 1.0 - (1.0 - t) ** p


def _power_in_out(p: int) -> Callable[[float], float]:
    def ease(t: float) -> float:
        if t < 0.5:
            return 2 ** (p - 1) * t ** p
        return 1.0 - (-2.0 * t + 2.0) ** p / 2.0
    return ease


def _sine_in(t: float) -> float:
    return 1.0 - math.cos(t * math.pi / 2.0)


def _sine_out(t: float) -> float:
    return math.sin(t * math.pi / 2.0)


def _sine_in_out(t: float) -> float:
    return -(math.cos(math.pi * t) - 1.0) / 2.0


def _expo_in(t: float) -> float:
    return 2.0 ** (10.0 * t - 10.0)


def _expo_out(t: float) -> float:
    return 1.0 - 2.0 ** (-10.0 * t)


def _expo_in_out(t: float) -> float:
    if t < 0.5:
        return 2.0 ** (20.0 * t - 10.0) / 2.0
    return (2.0 - 2.0 ** (-20.0 * t + 10.0)) / 2.0


@dataclass(frozen=True)
class CubicBezier:
    """
    CSS-style cubic-bezier(p1x, p1y, p2x, p2y) timing curve.

    The curve is parametric in t, so y for a given x is found by inverting
    x(t): Newton iteration first, bisection when the slope is too flat.
    """
    p1x: float
    p1y: float
    p2x: float
    p2y: float
    tolerance: float = 1e-7

    def __post_init__(self):
        values = (self.p1x, self.p1y, self.p2x, self.p2y)
        if not all(math.isfinite(v) for v in values):
            raise EasingError(f"Bezier control points must be finite numbers, got {values}")
        if not (0.0 <= self.p1x <= 1.0 and 0.0 <= self.p2x <= 1.0):
            raise EasingError(
                f"Bezier x control points must lie in [0, 1], got p1x={self.p1x}, p2x={self.p2x}"
            )

    def _coefficients(self, p1: float, p2: float) -> Tuple[float, float, float]:
        c = 3.0 * p1
        b = 3.0 * (p2 - p1) - c
        a = 1.0 - c - b
        return a, b, c

    def _sample(self, t: float, p1: float, p2: float) -> float:
        a, b, c = self._coefficients(p1, p2)
        return ((a * t + b) * t + c) * t

    def _slope_x(self, t: float) -> float:
        a, b, c = self._coefficients(self.p1x, self.p2x)
        return (3.0 * a * t + 2.0 * b) * t + c

    def solve_t(self, x: float) -> float:
        """Parameter t such that x(t) = x, to within tolerance."""
        t = x
        for _ in range(8):
            error = self._sample(t, self.p1x, self.p2x) - x
            if abs(error) < self.tolerance:
                return t
            slope = self._slope_x(t)
            if abs(slope) < 1e-6:
                break
            t -= error / slope
            if not 0.0 <= t <= 1.0:
                break

        low, high = 0.0, 1.0
        t = x
        for _ in range(100):
            current = self._sample(t, self.p1x, self.p2x)
            if abs(current - x) < self.tolerance:
                break
            if current < x:
                low = t
            else:
                high = t
            t = (low + high) / 2.0
        return t

    def __call__(self, x: float) -> float:
        if x <= 0.0:
            return 0.0
        if x >= 1.0:
            return 1.0
        return self._sample(self.solve_t(x), self.p1y, self.p2y)

    @property
    def points(self) -> Tuple[float, float, float, float]:
        return (self.p1x, self.p1y, self.p2x, self.p2y)


def bezier(p1x: float, p1y: float, p2x: float, p2y: float) -> Easing:
    """Easing backed by a cubic Bezier curve."""
    curve = CubicBezier(float(p1x), float(p1y), float(p2x), float(p2y))
    return Easing(name=f"cubic-bezier({p1x},{p1y},{p2x},{p2y})", func=curve)


_POWERS = {"quad": 2, "cubic": 3, "quart": 4, "quint": 5}

_PRESET_BEZIERS = {
    "ease": (0.25, 0.1, 0.25, 1.0),
    "ease-in": (0.42, 0.0, 1.0, 1.0),
    "ease-out": (0.0, 0.0, 0.58, 1.0),
    "ease-in-out": (0.42, 0.0, 0.58, 1.0),
    "dramatic-swoop": (0.85, 0.0, 0.15, 1.0),
}


def _build_catalog() -> Dict[str, Easing]:
    catalog = {"linear": Easing("linear", lambda t: t, identity=True)}

    for family, power in _POWERS.items():
        catalog[f"{family}-in"] = Easing(f"{family}-in", _power_in(power))
        catalog[f"{family}-out"] = Easing(f"{family}-out", _power_out(power))
        catalog[f"{family}-in-out"] = Easing(f"{family}-in-out", _power_in_out(power))

    catalog["sine-in"] = Easing("sine-in", _sine_in)
    catalog["sine-out"] = Easing("sine-out", _sine_out)
    catalog["sine-in-out"] = Easing("sine-in-out", _sine_in_out)

    catalog["expo-in"] = Easing("expo-in", _expo_in)
    catalog["expo-out"] = Easing("expo-out", _expo_out)
    catalog["expo-in-out"] = Easing("expo-in-out", _expo_in_out)

    for name, points in _PRESET_BEZIERS.items():
        catalog[name] = Easing(name, CubicBezier(*points))

    return catalog


EASINGS: Dict[str, Easing] = _build_catalog()

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_EASE_PREFIXED = re.compile(r"^ease-(in|out|in-out)-([a-z]+)$")


def normalize_name(name: str) -> str:
    """
    Canonical catalog key for a user-supplied name.

    Accepts kebab-case ('cubic-in-out'), snake_case and the camelCase forms
    used by web easing libraries ('easeInOutCubic', 'dramaticSwoop').
    """
    key = _CAMEL_BOUNDARY.sub("-", name.strip()).replace("_", "-").lower()
    match = _EASE_PREFIXED.match(key)
    if match and match.group(2) in set(_POWERS) | {"sine", "expo"}:
        return f"{match.group(2)}-{match.group(1)}"
    return key


def get_easing(name: str) -> Easing:
    """Look up a catalog easing by name."""
    key = normalize_name(name)
    try:
        return EASINGS[key]
    except KeyError:
        raise EasingError(f"Unknown easing '{name}'. Available: {', '.join(list_easings())}")


def list_easings() -> List[str]:
    return sorted(EASINGS)


def parse_bezier(text: str) -> Easing:
    """Parse 'a,b,c,d' or 'cubic-bezier(a,b,c,d)'."""
    body = text.strip()
    if body.lower().startswith("cubic-bezier(") and body.endswith(")"):
        body = body[len("cubic-bezier("):-1]

    parts = [part.strip() for part in body.split(",")]
    if len(parts) != 4:
        raise EasingError(f"Bezier needs exactly 4 numbers, got {len(parts)} in '{text}'")
    try:
        numbers = [float(part) for part in parts]
    except ValueError:
        raise EasingError(f"Bezier values must be numbers, got '{text}'")
    return bezier(*numbers)


def parse_easing(text: str) -> Easing:
    """
    Resolve an easing from a catalog name or a Bezier definition.

    Raises:
        EasingError: for unknown names or malformed Bezier tuples
    """
    if not text or not text.strip():
        raise EasingError("Easing must not be empty")
    if "," in text or text.strip().lower().startswith("cubic-bezier"):
        return parse_bezier(text)
    return get_easing(text)
