"""
Tests for easing functions and Bezier parsing.
"""
import pytest

from framekit.timing import EASINGS, CubicBezier, EasingError, get_easing, list_easings, parse_easing
from framekit.timing.easing import bezier, normalize_name, parse_bezier

SAMPLES = [i / 200 for i in range(201)]


class TestCatalog:
    """Properties every catalog easing must hold."""

    @pytest.mark.parametrize("name", sorted(EASINGS))
    def test_endpoints(self, name):
        easing = EASINGS[name]
        assert easing(0.0) == 0.0
        assert easing(1.0) == 1.0

    @pytest.mark.parametrize("name", sorted(EASINGS))
    def test_monotonic(self, name):
        easing = EASINGS[name]
        values = [easing(t) for t in SAMPLES]
        assert all(b >= a - 1e-6 for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("name", sorted(EASINGS))
    def test_range(self, name):
        easing = EASINGS[name]
        assert all(-1e-9 <= easing(t) <= 1.0 + 1e-9 for t in SAMPLES)

    def test_input_is_clamped(self):
        easing = get_easing("cubic-in")
        assert easing(-0.5) == 0.0
        assert easing(1.5) == 1.0

    def test_linear_is_identity(self):
        linear = get_easing("linear")
        assert linear.identity is True
        assert linear(0.37) == pytest.approx(0.37)

    def test_in_out_midpoint(self):
        for name in ("quad-in-out", "cubic-in-out", "sine-in-out", "expo-in-out", "dramatic-swoop"):
            assert get_easing(name)(0.5) == pytest.approx(0.5, abs=1e-6)

    def test_dramatic_swoop_is_slow_at_the_ends(self):
        swoop = get_easing("dramatic-swoop")
        assert swoop(0.1) < 0.05
        assert swoop(0.9) > 0.95

    def test_list_easings(self):
        names = list_easings()
        assert names == sorted(names)
        assert {"linear", "ease-in-out", "dramatic-swoop", "expo-in-out"} <= set(names)


class TestCubicBezier:
    """Tests for CubicBezier solving."""

    def test_linear_control_points(self):
        curve = CubicBezier(0.0, 0.0, 1.0, 1.0)
        for x in (0.1, 0.25, 0.5, 0.8):
            assert curve(x) == pytest.approx(x, abs=1e-6)

    def test_css_ease_reference_value(self):
        assert CubicBezier(0.25, 0.1, 0.25, 1.0)(0.5) == pytest.approx(0.8024, abs=1e-3)

    def test_solve_t_round_trips_x(self):
        curve = CubicBezier(0.85, 0.0, 0.15, 1.0)
        t = curve.solve_t(0.3)
        assert curve._sample(t, curve.p1x, curve.p2x) == pytest.approx(0.3, abs=1e-6)

    def test_overshooting_y_is_allowed(self):
        curve = CubicBezier(0.3, -0.5, 0.7, 1.5)
        assert curve(0.0) == 0.0
        assert curve(1.0) == 1.0

    def test_x_outside_unit_interval_raises(self):
        with pytest.raises(EasingError, match="x control points"):
            CubicBezier(1.5, 0.0, 0.5, 1.0)

    def test_non_finite_raises(self):
        with pytest.raises(EasingError, match="finite"):
            CubicBezier(float("nan"), 0.0, 0.5, 1.0)

    def test_points(self):
        assert bezier(0.1, 0.2, 0.3, 0.4).func.points == (0.1, 0.2, 0.3, 0.4)


class TestNameResolution:
    """Tests for easing name normalization and lookup."""

    @pytest.mark.parametrize("alias, canonical", [
        ("easeInOutCubic", "cubic-in-out"),
        ("easeOutQuad", "quad-out"),
        ("easeInOutExpo", "expo-in-out"),
        ("ease_in_out_sine", "sine-in-out"),
        ("dramaticSwoop", "dramatic-swoop"),
        ("easeIn", "ease-in"),
        ("LINEAR", "linear"),
    ])
    def test_aliases(self, alias, canonical):
        assert normalize_name(alias) == canonical
        assert get_easing(alias) is EASINGS[canonical]

    def test_unknown_name_raises(self):
        with pytest.raises(EasingError, match="Unknown easing"):
            get_easing("bouncy")

    def test_easing_error_is_value_error(self):
        with pytest.raises(ValueError):
            get_easing("bouncy")


class TestParsing:
    """Tests for parse_easing and parse_bezier."""

    def test_parse_name(self):
        assert parse_easing("cubic-in") is EASINGS["cubic-in"]

    def test_parse_plain_tuple(self):
        easing = parse_easing("0.42,0,0.58,1")
        assert easing(0.3) == pytest.approx(EASINGS["ease-in-out"](0.3), abs=1e-6)

    def test_parse_css_function(self):
        easing = parse_easing("cubic-bezier(0.42, 0, 0.58, 1)")
        assert easing.name == "cubic-bezier(0.42,0.0,0.58,1.0)"

    def test_wrong_count_raises(self):
        with pytest.raises(EasingError, match="exactly 4"):
            parse_bezier("0.1,0.2,0.3")

    def test_non_numeric_raises(self):
        with pytest.raises(EasingError, match="must be numbers"):
            parse_bezier("a,b,c,d")

    def test_empty_raises(self):
        with pytest.raises(EasingError):
            parse_easing("  ")
