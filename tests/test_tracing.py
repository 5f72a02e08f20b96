"""Tests for isopotential and field-line tracing, seeding and the batch tracer."""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose

from fieldtrace import (
    Composite,
    CurveTracer,
    PointCharge,
    StopReason,
    TraceOptions,
    TracedCurve,
    UniformField,
    circle_seeds,
    configure,
    line_seeds,
    subdivide_isopotential,
    trace_field_line,
    trace_isopotential,
)
from fieldtrace.tracing import FIELD_LINE, ISOPOTENTIAL


# ------------------------ Isopotentials ------------------------

def test_isopotential_around_point_charge(single_charge):
    seed = np.array([50.0, 0.0])
    curve = trace_isopotential(single_charge, seed, 5e-3, 5.0, 1e-3, 1000)

    assert curve.kind == ISOPOTENTIAL
    assert curve.closed
    assert curve.stop_reason is StopReason.STOP_CONDITION
    # Circumference 2 pi 50 walked in steps of about 5
    assert 60 <= len(curve) <= 66

    radii = np.linalg.norm(curve.points, axis=1)
    assert_allclose(radii, 50.0, rtol=1e-3)
    assert np.linalg.norm(curve.points[-1] - seed) < 2.5

    # Counter-clockwise around a positive charge
    assert curve.points[0][1] > 0

    polygon = curve.as_polygon()
    perimeter = np.sum(np.linalg.norm(np.diff(polygon, axis=0), axis=1))
    assert perimeter == pytest.approx(2 * np.pi * 50.0, rel=2e-2)


def test_isopotential_keeps_potential(single_charge):
    seed = np.array([0.0, -20.0])
    curve = trace_isopotential(single_charge, seed, 5e-3, 5.0, 1e-3, 1000)
    v0 = single_charge.potential_at(seed)

    assert curve.closed
    assert_allclose(single_charge.potential_at(curve.points), v0, atol=1e-2)


def test_isopotential_excludes_seed_and_polygon_closes(single_charge):
    seed = np.array([50.0, 0.0])
    curve = trace_isopotential(single_charge, seed, 5e-3, 5.0, 1e-3, 1000)

    assert not np.any(np.all(curve.points == seed, axis=1))
    polygon = curve.as_polygon()
    assert len(polygon) == len(curve) + 2
    assert_allclose(polygon[0], seed)
    assert_allclose(polygon[-1], seed)


def test_isopotential_open_when_budget_runs_out(single_charge):
    curve = trace_isopotential(single_charge, np.array([50.0, 0.0]), 5e-3, 5.0, 1e-3, 10)

    assert not curve.closed
    assert len(curve) == 10
    assert curve.stop_reason is StopReason.MAX_STEPS
    assert len(curve.as_polygon()) == 11


def test_isopotential_in_zero_field_is_truncated():
    curve = trace_isopotential(UniformField(field=(0.0, 0.0)), np.array([1.0, 1.0]), 5e-3, 5.0, 1e-3, 100)

    assert len(curve) == 0
    assert curve.truncated
    assert curve.stop_reason is StopReason.NON_FINITE
    assert not curve.closed


def test_isopotential_in_uniform_field_is_straight():
    field = UniformField(field=(2.0, 0.0))
    curve = trace_isopotential(field, np.array([0.0, 0.0]), 5e-3, 1.0, 1e-3, 5)

    # perp(E) of a field along +x points along +y
    assert_allclose(curve.points, [[0.0, 1.0], [0.0, 2.0], [0.0, 3.0], [0.0, 4.0], [0.0, 5.0]], atol=1e-12)


# ------------------------ Field lines ------------------------

def test_field_line_between_opposite_charges(charge_pair):
    seed = np.array([10.0, 0.0])
    curve = trace_field_line(charge_pair, seed, 5e-3, 5.0, 1e-3, 1000)
    points = curve.points

    assert curve.kind == FIELD_LINE
    # Low-potential end at the negative charge, high-potential end at the positive one
    assert np.linalg.norm(points[0] - np.array([0.0, -50.0])) < 2.0
    assert np.linalg.norm(points[-1] - np.array([0.0, 50.0])) < 2.0

    # y grows monotonically away from the charges
    near = np.minimum(
        np.linalg.norm(points - np.array([0.0, 50.0]), axis=1),
        np.linalg.norm(points - np.array([0.0, -50.0]), axis=1),
    )
    far = near > 3.0
    both_far = far[1:] & far[:-1]
    assert np.all(np.diff(points[:, 1])[both_far] > 0)

    # Field lines of opposite line charges are circular arcs through both
    center = np.array([-120.0, 0.0])
    radii = np.linalg.norm(points[far] - center, axis=1)
    assert_allclose(radii, 130.0, rtol=1e-2)


def test_field_line_seeded_next_to_positive_charge(charge_pair):
    seed = np.array([1.0, 49.0])
    curve = trace_field_line(charge_pair, seed, 5e-3, 5.0, 1e-3, 1000)
    points = curve.points

    assert abs(charge_pair.potential_at(seed)) < 300.0
    assert curve.stop_reasons[0] is StopReason.STOP_CONDITION
    assert np.linalg.norm(points[0] - np.array([0.0, -50.0])) < 2.0
    assert abs(charge_pair.potential_at(points[0])) > 300.0

    near = np.minimum(
        np.linalg.norm(points - np.array([0.0, 50.0]), axis=1),
        np.linalg.norm(points - np.array([0.0, -50.0]), axis=1),
    )
    far = near > 3.0
    both_far = far[1:] & far[:-1]
    assert np.all(np.diff(points[:, 1])[both_far] > 0)

    # Arc of the circle through both charges and the seed
    radii = np.linalg.norm(points[far] - np.array([-49.0, 0.0]), axis=1)
    assert_allclose(radii, np.hypot(49.0, 50.0), rtol=2e-2)


def test_field_line_junction(charge_pair):
    seed = np.array([10.0, 0.0])
    curve = trace_field_line(charge_pair, seed, 5e-3, 5.0, 1e-3, 1000)
    idx = curve.metadata["seed_index"]

    assert_allclose(curve.points[idx], seed)
    assert idx == curve.metadata["n_forward"]
    assert len(curve) == curve.metadata["n_forward"] + curve.metadata["n_backward"] + 1
    assert len(curve) <= 2 * 1000 + 1
    assert np.isnan(curve.step_lengths[idx])

    # Neighbours of the seed are one step away on either side
    assert np.linalg.norm(curve.points[idx + 1] - seed) <= 5.0 + 1e-9
    assert np.linalg.norm(curve.points[idx - 1] - seed) <= 5.0 + 1e-9


def test_field_line_respects_step_budget(charge_pair):
    curve = trace_field_line(charge_pair, np.array([10.0, 0.0]), 5e-3, 5.0, 1e-3, 3)

    assert len(curve) == 7
    assert curve.stop_reasons == (StopReason.MAX_STEPS, StopReason.MAX_STEPS)


def test_field_line_stops_on_potential_threshold(single_charge):
    curve = trace_field_line(single_charge, np.array([10.0, 0.0]), 5e-3, 5.0, 1e-3, 1000, max_potential=150.0)

    # |V| = 50 ln r exceeds 150 beyond r = e^3
    assert curve.stop_reasons[0] is StopReason.STOP_CONDITION
    assert np.linalg.norm(curve.points[0]) > np.exp(3.0)
    assert abs(single_charge.potential_at(curve.points[0])) > 150.0
    assert abs(single_charge.potential_at(curve.points[1])) <= 150.0


def test_field_line_seed_only_in_zero_field():
    curve = trace_field_line(UniformField(field=(0.0, 0.0)), np.array([2.0, 3.0]), 5e-3, 5.0, 1e-3, 100)

    assert len(curve) == 1
    assert_allclose(curve.points[0], [2.0, 3.0])
    assert curve.truncated


def test_truncation_warns_when_verbose():
    configure(verbose=True)
    with pytest.warns(UserWarning, match="non-finite"):
        trace_field_line(UniformField(field=(0.0, 0.0)), np.array([2.0, 3.0]), 5e-3, 5.0, 1e-3, 100)


def test_truncation_silent_by_default():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        trace_field_line(UniformField(field=(0.0, 0.0)), np.array([2.0, 3.0]), 5e-3, 5.0, 1e-3, 100)


def test_fixed_step_method(single_charge):
    curve = trace_isopotential(single_charge, np.array([50.0, 0.0]), 5e-3, 5.0, 1e-3, 1000, method="rk4")
    assert curve.closed
    assert_allclose(curve.step_lengths, 5.0)


# ------------------------ TracedCurve ------------------------

def test_traced_curve_is_read_only(single_charge):
    curve = trace_isopotential(single_charge, np.array([50.0, 0.0]), 5e-3, 5.0, 1e-3, 20)

    with pytest.raises(ValueError):
        curve.points[0, 0] = 1.0

    point = curve[0]
    point[0] = 1e6
    assert curve.points[0, 0] != 1e6
    assert np.asarray(curve).shape == (20, 2)
    assert len(list(curve)) == 20


def test_traced_curve_validation():
    with pytest.raises(ValueError):
        TracedCurve(points=np.zeros((2, 2)), seed=np.zeros(2), kind="contour")
    with pytest.raises(ValueError):
        TracedCurve(points=np.zeros((2, 2)), seed=np.zeros(2), kind=FIELD_LINE, step_lengths=[1.0])


def test_traced_curve_summary():
    curve = TracedCurve(
        points=[[0.0, 0.0], [3.0, 4.0]],
        seed=[0.0, 0.0],
        kind=FIELD_LINE,
        stop_reasons=("max_steps", "non_finite"),
    )
    info = curve.summary()

    assert info["length"] == pytest.approx(5.0)
    assert info["stop_reason"] == "non_finite"
    assert curve.stop_reason is StopReason.NON_FINITE


# ------------------------ TraceOptions ------------------------

@pytest.mark.parametrize("kwargs", [
    {"min_step": 0.0},
    {"min_step": 2.0, "max_step": 1.0},
    {"error_tolerance": -1e-3},
    {"max_steps": 0},
    {"max_steps": 2.5},
    {"max_potential": float("nan")},
    {"method": "rk45"},
])
def test_trace_options_validation(kwargs):
    with pytest.raises(ValueError):
        TraceOptions(**kwargs)


def test_trace_options_defaults():
    options = TraceOptions()
    assert options.is_adaptive
    assert options.as_dict()["max_steps"] == 1000


# ------------------------ Seeding ------------------------

def test_subdivide_by_arclength():
    polyline = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]])
    seeds = subdivide_isopotential(polyline, 3.0)

    assert_allclose(seeds, [[3, 0], [6, 0], [9, 0], [10, 2], [10, 5], [10, 8]], atol=1e-12)


def test_subdivide_by_flux():
    polyline = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]])
    seeds = subdivide_isopotential(polyline, 6.0, source=UniformField(field=(2.0, 0.0)), metric="flux")

    assert_allclose(seeds, [[3, 0], [6, 0], [9, 0], [10, 2], [10, 5], [10, 8]], atol=1e-12)


def test_subdivide_flux_follows_field_strength():
    # Field strength 1 / r: seeds crowd where the field is strong
    source = PointCharge(charge=1.0)
    polyline = line_seeds((1.0, 0.0), (21.0, 0.0), 201)
    seeds = subdivide_isopotential(polyline, 0.5, source=source, metric="flux")

    gaps = np.diff(seeds[:, 0])
    assert np.all(gaps > 0)
    assert gaps[0] < gaps[-1]


def test_subdivide_emits_only_when_spacing_is_exceeded():
    # 10 = 2 x 5: the second multiple is only reached, never exceeded
    seeds = subdivide_isopotential(np.array([[0.0, 0.0], [10.0, 0.0]]), 5.0)
    assert_allclose(seeds, [[5.0, 0.0]])

    # Several seeds from one long segment
    seeds = subdivide_isopotential(np.array([[0.0, 0.0], [10.0, 0.0]]), 3.0)
    assert_allclose(seeds, [[3.0, 0.0], [6.0, 0.0], [9.0, 0.0]])

    # The remainder carries into the next segment
    seeds = subdivide_isopotential(np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 0.5]]), 5.0)
    assert_allclose(seeds, [[5.0, 0.0], [10.0, 0.0]])


def test_subdivide_skips_degenerate_segments():
    polyline = np.array([[0.0, 0.0], [0.0, 0.0], [4.0, 0.0], [4.0, 0.0]])
    seeds = subdivide_isopotential(polyline, 1.5)
    assert_allclose(seeds, [[1.5, 0.0], [3.0, 0.0]])


def test_subdivide_short_input():
    assert subdivide_isopotential(np.array([[1.0, 1.0]]), 1.0).shape == (0, 2)
    assert subdivide_isopotential(np.array([[0.0, 0.0], [1.0, 0.0]]), 5.0).shape == (0, 2)


def test_subdivide_errors():
    polyline = np.array([[0.0, 0.0], [1.0, 0.0]])
    with pytest.raises(ValueError):
        subdivide_isopotential(polyline, 1.0, metric="charge")
    with pytest.raises(ValueError):
        subdivide_isopotential(polyline, 1.0, metric="flux")
    with pytest.raises(ValueError):
        subdivide_isopotential(polyline, 0.0)


def test_subdivide_closed_isopotential(single_charge):
    curve = trace_isopotential(single_charge, np.array([50.0, 0.0]), 5e-3, 5.0, 1e-3, 1000)
    seeds = subdivide_isopotential(curve.as_polygon(), 10.0)

    # Circumference of about 314
    assert 30 <= len(seeds) <= 32
    assert_allclose(np.linalg.norm(seeds, axis=1), 50.0, rtol=1e-2)


def test_line_and_circle_seeds():
    line = line_seeds((0.0, 0.0), (4.0, 2.0), 3)
    assert_allclose(line, [[0, 0], [2, 1], [4, 2]])
    assert line_seeds((0.0, 0.0), (1.0, 1.0), 0).shape == (0, 2)

    circle = circle_seeds((1.0, 1.0), 2.0, 4)
    assert_allclose(circle, [[3, 1], [1, 3], [-1, 1], [1, -1]], atol=1e-12)


# ------------------------ CurveTracer ------------------------

def test_curve_tracer_field_lines(single_charge):
    tracer = CurveTracer(single_charge, TraceOptions(max_steps=200), progress_style="none")
    seeds = circle_seeds((0.0, 0.0), 10.0, 8)
    lines = tracer.field_lines(seeds)

    assert len(lines) == 8
    for seed, line in zip(seeds, lines):
        assert_allclose(line.points[line.metadata["seed_index"]], seed)
        assert line.metadata["options"]["max_steps"] == 200


def test_curve_tracer_from_isopotential(charge_pair):
    tracer = CurveTracer(charge_pair, TraceOptions(max_steps=200), progress_style="none")
    contour = tracer.isopotential(np.array([0.0, 30.0]))
    assert contour.closed

    lines = tracer.field_lines_from_isopotential(contour, 10.0)
    expected = subdivide_isopotential(contour.as_polygon(), 10.0)
    assert len(lines) == len(expected) > 0

    combined = tracer.field_lines_from_isopotentials([contour, contour], 10.0)
    assert len(combined) == 2 * len(expected)


def test_curve_tracer_simple_progress(single_charge, capsys):
    tracer = CurveTracer(single_charge, TraceOptions(max_steps=20), progress_desc="Lines", progress_style="simple")
    tracer.field_lines(circle_seeds((0.0, 0.0), 10.0, 3))

    out = capsys.readouterr().out
    assert "Lines: 3/3" in out


def test_curve_tracer_empty_and_invalid_source():
    tracer = CurveTracer(Composite(), progress_style="none")
    assert tracer.field_lines(np.zeros((0, 2))) == []
    assert tracer.field_lines_from_isopotentials([], 5.0) == []

    with pytest.raises(ValueError):
        CurveTracer(object())
