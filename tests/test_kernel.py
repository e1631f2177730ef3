from __future__ import annotations

import numpy as np
import pytest

from trackriser.kernel import KernelError, evaluate, evaluate_profile
from trackriser.modeling import (
    boolean_difference,
    boolean_intersection,
    boolean_union,
    hull,
    linear_extrude,
    make_box,
    make_circle,
    make_cylinder,
    make_polygon,
    make_rect,
    rotate,
    scale,
    translate,
)
from tests.helpers import bounds, is_watertight, profile_bounds


def test_box_translate_bounds(settings):
    mesh = evaluate(translate(make_box((2.0, 4.0, 6.0)), (1.0, 2.0, 3.0)), settings)
    assert np.allclose(bounds(mesh), [1.0, 3.0, 2.0, 6.0, 3.0, 9.0])
    assert mesh.volume == pytest.approx(48.0)


def test_centered_box_rotate_z_90(settings):
    mesh = evaluate(rotate(make_box((2.0, 4.0, 1.0), center=True), 90.0), settings)
    b = bounds(mesh)
    assert np.allclose(b[[0, 1]], [-2.0, 2.0], atol=1e-5)
    assert np.allclose(b[[2, 3]], [-1.0, 1.0], atol=1e-5)


def test_rotate_order_is_x_then_z(settings):
    # A box along +x turned 90 about x, then 90 about z, ends up along +y and flat in z.
    mesh = evaluate(rotate(make_box((10.0, 1.0, 2.0)), (90.0, 0.0, 90.0)), settings)
    b = bounds(mesh)
    assert np.allclose(b[[2, 3]], [0.0, 10.0], atol=1e-5)
    assert np.allclose(b[[4, 5]], [0.0, 1.0], atol=1e-5)


def test_scale_bounds(settings):
    mesh = evaluate(scale(make_box((2.0, 4.0, 6.0), center=True), (2.0, 0.5, 1.0)), settings)
    assert np.allclose(bounds(mesh), [-2.0, 2.0, -1.0, 1.0, -3.0, 3.0])


def test_difference_and_intersection_volumes(settings):
    block = make_box((4.0, 4.0, 4.0))
    corner = translate(make_box((4.0, 4.0, 4.0)), (-2.0, -2.0, -2.0))
    assert evaluate(boolean_difference(block, [corner]), settings).volume == pytest.approx(56.0)
    assert evaluate(boolean_intersection([block, corner]), settings).volume == pytest.approx(8.0)
    assert evaluate(boolean_union([block, corner]), settings).volume == pytest.approx(120.0)


def test_cylinder_uses_configured_facets(settings):
    coarse = evaluate(make_cylinder(radius=1.0, height=1.0), settings)
    fine = evaluate(make_cylinder(radius=1.0, height=1.0, segments=128), settings)
    assert coarse.n_vertices < fine.n_vertices
    assert fine.volume == pytest.approx(np.pi, rel=1e-3)


def test_tapered_extrusion_scales_top(settings):
    mesh = evaluate(
        linear_extrude(make_rect((2.0, 4.0), center=True), height=3.0, scale_top=(2.0, 0.5)),
        settings,
    )
    assert np.allclose(bounds(mesh), [-2.0, 2.0, -2.0, 2.0, 0.0, 3.0], atol=1e-5)
    # Area goes from 8 to 8 through 8 * (1 + t) * (1 - t / 2).
    assert mesh.volume == pytest.approx(26.0, rel=1e-6)
    top = mesh.vertices[np.isclose(mesh.vertices[:, 2], 3.0)]
    assert np.isclose(np.abs(top[:, 0]).max(), 2.0)
    assert np.isclose(np.abs(top[:, 1]).max(), 1.0)


def test_hull_of_offset_circles(settings):
    circles = [translate(make_circle(1.0), (0.0, offset)) for offset in (-3.0, 3.0)]
    polygons = evaluate_profile(hull(circles), settings)
    assert len(polygons) == 1
    assert np.allclose(profile_bounds(polygons), [-1.0, 1.0, -4.0, 4.0], atol=1e-6)


def test_polygon_winding_is_normalised(settings):
    clockwise = make_polygon([(0, 0), (0, 1), (1, 1), (1, 0)])
    mesh = evaluate(linear_extrude(clockwise, height=2.0), settings)
    assert mesh.volume == pytest.approx(2.0)


def test_results_are_watertight(settings):
    tree = boolean_difference(
        make_box((10.0, 10.0, 10.0)),
        [translate(make_cylinder(radius=2.0, height=12.0), (5.0, 5.0, -1.0))],
    )
    watertight, open_edges = is_watertight(evaluate(tree, settings))
    assert watertight, f"{open_edges} open edges"


def test_two_d_root_is_rejected(settings):
    with pytest.raises(KernelError):
        evaluate(make_circle(1.0), settings)
    with pytest.raises(KernelError):
        evaluate_profile(make_box((1.0, 1.0, 1.0)), settings)


def test_empty_result_is_rejected(settings):
    apart = [make_box((1.0, 1.0, 1.0)), translate(make_box((1.0, 1.0, 1.0)), (5.0, 0.0, 0.0))]
    with pytest.raises(KernelError):
        evaluate(boolean_intersection(apart), settings)
