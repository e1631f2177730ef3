from __future__ import annotations

import numpy as np
import pytest

from trackriser.kernel import evaluate
from trackriser.options import ConnectorType
from trackriser.riser.supports import compose_supports, cutout_support, plug_support, support_wedge
from tests.helpers import bounds, is_watertight


def test_wedge_is_a_45_degree_prism(settings):
    mesh = evaluate(support_wedge(10.0, 4.0), settings)
    assert np.allclose(bounds(mesh), [0.0, 10.0, -2.0, 2.0, -10.0, 0.0], atol=1e-5)
    assert mesh.volume == pytest.approx(0.5 * 10.0 * 10.0 * 4.0, rel=1e-6)
    # Every point satisfies x <= depth + z, so no face overhangs more than 45 degrees.
    assert np.all(mesh.vertices[:, 0] <= 10.0 + mesh.vertices[:, 2] + 1e-5)


def test_plug_support_follows_plug_footprint(settings, standard):
    mesh = evaluate(plug_support(standard), settings)
    b = bounds(mesh)
    reach = standard.plug_neck_length + standard.plug_radius
    assert b[0] == pytest.approx(0.0, abs=1e-5)
    assert b[1] == pytest.approx(reach, abs=1e-3)
    assert np.allclose(b[[2, 3]], [-standard.plug_radius, standard.plug_radius], atol=1e-5)
    assert np.allclose(b[[4, 5]], [-reach, 0.0], atol=1e-5)
    assert mesh.volume < 0.5 * reach * reach * 2 * standard.plug_radius


def test_cutout_support_stays_under_track(settings, standard):
    mesh = evaluate(cutout_support(standard), settings)
    b = bounds(mesh)
    reach = standard.plug_neck_length * 1.25
    assert b[1] == pytest.approx(reach, abs=1e-3)
    assert b[2] >= -standard.width / 2.0 - 1e-5
    assert b[3] <= standard.width / 2.0 + 1e-5
    assert np.allclose(b[[4, 5]], [-reach, 0.0], atol=1e-5)


def test_supports_hang_below_both_ends(settings, standard):
    tree = compose_supports(25.0, 127.0, ConnectorType.FEMALE, ConnectorType.MALE, standard)
    mesh = evaluate(tree, settings)
    b = bounds(mesh)
    # Cutout support beyond the left end, plug support beyond the right end.
    assert np.allclose(b[[2, 3]], [-18.0, 25.0 + 15.0], atol=1e-3)
    assert np.allclose(b[[4, 5]], [127.0 - 18.0, 127.0], atol=1e-5)
    assert b[0] >= -1e-5 and b[1] <= 40.0 + 1e-5
    watertight, open_edges = is_watertight(mesh)
    assert watertight, f"{open_edges} open edges"
