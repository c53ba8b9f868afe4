"""Tests for skeleton conversion and painting."""

import numpy as np
import pytest

from skeleton.components.skeleton import SkeletonBuilder
from skeleton.components.template import TemplateGeometry, default_template
from skeleton.geometry.primitives import Point3
from skeleton.scene.scene_graph import Group, Material, SceneGraph, SelectionError


def _scene_with_frame():
    scene = SceneGraph()
    group = scene.add_group(Group(name="frame"))
    group.add_edge(Point3(), Point3(x=10.0))
    group.add_edge(Point3(x=10.0), Point3(x=10.0, z=4.0))
    group.add_edge(Point3(x=2.0, y=2.0), Point3(x=2.0, y=2.0))
    scene.add_material(Material(name="steel", color=8))
    return scene


def test_convert_edges_replaces_edges_with_polylines():
    """Each non-degenerate edge becomes a polyline with matching endpoints."""
    scene = _scene_with_frame()
    group = scene.groups["frame"]
    expected = [(e.start, e.end) for e in group.edges[:2]]

    report = SkeletonBuilder().convert_edges(group, default_template())

    assert report.converted == 2
    assert report.skipped == 1
    assert report.polylines_added == 2
    assert report.edges_removed == 3
    assert group.edges == []
    for polyline, (start, end) in zip(group.polylines, expected):
        assert len(polyline.vertices) == 2
        assert np.allclose(polyline.vertices[0].to_array(), start.to_array())
        assert np.allclose(polyline.vertices[1].to_array(), end.to_array())


def test_convert_edges_places_every_template_polyline():
    """Multi-polyline templates are scaled along X only."""
    template = TemplateGeometry(
        name="zigzag",
        polylines=[
            [Point3(), Point3(x=0.5, y=0.1), Point3(x=1.0)],
            [Point3(), Point3(z=0.2)],
        ],
    )
    group = Group(name="beam")
    group.add_edge(Point3(), Point3(x=10.0))

    report = SkeletonBuilder().convert_edges(group, template)

    assert report.polylines_added == 2
    zigzag, tick = group.polylines
    assert np.allclose(zigzag.vertices[1].to_array(), [5.0, 0.1, 0.0])
    assert np.allclose(zigzag.vertices[2].to_array(), [10.0, 0.0, 0.0])
    assert np.allclose(tick.vertices[1].to_array(), [0.0, 0.0, 0.2])


def test_convert_edges_logs_skipped_edges(caplog):
    """Zero-length edges are skipped with a warning."""
    scene = _scene_with_frame()

    with caplog.at_level("WARNING", logger="skeleton"):
        SkeletonBuilder().convert_edges(scene.groups["frame"], default_template())

    assert "zero-length" in caplog.text


def test_length_tolerance_skips_short_edges():
    """Edges shorter than the builder tolerance are skipped."""
    group = Group(name="tiny")
    group.add_edge(Point3(), Point3(x=1e-4))

    report = SkeletonBuilder(length_tolerance=1e-3).convert_edges(group, default_template())

    assert report.converted == 0
    assert report.skipped == 1
    assert group.polylines == []


def test_create_skeleton_is_one_undoable_operation():
    """create_skeleton converts the selection, releases the template and clears selection."""
    scene = _scene_with_frame()
    scene.select("frame")

    report = SkeletonBuilder().create_skeleton(scene)

    assert report.group == "frame"
    assert report.converted == 2
    assert scene.selection == []
    assert scene.definitions == {}
    assert scene.undo_names == ["Create Skeleton"]

    scene.undo()
    assert len(scene.groups["frame"].edges) == 3
    assert scene.groups["frame"].polylines == []


def test_create_skeleton_requires_selection():
    """Without exactly one selected group nothing happens."""
    scene = _scene_with_frame()

    with pytest.raises(SelectionError):
        SkeletonBuilder().create_skeleton(scene)

    assert len(scene.groups["frame"].edges) == 3
    assert scene.undo_names == []


class _FailingBuilder(SkeletonBuilder):
    def convert_edges(self, group, template):
        group.add_polyline([Point3(), Point3(x=1.0)])
        group.edges.clear()
        raise RuntimeError("host failure")


def test_create_skeleton_rolls_back_on_failure():
    """A failure mid-conversion restores the group and releases the template."""
    scene = _scene_with_frame()
    scene.select("frame")

    with pytest.raises(RuntimeError, match="host failure"):
        _FailingBuilder().create_skeleton(scene)

    assert len(scene.groups["frame"].edges) == 3
    assert scene.groups["frame"].polylines == []
    assert scene.definitions == {}
    assert scene.selection == ["frame"]


def test_paint_skeleton_uses_current_material():
    """paint_skeleton applies the current material and clears selection."""
    scene = _scene_with_frame()
    scene.current_material = "steel"
    scene.select("frame")

    group = SkeletonBuilder().paint_skeleton(scene)

    assert group.material == "steel"
    assert scene.groups["frame"].material == "steel"
    assert scene.selection == []
    assert scene.undo_names == ["Paint Skeleton"]


def test_paint_skeleton_explicit_material():
    """An explicit material overrides the current one."""
    scene = _scene_with_frame()
    scene.add_material(Material(name="brass", color=2))
    scene.current_material = "steel"
    scene.select("frame")

    SkeletonBuilder().paint_skeleton(scene, "brass")

    assert scene.groups["frame"].material == "brass"


def test_paint_skeleton_errors():
    """Unknown or missing materials and bad selections are rejected."""
    scene = _scene_with_frame()

    with pytest.raises(SelectionError):
        SkeletonBuilder().paint_skeleton(scene, "steel")

    scene.select("frame")
    with pytest.raises(ValueError, match="No material"):
        SkeletonBuilder().paint_skeleton(scene)
    with pytest.raises(ValueError, match="Unknown material"):
        SkeletonBuilder().paint_skeleton(scene, "gold")
    assert scene.groups["frame"].material is None
