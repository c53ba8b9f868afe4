"""Tests for template geometry loading."""

import ezdxf
import pytest

from skeleton.components.template import (
    TemplateError,
    TemplateGeometry,
    default_template,
    template_definition,
)
from skeleton.geometry.primitives import Point3
from skeleton.scene.scene_graph import SceneGraph


def _save_template_drawing(path, block_points=None, modelspace_line=False):
    doc = ezdxf.new("R2010")
    if block_points is not None:
        block = doc.blocks.new(name="POLY3D")
        block.add_polyline3d(block_points)
    if modelspace_line:
        doc.modelspace().add_line((0, 0, 0), (1, 0, 0))
    doc.saveas(str(path))
    return path


def test_default_template_is_unit_segment():
    """The built-in template is a unit segment along +X."""
    template = default_template()

    assert template.polylines == [[Point3(), Point3(x=1.0)]]
    assert template.is_unit_length()
    assert template.x_extent == (0.0, 1.0)


def test_load_template_from_block(tmp_path):
    """3D polylines in a named block become template polylines."""
    points = [(0, 0, 0), (0.5, 0.0, 0.1), (1, 0, 0)]
    path = _save_template_drawing(tmp_path / "template.dxf", block_points=points)

    template = TemplateGeometry.from_dxf(path, block_name="POLY3D")

    assert template.name == "POLY3D"
    assert len(template.polylines) == 1
    assert template.polylines[0] == [Point3.from_iterable(p) for p in points]


def test_load_template_from_modelspace(tmp_path):
    """Without a block name the modelspace is used."""
    path = _save_template_drawing(tmp_path / "unit.dxf", modelspace_line=True)

    template = TemplateGeometry.from_dxf(path, name="unit")

    assert template.name == "unit"
    assert template.polylines == [[Point3(), Point3(x=1.0)]]


def test_load_template_errors(tmp_path):
    """Missing files, missing blocks and empty layouts are reported."""
    with pytest.raises(FileNotFoundError):
        TemplateGeometry.from_dxf(tmp_path / "missing.dxf")

    path = _save_template_drawing(tmp_path / "empty.dxf")
    with pytest.raises(TemplateError, match="Block not found"):
        TemplateGeometry.from_dxf(path, block_name="NOPE")
    with pytest.raises(TemplateError, match="no lines or polylines"):
        TemplateGeometry.from_dxf(path)


def test_non_unit_template_warns(tmp_path, caplog):
    """A template that does not span [0, 1] on X is loaded with a warning."""
    path = _save_template_drawing(tmp_path / "long.dxf", block_points=[(0, 0, 0), (2.54, 0, 0)])

    with caplog.at_level("WARNING", logger="skeleton"):
        template = TemplateGeometry.from_dxf(path, block_name="POLY3D")

    assert not template.is_unit_length()
    assert "expected the unit interval" in caplog.text


def test_template_definition_is_released():
    """The definition is registered inside the block and removed afterwards."""
    scene = SceneGraph()
    template = default_template()

    with template_definition(scene, template) as definition:
        assert scene.definitions[template.name] is definition

    assert scene.definitions == {}


def test_template_definition_released_on_error():
    """The definition is removed even when the block raises."""
    scene = SceneGraph()

    with pytest.raises(RuntimeError):
        with template_definition(scene, default_template()):
            raise RuntimeError("abort")

    assert scene.definitions == {}


def test_template_definition_restores_replaced_definition():
    """A definition registered under the same name is put back on exit."""
    scene = SceneGraph()
    existing = TemplateGeometry(name="polyline3d", polylines=[[Point3(), Point3(x=2.0)]])
    scene.definitions["polyline3d"] = existing

    with template_definition(scene, default_template()) as definition:
        assert scene.definitions["polyline3d"] is definition

    assert scene.definitions == {"polyline3d": existing}


def test_template_definition_restores_replaced_definition_on_error():
    """The replaced definition is put back when the block raises."""
    scene = SceneGraph()
    scene.definitions["polyline3d"] = "existing"

    with pytest.raises(RuntimeError):
        with template_definition(scene, default_template()):
            raise RuntimeError("abort")

    assert scene.definitions["polyline3d"] == "existing"
