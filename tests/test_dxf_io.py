"""Tests for DXF reading and writing."""

import ezdxf
import pytest

from skeleton.export.dxf_writer import DXFWriter
from skeleton.geometry.primitives import Point3
from skeleton.ingestion.dxf_reader import DXFReader
from skeleton.scene.scene_graph import Group, Material, SceneGraph


def _drawing():
    doc = ezdxf.new("R2010")
    doc.layers.new("FRAME", dxfattribs={"color": 3})
    msp = doc.modelspace()
    msp.add_line((0, 0, 0), (10, 0, 0), dxfattribs={"layer": "FRAME"})
    msp.add_line((10, 0, 0), (10, 0, 5), dxfattribs={"layer": "FRAME"})
    msp.add_polyline3d([(0, 0, 0), (1, 1, 1), (2, 0, 2)], dxfattribs={"layer": "FRAME"})
    msp.add_line((0, 5, 0), (5, 5, 0))
    msp.add_circle((0, 0), 1.0)
    return doc


def test_read_scene_groups_by_layer():
    """Lines and polylines are grouped by their layer."""
    scene = DXFReader.from_document(_drawing()).read_scene()

    assert set(scene.groups) == {"FRAME", "0"}
    frame = scene.groups["FRAME"]
    assert len(frame.edges) == 2
    assert frame.edges[1].end == Point3(x=10.0, y=0.0, z=5.0)
    assert len(frame.polylines) == 1
    assert frame.polylines[0].vertices[1] == Point3(x=1.0, y=1.0, z=1.0)
    assert len(scene.groups["0"].edges) == 1


def test_read_scene_registers_layer_materials():
    """Layer colors become materials named after the layer."""
    scene = DXFReader.from_document(_drawing()).read_scene()

    assert scene.materials["FRAME"].color == 3
    assert scene.groups["FRAME"].material == "FRAME"


def test_reader_missing_file(tmp_path):
    """Missing drawings raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        DXFReader(tmp_path / "nope.dxf")


def test_write_and_read_back(tmp_path):
    """Written drawings read back into the same groups."""
    scene = SceneGraph()
    scene.add_material(Material(name="steel", color=8))
    group = scene.add_group(Group(name="SKELETON", material="steel"))
    group.add_polyline([Point3(), Point3(x=1.0, y=2.0, z=3.0)])
    group.add_edge(Point3(), Point3(y=4.0))

    output = DXFWriter().write(scene, tmp_path / "out" / "skeleton.dxf")

    assert output.exists()
    doc = ezdxf.readfile(str(output))
    assert doc.layers.get("SKELETON").color == 8
    polylines = doc.modelspace().query("POLYLINE")
    assert len(polylines) == 1
    assert polylines[0].is_3d_polyline

    read_back = DXFReader(output).read_scene()
    skeleton = read_back.groups["SKELETON"]
    assert len(skeleton.edges) == 1
    assert skeleton.polylines[0].vertices == [Point3(), Point3(x=1.0, y=2.0, z=3.0)]


def test_writer_handles_default_layer():
    """Groups on layer 0 reuse the existing layer."""
    scene = SceneGraph()
    scene.add_group(Group(name="0")).add_edge(Point3(), Point3(x=1.0))

    doc = DXFWriter().to_document(scene)

    assert len(doc.modelspace().query("LINE")) == 1
