"""Read DXF drawings into a scene graph."""

import logging
from pathlib import Path
from typing import List

import ezdxf

from ..geometry.primitives import Point3
from ..scene.scene_graph import Group, Material, SceneGraph

logger = logging.getLogger(__name__)


class DXFReader:
    """Build a scene graph from the modelspace of a DXF drawing.

    Entities are grouped by layer: each layer becomes a group of the same
    name and each layer color is registered as a material.
    """

    def __init__(self, dxf_path: str | Path):
        """Initialize reader with DXF file path."""
        self.dxf_path = Path(dxf_path)
        if not self.dxf_path.exists():
            raise FileNotFoundError(f"DXF file not found: {dxf_path}")

        self.doc = ezdxf.readfile(str(self.dxf_path))
        self.modelspace = self.doc.modelspace()

    @classmethod
    def from_document(cls, doc) -> "DXFReader":
        """Wrap an already loaded ezdxf document."""
        reader = cls.__new__(cls)
        reader.dxf_path = Path(doc.filename) if doc.filename else None
        reader.doc = doc
        reader.modelspace = doc.modelspace()
        return reader

    def read_scene(self) -> SceneGraph:
        """Read LINE and polyline entities into groups."""
        scene = SceneGraph()
        scene.metadata = {
            "source": str(self.dxf_path) if self.dxf_path else None,
            "dxfversion": self.doc.dxfversion,
            "units": self.doc.units,
        }

        skipped = 0
        for entity in self.modelspace:
            entity_type = entity.dxftype()
            layer = entity.dxf.layer
            if entity_type == "LINE":
                group = self._group_for(scene, layer)
                group.add_edge(
                    Point3.from_iterable(entity.dxf.start),
                    Point3.from_iterable(entity.dxf.end),
                )
            elif entity_type in ("POLYLINE", "LWPOLYLINE"):
                vertices = self._polyline_vertices(entity)
                if len(vertices) >= 2:
                    self._group_for(scene, layer).add_polyline(vertices)
            else:
                skipped += 1

        if skipped:
            logger.debug(f"Ignored {skipped} unsupported entities")
        logger.info(
            f"Read {len(scene.groups)} groups from "
            f"{self.dxf_path.name if self.dxf_path else 'document'}"
        )
        return scene

    def _group_for(self, scene: SceneGraph, layer: str) -> Group:
        group = scene.get_group(layer)
        if group is None:
            group = scene.add_group(Group(name=layer))
            if layer in self.doc.layers:
                color = abs(self.doc.layers.get(layer).color)
                scene.add_material(Material(name=layer, color=color))
                group.material = layer
        return group

    def _polyline_vertices(self, entity) -> List[Point3]:
        if entity.dxftype() == "LWPOLYLINE":
            points = [Point3.from_iterable(p) for p in entity.vertices_in_wcs()]
            closed = entity.closed
        else:
            points = [Point3.from_iterable(p) for p in entity.points()]
            closed = entity.is_closed
        if closed and points:
            points.append(points[0])
        return points

    def get_layers(self) -> List[str]:
        """Get list of layer names in the DXF."""
        return [layer.dxf.name for layer in self.doc.layers]
