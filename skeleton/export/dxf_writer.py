"""Export a scene graph to DXF format."""

import logging
from pathlib import Path
from typing import Any

import ezdxf
from ezdxf import colors

from ..scene.scene_graph import Group, SceneGraph

logger = logging.getLogger(__name__)


class DXFWriter:
    """Write scene groups to a DXF drawing, one layer per group."""

    def __init__(self, dxf_version: str = "R2010"):
        self.dxf_version = dxf_version

    def to_document(self, scene: SceneGraph) -> Any:
        """
        Build an ezdxf document for the scene.

        Edges become LINE entities and polylines become 3D POLYLINE entities
        on the group's layer; the layer color comes from the group material.
        """
        doc = ezdxf.new(self.dxf_version)
        msp = doc.modelspace()

        for group in scene.groups.values():
            self._setup_layer(doc, scene, group)
            attribs = {"layer": group.name}
            for edge in group.edges:
                msp.add_line(edge.start.as_tuple(), edge.end.as_tuple(), dxfattribs=attribs)
            for polyline in group.polylines:
                msp.add_polyline3d(
                    [p.as_tuple() for p in polyline.vertices],
                    dxfattribs=attribs,
                )
        return doc

    def write(self, scene: SceneGraph, output_path: str | Path) -> Path:
        """
        Export scene graph to a DXF file.

        Args:
            scene: Scene graph to export
            output_path: Path to output DXF file

        Returns:
            The written path
        """
        doc = self.to_document(scene)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        doc.saveas(str(output_path))
        logger.info(f"Wrote {len(scene.groups)} groups to {output_path}")
        return output_path

    def _setup_layer(self, doc: Any, scene: SceneGraph, group: Group):
        material = scene.materials.get(group.material) if group.material else None
        color = material.color if material else colors.WHITE
        if group.name in doc.layers:
            doc.layers.get(group.name).color = color
        else:
            doc.layers.new(group.name, dxfattribs={"color": color})
