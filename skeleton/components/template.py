"""Template geometry placed along every converted edge."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import ezdxf
from pydantic import BaseModel, Field

from ..geometry.primitives import Point3
from ..scene.scene_graph import SceneGraph

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "polyline3d"
UNIT_TOLERANCE = 1e-6


class TemplateError(ValueError):
    """Raised when a template drawing has no usable geometry."""


class TemplateGeometry(BaseModel):
    """
    Polylines authored in a local frame.

    The template is expected to span the unit interval along local +X, from
    the origin to ``(1, 0, 0)``; it is scaled along X to each edge's length.
    """
    name: str = DEFAULT_TEMPLATE_NAME
    polylines: List[List[Point3]] = Field(default_factory=list)

    @property
    def x_extent(self) -> tuple:
        xs = [p.x for polyline in self.polylines for p in polyline]
        if not xs:
            return (0.0, 0.0)
        return (min(xs), max(xs))

    def is_unit_length(self, tolerance: float = UNIT_TOLERANCE) -> bool:
        low, high = self.x_extent
        return abs(low) <= tolerance and abs(high - 1.0) <= tolerance

    @classmethod
    def from_dxf(
        cls,
        dxf_path: str | Path,
        block_name: Optional[str] = None,
        name: Optional[str] = None,
    ) -> "TemplateGeometry":
        """
        Load a template from a DXF drawing.

        Args:
            dxf_path: Drawing containing the template geometry
            block_name: Block holding the geometry; modelspace when omitted
            name: Template name (defaults to the block name or file stem)

        Returns:
            TemplateGeometry built from LINE and polyline entities

        Raises:
            FileNotFoundError: If the drawing does not exist
            TemplateError: If the block is missing or holds no usable geometry
        """
        dxf_path = Path(dxf_path)
        if not dxf_path.exists():
            raise FileNotFoundError(f"Template DXF not found: {dxf_path}")

        doc = ezdxf.readfile(str(dxf_path))
        if block_name:
            layout = doc.blocks.get(block_name)
            if layout is None:
                raise TemplateError(f"Block not found in {dxf_path.name}: {block_name}")
        else:
            layout = doc.modelspace()

        template = cls.from_entities(layout, name or block_name or dxf_path.stem)
        logger.info(
            f"Loaded template '{template.name}' from {dxf_path} "
            f"({len(template.polylines)} polylines)"
        )
        return template

    @classmethod
    def from_entities(cls, entities, name: str = DEFAULT_TEMPLATE_NAME) -> "TemplateGeometry":
        """Build a template from an iterable of ezdxf entities."""
        polylines = []
        for entity in entities:
            entity_type = entity.dxftype()
            if entity_type == "LINE":
                polylines.append([
                    Point3.from_iterable(entity.dxf.start),
                    Point3.from_iterable(entity.dxf.end),
                ])
            elif entity_type == "POLYLINE":
                points = [Point3.from_iterable(p) for p in entity.points()]
                if entity.is_closed and points:
                    points.append(points[0])
                polylines.append(points)
            elif entity_type == "LWPOLYLINE":
                points = [Point3.from_iterable(p) for p in entity.vertices_in_wcs()]
                if entity.closed and points:
                    points.append(points[0])
                polylines.append(points)

        polylines = [p for p in polylines if len(p) >= 2]
        if not polylines:
            raise TemplateError(f"Template '{name}' contains no lines or polylines")

        template = cls(name=name, polylines=polylines)
        if not template.is_unit_length():
            low, high = template.x_extent
            logger.warning(
                f"Template '{name}' spans x=[{low:g}, {high:g}], "
                "expected the unit interval [0, 1]"
            )
        return template


def default_template() -> TemplateGeometry:
    """Single unit segment along +X."""
    return TemplateGeometry(
        name=DEFAULT_TEMPLATE_NAME,
        polylines=[[Point3(), Point3(x=1.0)]],
    )


@contextmanager
def template_definition(scene: SceneGraph, template: TemplateGeometry) -> Iterator[TemplateGeometry]:
    """
    Register ``template`` as a scene definition for the duration of a block.

    On every exit path the definition is removed, or a definition it
    replaced is put back.
    """
    replacing = template.name in scene.definitions
    previous = scene.definitions.get(template.name)
    if replacing:
        logger.debug(f"Replacing definition: {template.name}")
    scene.definitions[template.name] = template
    logger.debug(f"Loaded definition: {template.name}")
    try:
        yield template
    finally:
        if replacing:
            scene.definitions[template.name] = previous
        else:
            scene.definitions.pop(template.name, None)
        logger.debug(f"Released definition: {template.name}")
