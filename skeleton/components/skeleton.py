"""Replace a group's edges with placed copies of the template geometry."""

import logging
from typing import Optional

from pydantic import BaseModel

from ..geometry.transform import LENGTH_TOLERANCE, segment_transform
from ..scene.scene_graph import Group, SceneGraph
from .template import TemplateGeometry, default_template, template_definition

logger = logging.getLogger(__name__)


class ConversionReport(BaseModel):
    """Counts from converting one group."""
    group: str
    converted: int = 0
    skipped: int = 0
    polylines_added: int = 0
    edges_removed: int = 0


class SkeletonBuilder:
    """Builds skeletons: polyline copies of a template placed along edges."""

    def __init__(self, length_tolerance: float = LENGTH_TOLERANCE):
        """
        Initialize builder.

        Args:
            length_tolerance: Edges shorter than this are skipped
        """
        self.length_tolerance = length_tolerance

    def convert_edges(self, group: Group, template: TemplateGeometry) -> ConversionReport:
        """
        Replace every edge in ``group`` with a scaled copy of ``template``.

        Each template polyline is placed with the edge's segment transform and
        added to the group as a plain polyline. All input edges, including
        skipped zero-length ones, are removed afterwards.

        Returns:
            ConversionReport with counts
        """
        report = ConversionReport(group=group.name)
        edges = list(group.edges)

        for edge in edges:
            if edge.length <= self.length_tolerance:
                logger.warning(f"Skipping zero-length edge {edge.id} in group '{group.name}'")
                report.skipped += 1
                continue

            transform = segment_transform(edge.start, edge.end, self.length_tolerance)
            for vertices in template.polylines:
                group.add_polyline([transform.apply(p) for p in vertices])
                report.polylines_added += 1
            report.converted += 1

        report.edges_removed = group.remove_edges(edges)
        logger.info(
            f"Converted {report.converted} edges in group '{group.name}' "
            f"({report.skipped} skipped, {report.polylines_added} polylines added)"
        )
        return report

    def create_skeleton(
        self,
        scene: SceneGraph,
        template: Optional[TemplateGeometry] = None,
    ) -> ConversionReport:
        """
        Convert the selected group into a skeleton as one operation.

        Raises:
            SelectionError: Unless exactly one group is selected
        """
        group = scene.selected_group()
        if template is None:
            template = default_template()

        with scene.operation("Create Skeleton"):
            with template_definition(scene, template) as definition:
                report = self.convert_edges(group, definition)

        scene.clear_selection()
        return report

    def paint_skeleton(self, scene: SceneGraph, material: Optional[str] = None) -> Group:
        """
        Apply ``material`` (or the scene's current material) to the selected group.

        Raises:
            SelectionError: Unless exactly one group is selected
            ValueError: If no material is given and none is current
        """
        group = scene.selected_group()
        material = material or scene.current_material
        if material is None:
            raise ValueError("No material given and no current material set")
        if material not in scene.materials:
            raise ValueError(f"Unknown material: {material}")

        with scene.operation("Paint Skeleton"):
            group.material = material

        scene.clear_selection()
        logger.info(f"Painted group '{group.name}' with '{material}'")
        return group
