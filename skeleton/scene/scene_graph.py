"""Scene model of groups, edges and 3D polylines."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr

from ..geometry.primitives import Point3

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid4().hex[:12]


class SelectionError(ValueError):
    """Raised when a command needs exactly one selected group."""


class Edge(BaseModel):
    """Straight edge between two points."""
    id: str = Field(default_factory=_new_id, description="Unique edge identifier")
    start: Point3
    end: Point3

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


class Polyline3D(BaseModel):
    """Open 3D polyline."""
    id: str = Field(default_factory=_new_id, description="Unique polyline identifier")
    vertices: List[Point3] = Field(default_factory=list)


class Material(BaseModel):
    """Named material mapped to an AutoCAD color index."""
    name: str
    color: int = Field(default=7, ge=0, le=256, description="ACI color")


class Group(BaseModel):
    """A named collection of edges and polylines."""
    name: str = Field(..., description="Group name (DXF layer)")
    edges: List[Edge] = Field(default_factory=list)
    polylines: List[Polyline3D] = Field(default_factory=list)
    material: Optional[str] = Field(None, description="Material name")

    def add_edge(self, start: Point3, end: Point3) -> Edge:
        edge = Edge(start=start, end=end)
        self.edges.append(edge)
        return edge

    def add_polyline(self, vertices: List[Point3]) -> Polyline3D:
        polyline = Polyline3D(vertices=list(vertices))
        self.polylines.append(polyline)
        return polyline

    def remove_edges(self, edges: List[Edge]) -> int:
        """Remove the given edges; returns how many were removed."""
        ids = {edge.id for edge in edges}
        before = len(self.edges)
        self.edges = [edge for edge in self.edges if edge.id not in ids]
        return before - len(self.edges)


class SceneGraph(BaseModel):
    """Editable scene with a selection and undoable operations."""
    groups: Dict[str, Group] = Field(
        default_factory=dict, description="Groups indexed by name"
    )
    materials: Dict[str, Material] = Field(
        default_factory=dict, description="Materials indexed by name"
    )
    current_material: Optional[str] = Field(None, description="Material used by paint")
    selection: List[str] = Field(default_factory=list, description="Selected group names")
    definitions: Dict[str, Any] = Field(
        default_factory=dict, description="Loaded component definitions"
    )
    metadata: Dict = Field(default_factory=dict)

    _undo_stack: List[Tuple[str, Dict[str, Group], Dict[str, Material]]] = PrivateAttr(
        default_factory=list
    )

    def get_group(self, name: str) -> Optional[Group]:
        return self.groups.get(name)

    def add_group(self, group: Group) -> Group:
        self.groups[group.name] = group
        return group

    def remove_group(self, name: str):
        self.groups.pop(name, None)
        if name in self.selection:
            self.selection.remove(name)

    def add_material(self, material: Material) -> Material:
        self.materials[material.name] = material
        return material

    def select(self, *names: str):
        """Replace the selection with the given group names."""
        self.selection = list(names)

    def clear_selection(self):
        self.selection = []

    def selected_group(self) -> Group:
        """
        Return the single selected group.

        Raises:
            SelectionError: Unless exactly one existing group is selected
        """
        if len(self.selection) != 1:
            raise SelectionError("Please select a group")
        group = self.groups.get(self.selection[0])
        if group is None:
            raise SelectionError("Please select a group")
        return group

    def _snapshot(self) -> Tuple[Dict[str, Group], Dict[str, Material]]:
        groups = {name: group.model_copy(deep=True) for name, group in self.groups.items()}
        materials = {name: mat.model_copy(deep=True) for name, mat in self.materials.items()}
        return groups, materials

    @contextmanager
    def operation(self, name: str) -> Iterator["SceneGraph"]:
        """
        Run a block of edits as one undoable operation.

        Group and material changes are rolled back if the block raises;
        the exception is re-raised.
        """
        groups, materials = self._snapshot()
        logger.debug(f"Start operation: {name}")
        try:
            yield self
        except Exception:
            self.groups = groups
            self.materials = materials
            logger.warning(f"Aborted operation: {name}")
            raise
        self._undo_stack.append((name, groups, materials))
        logger.info(f"Committed operation: {name}")

    @property
    def undo_names(self) -> List[str]:
        return [name for name, _, _ in self._undo_stack]

    def undo(self) -> Optional[str]:
        """Revert the last committed operation; returns its name."""
        if not self._undo_stack:
            return None
        name, groups, materials = self._undo_stack.pop()
        self.groups = groups
        self.materials = materials
        self.selection = [n for n in self.selection if n in self.groups]
        logger.info(f"Undid operation: {name}")
        return name
