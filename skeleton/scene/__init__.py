"""Scene model: groups, edges, polylines and undoable operations"""

from .scene_graph import Edge, Group, Material, Polyline3D, SceneGraph, SelectionError

__all__ = ["Edge", "Group", "Material", "Polyline3D", "SceneGraph", "SelectionError"]
