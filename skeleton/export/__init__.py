"""DXF export of the scene model"""

from .dxf_writer import DXFWriter

__all__ = ["DXFWriter"]
