"""DXF ingestion into the scene model"""

from .dxf_reader import DXFReader

__all__ = ["DXFReader"]
