"""Template geometry and skeleton conversion"""

from .skeleton import ConversionReport, SkeletonBuilder
from .template import TemplateError, TemplateGeometry, default_template, template_definition

__all__ = [
    "ConversionReport",
    "SkeletonBuilder",
    "TemplateError",
    "TemplateGeometry",
    "default_template",
    "template_definition",
]
