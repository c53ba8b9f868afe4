"""Main CLI entry point."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import ezdxf
import yaml

from ..components.skeleton import ConversionReport, SkeletonBuilder
from ..components.template import TemplateGeometry, default_template
from ..export.dxf_writer import DXFWriter
from ..ingestion.dxf_reader import DXFReader
from ..scene.scene_graph import Group, Material
from ..shared.config import Settings, get_settings
from ..shared.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _default_output(dxf_path: str) -> Path:
    path = Path(dxf_path)
    return path.with_name(f"{path.stem}_skeleton.dxf")


def _load_template(
    settings: Settings,
    template_path: Optional[str] = None,
    block_name: Optional[str] = None,
) -> TemplateGeometry:
    path = template_path or settings.template.path
    if not path:
        return default_template()
    return TemplateGeometry.from_dxf(
        path,
        block_name=block_name or settings.template.block_name,
        name=settings.template.name,
    )


def create_skeleton(
    dxf_path: str,
    group_name: str,
    output_path: Optional[str] = None,
    template_path: Optional[str] = None,
    block_name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> ConversionReport:
    """Convert the edges of one group (layer) in a DXF drawing into a skeleton."""
    settings = settings or get_settings()
    logger.info(f"Creating skeleton for group '{group_name}' in {dxf_path}")

    scene = DXFReader(dxf_path).read_scene()
    template = _load_template(settings, template_path, block_name)

    builder = SkeletonBuilder(length_tolerance=settings.geometry.length_tolerance)
    scene.select(group_name)
    report = builder.create_skeleton(scene, template)

    output = Path(output_path) if output_path else _default_output(dxf_path)
    DXFWriter(settings.dxf.version).write(scene, output)
    return report


def paint_skeleton(
    dxf_path: str,
    group_name: str,
    material_name: str,
    color: Optional[int] = None,
    output_path: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Group:
    """Apply a material to one group (layer) of a DXF drawing."""
    settings = settings or get_settings()
    logger.info(f"Painting group '{group_name}' in {dxf_path} with '{material_name}'")

    scene = DXFReader(dxf_path).read_scene()
    if color is not None or material_name not in scene.materials:
        scene.add_material(Material(name=material_name, color=7 if color is None else color))
    scene.current_material = material_name

    scene.select(group_name)
    group = SkeletonBuilder().paint_skeleton(scene)

    output = Path(output_path) if output_path else _default_output(dxf_path)
    DXFWriter(settings.dxf.version).write(scene, output)
    return group


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skeleton",
        description="Replace the edges of a DXF layer with 3D polyline copies of a template.",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a skeleton from a group")
    create.add_argument("dxf_file", help="Input DXF drawing")
    create.add_argument("--group", required=True, help="Group (layer) to convert")
    create.add_argument("--template", help="DXF drawing holding the template geometry")
    create.add_argument("--block", help="Template block name (default: modelspace)")
    create.add_argument("-o", "--output", help="Output DXF (default: <input>_skeleton.dxf)")

    paint = subparsers.add_parser("paint", help="Paint a skeleton group")
    paint.add_argument("dxf_file", help="Input DXF drawing")
    paint.add_argument("--group", required=True, help="Group (layer) to paint")
    paint.add_argument("--material", required=True, help="Material name")
    paint.add_argument("--color", type=int, help="ACI color for a new material")
    paint.add_argument("-o", "--output", help="Output DXF (default: <input>_skeleton.dxf)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings(args.config)
        level = "DEBUG" if args.verbose else settings.logging.level
        setup_logging(level, settings.logging.file)

        if args.command == "create":
            report = create_skeleton(
                args.dxf_file,
                args.group,
                output_path=args.output,
                template_path=args.template,
                block_name=args.block,
                settings=settings,
            )
            print(
                f"Converted {report.converted} edges "
                f"({report.skipped} skipped, {report.polylines_added} polylines)"
            )
        elif args.command == "paint":
            group = paint_skeleton(
                args.dxf_file,
                args.group,
                args.material,
                color=args.color,
                output_path=args.output,
                settings=settings,
            )
            print(f"Painted group '{group.name}' with '{group.material}'")
    except (ValueError, OSError, ezdxf.DXFStructureError, yaml.YAMLError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
