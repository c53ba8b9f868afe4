"""Basic usage example for Skeleton."""

from pathlib import Path

from skeleton.cli.main import create_skeleton, paint_skeleton
from skeleton.geometry import Point3, segment_transform
from skeleton.shared import setup_logging


def main():
    """Example usage of the skeleton pipeline."""
    setup_logging("INFO")
    samples = Path(__file__).parent.parent / "samples"
    frame_path = samples / "frame.dxf"
    template_path = samples / "polyline3d_template.dxf"
    
    # Example 1: Place the unit template on a single segment
    print("=" * 60)
    print("Example 1: Segment transform")
    print("=" * 60)
    
    start = Point3(x=1.0, y=2.0, z=0.0)
    end = Point3(x=4.0, y=6.0, z=12.0)
    transform = segment_transform(start, end)
    print(f"  (0,0,0) -> {transform.apply(Point3()).as_tuple()}")
    print(f"  (1,0,0) -> {transform.apply(Point3(x=1.0)).as_tuple()}")
    
    # Example 2: Convert the FRAME layer of a drawing
    print("\n" + "=" * 60)
    print("Example 2: Creating a skeleton")
    print("=" * 60)
    
    if not frame_path.exists():
        print(f"\n⚠ Sample DXF not found: {frame_path}")
        print("  Run: python scripts/generate_samples.py")
        return
    
    output_path = Path("output") / "frame_skeleton.dxf"
    report = create_skeleton(
        str(frame_path),
        "FRAME",
        output_path=str(output_path),
        template_path=str(template_path) if template_path.exists() else None,
        block_name="POLY3D",
    )
    print(f"\n✓ Converted {report.converted} edges into {report.polylines_added} polylines")
    
    # Example 3: Paint the result
    group = paint_skeleton(str(output_path), "FRAME", "steel", color=8, output_path=str(output_path))
    print(f"✓ Painted '{group.name}' with '{group.material}'")
    print(f"\nCheck {output_path} for the result")


if __name__ == "__main__":
    main()
