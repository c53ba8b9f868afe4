"""Generate sample DXF files: a 3D frame and a polyline template."""

from pathlib import Path

import ezdxf


def create_frame_dxf(output_path: Path):
    """Create a tower-like 3D frame on layer FRAME."""
    doc = ezdxf.new("R2010")
    doc.layers.new("FRAME", dxfattribs={"color": 3})
    msp = doc.modelspace()
    
    # Frame parameters (inches)
    width = 12.0
    height = 36.0
    levels = 3
    
    corners = [(0, 0), (width, 0), (width, width), (0, width)]
    level_height = height / levels
    
    for level in range(levels + 1):
        z = level * level_height
        # Horizontal ring
        for i, (x1, y1) in enumerate(corners):
            x2, y2 = corners[(i + 1) % len(corners)]
            msp.add_line((x1, y1, z), (x2, y2, z), dxfattribs={"layer": "FRAME"})
        
        if level == levels:
            break
        
        # Vertical posts
        z_next = z + level_height
        for x, y in corners:
            msp.add_line((x, y, z), (x, y, z_next), dxfattribs={"layer": "FRAME"})
        
        # Diagonal bracing, alternating direction per level
        for i, (x1, y1) in enumerate(corners):
            x2, y2 = corners[(i + 1) % len(corners)]
            if level % 2:
                msp.add_line((x1, y1, z), (x2, y2, z_next), dxfattribs={"layer": "FRAME"})
            else:
                msp.add_line((x2, y2, z), (x1, y1, z_next), dxfattribs={"layer": "FRAME"})
    
    doc.saveas(str(output_path))
    print(f"Created frame DXF: {output_path}")


def create_template_dxf(output_path: Path):
    """Create a 1 inch polyline template in block POLY3D."""
    doc = ezdxf.new("R2010")
    block = doc.blocks.new(name="POLY3D")
    
    # Unit segment along +X with a small kink above the centre line
    block.add_polyline3d([
        (0.0, 0.0, 0.0),
        (0.45, 0.0, 0.0),
        (0.5, 0.0, 0.05),
        (0.55, 0.0, 0.0),
        (1.0, 0.0, 0.0),
    ])
    
    doc.saveas(str(output_path))
    print(f"Created template DXF: {output_path}")


def main():
    """Generate all sample files."""
    samples_dir = Path(__file__).parent.parent / "samples"
    samples_dir.mkdir(exist_ok=True)
    
    create_frame_dxf(samples_dir / "frame.dxf")
    create_template_dxf(samples_dir / "polyline3d_template.dxf")
    
    print(f"\nSamples written to {samples_dir}")


if __name__ == "__main__":
    main()
