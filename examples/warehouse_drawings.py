#!/usr/bin/env python3
"""
Warehouse Drawing Set Example

Loads the members in warehouse_frame.yaml and produces the default three
sheet drawing set:
- Structural plan (1:100)
- Foundation plan (1:50)
- Beam reinforcement details (1:25)

Outputs:
- One SVG and one PNG per sheet
- Multi-page PDF of the whole set
"""

from pathlib import Path

from structdraw import StructuralDrawing, load_structural_elements
from structdraw.drawing_generator import DrawingElement


def main():
    here = Path(__file__).parent
    output_dir = here / "output"
    output_dir.mkdir(exist_ok=True)

    print("Warehouse Drawing Set Example")
    print("=" * 50)

    elements, project = load_structural_elements(here / "warehouse_frame.yaml")
    print(f"Loaded {len(elements)} members for {project.name}")

    drawing = StructuralDrawing(structural_elements=elements, project_info=project)

    # A manual note survives regeneration
    drawing.add_element(
        DrawingElement.text("general-notes", "Text", 40, 60, "ALL DIMENSIONS IN MM", font_size=4)
    )

    for index, sheet in enumerate(drawing.sheets):
        drawing.set_active_sheet(index)
        drawing.reset_view()
        svg_path = output_dir / f"sheet_{sheet.id}.svg"
        png_path = output_dir / f"sheet_{sheet.id}.png"
        drawing.export_svg(svg_path)
        drawing.export_png(png_path)
        print(f"  {sheet.title_block.drawing_number} {sheet.name}: {len(sheet.elements)} elements")

    # Close-up of the beam section with reinforcement only
    drawing.set_active_sheet(2)
    drawing.toggle_layer("Dimensions")
    drawing.toggle_grid()
    for _ in range(4):
        drawing.zoom_in()
    drawing.pan_by(-600, -300)
    drawing.export_png(output_dir / "beam_section_closeup.png")
    print("Exported close-up: beam_section_closeup.png")

    pdf_path = output_dir / "warehouse_set.pdf"
    drawing.export_pdf(pdf_path, all_sheets=True)
    print(f"Exported PDF: {pdf_path}")

    print("\n" + "=" * 50)
    print("Done!")


if __name__ == "__main__":
    main()
