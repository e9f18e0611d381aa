#!/usr/bin/env python3
"""
Example: Compile an artwork document to per-ring symbol lists.

This demonstrates the full pipeline from document text to the flat
strings a ring renderer consumes.

Usage:
    python examples/compile_document.py
    # Creates: examples/output/flower.yaml

This walks through:
1. Parsing a document with variables, rings and a palette
2. Fitting each ring's pattern to its element count
3. Exporting the AST as YAML
"""

from pathlib import Path

import yaml

from chuk_mcp_wheelgen import compile_pattern_string, parse_document, parse_pattern
from chuk_mcp_wheelgen.language import PatternExpander, items_to_flat
from chuk_mcp_wheelgen.models import ElementCountNode

DOCUMENT = """\
;; Flower
variables:
@petal = $dh2
@leaf = mir(@petal)

rings:
O(9, 48): seq($dh2v, 3)
O(12, 24): seq(@petal, @leaf, 1) [A, B]
O(15, 16): space($dHl, 1)

palette:
A = triadic(baseHue: 200, saturation: 80)
B = hsb(40, 90, 95)

dot:
size: 3
visible: true
"""


def main() -> None:
    """Compile the flower document."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("CHUK Wheelgen Document Compiler")
    print("=" * 40)

    # Single expressions first
    for text in ("seq($d, $h, $l, 3)", "mir($dhlv)", "space($dhl, 2)", "dhl:7"):
        result = parse_pattern(text)
        flat = "".join(str(item) for item in result.expanded or [])
        print(f"  {text:<22} -> {flat}")
    print(f"  legacy 'd3hV'          -> {compile_pattern_string('d3hV')}")
    print()

    result = parse_document(DOCUMENT)
    if not result.success or result.ast is None:
        print(f"Parse failed: {result.error}")
        return

    ast = result.ast
    print(f"Variables: {', '.join(v.name for v in ast.variables)}")
    print(f"Palette: {', '.join(sorted(ast.palette or {}))}")
    print()

    print("Rings:")
    expander = PatternExpander({v.name: v.pattern for v in ast.variables})
    for ring in ast.rings:
        items = expander.expand(ElementCountNode(pattern=ring.pattern, count=ring.element_count))
        colors = ",".join(ring.colors) if ring.colors else "-"
        print(f"  r={ring.radius:<5} n={ring.element_count:<3} [{colors}] {items_to_flat(items)}")
    print()

    output_file = output_dir / "flower.yaml"
    output_file.write_text(
        yaml.safe_dump(ast.to_yaml_dict(), default_flow_style=False, sort_keys=False)
    )
    print(f"Written: {output_file}")


if __name__ == "__main__":
    main()
