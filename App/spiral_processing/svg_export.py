"""SVG export of a spiral path."""

from itertools import chain

import svg

from models import SpiralParameters, SpiralPath

from .synthesizer import clip_radius

CLIP_ID = "spiral-clip"
WIDTH_STEP = 0.1  # px, widths are snapped to this step to merge segments


def _width_runs(path: SpiralPath) -> "list[tuple[float, list[tuple[float, float]]]]":
    """Group consecutive segments that share a snapped width into polylines.

    Returns:
        List of (width, points) where neighbouring runs share an end point
    """
    runs: "list[tuple[float, list[tuple[float, float]]]]" = []
    current_width = None
    points: "list[tuple[float, float]]" = []

    for x0, y0, x1, y1, width in path.segments():
        snapped = round(round(width / WIDTH_STEP) * WIDTH_STEP, 3)
        if snapped != current_width:
            if points:
                runs.append((current_width, points))
            current_width = snapped
            points = [(x0, y0)]
        points.append((x1, y1))

    if points:
        runs.append((current_width, points))
    return runs


def spiral_path_to_svg(path: SpiralPath, params: SpiralParameters) -> str:
    """Convert a spiral path to an SVG document string.

    Args:
        path: Spiral samples in canvas coordinates
        params: Parameters the path was synthesized with

    Returns:
        SVG content as string, resolution x resolution user units
    """
    size = params.resolution

    strokes: "list[svg.Element]" = []
    for width, points in _width_runs(path):
        # Round to keep the document small; 0.01px is far below visible
        flat: "list[float]" = [round(v, 2) for v in chain.from_iterable(points)]
        strokes.append(
            svg.Polyline(
                points=flat,  # type: ignore[arg-type]
                stroke="black",
                stroke_width=width,
                stroke_linecap="round",
                stroke_linejoin="round",
                fill="none",
            )
        )

    elements: "list[svg.Element]" = [
        svg.Rect(x=0, y=0, width=size, height=size, fill="white"),
    ]

    radius = clip_radius(params)
    if params.crop_to_circle:
        elements.append(
            svg.Defs(
                elements=[
                    svg.ClipPath(
                        id=CLIP_ID,
                        elements=[
                            svg.Circle(cx=size / 2, cy=size / 2, r=max(0.0, radius))
                        ],
                    )
                ]
            )
        )
        elements.append(svg.G(clip_path=f"url(#{CLIP_ID})", elements=strokes))
    else:
        elements.extend(strokes)

    return svg.SVG(
        width=size,
        height=size,
        viewBox=svg.ViewBoxSpec(0, 0, size, size),
        elements=elements,
    ).as_str()
