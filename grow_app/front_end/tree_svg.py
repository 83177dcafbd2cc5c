# front_end/tree_svg.py

"""Turns the /tree/layout payload into an inline SVG picture."""

import logging
from html import escape
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

TRUNK_COLOR = "#8B5A2B"
BRANCH_COLOR = "#7B4A24"
LEAF_COLOR = "#4CAF50"
ROOT_COLOR = "#6D351E"
SOIL_COLOR = "#5D4037"
SKY_COLOR = "#E3F2FD"

SUBBRANCH_GAP = 20
ROOT_SPACING = 12
ROOT_LENGTH = 48
FADED_ROOT_LENGTH = 12
SOIL_HEIGHT = 64


def _leaf_svg(leaf: Dict[str, Any], end_x: float, y: float, is_left: bool, thickness: float) -> str:
    # Leaf offsets are measured from the outer end of the branch
    x = end_x + leaf["offset"] if is_left else end_x - leaf["offset"]
    cy = y - thickness / 2 + leaf["top"]
    opacity = 1.0 if leaf.get("completed") else 0.2
    radius = 6 if leaf.get("completed") else 4.5
    return (
        f'<ellipse cx="{x:.1f}" cy="{cy:.1f}" rx="{radius}" ry="{radius * 0.6:.1f}" '
        f'fill="{LEAF_COLOR}" opacity="{opacity}" transform="rotate(-45 {x:.1f} {cy:.1f})">'
        f'<title>{escape(leaf.get("title", ""))}</title></ellipse>'
    )


def _branch_svg(branch: Dict[str, Any], x: float, y: float) -> str:
    """One branch anchored at (x, y) plus its leaves and sub-branches."""
    is_left = branch.get("side") == "left"
    length = float(branch["length"])
    thickness = max(float(branch["thickness"]), 1.0)
    end_x = x - length if is_left else x + length
    parts: List[str] = [
        f'<g transform="rotate({branch["angle"]:.2f} {x:.1f} {y:.1f})">',
        f'<rect x="{min(x, end_x):.1f}" y="{y - thickness / 2:.1f}" width="{length:.1f}" '
        f'height="{thickness:.1f}" rx="2" fill="{BRANCH_COLOR}">'
        f'<title>{escape(branch.get("title", ""))} ({branch.get("progress", 0)}%)</title></rect>',
    ]
    parts.extend(_leaf_svg(leaf, end_x, y, is_left, thickness) for leaf in branch.get("leaves", []))
    children = branch.get("children", [])
    for idx, child in enumerate(children):
        child_y = y + (idx - (len(children) - 1) / 2) * SUBBRANCH_GAP
        parts.append(_branch_svg(child, end_x, child_y))
    parts.append("</g>")
    return "".join(parts)


def render_tree_svg(layout: Dict[str, Any], width: int = 800, height: int = 600) -> str:
    """
    Renders a TreeLayout dictionary as an SVG string. The trunk stands on the
    soil in the middle of the canvas, branches hang off its sides and roots
    spread below the soil line.
    """
    cx = width / 2
    ground = height - SOIL_HEIGHT
    trunk_width = float(layout.get("trunk_width", 20))
    trunk_height = min(float(layout.get("trunk_height", 150)), ground - 10)
    trunk_top = ground - trunk_height

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">',
        f'<rect x="0" y="0" width="{width}" height="{ground}" fill="{SKY_COLOR}"/>',
        f'<rect x="{cx - trunk_width / 2:.1f}" y="{trunk_top:.1f}" width="{trunk_width:.1f}" '
        f'height="{trunk_height:.1f}" rx="6" fill="{TRUNK_COLOR}"/>',
    ]

    for branch in layout.get("left", []):
        parts.append(_branch_svg(branch, cx - trunk_width / 2, trunk_top + float(branch.get("top") or 0)))
    for branch in layout.get("right", []):
        parts.append(_branch_svg(branch, cx + trunk_width / 2, trunk_top + float(branch.get("top") or 0)))

    parts.append(f'<rect x="0" y="{ground}" width="{width}" height="{SOIL_HEIGHT}" fill="{SOIL_COLOR}"/>')
    roots = layout.get("roots", [])
    for root in roots:
        rx = cx + (root["index"] - (len(roots) - 1) / 2) * ROOT_SPACING
        completed = root.get("completed", False)
        root_length = ROOT_LENGTH if completed else FADED_ROOT_LENGTH
        parts.append(
            f'<line x1="{rx:.1f}" y1="{ground}" x2="{rx:.1f}" y2="{ground + root_length}" '
            f'stroke="{ROOT_COLOR}" stroke-width="4" stroke-linecap="round" '
            f'opacity="{1.0 if completed else 0.3}" transform="rotate({root["angle"]:.2f} {rx:.1f} {ground})">'
            f'<title>{escape(root.get("title", ""))}</title></line>'
        )
    parts.append("</svg>")
    logger.debug("Rendered tree SVG with %d left, %d right branches.", len(layout.get("left", [])), len(layout.get("right", [])))
    return "".join(parts)
