"""Report layer: fixed-width text rendering of RCA reports."""

from pod_rca.report.renderer import BOX_WIDTH, MAX_WORD_LENGTH, render, render_lines

__all__ = [
    "BOX_WIDTH",
    "MAX_WORD_LENGTH",
    "render",
    "render_lines",
]
