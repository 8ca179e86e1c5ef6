"""Fixed-width box rendering of an RcaReport.

Every line of the output is exactly ``BOX_WIDTH`` characters, border glyphs
included, whatever the report contains. Only str methods and float
formatting are used, so the output does not depend on locale.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pod_rca.diagnosis.models import RcaReport

BOX_WIDTH = 86
CONTENT_WIDTH = BOX_WIDTH - 2
TITLE_MAX_LENGTH = 76
CONFIDENCE_LABEL_WIDTH = 60
MAX_WORD_LENGTH = CONTENT_WIDTH - 2

BULLET = "•"
NOT_AVAILABLE = "N/A"
ELLIPSIS = "..."

_LEFT = "║"
_RIGHT = "║"
_MARGIN = _LEFT + " "

TOP_RULE = "╔" + "═" * CONTENT_WIDTH + "╗"
MID_RULE = "╠" + "═" * CONTENT_WIDTH + "╣"
BOTTOM_RULE = "╚" + "═" * CONTENT_WIDTH + "╝"


def _close(line: str) -> str:
    """Pad a partial line up to the right border and close it."""
    return line.ljust(BOX_WIDTH - 1) + _RIGHT


def _label(text: str) -> str:
    return _close(_MARGIN + text)


def truncate(text: str | None, max_length: int) -> str:
    """Cut text to max_length, marking the cut with a trailing '...'."""
    if text is None:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def _hard_wrap(token: str) -> Iterator[str]:
    for start in range(0, len(token), MAX_WORD_LENGTH):
        yield _close(_MARGIN + token[start : start + MAX_WORD_LENGTH])


def _wrap_tokens(tokens: Iterable[str]) -> Iterator[str]:
    line = _MARGIN
    for token in tokens:
        if len(token) > MAX_WORD_LENGTH:
            if line != _MARGIN:
                yield _close(line)
                line = _MARGIN
            yield from _hard_wrap(token)
            continue
        if len(line) + len(token) + 1 >= BOX_WIDTH - 1:
            yield _close(line)
            line = _MARGIN
        line += token + " "
    if line != _MARGIN:
        yield _close(line)


def wrap(text: str | None) -> tuple[str, ...]:
    """Word-wrap text into bordered lines; blank text becomes a single N/A line."""
    tokens = text.split() if text else []
    if not tokens:
        return (_label(NOT_AVAILABLE),)
    return tuple(_wrap_tokens(tokens))


def wrap_bullet(entry: str | None) -> tuple[str, ...]:
    tokens = (entry.split() if entry else []) or [NOT_AVAILABLE]
    return tuple(_wrap_tokens([BULLET, *tokens]))


def _section(heading: str, body: Iterable[str]) -> tuple[str, ...]:
    return (MID_RULE, _label(heading), *body)


def render_lines(report: RcaReport) -> tuple[str, ...]:
    """Build the report box as an immutable sequence of lines."""
    title = " ".join(report.title.split()) if report.title else report.title
    confidence = report.validation_confidence if report.validation_confidence is not None else 0.0

    lines = [
        TOP_RULE,
        _LEFT + "RCA REPORT".center(CONTENT_WIDTH) + _RIGHT,
        MID_RULE,
        f"{_MARGIN}Title: {truncate(title, TITLE_MAX_LENGTH):<{TITLE_MAX_LENGTH}}{_RIGHT}",
    ]
    lines.extend(_section("Issue Description:", wrap(report.issue)))
    lines.extend(_section("Evidence:", wrap(report.evidence)))
    lines.extend(_section("Proposed Solution:", wrap(report.proposed_solution)))
    if report.supported_logs:
        body = [line for entry in report.supported_logs for line in wrap_bullet(entry)]
        lines.extend(_section("Supported Logs:", body))
    lines.append(MID_RULE)
    lines.append(f"{_MARGIN}Validation Confidence: {confidence:<{CONFIDENCE_LABEL_WIDTH}.2f}{_RIGHT}")
    lines.append(BOTTOM_RULE)
    return tuple(lines)


def render(report: RcaReport) -> str:
    """Render the report as box-drawn text, one trailing newline included."""
    return "\n".join(render_lines(report)) + "\n"
