"""Markdown-subset renderer for chat display.

Supports: headings (levels 1-3), bold, bullet and numbered list items,
fenced code blocks, blank-line spacers and paragraphs. Anything else is
shown as literal paragraph text.

``render`` turns text into display blocks; ``blocks_to_html`` turns blocks
into HTML for ``ui.html``. Literal text is HTML-escaped at emission time, so
model output can be displayed without a sanitizer.
"""

import html
import itertools
import re
from collections.abc import Iterable
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

FENCE_RE = re.compile(r"^```[^`\s]*\s*$")
BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
ORDERED_ITEM_RE = re.compile(r"^\d+\. ")

HEADING_PREFIXES = (("# ", 1), ("## ", 2), ("### ", 3))
BULLET_PREFIXES = ("- ", "* ")

_HEADING_CLASSES = {
    1: "text-2xl font-bold mt-4 mb-2",
    2: "text-xl font-bold mt-3 mb-2",
    3: "text-lg font-bold mt-2 mb-1",
}


class _DisplayModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Span(_DisplayModel):
    """A run of inline text, optionally emphasized."""

    text: str
    bold: bool = False

    @property
    def html(self) -> str:
        escaped = html.escape(self.text, quote=False)
        return f"<strong>{escaped}</strong>" if self.bold else escaped


def _spans_html(spans: Iterable[Span]) -> str:
    return "".join(span.html for span in spans)


class Heading(_DisplayModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=3)
    text: str

    @property
    def html(self) -> str:
        tag = f"h{self.level}"
        return f'<{tag} class="{_HEADING_CLASSES[self.level]}">{html.escape(self.text, quote=False)}</{tag}>'


class ListItem(_DisplayModel):
    kind: Literal["list_item"] = "list_item"
    ordered: bool
    spans: tuple[Span, ...] = ()

    @property
    def html(self) -> str:
        return f"<li>{_spans_html(self.spans)}</li>"


class CodeLine(_DisplayModel):
    kind: Literal["code_line"] = "code_line"
    text: str

    @property
    def html(self) -> str:
        return html.escape(self.text, quote=False)


class Spacer(_DisplayModel):
    kind: Literal["spacer"] = "spacer"

    @property
    def html(self) -> str:
        return '<div class="h-2"></div>'


class Paragraph(_DisplayModel):
    kind: Literal["paragraph"] = "paragraph"
    spans: tuple[Span, ...] = ()

    @property
    def html(self) -> str:
        return f'<p class="mb-2">{_spans_html(self.spans)}</p>'

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


Block = Annotated[
    Heading | ListItem | CodeLine | Spacer | Paragraph,
    Field(discriminator="kind"),
]


def parse_inline(text: str) -> tuple[Span, ...]:
    """Split a line into literal and bold spans.

    ``**x**`` pairs are matched non-greedily, left to right. Unpaired
    asterisks stay literal.
    """
    spans: list[Span] = []
    # re.split with one group alternates literal, bold, literal, ...
    for i, piece in enumerate(BOLD_RE.split(text)):
        bold = i % 2 == 1
        if piece or bold:
            spans.append(Span(text=piece, bold=bold))
    return tuple(spans)


def _render_line(line: str) -> Heading | ListItem | Spacer | Paragraph:
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix):])

    if line.startswith(BULLET_PREFIXES):
        return ListItem(ordered=False, spans=parse_inline(line[2:]))

    if match := ORDERED_ITEM_RE.match(line):
        return ListItem(ordered=True, spans=parse_inline(line[match.end():]))

    if not line.strip():
        return Spacer()

    return Paragraph(spans=parse_inline(line))


def render(text: str) -> list[Block]:
    """Convert text to display blocks.

    Args:
        text: Markdown-subset text, typically a streaming snapshot.

    Returns:
        Blocks in line order. Empty text gives no blocks.
    """
    if not text:
        return []

    blocks: list[Block] = []
    in_code_block = False

    for raw_line in text.split("\n"):
        line = raw_line.removesuffix("\r")
        if FENCE_RE.match(line):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            blocks.append(CodeLine(text=line))
        else:
            blocks.append(_render_line(line))

    return blocks


def _group_key(block: Block) -> tuple[str, bool]:
    match block:
        case ListItem(ordered=ordered):
            return ("list_item", ordered)
        case _:
            return (block.kind, False)


def blocks_to_html(blocks: Iterable[Block]) -> str:
    """Render blocks to HTML.

    Consecutive code lines share one ``<pre>``, and consecutive list items of
    the same kind share one ``<ul>``/``<ol>``.
    """
    out: list[str] = []
    for (kind, ordered), group in itertools.groupby(blocks, key=_group_key):
        members = list(group)
        match kind:
            case "code_line":
                code = "\n".join(block.html for block in members)
                out.append(
                    '<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 '
                    f'overflow-x-auto text-xs"><code>{code}</code></pre>'
                )
            case "list_item":
                tag, style = ("ol", "list-decimal") if ordered else ("ul", "list-disc")
                items = "".join(block.html for block in members)
                out.append(f'<{tag} class="{style} ml-4 my-2 space-y-1">{items}</{tag}>')
            case _:
                out.extend(block.html for block in members)
    return "".join(out)


def markdown_to_html(text: str) -> str:
    """Convert markdown-subset text straight to HTML for chat display."""
    return blocks_to_html(render(text))
