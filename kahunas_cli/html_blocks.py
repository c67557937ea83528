"""Minimal HTML scanner for the platform's workout preview markup.

The preview widget uses a small, predictable dialect: nested div/table
blocks, data-* attributes and a handful of entities. Blocks are matched by
counting open/close tags instead of building a DOM, and malformed markup
degrades to "rest of the document" rather than raising.
"""

import re
from typing import Optional

ENTITY_TABLE = {
    "&quot;": '"',
    "&#34;": '"',
    "&apos;": "'",
    "&#39;": "'",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
}
ENTITY_PATTERN = re.compile("|".join(re.escape(entity) for entity in ENTITY_TABLE))

DAY_BLOCK_PATTERN = re.compile(
    r"""<div\b[^>]*\bid\s*=\s*["']day_content_(\d+)["'][^>]*>""", re.IGNORECASE
)
DATA_ATTRIBUTE_PATTERN = re.compile(
    r"""\bdata-([\w-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE
)
DIV_START_PATTERN = re.compile(r"<div\b", re.IGNORECASE)
TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")

_tag_patterns: dict[str, re.Pattern] = {}


def decode_html_entities(text: str) -> str:
    """Decode the fixed entity table in a single pass."""
    return ENTITY_PATTERN.sub(lambda match: ENTITY_TABLE[match.group(0)], text)


def strip_tags(html: str) -> str:
    """Text content of a fragment with whitespace collapsed."""
    text = TAG_PATTERN.sub(" ", html)
    return WHITESPACE_PATTERN.sub(" ", decode_html_entities(text)).strip()


def _open_close_pattern(tag: str) -> re.Pattern:
    pattern = _tag_patterns.get(tag)
    if pattern is None:
        pattern = re.compile(rf"<(/?){tag}\b[^>]*>", re.IGNORECASE)
        _tag_patterns[tag] = pattern
    return pattern


def _extract_balanced_block(html: str, start: int, tag: str) -> str:
    depth = 0
    for match in _open_close_pattern(tag).finditer(html, start):
        if match.group(1):
            depth -= 1
            if depth <= 0:
                return html[start:match.end()]
        else:
            depth += 1
    return html[start:]


def extract_div_block(html: str, start: int) -> str:
    """Return the <div> starting at `start` through its matching </div>."""
    return _extract_balanced_block(html, start, "div")


def extract_table_block(html: str, start: int) -> str:
    """Return the <table> starting at `start` through its matching </table>."""
    return _extract_balanced_block(html, start, "table")


def extract_section_html(html: str, class_name: str) -> Optional[str]:
    """Return the div enclosing the first occurrence of `class_name`."""
    marker = html.find(class_name)
    if marker < 0:
        return None
    starts = [match.start() for match in DIV_START_PATTERN.finditer(html, 0, marker)]
    if not starts:
        return None
    return extract_div_block(html, starts[-1])


def find_start_tags(html: str, tag: str) -> list[re.Match]:
    """All opening tags of one kind, in document order."""
    return [match for match in _open_close_pattern(tag).finditer(html) if not match.group(1)]


def extract_workout_day_blocks(html: str) -> dict[int, str]:
    """Map each day_content_N index to its div block, in document order."""
    blocks: dict[int, str] = {}
    for match in DAY_BLOCK_PATTERN.finditer(html):
        index = int(match.group(1))
        if index not in blocks:
            blocks[index] = extract_div_block(html, match.start())
    return blocks


def _is_visible(block: str) -> bool:
    opening = block[: block.find(">") + 1]
    style = extract_attribute(opening, "style") or ""
    return "display:block" in WHITESPACE_PATTERN.sub("", style).lower()


def select_workout_day_block(
    blocks: dict[int, str], day_index: Optional[int] = None
) -> Optional[tuple[int, str]]:
    """Pick the day block for `day_index`.

    Order: exact index, index - 1, the only block, the block shown with
    display:block, then the first block.
    """
    if not blocks:
        return None
    if day_index is not None:
        if day_index in blocks:
            return day_index, blocks[day_index]
        if day_index - 1 in blocks:
            return day_index - 1, blocks[day_index - 1]
    if len(blocks) == 1:
        return next(iter(blocks.items()))
    for index, block in blocks.items():
        if _is_visible(block):
            return index, block
    return next(iter(blocks.items()))


def extract_data_attributes(tag: str) -> dict[str, str]:
    """Collect data-* attributes of one tag, keyed without the data- prefix."""
    attributes: dict[str, str] = {}
    for match in DATA_ATTRIBUTE_PATTERN.finditer(tag):
        raw = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[match.group(1).lower()] = decode_html_entities(raw)
    return attributes


def extract_attribute(tag: str, name: str) -> Optional[str]:
    """Return one attribute value from a tag string, or None."""
    pattern = re.compile(
        rf"""(?:^|[\s<]){re.escape(name)}\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
        re.IGNORECASE,
    )
    match = pattern.search(tag)
    if not match:
        return None
    raw = next(group for group in match.groups() if group is not None)
    return decode_html_entities(raw)
