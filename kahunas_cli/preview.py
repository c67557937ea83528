"""Parse the platform's embedded day-preview HTML into a workout day."""

import logging
import re
from typing import Optional

from kahunas_cli.exercises import build_groups_from_html, summarize_total_volume
from kahunas_cli.extractors import parse_number, parse_text
from kahunas_cli.html_blocks import (
    extract_data_attributes,
    extract_section_html,
    extract_workout_day_blocks,
    select_workout_day_block,
    strip_tags,
)
from kahunas_cli.models import TotalVolumeSet, WorkoutDaySummary, WorkoutSectionSummary

logger = logging.getLogger(__name__)

# (class markers, section type, label) in display order.
SECTION_MARKERS = (
    (("warmup_section", "warm_up_section"), "warm_up", "Warm Up"),
    (("workout_section",), "workout", "Workout"),
    (("cooldown_section", "cool_down_section"), "workout", "Cooldown"),
)
TOTAL_VOLUME_MARKER = "total_volume_sets"
TAG_WITH_DATA_PATTERN = re.compile(r"<[a-z][^>]*\bdata-[^>]*>", re.IGNORECASE)


def _find_section(html: str, markers: tuple[str, ...]) -> Optional[str]:
    for marker in markers:
        section = extract_section_html(html, marker)
        if section is not None:
            return section
    return None


def extract_preview_sections(html: str) -> list[WorkoutSectionSummary]:
    """Warm-up, workout and cooldown sections of one day block."""
    sections = []
    found_marker = False
    for markers, section_type, label in SECTION_MARKERS:
        section_html = _find_section(html, markers)
        if section_html is None:
            continue
        found_marker = True
        groups = build_groups_from_html(section_html)
        if groups:
            sections.append(WorkoutSectionSummary(type=section_type, label=label, groups=groups))
    if not found_marker:
        groups = build_groups_from_html(html)
        if groups:
            sections.append(WorkoutSectionSummary(type="workout", label="Workout", groups=groups))
    return sections


def extract_total_volume_sets(html: str) -> list[TotalVolumeSet]:
    """Read the per-body-part totals panel, if the block has one."""
    panel = extract_section_html(html, TOTAL_VOLUME_MARKER)
    if panel is None:
        return []
    totals = []
    for match in TAG_WITH_DATA_PATTERN.finditer(panel):
        data = extract_data_attributes(match.group(0))
        body_part = parse_text(data.get("body_part") or data.get("body_part_name"))
        sets = parse_number(data.get("sets") or data.get("body_volume"))
        if body_part and sets is not None:
            totals.append(TotalVolumeSet(body_part=body_part, sets=sets))
    return totals


def extract_day_label(html: str, day_index: int) -> Optional[str]:
    """Text of the tab link pointing at #day_content_N."""
    pattern = re.compile(
        rf"""<a\b[^>]*\bhref\s*=\s*["']#day_content_{day_index}["'][^>]*>(.*?)</a\s*>""",
        re.IGNORECASE | re.DOTALL,
    )
    match = pattern.search(html)
    if not match:
        return None
    return strip_tags(match.group(1)) or None


def parse_workout_day_preview(html: str, day_index: Optional[int] = None) -> Optional[WorkoutDaySummary]:
    """Build the workout day shown in a preview fragment.

    Args:
        html: Preview HTML, possibly holding several day_content_N tabs
        day_index: 0-based day to show; None lets the visible tab win

    Returns:
        The parsed day, or None when the markup yields no exercises
    """
    if not isinstance(html, str) or not html:
        return None

    selected = select_workout_day_block(extract_workout_day_blocks(html), day_index)
    if selected is None:
        block = html
        resolved_index = day_index
        label = None
    else:
        resolved_index, block = selected
        label = extract_day_label(html, resolved_index)

    sections = extract_preview_sections(block)
    if not sections:
        logger.debug("Preview HTML produced no sections (day_index=%s)", day_index)
        return None

    total_volume_sets = extract_total_volume_sets(block) or summarize_total_volume(sections)
    fields = {"total_volume_sets": total_volume_sets, "sections": sections}
    if resolved_index is not None:
        fields["day_index"] = resolved_index
        fields["day_label"] = label or f"Day {resolved_index + 1}"
    return WorkoutDaySummary(**fields)
