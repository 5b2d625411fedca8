"""Render a StatsRecord into the SVG card and the profile README."""

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from importlib.resources import files
from pathlib import Path
from string import Template
from typing import Any

from lxml import etree

from profilecard.exceptions import RenderError
from profilecard.logging import get_logger
from profilecard.models.stats import StatsRecord

TEMPLATES = files("profilecard").joinpath("templates")
SVG_TEMPLATE = "profile.svg"
README_TEMPLATE = "README.md"


def format_number(num: int) -> str:
    """
    Shorten large counts for display.

    Examples:
        999 -> "999"
        1000 -> "1.0k"
        1250 -> "1.3k"
    """
    if num >= 1000:
        thousands = (Decimal(num) / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{thousands}k"
    return str(num)


def initials(name: str) -> str:
    """First letters of up to two words of a name, uppercased."""
    return "".join(word[0] for word in name.split() if word).upper()[:2]


def _set_text(root: Any, element_id: str, text: str) -> None:
    el = root.find(f".//*[@id='{element_id}']")
    if el is None:
        raise RenderError(f"SVG template has no element with id {element_id!r}")
    el.text = text


def render_svg(record: StatsRecord) -> str:
    """
    Fill the SVG card template with a record's values.

    Args:
        record: Statistics to render

    Returns:
        SVG document as a string

    Raises:
        RenderError: If the template cannot be parsed or lacks a placeholder
    """
    try:
        root = etree.fromstring(TEMPLATES.joinpath(SVG_TEMPLATE).read_bytes())
    except (OSError, etree.XMLSyntaxError) as e:
        raise RenderError(f"Cannot load SVG template: {e}") from e

    values = {
        "name": record.name,
        "handle": record.handle,
        "location": record.location,
        "bio": record.bio,
        "organization": record.organization,
        "link": record.link,
        "repositories": str(record.repository_count),
        "followers": format_number(record.followers),
        "following": str(record.following),
        "commits": format_number(record.commit_estimate),
        "pull_requests": str(record.pull_request_count),
        "issues": str(record.issue_count),
        "stars": format_number(record.star_total),
        "streak": str(record.streak_days),
        "lines": format_number(record.estimated_line_count),
        "initials": initials(record.name),
    }
    for element_id, text in values.items():
        _set_text(root, element_id, text)

    return etree.tostring(root, encoding="unicode")


def render_readme(
    record: StatsRecord,
    updated: date | None = None,
    svg_filename: str = "profile.svg",
) -> str:
    """
    Fill the README template for a record's handle.

    Args:
        record: Statistics to render
        updated: Date shown in the footer, today (UTC) if None
        svg_filename: Name of the card image the README embeds
    """
    if updated is None:
        updated = datetime.now(timezone.utc).date()

    try:
        template = Template(TEMPLATES.joinpath(README_TEMPLATE).read_text(encoding="utf-8"))
    except OSError as e:
        raise RenderError(f"Cannot load README template: {e}") from e

    return template.safe_substitute(
        handle=record.handle,
        badge_handle=record.handle.replace("-", "--"),
        svg_filename=svg_filename,
        updated=f"{updated:%B} {updated.day}, {updated.year}",
    )


def save_outputs(
    record: StatsRecord,
    output_dir: str | Path = ".",
    svg_filename: str = "profile.svg",
    readme_filename: str = "README.md",
) -> list[Path]:
    """
    Render both documents and write them to a directory.

    Args:
        record: Statistics to render
        output_dir: Destination directory, created if missing
        svg_filename: File name for the card
        readme_filename: File name for the README

    Returns:
        Paths written, card first

    Raises:
        RenderError: If rendering or writing fails
    """
    out = Path(output_dir)
    svg_path = out / svg_filename
    readme_path = out / readme_filename

    svg = render_svg(record)
    readme = render_readme(record, svg_filename=svg_filename)

    try:
        out.mkdir(parents=True, exist_ok=True)
        svg_path.write_text(svg, encoding="utf-8")
        readme_path.write_text(readme, encoding="utf-8")
    except OSError as e:
        raise RenderError(f"Failed to write outputs: {e}") from e

    get_logger("renderer").info(
        "outputs_saved", svg=str(svg_path), readme=str(readme_path)
    )
    return [svg_path, readme_path]
