"""Legacy agreement text

Agreements created before structured terms existed store a pre-formatted
plain-text document. It is parsed line by line into blocks and drawn with
the regular renderer operations. A line that cannot be parsed or drawn is
logged and skipped; the rest of the document still renders.
"""

import logging
import re
from typing import List, Optional
from pydantic import BaseModel

from .layout import LayoutContext
from .renderer import DocumentRenderer

logger = logging.getLogger(__name__)

DIVIDER = "divider"
HEADING = "heading"
BULLET = "bullet"
NUMBERED = "numbered"
CHECKBOX = "checkbox"
KEY_VALUE = "key_value"
PARAGRAPH = "paragraph"

BOX_CHARS = "┌┐└┘│─├┤┬┴┼"
DECORATION_CHARS = set(BOX_CHARS + "▓═━┃╔╗╚╝║╠╣╦╩╬-=_* ")

BULLET_RE = re.compile(r"^[-•*·]\s+(?P<text>.*\S)")
NUMBERED_RE = re.compile(r"^(?P<number>\d{1,3})[.)]\s+(?P<text>.*\S)")
CHECKBOX_RE = re.compile(r"^(?:\[(?P<mark>[ xX✓✔])\]|(?P<glyph>[☑☒☐✓✔]))\s*(?P<text>.*\S)")
KEY_VALUE_RE = re.compile(r"^(?P<label>[A-Za-z][\w ()/&'.,#-]{0,48}):\s+(?P<value>\S.*)$")

CHECKED_MARKS = set("xX✓✔☑☒")


class LegacyBlock(BaseModel):
    kind: str
    text: str = ""
    label: Optional[str] = None
    number: Optional[int] = None
    checked: bool = False


def _is_decoration(line: str) -> bool:
    return "▓" in line or "═══" in line or all(char in DECORATION_CHARS for char in line)


def _is_all_caps(line: str) -> bool:
    letters = [char for char in line if char.isalpha()]
    return bool(letters) and all(char.isupper() for char in letters) and len(line) <= 90


def parse_line(raw: str) -> Optional[LegacyBlock]:
    """
    Classify one line of legacy text

    Returns None for blank lines and for box frames with no text.
    """
    line = raw.strip()
    if not line:
        return None

    if "│" in line:
        text = line.strip(BOX_CHARS + " ")
        text = re.sub(f"[{BOX_CHARS}]", "", text).strip()
        if len(text) > 2:
            return LegacyBlock(kind=HEADING, text=text.upper())
        return None

    if _is_decoration(line):
        return LegacyBlock(kind=DIVIDER)

    match = BULLET_RE.match(line)
    if match:
        return LegacyBlock(kind=BULLET, text=match.group("text"))

    match = NUMBERED_RE.match(line)
    if match:
        return LegacyBlock(kind=NUMBERED, text=match.group("text"), number=int(match.group("number")))

    match = CHECKBOX_RE.match(line)
    if match:
        mark = match.group("mark") or match.group("glyph")
        return LegacyBlock(kind=CHECKBOX, text=match.group("text"), checked=mark in CHECKED_MARKS)

    match = KEY_VALUE_RE.match(line)
    if match:
        return LegacyBlock(kind=KEY_VALUE, label=match.group("label").strip(), text=match.group("value").strip())

    if _is_all_caps(line):
        return LegacyBlock(kind=HEADING, text=line.rstrip(":").strip())

    return LegacyBlock(kind=PARAGRAPH, text=line)


def parse_legacy_text(text: str) -> List[LegacyBlock]:
    """Parse legacy agreement text into renderable blocks"""
    blocks: List[LegacyBlock] = []
    for number, raw in enumerate((text or "").splitlines(), start=1):
        try:
            block = parse_line(raw)
        except Exception as e:
            logger.warning(f"Skipping legacy agreement line {number}: {e}")
            continue
        if block is None:
            continue
        # Runs of decoration collapse into one divider; none at the start
        if block.kind == DIVIDER and (not blocks or blocks[-1].kind == DIVIDER):
            continue
        blocks.append(block)
    while blocks and blocks[-1].kind == DIVIDER:
        blocks.pop()
    return blocks


def render_legacy_blocks(renderer: DocumentRenderer, ctx: LayoutContext, blocks: List[LegacyBlock]) -> int:
    """
    Draw parsed legacy blocks

    Returns:
        Number of blocks skipped because they failed to render
    """
    skipped = 0
    for block in blocks:
        try:
            if block.kind == DIVIDER:
                renderer.rule(ctx)
            elif block.kind == HEADING:
                renderer.section_heading(ctx, block.text)
            elif block.kind == BULLET:
                renderer.bullet_list(ctx, [block.text])
            elif block.kind == NUMBERED:
                renderer.numbered_list(ctx, [block.text], start=block.number or 1)
            elif block.kind == CHECKBOX:
                renderer.checkbox_item(ctx, block.text, block.checked)
            elif block.kind == KEY_VALUE:
                renderer.key_value_pair(ctx, f"{block.label}:", block.text)
            else:
                renderer.paragraph(ctx, block.text)
        except Exception as e:
            skipped += 1
            logger.warning(f"Skipping legacy agreement block {block.kind!r}: {e}")
    return skipped
