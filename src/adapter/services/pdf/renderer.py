"""Cursor-driven document renderer

Draws onto a ReportLab canvas top to bottom. Every operation takes the
LayoutContext of the current render, advances its cursor, and starts a new
page when the next block would cross the printable bottom. Nothing is ever
truncated.
"""

import logging
from decimal import Decimal
from io import BytesIO
from typing import List, Optional, Sequence
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from src.app.pricing.money import format_amount
from .formatting import format_datetime_long
from .layout import MARGIN, PAGE_HEIGHT, PAGE_WIDTH, LayoutContext

logger = logging.getLogger(__name__)

PRIMARY = colors.HexColor("#2C3E50")
MUTED = colors.HexColor("#7F8C8D")
RULE = colors.HexColor("#B4B4B4")
FAINT = colors.HexColor("#E6E6E6")
SHADE = colors.HexColor("#F5F5F5")
ALERT = colors.HexColor("#C83232")
SETTLED = colors.HexColor("#22823C")

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"
FONT_MONO = "Courier"

NORMAL = "normal"
BOLD = "bold"
ALERT_ROW = "alert"
GRAND_TOTAL = "grand_total"

ROW_HEIGHT = 11
TABLE_ROW_HEIGHT = 12
HEADING_HEIGHT = 13
AMOUNT_COLUMN = 90


def printable(text) -> str:
    """Restrict text to what the standard PDF fonts can encode"""
    return str(text).encode("cp1252", "replace").decode("cp1252")


class NumberedCanvas(canvas.Canvas):
    """
    Canvas that holds finished pages until save() so each footer can
    carry the total page count
    """

    def __init__(self, *args, footer_text: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.footer_text = footer_text
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_footer(page_count)
            super().showPage()
        super().save()

    def draw_footer(self, page_count: int):
        width = self._pagesize[0]
        y = 14
        self.saveState()
        self.setStrokeColor(RULE)
        self.setLineWidth(0.3)
        self.line(MARGIN, y + 8, width - MARGIN, y + 8)
        self.setFont(FONT, 5.5)
        self.setFillColor(MUTED)
        text = f"Page {self._pageNumber} of {page_count}"
        if self.footer_text:
            text = f"{self.footer_text}  |  {text}"
        self.drawCentredString(width / 2, y, printable(text))
        self.restoreState()


class DocumentRenderer:
    """
    Layout operations over a single in-memory PDF

    Usage:
        ctx = LayoutContext()
        renderer = DocumentRenderer("Invoice INV-2025-000001", footer_text="...")
        renderer.section_heading(ctx, "CHARGES")
        renderer.table_row(ctx, "Delivery Fee", Decimal("25.00"))
        pdf_bytes = renderer.finish(ctx)
    """

    def __init__(self, title: str, footer_text: str = "", author: Optional[str] = None):
        self.buffer = BytesIO()
        self.canvas = NumberedCanvas(
            self.buffer,
            pagesize=(PAGE_WIDTH, PAGE_HEIGHT),
            invariant=1,
            footer_text=footer_text,
        )
        self.canvas.setTitle(printable(title))
        if author:
            self.canvas.setAuthor(printable(author))

    # ── Page control ──

    def new_page(self, ctx: LayoutContext) -> None:
        self.canvas.showPage()
        ctx.page_number += 1
        ctx.reset_to_top()
        if ctx.section:
            self._text(ctx.left, ctx.baseline(7), f"{ctx.section} (continued)", FONT_ITALIC, 6.5, MUTED)
            ctx.advance(ROW_HEIGHT)

    def ensure_space(self, ctx: LayoutContext, height: float) -> None:
        """Break the page if a block of this height would not fit"""
        if not ctx.fits(height) and ctx.cursor > ctx.margin_top:
            self.new_page(ctx)

    def keep_together(self, ctx: LayoutContext, height: float) -> None:
        """Move a block to the next page only when it would fit there whole"""
        if self._fits_on_fresh_page(ctx, height):
            self.ensure_space(ctx, height)

    @staticmethod
    def _fits_on_fresh_page(ctx: LayoutContext, height: float) -> bool:
        # A continued section spends one row on its "(continued)" caption
        caption = ROW_HEIGHT if ctx.section else 0
        return ctx.margin_top + caption + height <= ctx.bottom_limit

    def spacer(self, ctx: LayoutContext, height: float) -> None:
        self.flush_pair(ctx)
        if ctx.fits(height):
            ctx.advance(height)
        else:
            self.new_page(ctx)

    def rule(self, ctx: LayoutContext, weight: float = 0.3, color=RULE) -> None:
        self.flush_pair(ctx)
        self.ensure_space(ctx, 8)
        ctx.advance(3)
        self.canvas.saveState()
        self.canvas.setStrokeColor(color)
        self.canvas.setLineWidth(weight)
        y = ctx.baseline()
        self.canvas.line(ctx.left, y, ctx.right, y)
        self.canvas.restoreState()
        ctx.advance(5)

    def finish(self, ctx: LayoutContext) -> bytes:
        """Close the last page and return the PDF bytes"""
        self.flush_pair(ctx)
        self.canvas.showPage()
        self.canvas.save()
        return self.buffer.getvalue()

    # ── Blocks ──

    def header(
        self,
        ctx: LayoutContext,
        title: str,
        subtitle: Optional[str] = None,
        logo: Optional[bytes] = None,
        right_lines: Sequence[str] = (),
    ) -> None:
        """Logo on the left, centred title, reference lines on the right"""
        if logo:
            self.draw_image(logo, ctx.left, ctx.baseline(24), 66, 24)
        self._centred(ctx.page_width / 2, ctx.baseline(14), title, FONT_BOLD, 15, colors.black)
        if subtitle:
            self._centred(ctx.page_width / 2, ctx.baseline(26), subtitle, FONT_BOLD, 8.5, colors.black)
        for index, line in enumerate(right_lines):
            self._right(ctx.right, ctx.baseline(7 + index * 9), line, FONT_MONO, 7, colors.black)
        ctx.advance(32)
        self.rule(ctx, weight=1.5, color=colors.black)

    def banner(self, ctx: LayoutContext, text: str) -> None:
        """Shaded single-line bar, e.g. company contact details"""
        self.flush_pair(ctx)
        self.ensure_space(ctx, 14)
        self.canvas.saveState()
        self.canvas.setFillColor(SHADE)
        self.canvas.setStrokeColor(RULE)
        self.canvas.setLineWidth(0.3)
        self.canvas.rect(ctx.left, ctx.baseline(11), ctx.content_width, 11, stroke=1, fill=1)
        self.canvas.restoreState()
        self._centred(ctx.page_width / 2, ctx.baseline(8), text, FONT, 5.5, colors.HexColor("#3C3C3C"))
        ctx.advance(14)

    def section_heading(self, ctx: LayoutContext, title: str) -> None:
        """Section title; kept on the same page as the row that follows it"""
        self.flush_pair(ctx)
        self.ensure_space(ctx, HEADING_HEIGHT + TABLE_ROW_HEIGHT)
        ctx.section = title
        self._text(ctx.left, ctx.baseline(9), title, FONT_BOLD, 8, PRIMARY)
        ctx.advance(HEADING_HEIGHT)

    def key_value_row(self, ctx: LayoutContext, label: str, value: str) -> None:
        """Full-width label/value row; long values wrap under themselves"""
        self.flush_pair(ctx)
        self._key_value(ctx, label, value, ctx.left, ctx.content_width)

    def key_value_pair(self, ctx: LayoutContext, label: str, value: str) -> None:
        """
        Two-column label/value row

        The first call is buffered; the second draws both side by side. A
        buffered pair left over when another block starts is drawn alone.
        """
        if ctx.pending_pair is None:
            ctx.pending_pair = (label, value)
            return
        left_label, left_value = ctx.pending_pair
        ctx.pending_pair = None
        column = ctx.content_width / 2 - 6
        left_lines = self._wrap_value(left_label, left_value, column)
        right_lines = self._wrap_value(label, value, column)
        height = ROW_HEIGHT * max(len(left_lines), len(right_lines))
        if not self._fits_on_fresh_page(ctx, height):
            # Too tall to sit side by side; each half flows across pages
            self._key_value(ctx, left_label, left_value, ctx.left, ctx.content_width)
            self._key_value(ctx, label, value, ctx.left, ctx.content_width)
            return
        self.ensure_space(ctx, height)
        top = ctx.cursor
        self._draw_key_value(ctx, left_label, left_lines, ctx.left)
        ctx.cursor = top
        self._draw_key_value(ctx, label, right_lines, ctx.middle)
        ctx.cursor = top + height

    def flush_pair(self, ctx: LayoutContext) -> None:
        if ctx.pending_pair is None:
            return
        label, value = ctx.pending_pair
        ctx.pending_pair = None
        self._key_value(ctx, label, value, ctx.left, ctx.content_width)

    def table_header(self, ctx: LayoutContext, left: str, right: str) -> None:
        self.flush_pair(ctx)
        self.ensure_space(ctx, HEADING_HEIGHT + TABLE_ROW_HEIGHT)
        self.canvas.saveState()
        self.canvas.setFillColor(SHADE)
        self.canvas.setStrokeColor(RULE)
        self.canvas.setLineWidth(0.3)
        self.canvas.rect(ctx.left, ctx.baseline(HEADING_HEIGHT), ctx.content_width, HEADING_HEIGHT, stroke=1, fill=1)
        self.canvas.restoreState()
        self._text(ctx.left + 4, ctx.baseline(9), left, FONT_BOLD, 6.5, colors.HexColor("#3C3C3C"))
        self._right(ctx.right - 4, ctx.baseline(9), right, FONT_BOLD, 6.5, colors.HexColor("#3C3C3C"))
        ctx.advance(HEADING_HEIGHT + 3)

    def table_row(
        self,
        ctx: LayoutContext,
        label: str,
        amount: Decimal,
        emphasis: str = NORMAL,
        currency: Optional[str] = None,
        indent: float = 4,
    ) -> None:
        """
        Description/amount row

        Grand-total rows are boxed and carry the currency code. Bold rows
        (subtotals) sit on a shaded band. A label too long for one page
        wraps line by line across the break; the amount stays on its first
        line.
        """
        self.flush_pair(ctx)
        amount_text = format_amount(amount)
        if emphasis == GRAND_TOTAL:
            if currency:
                amount_text = f"{amount_text} {currency}"
            self._boxed_total(ctx, label, amount_text, PRIMARY, colors.HexColor("#F0F0F0"), colors.black)
            return

        font = FONT_BOLD if emphasis == BOLD else FONT
        size = 7.5 if emphasis == BOLD else 7
        color = ALERT if emphasis == ALERT_ROW else colors.black
        leading = size + 2
        padding = TABLE_ROW_HEIGHT - leading
        lines = simpleSplit(printable(label), font, size, ctx.content_width - AMOUNT_COLUMN - indent) or [""]
        self.keep_together(ctx, leading * len(lines) + padding)
        for index, line in enumerate(lines):
            self.ensure_space(ctx, leading + padding)
            if emphasis == BOLD:
                self._shade(ctx, leading + padding)
            self._text(ctx.left + indent, ctx.baseline(size + 1), line, font, size, color)
            if index == 0:
                self._right(ctx.right - 4, ctx.baseline(size + 1), amount_text, font, size, color)
            ctx.advance(leading)
        if emphasis == NORMAL:
            self.canvas.saveState()
            self.canvas.setStrokeColor(FAINT)
            self.canvas.setLineWidth(0.2)
            self.canvas.line(ctx.left, ctx.baseline(padding - 4), ctx.right, ctx.baseline(padding - 4))
            self.canvas.restoreState()
        ctx.advance(padding)

    def status_box(self, ctx: LayoutContext, label: str, value: str, settled: bool) -> None:
        """Boxed highlight row: red for an outstanding amount, green when settled"""
        self.flush_pair(ctx)
        if settled:
            self._boxed_total(ctx, label, value, SETTLED, colors.HexColor("#F0FFF0"), SETTLED)
        else:
            self._boxed_total(ctx, label, value, ALERT, colors.HexColor("#FFF0F0"), ALERT)

    def paragraph(
        self,
        ctx: LayoutContext,
        text: str,
        size: float = 7,
        font: str = FONT,
        color=colors.black,
        indent: float = 0,
    ) -> None:
        """Wrapped text; each line breaks the page independently"""
        self.flush_pair(ctx)
        leading = size + 2
        for line in simpleSplit(printable(text), font, size, ctx.content_width - indent):
            self.ensure_space(ctx, leading)
            self._text(ctx.left + indent, ctx.baseline(size), line, font, size, color)
            ctx.advance(leading)

    def bullet_list(self, ctx: LayoutContext, items: Sequence[str], size: float = 7) -> None:
        for item in items:
            self._marked_item(ctx, "•", item, size)

    def numbered_list(self, ctx: LayoutContext, items: Sequence[str], start: int = 1, size: float = 7) -> None:
        for offset, item in enumerate(items):
            self._marked_item(ctx, f"{start + offset}.", item, size)

    def checkbox_item(self, ctx: LayoutContext, text: str, checked: bool, size: float = 7) -> None:
        self.flush_pair(ctx)
        lines = simpleSplit(printable(text), FONT, size, ctx.content_width - 14) or [""]
        leading = size + 2
        self.keep_together(ctx, leading * len(lines))
        self.ensure_space(ctx, leading)
        box_y = ctx.baseline(size)
        self.canvas.saveState()
        self.canvas.setStrokeColor(colors.black)
        self.canvas.setLineWidth(0.5)
        self.canvas.rect(ctx.left, box_y - 0.5, 6, 6, stroke=1, fill=0)
        if checked:
            self.canvas.line(ctx.left + 1, box_y + 2.5, ctx.left + 2.5, box_y + 0.5)
            self.canvas.line(ctx.left + 2.5, box_y + 0.5, ctx.left + 5, box_y + 5)
        self.canvas.restoreState()
        for index, line in enumerate(lines):
            if index:
                self.ensure_space(ctx, leading)
            self._text(ctx.left + 10, ctx.baseline(size), line, FONT, size, colors.black)
            ctx.advance(leading)

    def signature_block(
        self,
        ctx: LayoutContext,
        signer_name: Optional[str],
        signed_at: Optional[datetime],
        image_bytes: Optional[bytes] = None,
        confirmed_at: Optional[datetime] = None,
        signed_manually: bool = False,
    ) -> None:
        """Signature image and signer details, or blank lines when unsigned"""
        self.flush_pair(ctx)
        self.ensure_space(ctx, 90)
        self.rule(ctx, weight=0.5, color=colors.black)

        if not signer_name:
            y = ctx.baseline(14)
            self._text(ctx.left, y, "CUSTOMER SIGNATURE:", FONT_MONO, 7, colors.black)
            self.canvas.line(ctx.left + 110, y, ctx.left + 250, y)
            self._text(ctx.middle + 20, y, "DATE:", FONT_MONO, 7, colors.black)
            self.canvas.line(ctx.middle + 55, y, ctx.middle + 170, y)
            ctx.advance(22)
            return

        if image_bytes and self.draw_image(image_bytes, ctx.left, ctx.baseline(40), 140, 40):
            ctx.advance(44)

        self._draw_key_value(ctx, "SIGNED BY:", [signer_name.upper()], ctx.left, font=FONT_MONO)
        ctx.advance(-ROW_HEIGHT)
        self._draw_key_value(ctx, "DATE:", [format_datetime_long(signed_at)], ctx.middle, font=FONT_MONO)
        if confirmed_at:
            self._draw_key_value(ctx, "CONFIRMED:", [format_datetime_long(confirmed_at)], ctx.left, font=FONT_MONO)
        if signed_manually:
            self._text(ctx.left, ctx.baseline(6), "(Signed in person)", FONT_ITALIC, 6, colors.HexColor("#646464"))
            ctx.advance(10)

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> bool:
        """Draw an image scaled into the box; unreadable images are logged and skipped"""
        try:
            self.canvas.drawImage(
                ImageReader(BytesIO(data)),
                x,
                y,
                width=width,
                height=height,
                preserveAspectRatio=True,
                anchor="sw",
                mask="auto",
            )
            return True
        except Exception as e:
            logger.warning(f"Skipping unreadable image ({len(data)} bytes): {e}")
            return False

    # ── Primitives ──

    def _text(self, x: float, y: float, text: str, font: str, size: float, color) -> None:
        self.canvas.setFont(font, size)
        self.canvas.setFillColor(color)
        self.canvas.drawString(x, y, printable(text))

    def _right(self, x: float, y: float, text: str, font: str, size: float, color) -> None:
        self.canvas.setFont(font, size)
        self.canvas.setFillColor(color)
        self.canvas.drawRightString(x, y, printable(text))

    def _centred(self, x: float, y: float, text: str, font: str, size: float, color) -> None:
        self.canvas.setFont(font, size)
        self.canvas.setFillColor(color)
        self.canvas.drawCentredString(x, y, printable(text))

    def _wrap_value(self, label: str, value: str, width: float) -> List[str]:
        label_width = self.canvas.stringWidth(printable(label), FONT_BOLD, 7.5) + 3
        return simpleSplit(printable(value or ""), FONT, 7.5, max(width - label_width, 20)) or [""]

    def _key_value(self, ctx: LayoutContext, label: str, value: str, x: float, width: float) -> None:
        lines = self._wrap_value(label, value, width)
        self.keep_together(ctx, ROW_HEIGHT * len(lines))
        self._draw_key_value(ctx, label, lines, x)

    def _draw_key_value(
        self, ctx: LayoutContext, label: str, lines: List[str], x: float, font: str = FONT
    ) -> None:
        """Label on the first line; value lines stay indented past a page break"""
        label_font = FONT_BOLD if font == FONT else font
        label_width = self.canvas.stringWidth(printable(label), label_font, 7.5) + 3
        for index, line in enumerate(lines):
            self.ensure_space(ctx, ROW_HEIGHT)
            if index == 0:
                self._text(x, ctx.baseline(8), label, label_font, 7.5, colors.HexColor("#3C3C3C"))
            self._text(x + label_width, ctx.baseline(8), line, font, 7.5, colors.black)
            ctx.advance(ROW_HEIGHT)

    def _marked_item(self, ctx: LayoutContext, marker: str, text: str, size: float) -> None:
        self.flush_pair(ctx)
        leading = size + 2
        lines = simpleSplit(printable(text), FONT, size, ctx.content_width - 14) or [""]
        for index, line in enumerate(lines):
            self.ensure_space(ctx, leading)
            if index == 0:
                self._text(ctx.left + 2, ctx.baseline(size), marker, FONT, size, colors.black)
            self._text(ctx.left + 14, ctx.baseline(size), line, FONT, size, colors.black)
            ctx.advance(leading)

    def _shade(self, ctx: LayoutContext, height: float) -> None:
        self.canvas.saveState()
        self.canvas.setFillColor(SHADE)
        self.canvas.rect(ctx.left, ctx.baseline(height - 1), ctx.content_width, height, stroke=0, fill=1)
        self.canvas.restoreState()

    def _boxed_total(self, ctx: LayoutContext, label: str, value: str, border, fill, text_color) -> None:
        self.ensure_space(ctx, 20)
        self.canvas.saveState()
        self.canvas.setFillColor(fill)
        self.canvas.setStrokeColor(border)
        self.canvas.setLineWidth(0.8)
        self.canvas.rect(ctx.left, ctx.baseline(15), ctx.content_width, 15, stroke=1, fill=1)
        self.canvas.restoreState()
        self._text(ctx.left + 4, ctx.baseline(10.5), label, FONT_BOLD, 8.5, text_color)
        self._right(ctx.right - 4, ctx.baseline(10.5), value, FONT_BOLD, 8.5, text_color)
        ctx.advance(20)
