from .agreement_document import render_agreement_document
from .invoice_document import render_invoice_document
from .layout import LayoutContext
from .legacy import LegacyBlock, parse_legacy_text, render_legacy_blocks
from .renderer import DocumentRenderer, NumberedCanvas, printable

__all__ = [
    "render_agreement_document",
    "render_invoice_document",
    "LayoutContext",
    "LegacyBlock",
    "parse_legacy_text",
    "render_legacy_blocks",
    "DocumentRenderer",
    "NumberedCanvas",
    "printable",
]
