"""Helpers for configuring Unicode-capable fonts in ReportLab PDFs."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

FONT_NAME = "SipTakipUnicode"
FONT_CANDIDATES: tuple[str, ...] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    r"C:\\Windows\\Fonts\\arial.ttf",
    r"C:\\Windows\\Fonts\\segoeui.ttf",
)

_fallback_warned = False


def find_unicode_ttf(candidates: tuple[str, ...] = FONT_CANDIDATES) -> str | None:
    """Return the first installed TTF able to draw Turkish letters."""
    return next((path for path in candidates if Path(path).exists()), None)


def register_pdf_font() -> str:
    """Register a Unicode font for ReportLab and return chosen font name."""
    global _fallback_warned

    font_path = find_unicode_ttf()
    if font_path is None:
        if not _fallback_warned:
            logger.warning("[PDF] No Unicode TTF font found; ğ, ş and ı may render incorrectly.")
            _fallback_warned = True
        return "Helvetica"

    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfbase.ttfonts import TTFont

    if FONT_NAME not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(FONT_NAME, font_path))
    return FONT_NAME
