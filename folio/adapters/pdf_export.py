"""PDF export of page cards using reportlab, one A4 page per card."""

from __future__ import annotations

import io
import logging
import os
from typing import Callable, Optional, Sequence, Tuple

from PIL import Image as PILImage
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from folio.domain.entities import CoverPage, SeriesCoverPage
from folio.domain.images import ImageData
from folio.domain.ports import PdfExportPort
from folio.domain.theme import ThemeStyle
from folio.viewmodels.page_view import PageCard

_log = logging.getLogger(__name__)

AskPdfPath = Callable[[str], Optional[str]]
"""``(suggested_filename) -> path | None``."""

MARGIN = 18 * mm
IMAGE_TOP_RATIO = 0.78
_SERIF_HINTS = ("serif", "garamond", "times", "georgia")


def base_fonts(theme: ThemeStyle) -> Tuple[str, str]:
    """Regular/bold reportlab core fonts closest to the theme's font family."""
    family = (theme.font_family or "").lower()
    if any(hint in family and f"sans-{hint}" not in family for hint in _SERIF_HINTS):
        return "Times-Roman", "Times-Bold"
    return "Helvetica", "Helvetica-Bold"


def image_reader(image: ImageData) -> Tuple[ImageReader, int, int]:
    with PILImage.open(io.BytesIO(image.data)) as img:
        img.load()
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        width, height = img.size
        return ImageReader(img.copy()), width, height


def fit_box(width: float, height: float, max_w: float, max_h: float) -> Tuple[float, float]:
    if width <= 0 or height <= 0:
        return 0.0, 0.0
    scale = min(max_w / width, max_h / height)
    return width * scale, height * scale


class ReportlabPdfExporter(PdfExportPort):
    def __init__(self, ask_save_path: AskPdfPath, default_name: str = "Portfolio.pdf") -> None:
        self.ask_save_path = ask_save_path
        self.default_name = default_name
        self.page_width, self.page_height = A4

    def export_pdf(self, cards: Sequence[PageCard], theme: ThemeStyle) -> Optional[str]:
        path = self.ask_save_path(self.default_name)
        if not path:
            return None
        if not os.path.splitext(path)[1]:
            path += ".pdf"
        self.render(path, cards, theme)
        _log.info("Wrote %d page(s) to %s", len(cards), path)
        return path

    def render(self, path: str, cards: Sequence[PageCard], theme: ThemeStyle) -> None:
        pdf = canvas.Canvas(path, pagesize=A4)
        pdf.setTitle(cards[0].heading if cards else "Portfolio")
        for card in cards:
            self._draw_background(pdf, theme)
            if card.kind == CoverPage.kind:
                self._draw_cover(pdf, card, theme)
            elif card.kind == SeriesCoverPage.kind:
                self._draw_series_cover(pdf, card, theme)
            else:
                self._draw_image_page(pdf, card, theme)
            pdf.showPage()
        pdf.save()

    # ---- Page painters ----
    def _draw_background(self, pdf: canvas.Canvas, theme: ThemeStyle) -> None:
        pdf.setFillColor(HexColor(theme.paper))
        pdf.rect(0, 0, self.page_width, self.page_height, fill=1, stroke=0)

    def _paragraph(
        self,
        pdf: canvas.Canvas,
        text: str,
        x: float,
        y: float,
        font: str,
        size: float,
        max_width: float,
    ) -> float:
        """Draw wrapped text downward from ``y``; returns the next baseline."""
        pdf.setFont(font, size)
        leading = size * 1.4
        for block in (text or "").splitlines() or [""]:
            for line in simpleSplit(block, font, size, max_width) or [""]:
                pdf.drawString(x, y, line)
                y -= leading
        return y

    def _draw_cover(self, pdf: canvas.Canvas, card: PageCard, theme: ThemeStyle) -> None:
        regular, bold = base_fonts(theme)
        body = theme.font_size_px
        width = self.page_width - 2 * MARGIN
        y = self.page_height * 0.62

        pdf.setFillColor(HexColor(theme.muted))
        pdf.setFont(regular, body * 0.85)
        pdf.drawString(MARGIN, y, card.label.upper())
        y -= body * 3.2

        pdf.setFillColor(HexColor(theme.text))
        pdf.setFont(bold, body * 2.6)
        pdf.drawString(MARGIN, y, card.heading)
        y -= body * 2.2
        if card.subheading:
            pdf.setFillColor(HexColor(theme.muted))
            pdf.setFont(regular, body * 1.3)
            pdf.drawString(MARGIN, y, card.subheading)
            y -= body * 2.4
        if card.desc:
            pdf.setFillColor(HexColor(theme.text))
            y = self._paragraph(pdf, card.desc, MARGIN, y, regular, body, width * 0.8)
            y -= body
        pdf.setFillColor(HexColor(theme.muted))
        for link in card.links:
            pdf.setFont(regular, body * 0.9)
            pdf.drawString(MARGIN, y, link)
            y -= body * 1.5

    def _draw_series_cover(self, pdf: canvas.Canvas, card: PageCard, theme: ThemeStyle) -> None:
        regular, bold = base_fonts(theme)
        body = theme.font_size_px
        width = self.page_width - 2 * MARGIN
        y = self.page_height * 0.6

        pdf.setFillColor(HexColor(theme.text))
        pdf.setFont(bold, body * 2.2)
        pdf.drawString(MARGIN, y, card.heading)
        y -= body * 2
        if card.year:
            pdf.setFillColor(HexColor(theme.muted))
            pdf.setFont(regular, body * 1.1)
            pdf.drawString(MARGIN, y, card.year)
            y -= body * 2.2
        if card.desc:
            pdf.setFillColor(HexColor(theme.text))
            y = self._paragraph(pdf, card.desc, MARGIN, y, regular, body, width * 0.8)
            y -= body
        pdf.setFillColor(HexColor(theme.muted))
        pdf.setFont(regular, body * 0.9)
        pdf.drawString(MARGIN, y, card.info)

    def _draw_image_page(self, pdf: canvas.Canvas, card: PageCard, theme: ThemeStyle) -> None:
        regular, bold = base_fonts(theme)
        body = theme.font_size_px
        area_top = self.page_height - MARGIN
        area_bottom = self.page_height * (1 - IMAGE_TOP_RATIO)
        area_w = self.page_width - 2 * MARGIN
        area_h = area_top - area_bottom

        if card.tag:
            pdf.setFillColor(HexColor(theme.muted))
            pdf.setFont(regular, body * 0.8)
            pdf.drawRightString(self.page_width - MARGIN, area_top + MARGIN * 0.4, card.tag)

        if card.image is not None:
            reader, img_w, img_h = image_reader(card.image)
            draw_w, draw_h = fit_box(img_w, img_h, area_w, area_h)
            x = MARGIN + (area_w - draw_w) / 2
            y = area_bottom + (area_h - draw_h) / 2
            pdf.drawImage(reader, x, y, width=draw_w, height=draw_h, mask="auto")

        meta_y = area_bottom - body * 2.4
        pdf.setFillColor(HexColor(theme.text))
        pdf.setFont(bold, body)
        pdf.drawString(MARGIN, meta_y, card.heading)
        if card.desc:
            pdf.setFillColor(HexColor(theme.muted))
            self._paragraph(pdf, card.desc, MARGIN, meta_y - body * 1.6, regular, body * 0.9, area_w * 0.7)
        if card.year:
            pdf.setFillColor(HexColor(theme.muted))
            pdf.setFont(regular, body)
            pdf.drawRightString(self.page_width - MARGIN, meta_y, card.year)


__all__ = ["ReportlabPdfExporter", "base_fonts", "fit_box"]
