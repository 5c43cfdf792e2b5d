from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence
from ..domain.ports import PdfExportPort
from ..domain.theme import ThemeStyle
from .error_mapping import map_storage_error


@dataclass
class ExportPortfolio:
    exporter: PdfExportPort

    def __call__(self, cards: Sequence[Any], theme: ThemeStyle) -> Optional[str]:
        if not cards:
            raise map_storage_error(ValueError("Nothing to export yet."), default_code="EXPORT_EMPTY")
        try:
            return self.exporter.export_pdf(cards, theme)
        except Exception as e:
            raise map_storage_error(e, default_code="EXPORT_FAILED")
