"""Image files picked from disk, read into inline ``ImageData``."""

from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Sequence, Tuple

from folio.domain.images import IMAGE_EXTENSIONS, ImageData, is_image_path
from folio.domain.ports import ImageSourcePort

_log = logging.getLogger(__name__)

AskOpenPaths = Callable[[], Sequence[str]]

FILE_TYPES: Tuple[Tuple[str, str], ...] = (
    ("Images", " ".join(f"*.{ext}" for ext in IMAGE_EXTENSIONS)),
    ("All files", "*.*"),
)


class LocalImageSource(ImageSourcePort):
    def __init__(self, ask_open_paths: AskOpenPaths) -> None:
        self.ask_open_paths = ask_open_paths

    def select_image_files(self) -> Optional[List[ImageData]]:
        paths = [p for p in (self.ask_open_paths() or ()) if p]
        if not paths:
            return None
        images = [self.read(path) for path in paths]
        _log.info("Read %d image(s) from disk", len(images))
        return images

    def read_image_files(self, paths: Sequence[str]) -> List[ImageData]:
        """Read the image files among ``paths``; other files are skipped."""
        wanted = [p for p in paths if p and is_image_path(p)]
        skipped = len([p for p in paths if p]) - len(wanted)
        if skipped:
            _log.info("Skipped %d dropped file(s) that are not images", skipped)
        return [self.read(path) for path in wanted]

    @staticmethod
    def read(path: str) -> ImageData:
        return ImageData.from_file(os.path.abspath(path))


__all__ = ["FILE_TYPES", "LocalImageSource"]
