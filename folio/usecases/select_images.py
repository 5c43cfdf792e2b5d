from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence
from ..domain.images import ImageData
from ..domain.ports import ImageSourcePort
from .error_mapping import map_storage_error


@dataclass
class SelectImages:
    source: ImageSourcePort

    def __call__(self) -> Optional[List[ImageData]]:
        try:
            images = self.source.select_image_files()
        except Exception as e:
            raise map_storage_error(e, default_code="SELECT_IMAGES_FAILED")
        if images is None:
            return None
        return list(images)


@dataclass
class ReadImageFiles:
    """Read dropped files; non-image paths are ignored."""

    source: ImageSourcePort

    def __call__(self, paths: Sequence[str]) -> List[ImageData]:
        try:
            return list(self.source.read_image_files(list(paths)))
        except Exception as e:
            raise map_storage_error(e, default_code="READ_IMAGES_FAILED")
