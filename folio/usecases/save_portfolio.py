from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..domain.ports import Payload, PortfolioStoragePort
from .error_mapping import map_storage_error


@dataclass
class SavePortfolio:
    storage: PortfolioStoragePort

    def __call__(self, payload: Payload, known_path: Optional[str] = None) -> Optional[str]:
        try:
            return self.storage.save(payload, known_path)
        except Exception as e:
            raise map_storage_error(e, default_code="SAVE_PORTFOLIO_FAILED")
