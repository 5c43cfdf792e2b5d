from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..domain.ports import Payload, PortfolioStoragePort
from .error_mapping import map_storage_error


@dataclass
class CreatePortfolio:
    storage: PortfolioStoragePort

    def __call__(self, payload: Payload) -> Optional[str]:
        """Write a fresh portfolio file; ``None`` when the dialog was canceled."""
        try:
            return self.storage.create_document(payload)
        except Exception as e:
            raise map_storage_error(e, default_code="CREATE_PORTFOLIO_FAILED")
