from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..domain.document import PortfolioDocument
from ..domain.ports import PortfolioStoragePort
from ..domain.snapshot import document_from_payload
from .error_mapping import map_storage_error


@dataclass(frozen=True)
class OpenedPortfolio:
    document: PortfolioDocument
    path: str


@dataclass
class OpenPortfolio:
    """Let the user pick a portfolio file and decode it."""

    storage: PortfolioStoragePort

    def __call__(self) -> Optional[OpenedPortfolio]:
        try:
            result = self.storage.open()
            if result is None:
                return None
            payload, path = result
            return OpenedPortfolio(document=document_from_payload(payload), path=path)
        except Exception as e:
            raise map_storage_error(e, default_code="OPEN_PORTFOLIO_FAILED")


@dataclass
class OpenPortfolioAt:
    """Decode the portfolio stored at a known path (e.g. the last one used)."""

    storage: PortfolioStoragePort

    def __call__(self, path: str) -> OpenedPortfolio:
        try:
            payload, resolved = self.storage.open_at(path)
            return OpenedPortfolio(document=document_from_payload(payload), path=resolved)
        except Exception as e:
            raise map_storage_error(e, default_code="OPEN_PORTFOLIO_FAILED")
