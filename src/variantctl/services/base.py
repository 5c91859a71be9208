"""BaseService — foundation for all variantctl services.

Every service receives a :class:`CatalogStore` at construction time.
The store owns catalog loading and the per-item index cache; services
only read from it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from variantctl.infrastructure.catalog_store import CatalogItemNotFound, CatalogLoadError
from variantctl.services.result import ServiceResult

if TYPE_CHECKING:
    from variantctl.infrastructure.catalog_store import CatalogStore, IndexedItem

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve(self, ...) -> ServiceResult:
                entry = self._load(op, handle)
                if isinstance(entry, ServiceResult):
                    return entry
                ...
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def _load(self, op: str, handle: str | None) -> IndexedItem | ServiceResult:
        """Fetch an indexed item, or a failed ServiceResult explaining why not."""
        try:
            return self._store.indexed(handle)
        except CatalogItemNotFound as exc:
            return ServiceResult.failure(
                op, "ITEM_NOT_FOUND", str(exc), handle=exc.handle, available=exc.available
            )
        except CatalogLoadError as exc:
            logger.debug("Catalog load failed", exc_info=True)
            return ServiceResult.failure(op, "CATALOG_LOAD_FAILED", str(exc), path=str(exc.path))
