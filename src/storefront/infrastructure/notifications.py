"""Default low-stock observer: a warning in the application log."""

from __future__ import annotations

import logging

from storefront.domain.service.collaborators import LowStockObserver, LowStockSignal

logger = logging.getLogger(__name__)


class LoggingLowStockObserver(LowStockObserver):

    def notify(self, signal: LowStockSignal) -> None:
        logger.warning(
            "low_stock: variant_id=%s remaining=%s",
            signal.variant_id,
            signal.remaining_quantity,
        )
