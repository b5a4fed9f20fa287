"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from storefront.application.adjust_stock import RestockHandler, SetStockHandler
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.list_products import ListProductsHandler, ShowProductHandler
from storefront.application.show_inventory import CheckStockHandler, LowStockReportHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.infrastructure.config import Settings
from storefront.infrastructure.notifications import LoggingLowStockObserver
from storefront.infrastructure.persistence.engine import create_store_engine
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


class Container:
    """Holds the engine for one process and hands out request-scoped handlers."""

    def __init__(self, settings: Settings | None = None, engine: Engine | None = None) -> None:
        self.settings = settings or Settings.from_env()
        self.engine = engine or create_store_engine(self.settings.database_url)
        self.low_stock_observer = LoggingLowStockObserver()

    def unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.engine)

    # --- Orders ---------------------------------------------------------------

    def create_order_handler(self) -> CreateOrderHandler:
        return CreateOrderHandler(
            self.unit_of_work(),
            low_stock_observer=self.low_stock_observer,
            low_stock_threshold=self.settings.low_stock_threshold,
        )

    def cancel_order_handler(self) -> CancelOrderHandler:
        return CancelOrderHandler(self.unit_of_work())

    def update_order_status_handler(self) -> UpdateOrderStatusHandler:
        return UpdateOrderStatusHandler(self.unit_of_work())

    def update_payment_status_handler(self) -> UpdatePaymentStatusHandler:
        return UpdatePaymentStatusHandler(self.unit_of_work())

    def show_order_handler(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.unit_of_work())

    def list_orders_handler(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.unit_of_work())

    # --- Catalog --------------------------------------------------------------

    def list_products_handler(self) -> ListProductsHandler:
        return ListProductsHandler(self.unit_of_work())

    def show_product_handler(self) -> ShowProductHandler:
        return ShowProductHandler(self.unit_of_work())

    # --- Inventory ------------------------------------------------------------

    def set_stock_handler(self) -> SetStockHandler:
        return SetStockHandler(
            self.unit_of_work(),
            low_stock_observer=self.low_stock_observer,
            low_stock_threshold=self.settings.low_stock_threshold,
        )

    def restock_handler(self) -> RestockHandler:
        return RestockHandler(
            self.unit_of_work(),
            low_stock_observer=self.low_stock_observer,
            low_stock_threshold=self.settings.low_stock_threshold,
        )

    def low_stock_report_handler(self) -> LowStockReportHandler:
        return LowStockReportHandler(self.unit_of_work(), self.settings.low_stock_threshold)

    def check_stock_handler(self) -> CheckStockHandler:
        return CheckStockHandler(self.unit_of_work())
