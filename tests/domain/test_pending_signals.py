"""Tests for buffering low-stock signals until commit."""

from storefront.domain.service.collaborators import LowStockSignal, PendingSignals
from tests.fakes import ExplodingObserver, RecordingObserver


def test_flush_delivers_in_order_and_empties():
    pending = PendingSignals()
    pending.notify(LowStockSignal(1, 2))
    pending.notify(LowStockSignal(2, 0))
    observer = RecordingObserver()

    pending.flush_to(observer)

    assert [s.variant_id for s in observer.signals] == [1, 2]
    assert len(pending) == 0


def test_flush_without_observer_drops_signals():
    pending = PendingSignals()
    pending.notify(LowStockSignal(1, 2))
    pending.flush_to(None)
    assert len(pending) == 0


def test_observer_failure_is_not_raised():
    pending = PendingSignals()
    pending.notify(LowStockSignal(1, 2))
    pending.flush_to(ExplodingObserver())
    assert len(pending) == 0
