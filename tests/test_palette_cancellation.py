"""Tests for palette cancellation tokens."""

from servdesk.ui.command_palette.cancellation import CancellationToken, SerialCanceller


class TestCancellationToken:
    def test_starts_active(self):
        assert not CancellationToken().is_cancelled()

    def test_cancel_is_idempotent(self):
        calls = []
        token = CancellationToken()
        token.on_cancel(lambda: calls.append(1))

        token.cancel()
        token.cancel()

        assert token.is_cancelled()
        assert calls == [1]

    def test_cancel_cascades_to_children(self):
        parent = CancellationToken()
        child = parent.child()
        grandchild = child.child()

        parent.cancel()

        assert child.is_cancelled()
        assert grandchild.is_cancelled()

    def test_child_cancel_leaves_parent_active(self):
        parent = CancellationToken()
        child = parent.child()

        child.cancel()

        assert not parent.is_cancelled()

    def test_child_of_cancelled_parent_starts_cancelled(self):
        parent = CancellationToken()
        parent.cancel()

        assert parent.child().is_cancelled()

    def test_on_cancel_after_cancel_runs_immediately(self):
        calls = []
        token = CancellationToken()
        token.cancel()

        token.on_cancel(lambda: calls.append("late"))

        assert calls == ["late"]


class TestSerialCanceller:
    def test_next_cancels_previous(self):
        serial = SerialCanceller(CancellationToken())

        first = serial.next()
        second = serial.next()

        assert first.is_cancelled()
        assert not second.is_cancelled()
        assert serial.current is second

    def test_cancel_clears_current(self):
        serial = SerialCanceller(CancellationToken())
        token = serial.next()

        serial.cancel()

        assert token.is_cancelled()
        assert serial.current is None

    def test_parent_cancel_reaches_issued_tokens(self):
        parent = CancellationToken()
        serial = SerialCanceller(parent)
        token = serial.next()

        parent.cancel()

        assert token.is_cancelled()
        assert serial.next().is_cancelled()
