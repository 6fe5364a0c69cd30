"""Tests for DebouncedInput on a fake clock."""

from servdesk.ui.command_palette.cancellation import CancellationToken
from servdesk.ui.command_palette.debounce import DebouncedInput


def _make(scheduler, token=None):
    emitted: list[str] = []
    unchanged: list[str] = []
    debouncer = DebouncedInput(
        emitted.append,
        on_unchanged=unchanged.append,
        delay=0.25,
        call_later=scheduler.call_later,
        token=token,
    )
    return debouncer, emitted, unchanged


class TestDebouncedInput:
    def test_emits_after_quiet_window(self, scheduler):
        debouncer, emitted, _ = _make(scheduler)

        debouncer.push("acme")
        scheduler.advance(0.2)
        assert emitted == []
        assert debouncer.pending

        scheduler.advance(0.05)
        assert emitted == ["acme"]
        assert debouncer.stable == "acme"
        assert not debouncer.pending

    def test_burst_emits_last_value_once(self, scheduler):
        debouncer, emitted, _ = _make(scheduler)

        for text in ("a", "ac", "acm", "acme"):
            debouncer.push(text)
            scheduler.advance(0.1)
        scheduler.advance(0.25)

        assert emitted == ["acme"]

    def test_superseded_timers_are_cancelled(self, scheduler):
        debouncer, _, _ = _make(scheduler)

        debouncer.push("a")
        debouncer.push("ab")

        assert len(scheduler.pending) == 1

    def test_same_value_is_not_emitted_twice(self, scheduler):
        debouncer, emitted, unchanged = _make(scheduler)

        debouncer.push("x")
        scheduler.advance(0.25)
        debouncer.push("xy")
        debouncer.push("x")
        scheduler.advance(0.25)

        assert emitted == ["x"]
        assert unchanged == ["x"]

    def test_empty_value_is_emitted_after_text(self, scheduler):
        debouncer, emitted, _ = _make(scheduler)

        debouncer.push("x")
        scheduler.advance(0.25)
        debouncer.push("")
        scheduler.advance(0.25)

        assert emitted == ["x", ""]

    def test_reset_drops_pending_value(self, scheduler):
        debouncer, emitted, _ = _make(scheduler)

        debouncer.push("abc")
        debouncer.reset()
        scheduler.advance(1.0)

        assert emitted == []
        assert debouncer.raw == ""

    def test_cancelled_owner_silences_timers(self, scheduler):
        owner = CancellationToken()
        debouncer, emitted, _ = _make(scheduler, token=owner)

        debouncer.push("abc")
        owner.cancel()
        scheduler.advance(1.0)
        debouncer.push("abcd")
        scheduler.advance(1.0)

        assert emitted == []
        assert scheduler.pending == []

    def test_reset_with_new_token_revives_input(self, scheduler):
        owner = CancellationToken()
        debouncer, emitted, _ = _make(scheduler, token=owner)
        owner.cancel()

        debouncer.reset("", token=CancellationToken())
        debouncer.push("again")
        scheduler.advance(0.25)

        assert emitted == ["again"]
