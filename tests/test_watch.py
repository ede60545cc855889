from __future__ import annotations

from pathlib import Path

from prosetex.ui.cli.watch import Debouncer, watch_file


class FakeTime:
    """Deterministic clock whose ``sleep`` advances time and runs a hook."""

    def __init__(self) -> None:
        self.now = 0.0
        self.hooks: dict[float, object] = {}

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now = round(self.now + seconds, 6)
        hook = self.hooks.pop(self.now, None)
        if callable(hook):
            hook()


def test_debouncer_waits_for_quiet_period() -> None:
    debouncer = Debouncer(delay=0.5)
    assert not debouncer.ready(10.0)
    debouncer.touch(1.0)
    assert not debouncer.ready(1.4)
    assert debouncer.ready(1.5)
    debouncer.reset()
    assert not debouncer.ready(5.0)


def test_watch_runs_once_initially(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("a", encoding="utf-8")
    calls: list[Path] = []
    fake = FakeTime()

    runs = watch_file(
        source, calls.append, debounce=0.5, poll_interval=0.1, max_runs=1,
        clock=fake.clock, sleep=fake.sleep,
    )

    assert runs == 1
    assert calls == [source]


def test_burst_of_changes_triggers_single_run(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("a", encoding="utf-8")
    fake = FakeTime()
    contents: list[str] = []

    def _edit(text: str):
        def _write() -> None:
            source.write_text(text, encoding="utf-8")

        return _write

    fake.hooks[0.1] = _edit("ab")
    fake.hooks[0.2] = _edit("abc")
    fake.hooks[0.3] = _edit("abcd")

    runs = watch_file(
        source,
        lambda path: contents.append(path.read_text(encoding="utf-8")),
        debounce=0.5,
        poll_interval=0.1,
        max_runs=2,
        clock=fake.clock,
        sleep=fake.sleep,
    )

    assert runs == 2
    assert contents == ["a", "abcd"]
    assert fake.now >= 0.8
