"""
자동 저장(debounce) 테스트
"""
import threading
from services.autosave import DebouncedAutosave, PollingScheduler


class _Store:
    def __init__(self, ok=True):
        self.ok = ok
        self.writes = []

    def write(self, record):
        self.writes.append(record)
        return self.ok


def _autosave(scheduler, state, store):
    return DebouncedAutosave(
        snapshot=lambda: dict(state),
        write=store.write,
        delay_ms=800,
        scheduler=scheduler,
    )


class TestDebouncedAutosave:

    def test_burst_coalesces_into_one_write_with_latest_state(self, scheduler):
        state = {'n': 0}
        store = _Store()
        autosave = _autosave(scheduler, state, store)

        for n in range(1, 6):
            state['n'] = n
            autosave.touch()
            scheduler.advance(300)

        assert store.writes == []
        scheduler.advance(500)

        assert store.writes == [{'n': 5}]
        assert autosave.save_count == 1
        assert not autosave.pending

    def test_nothing_written_before_delay(self, scheduler):
        store = _Store()
        autosave = _autosave(scheduler, {'n': 1}, store)

        autosave.touch()
        scheduler.advance(799)
        assert store.writes == []

        scheduler.advance(1)
        assert len(store.writes) == 1

    def test_flush_writes_immediately_once(self, scheduler):
        store = _Store()
        autosave = _autosave(scheduler, {'n': 1}, store)

        autosave.touch()
        assert autosave.flush() is True
        assert len(store.writes) == 1

        scheduler.advance(1000)
        assert len(store.writes) == 1
        assert autosave.flush() is False

    def test_cancel_discards_pending_write(self, scheduler):
        store = _Store()
        autosave = _autosave(scheduler, {'n': 1}, store)

        autosave.touch()
        autosave.cancel()
        scheduler.advance(1000)

        assert store.writes == []

    def test_failed_write_keeps_state_and_reports(self, scheduler, capsys):
        state = {'n': 3}
        store = _Store(ok=False)
        autosave = _autosave(scheduler, state, store)

        autosave.touch()
        scheduler.advance(800)

        assert store.writes == [{'n': 3}]
        assert state == {'n': 3}
        assert autosave.save_count == 0
        assert '✗' in capsys.readouterr().out

    def test_touch_after_save_schedules_again(self, scheduler):
        state = {'n': 1}
        store = _Store()
        autosave = _autosave(scheduler, state, store)

        autosave.touch()
        scheduler.advance(800)
        state['n'] = 2
        autosave.touch()
        scheduler.advance(800)

        assert store.writes == [{'n': 1}, {'n': 2}]


class _Clock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestPollingScheduler:

    def test_runs_only_due_callbacks_on_caller_thread(self):
        clock = _Clock()
        scheduler = PollingScheduler(clock=clock)
        calls = []
        scheduler.schedule(0.8, lambda: calls.append(('a', threading.current_thread())))
        scheduler.schedule(2.0, lambda: calls.append(('b', threading.current_thread())))

        assert scheduler.run_pending() == 0
        clock.now += 0.8
        assert scheduler.run_pending() == 1
        assert calls == [('a', threading.current_thread())]

        clock.now += 5
        scheduler.run_pending()
        assert [name for name, _ in calls] == ['a', 'b']
        assert scheduler.run_pending() == 0

    def test_cancelled_callback_never_runs(self):
        clock = _Clock()
        scheduler = PollingScheduler(clock=clock)
        calls = []
        scheduler.schedule(0.1, lambda: calls.append(1)).cancel()

        clock.now += 1
        assert scheduler.run_pending() == 0
        assert calls == []

    def test_autosave_writes_on_poll_after_delay(self):
        clock = _Clock()
        store = _Store()
        writer_threads = []

        def write(record):
            writer_threads.append(threading.current_thread())
            return store.write(record)

        autosave = DebouncedAutosave(
            snapshot=lambda: {'n': 1}, write=write,
            delay_ms=800, scheduler=PollingScheduler(clock=clock),
        )

        autosave.touch()
        clock.now += 0.5
        assert autosave.poll() is True
        assert store.writes == []

        clock.now += 0.5
        assert autosave.poll() is False
        assert store.writes == [{'n': 1}]
        assert writer_threads == [threading.current_thread()]

    def test_default_scheduler_does_not_start_threads(self):
        before = threading.active_count()
        autosave = DebouncedAutosave(snapshot=dict, write=_Store().write)

        autosave.touch()

        assert isinstance(autosave.scheduler, PollingScheduler)
        assert threading.active_count() == before
        assert autosave.flush() is True
