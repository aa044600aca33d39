"""
수강 계획 자동 저장 (debounce)

상태가 바뀔 때마다 touch() 를 호출하면, 대기 중인 저장을 취소하고 다시 예약한다.
예약 시간이 지나면 그 시점의 상태를 스냅샷으로 떠서 한 번만 저장한다.
저장 실패 시 메시지만 출력하고 되돌리지 않는다.

저장은 항상 호출한 쪽 스레드에서 실행된다 (DB 세션을 스레드 간에 공유하지 않음).
스케줄러는 주입한다:
  - PollingScheduler: 기한이 지난 콜백을 run_pending() 호출 시점에 실행 (실제 실행용)
  - 테스트에서는 시계를 직접 움직이는 스케줄러를 넣는다
"""
import time


class _PendingCall:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class PollingScheduler:
    """
    기한이 된 콜백을 run_pending() 을 호출한 스레드에서 실행

    편집 루프(화면 갱신, 명령 처리 등)가 주기적으로 run_pending() 을 불러야 한다.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self._calls = []

    def schedule(self, delay_seconds, callback):
        """
        Returns:
            handle: cancel() 메서드를 가진 객체
        """
        call = _PendingCall(self.clock() + delay_seconds, callback)
        self._calls.append(call)
        return call

    def run_pending(self):
        """기한이 지난 콜백 실행, 실행한 개수 반환"""
        now = self.clock()
        live = [c for c in self._calls if not c.cancelled]
        due = [c for c in live if c.due <= now]
        self._calls = [c for c in live if c.due > now]
        for call in sorted(due, key=lambda c: c.due):
            call.callback()
        return len(due)


class DebouncedAutosave:
    """마지막 변경 후 delay 가 지나면 한 번 저장"""

    def __init__(self, snapshot, write, delay_ms=800, scheduler=None):
        """
        Args:
            snapshot: 현재 상태를 저장용 레코드로 돌려주는 함수
            write: 레코드를 저장하는 함수 (성공 여부 bool 반환)
            delay_ms: 대기 시간 (밀리초)
            scheduler: schedule(delay_seconds, callback) 를 제공하는 객체
        """
        self.snapshot = snapshot
        self.write = write
        self.delay_ms = delay_ms
        self.scheduler = scheduler or PollingScheduler()
        self.pending = False
        self.saving = False
        self.save_count = 0
        self._handle = None

    def touch(self):
        """상태 변경 알림, 기존 예약 취소 후 재예약"""
        if self._handle is not None:
            self._handle.cancel()
        self.pending = True
        self._handle = self.scheduler.schedule(self.delay_ms / 1000.0, self._fire)

    def poll(self):
        """기한이 지난 저장 실행 (run_pending 을 제공하는 스케줄러만)"""
        run_pending = getattr(self.scheduler, 'run_pending', None)
        if run_pending is not None:
            run_pending()
        return self.pending

    def cancel(self):
        """대기 중인 저장 취소 (저장하지 않음)"""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self.pending = False

    def flush(self):
        """대기 중인 저장이 있으면 바로 실행"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if not self.pending:
            return False
        return self._fire()

    def _fire(self):
        if not self.pending:
            return False
        self.pending = False
        self._handle = None
        record = self.snapshot()

        self.saving = True
        try:
            ok = self.write(record)
        finally:
            self.saving = False

        if ok:
            self.save_count += 1
        else:
            print("✗ 수강 계획 자동 저장 실패")
        return bool(ok)
