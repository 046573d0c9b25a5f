from PySide6.QtCore import QTimer
from tt.core.clock import Scheduler

# Scheduler backed by QTimer, so ticks arrive on the Qt event loop like every other UI event. The returned handle is
# the QTimer itself.
class QtScheduler(Scheduler):

    def __init__(self, parent=None):
        self._parent = parent

    def register(self, period_seconds, callback):
        timer = QTimer(self._parent)
        timer.setInterval(int(period_seconds * 1000))
        timer.timeout.connect(lambda: self._fire(timer, callback))
        timer.start()
        return timer

    def cancel(self, handle):
        handle.stop()
        handle.deleteLater()

    # A callback returning False drops its own registration.
    def _fire(self, timer, callback):
        if not callback():
            self.cancel(timer)
