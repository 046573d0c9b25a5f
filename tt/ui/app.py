import sys
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QVBoxLayout, QWidget
from tt.common.logger import log
from tt.core import config
from tt.core.clock import SystemClock
from tt.core.timer import select
from tt.ui.scheduler import QtScheduler
from tt.ui.theme import build_stylesheet
from tt.ui.timer_label import TimerLabel

HINT_TEXT = "S start   Space pause   R reset   ←/→ slides   Esc quit"


# ---------------------------------------------------------------------------
# Presenter window
# ---------------------------------------------------------------------------

# Minimal presenter console: the timer readout, a status line, and keyboard control. Slide navigation here only
# feeds progress into the timer's pacing indicator.
class PresenterWindow(QMainWindow):

    def __init__(self, settings, clock=None):
        super().__init__()
        self.setWindowTitle("Talk Timer")
        self.slides = settings.get("slides", 0)
        self.slide = 0

        # -- Build UI skeleton --
        central = QWidget()
        self.setCentralWidget(central)
        lay = QVBoxLayout(central)
        self.timer_label = TimerLabel(settings["font"], settings["font_size"])
        lay.addWidget(self.timer_label, 1)
        self.status_label = QLabel("")
        self.status_label.setObjectName("statusLabel")
        self.status_label.setFont(QFont(settings["font"], max(8, settings["font_size"] // 4)))
        self.status_label.setAlignment(Qt.AlignCenter)
        lay.addWidget(self.status_label)
        self.setStyleSheet(build_stylesheet(settings.get("theme")))

        # -- Timer --
        clock = clock or SystemClock()
        self.scheduler = QtScheduler(self)
        self.timer = select(
            **config.timer_arguments(settings, clock),
            clock=clock,
            scheduler=self.scheduler,
            sink=self.timer_label.show_readout,
        )
        self._update_status()

    # ------------------------------------------------------------------ #
    #  Keyboard control                                                    #
    # ------------------------------------------------------------------ #

    def keyPressEvent(self, event):
        key = event.key()
        if key in (Qt.Key_S, Qt.Key_Return, Qt.Key_Enter):
            self.timer.start()
        elif key in (Qt.Key_Space, Qt.Key_P):
            self.timer.pause()
        elif key == Qt.Key_R:
            self.timer.reset()
        elif key in (Qt.Key_Right, Qt.Key_PageDown):
            self.move_slide(1)
        elif key in (Qt.Key_Left, Qt.Key_PageUp):
            self.move_slide(-1)
        elif key in (Qt.Key_Escape, Qt.Key_Q):
            self.close()
            return
        else:
            super().keyPressEvent(event)
            return
        self._update_status()

    # ------------------------------------------------------------------ #
    #  Slides                                                              #
    # ------------------------------------------------------------------ #

    def move_slide(self, step):
        """Move through the deck and report the new position as progress."""
        if self.slides <= 1:
            return
        self.slide = min(max(self.slide + step, 0), self.slides - 1)
        self.timer.set_progress(self.slide / (self.slides - 1))

    # ------------------------------------------------------------------ #
    #  Display helpers                                                     #
    # ------------------------------------------------------------------ #

    def status_text(self):
        parts = []
        if self.slides > 0:
            parts.append(f"Slide {self.slide + 1}/{self.slides}")
        if self.timer.is_paused():
            parts.append("Paused")
        parts.append(HINT_TEXT)
        return "   •   ".join(parts)

    def _update_status(self):
        self.status_label.setText(self.status_text())

    def closeEvent(self, event):
        self.timer.stop()
        log.info("Presenter window closed")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(settings):
    app = QApplication(sys.argv)
    window = PresenterWindow(settings)
    window.show()
    sys.exit(app.exec())
