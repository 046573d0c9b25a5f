"""Label that displays a timer readout."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel

from tt.core.timer_state import ALL_TAGS
from tt.ui.theme import tag_property


class TimerLabel(QLabel):
    """Renderer sink for ``TalkTimer``.

    Status tags become boolean dynamic properties so the stylesheet can color
    the readout with ``#timerLabel[pretalk="true"]`` style selectors.
    """

    def __init__(self, font_family="DejaVu Sans Mono", font_size=48, parent=None):
        super().__init__("00:00", parent)
        self.setObjectName("timerLabel")
        self.setFont(QFont(font_family, font_size))
        self.setAlignment(Qt.AlignCenter)
        self.tags = frozenset()
        for tag in ALL_TAGS:
            self.setProperty(tag_property(tag), False)

    def show_readout(self, text, tags):
        """Apply one readout. Restyles only when the tag set changed."""
        self.setText(text)
        tags = frozenset(tags)
        if tags == self.tags:
            return
        self.tags = tags
        for tag in ALL_TAGS:
            self.setProperty(tag_property(tag), tag in tags)
        # Property selectors are only re-evaluated on polish
        self.style().unpolish(self)
        self.style().polish(self)
