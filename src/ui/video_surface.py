"""비디오 출력 위젯: 화면 클릭을 시그널로 알린다."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent
from PySide6.QtMultimediaWidgets import QVideoWidget


class VideoSurface(QVideoWidget):
    """QVideoWidget that reports left clicks as ``clicked``."""

    clicked = Signal()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)
