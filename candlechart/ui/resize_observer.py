"""Observe box-size changes of a container widget."""

from __future__ import annotations

from typing import Callable

from PyQt6 import sip
from PyQt6.QtCore import QEvent, QObject, QSize
from PyQt6.QtGui import QResizeEvent
from PyQt6.QtWidgets import QWidget


class ResizeObserver(QObject):
    """Event filter that reports resize events of one widget.

    Usage:
        observer = ResizeObserver(lambda size: chart.apply_options(width=size.width()))
        observer.observe(container)
        ...
        observer.detach()
    """

    def __init__(
        self,
        callback: Callable[[QSize], None],
        parent: QObject | None = None,
    ) -> None:
        """Initialize the observer.

        Args:
            callback: Called with the new size after every resize.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._callback = callback
        self._target: QWidget | None = None

    @property
    def target(self) -> QWidget | None:
        """The observed widget, or None when disconnected."""
        return self._target

    def observe(self, widget: QWidget) -> None:
        """Start observing a widget, replacing any previous target."""
        self.detach()
        widget.installEventFilter(self)
        self._target = widget

    def detach(self) -> None:
        """Stop observing. Safe to call repeatedly."""
        target = self._target
        if target is None:
            return
        self._target = None
        if not sip.isdeleted(target):
            target.removeEventFilter(self)

    def eventFilter(self, obj: QObject | None, event: QEvent | None) -> bool:
        """Forward resize events of the observed widget to the callback."""
        if (
            self._target is not None
            and obj is self._target
            and event is not None
            and event.type() == QEvent.Type.Resize
            and isinstance(event, QResizeEvent)
        ):
            self._callback(event.size())
        return super().eventFilter(obj, event)
