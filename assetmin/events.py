"""Lifecycle notifications for Assetmin.

Observers can be told before and after each artifact is written. Every
notification carries the subject file, the derived artifact and whether the
artifact content changed, so an observer can skip work (a UI refresh, a log
line) when nothing was rewritten.

Notifications fire even when an unchanged artifact is not written. They are
not buffered: a callback subscribed after a write never sees it.

Key classes:
- LifecycleChannel: The four notification points.
- MinifyFileEvent: Payload delivered to subscribers.
- EventNotifier: Thread-safe subscriber registry and dispatcher.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .protocols import MinifyObserver


class LifecycleChannel(Enum):
    BEFORE_WRITE_MIN_FILE = "before_write_min_file"
    AFTER_WRITE_MIN_FILE = "after_write_min_file"
    BEFORE_WRITE_GZIP_FILE = "before_write_gzip_file"
    AFTER_WRITE_GZIP_FILE = "after_write_gzip_file"


@dataclass(frozen=True)
class MinifyFileEvent:
    """Payload of a lifecycle notification.

    Attributes:
        subject_file: File the artifact is derived from (the source output
            file for min files, the min file for gzip files).
        derived_file: Artifact being written.
        changed: Whether the artifact content changed and is actually written.
    """

    subject_file: Path
    derived_file: Path
    changed: bool


Subscriber = Callable[[MinifyFileEvent], None]


class EventNotifier:
    """Registry of lifecycle subscribers.

    One notifier is typically shared by every build unit of a process and
    passed explicitly to the components that publish events. Registration
    and dispatch are safe across threads; dispatch iterates over a snapshot
    so callbacks may subscribe or unsubscribe while being notified.
    Exceptions raised by a callback propagate to the publisher.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[LifecycleChannel, list[Subscriber]] = {
            channel: [] for channel in LifecycleChannel
        }

    def subscribe(self, channel: LifecycleChannel, callback: Subscriber) -> Subscriber:
        """Register a callback for a channel.

        Args:
            channel: Channel to listen on.
            callback: Called with a MinifyFileEvent.

        Returns:
            The callback, for a later unsubscribe.
        """
        with self._lock:
            self._subscribers[channel].append(callback)
        return callback

    def unsubscribe(self, channel: LifecycleChannel, callback: Subscriber) -> None:
        """Remove a callback from a channel; unknown callbacks are ignored."""
        with self._lock:
            try:
                self._subscribers[channel].remove(callback)
            except ValueError:
                pass

    def subscribe_all(self, observer: MinifyObserver) -> None:
        """Register an observer's methods on all four channels."""
        for channel in LifecycleChannel:
            self.subscribe(channel, getattr(observer, channel.value))

    def unsubscribe_all(self, observer: MinifyObserver) -> None:
        for channel in LifecycleChannel:
            self.unsubscribe(channel, getattr(observer, channel.value))

    def subscriber_count(self, channel: LifecycleChannel) -> int:
        with self._lock:
            return len(self._subscribers[channel])

    def notify(self, channel: LifecycleChannel, event: MinifyFileEvent) -> None:
        """Deliver an event to every current subscriber of a channel, in registration order."""
        with self._lock:
            callbacks = list(self._subscribers[channel])
        for callback in callbacks:
            callback(event)

    def publish(
        self, channel: LifecycleChannel, subject_file: Path, derived_file: Path, changed: bool
    ) -> None:
        self.notify(channel, MinifyFileEvent(subject_file, derived_file, changed))
