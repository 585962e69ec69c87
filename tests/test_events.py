import threading
from pathlib import Path

import pytest

from assetmin.events import EventNotifier, LifecycleChannel, MinifyFileEvent
from assetmin.protocols import MinifyObserver


def make_event(changed=True):
    return MinifyFileEvent(Path("app.js"), Path("app.min.js"), changed)


def test_notify_reaches_subscribers_in_order():
    notifier = EventNotifier()
    seen = []
    notifier.subscribe(LifecycleChannel.BEFORE_WRITE_MIN_FILE, lambda e: seen.append(("a", e)))
    notifier.subscribe(LifecycleChannel.BEFORE_WRITE_MIN_FILE, lambda e: seen.append(("b", e)))
    event = make_event()
    notifier.notify(LifecycleChannel.BEFORE_WRITE_MIN_FILE, event)
    assert seen == [("a", event), ("b", event)]


def test_channels_are_independent():
    notifier = EventNotifier()
    seen = []
    notifier.subscribe(LifecycleChannel.AFTER_WRITE_GZIP_FILE, seen.append)
    notifier.notify(LifecycleChannel.BEFORE_WRITE_GZIP_FILE, make_event())
    assert seen == []


def test_notify_without_subscribers_is_noop():
    EventNotifier().notify(LifecycleChannel.AFTER_WRITE_MIN_FILE, make_event())


def test_unsubscribe():
    notifier = EventNotifier()
    seen = []
    callback = notifier.subscribe(LifecycleChannel.AFTER_WRITE_MIN_FILE, seen.append)
    assert notifier.subscriber_count(LifecycleChannel.AFTER_WRITE_MIN_FILE) == 1
    notifier.unsubscribe(LifecycleChannel.AFTER_WRITE_MIN_FILE, callback)
    notifier.unsubscribe(LifecycleChannel.AFTER_WRITE_MIN_FILE, callback)
    notifier.publish(LifecycleChannel.AFTER_WRITE_MIN_FILE, Path("a.js"), Path("a.min.js"), False)
    assert seen == []
    assert notifier.subscriber_count(LifecycleChannel.AFTER_WRITE_MIN_FILE) == 0


def test_late_subscriber_sees_no_replay():
    notifier = EventNotifier()
    notifier.notify(LifecycleChannel.BEFORE_WRITE_MIN_FILE, make_event())
    seen = []
    notifier.subscribe(LifecycleChannel.BEFORE_WRITE_MIN_FILE, seen.append)
    assert seen == []


def test_callback_may_unsubscribe_during_dispatch():
    notifier = EventNotifier()
    seen = []

    def once(event):
        seen.append("once")
        notifier.unsubscribe(LifecycleChannel.BEFORE_WRITE_MIN_FILE, once)

    notifier.subscribe(LifecycleChannel.BEFORE_WRITE_MIN_FILE, once)
    notifier.subscribe(LifecycleChannel.BEFORE_WRITE_MIN_FILE, lambda e: seen.append("always"))
    notifier.notify(LifecycleChannel.BEFORE_WRITE_MIN_FILE, make_event())
    notifier.notify(LifecycleChannel.BEFORE_WRITE_MIN_FILE, make_event())
    assert seen == ["once", "always", "always"]


def test_subscriber_errors_propagate():
    notifier = EventNotifier()

    def broken(event):
        raise RuntimeError("observer failed")

    notifier.subscribe(LifecycleChannel.AFTER_WRITE_MIN_FILE, broken)
    with pytest.raises(RuntimeError):
        notifier.notify(LifecycleChannel.AFTER_WRITE_MIN_FILE, make_event())


def test_subscribe_all_observer():
    class Recorder:
        def __init__(self):
            self.calls = []

        def before_write_min_file(self, event):
            self.calls.append("before_min")

        def after_write_min_file(self, event):
            self.calls.append("after_min")

        def before_write_gzip_file(self, event):
            self.calls.append("before_gz")

        def after_write_gzip_file(self, event):
            self.calls.append("after_gz")

    recorder = Recorder()
    assert isinstance(recorder, MinifyObserver)
    notifier = EventNotifier()
    notifier.subscribe_all(recorder)
    for channel in LifecycleChannel:
        notifier.notify(channel, make_event())
    assert recorder.calls == ["before_min", "after_min", "before_gz", "after_gz"]

    notifier.unsubscribe_all(recorder)
    for channel in LifecycleChannel:
        assert notifier.subscriber_count(channel) == 0


def test_concurrent_subscribe_and_notify():
    notifier = EventNotifier()
    counter = []
    lock = threading.Lock()

    def record(event):
        with lock:
            counter.append(event)

    def worker():
        for _ in range(50):
            notifier.subscribe(LifecycleChannel.BEFORE_WRITE_GZIP_FILE, record)
            notifier.notify(LifecycleChannel.BEFORE_WRITE_GZIP_FILE, make_event())
            notifier.unsubscribe(LifecycleChannel.BEFORE_WRITE_GZIP_FILE, record)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert notifier.subscriber_count(LifecycleChannel.BEFORE_WRITE_GZIP_FILE) == 0
    assert len(counter) >= 8 * 50
