from pokerui.debug import DebugSink
from pokerui.dialog import DialogNotifier
from pokerui.ui.widgets import Dialog


def test_show_and_immediate_hide(scheduler):
    dialog = Dialog()
    notifier = DialogNotifier(dialog, scheduler)

    notifier.show("Game is done!")
    assert dialog.is_open and dialog.contents == "Game is done!"

    assert notifier.hide() is None
    assert not dialog.is_open


def test_later_message_overwrites_and_earlier_hide_still_fires(scheduler):
    dialog = Dialog()
    notifier = DialogNotifier(dialog, scheduler)

    notifier.flash("first", 1000)
    scheduler.advance(500)
    notifier.show("second")
    scheduler.advance(500)

    assert not dialog.is_open
    assert dialog.contents == "second"


def test_cancelled_hide_keeps_dialog_open(scheduler):
    dialog = Dialog()
    notifier = DialogNotifier(dialog, scheduler)

    task = notifier.flash("hello", 100)
    task.cancel()
    scheduler.advance(1000)

    assert dialog.is_open


def test_debug_sink_routes_by_kind(caplog):
    caplog.set_level("DEBUG", logger="pokerui")
    sink = DebugSink()

    sink("plain message")
    sink("something broke", kind="err")
    sink({'pot': 30}, kind="dir")

    levels = [(r.levelname, r.getMessage()) for r in caplog.records if r.name == "pokerui"]
    assert ("DEBUG", "plain message") in levels
    assert ("ERROR", "something broke") in levels
    assert any(level == "DEBUG" and "'pot': 30" in message for level, message in levels)
