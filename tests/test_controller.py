import pytest

from pokerui.controller import PokerUI


def test_network_can_only_be_set_once(ui, network):
    ui.network = network

    with pytest.raises(RuntimeError):
        ui.network = network
    assert ui.network is network


def test_assigning_network_enables_table_capture(ui, network):
    ui.network = network

    assert network.capture_new_tables is True
    assert network.listener_count("new-game") == 1
    assert network.listener_count("table-announced") == 1


def test_connected_network_shows_notice_immediately(ui, network, scheduler):
    network.connected = True
    ui.network = network

    assert ui.dialog_widget.is_open
    assert ui.dialog_widget.contents == PokerUI.CONNECTED_MESSAGE
    assert network.listener_count("connection-started") == 0

    scheduler.advance(2999)
    assert ui.dialog_widget.is_open
    scheduler.advance(1)
    assert not ui.dialog_widget.is_open


def test_notice_waits_for_connection_started(ui, network, scheduler):
    ui.network = network
    assert not ui.dialog_widget.is_open

    network.emit("connection-started")

    assert ui.dialog_widget.contents == "Connected to peer-to-peer network."
    scheduler.advance(3000)
    assert not ui.dialog_widget.is_open


def test_new_game_event_creates_binding(ui, network, make_engine):
    ui.network = network
    engine = make_engine()

    network.emit("new-game", engine)
    network.emit("new-game", engine)

    assert len(ui.bindings) == 1
    assert ui.binding_for(engine).name == "game1"
    assert engine.listener_count("deal") == 1


def test_auto_deal_toggle_reaches_every_binding(ui, bind, settings):
    assert ui.auto_deal is settings.auto_deal
    first = bind()
    ui.auto_deal = False
    second = bind()

    assert first.auto_deal is False
    assert second.auto_deal is False


def test_auto_deal_default_comes_from_settings(settings, scheduler):
    settings.auto_deal = False
    ui = PokerUI(settings=settings, scheduler=scheduler, template=None)

    assert ui.auto_deal is False


def test_view_updated_is_emitted_for_game_changes(ui, bind):
    updates = []
    ui.add_listener("view-updated", updates.append)

    binding = bind()
    binding.engine.emit("deal", [(14, 's')], True)

    assert updates[0] is binding
    assert updates.count(binding) >= 2
