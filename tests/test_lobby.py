import asyncio

import pytest

from pokerui.errors import TableError
from pokerui.lobby import TableAnnouncement


async def settle(rounds: int = 3):
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_create_table_requests_remote_seats_and_starts_game(ui, network, make_table):
    ui.network = network

    task = asyncio.ensure_future(ui.lobby_controller.create_table("alice", "t1", 3, 20, 10))
    await settle()

    assert network.created == [("t1", 2, {'big_blind': 20, 'small_blind': 10})]
    assert ui.lobby.create_button.enabled is False
    assert not task.done()

    network.ready(make_table("t1", remote=2))
    game = await task

    assert game.started is True
    assert game.player_info == {'alias': 'alice'}
    assert ui.binding_for(game) is ui.active
    assert ui.lobby.hidden is True


@pytest.mark.asyncio
async def test_create_table_waits_for_its_own_table(ui, network, make_table):
    ui.network = network
    task = asyncio.ensure_future(ui.lobby_controller.create_table("alice", "mine", 2, 2, 1))
    await settle()

    network.ready(make_table("someone-else"))
    await settle()
    assert not task.done()

    network.ready(make_table("mine"))
    game = await task
    assert game.table['table_name'] == "mine"


@pytest.mark.asyncio
async def test_create_button_reads_form_fields(ui, network, make_table):
    ui.network = network
    lobby = ui.lobby
    lobby.alias.set("bob")
    lobby.table_name.set("friday")
    lobby.num_players.set("4")
    lobby.big_blind.set("50")
    lobby.small_blind.set("25")

    assert lobby.create_button.click() is True
    await settle()
    assert network.created == [("friday", 3, {'big_blind': '50', 'small_blind': '25'})]

    # a second click is ignored while the first request is pending
    assert lobby.create_button.click() is False

    network.ready(make_table("friday", remote=3))
    await settle()
    assert network.games[0].player_info == {'alias': 'bob'}


@pytest.mark.asyncio
async def test_rejected_table_ready_surfaces_as_table_error(ui, network):
    ui.network = network
    task = asyncio.ensure_future(ui.lobby_controller.create_table("alice", "t1", 2, 2, 1))
    await settle()

    network.reject_waiters("table-ready", RuntimeError("peers went away"))

    with pytest.raises(TableError):
        await task
    assert network.games == []


@pytest.mark.asyncio
async def test_table_ready_timeout(ui, network, settings):
    settings.table_ready_timeout = 0.01
    ui.network = network

    with pytest.raises(TableError):
        await ui.lobby_controller.create_table("alice", "t1", 2, 2, 1)


@pytest.mark.asyncio
async def test_join_uses_table_record_from_table_ready(ui, network, make_table):
    ui.network = network
    announced = make_table("t9", remote=2)
    network.announce(announced)
    entry = ui.lobby.table_list[0]

    assert entry.click() is True
    await settle()
    assert network.joined == [announced]
    assert ui.lobby.table_list == []

    seated = dict(announced, seat=2)
    network.ready(seated)
    await settle()

    game = network.games[0]
    assert game.table is seated
    assert game.player_info == {'alias': 'A player'}
    assert game.started is True


@pytest.mark.asyncio
async def test_join_failure_shows_notice_without_retry(ui, network, make_table, scheduler):
    ui.network = network
    network.announce(make_table("t2"))
    join = asyncio.ensure_future(ui.lobby_controller.join_table(ui.lobby.table_list[0].announcement))
    await settle()

    network.reject_waiters("table-ready", RuntimeError("table is full"))

    assert await join is None
    assert ui.dialog_widget.is_open
    assert ui.dialog_widget.contents == "table is full"
    assert len(network.joined) == 1

    scheduler.advance(4000)
    assert not ui.dialog_widget.is_open


def test_announcement_entry_describes_table(ui, network, make_table):
    ui.network = network
    network.announce(make_table("high-rollers", remote=2, big=200, small=100))

    entry = ui.lobby.table_list[0]
    assert entry.announcement.player_count == 3
    assert entry.lines == [
        "high-rollers",
        "Number of players: 3",
        "Big blind: 200",
        "Small blind: 100",
    ]


def test_newer_announcement_supersedes_same_table(ui, network, make_table):
    ui.network = network
    network.announce(make_table("t1", big=20))
    network.announce(make_table("t2"))
    network.announce(make_table("t1", big=40))

    names = [entry.announcement.table_name for entry in ui.lobby.table_list]
    assert names == ["t2", "t1"]
    assert ui.lobby.table_list[1].announcement.big_blind == 40


def test_entry_is_bound_to_the_announced_record(ui, network, make_table):
    ui.network = network
    older = make_table("older")
    newer = make_table("newer")
    network.announced_tables = [newer]

    network.emit("table-announced", older)

    assert ui.lobby.table_list[0].announcement.record is older


def test_from_record_handles_missing_info(make_table):
    announcement = TableAnnouncement.from_record({'table_name': 'bare'})

    assert announcement.player_count == 1
    assert announcement.big_blind is None
