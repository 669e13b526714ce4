"""Unit tests for status chains and the merged friend feed."""

from datetime import datetime, timedelta, timezone

import pytest

from socnet import (
    InMemoryGraphStore,
    InvalidArgumentError,
    NotFoundError,
    SocialNetwork,
    StatusFeed,
)

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class _Clock:
    """Returns the queued times in order, then repeats the last one."""

    def __init__(self, *times: datetime) -> None:
        self._times = list(times) or [T0]

    def __call__(self) -> datetime:
        if len(self._times) > 1:
            return self._times.pop(0)
        return self._times[0]


def _network(clock=None) -> SocialNetwork:
    return SocialNetwork(InMemoryGraphStore(), status_feed=StatusFeed(clock=clock))


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


def test_add_status_and_retrieve_it() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "p")
        network.add_status(uow, person, "Testing!")
        uow.commit()

    with network.unit_of_work() as uow:
        update = next(network.get_status(uow, person))
    assert update.text == "Testing!"
    assert update.author == person


def test_multiple_statuses_come_out_newest_first() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "p")
        for text in ("Test1", "Test2", "Test3"):
            network.add_status(uow, person, text)
        assert [s.text for s in network.get_status(uow, person)] == [
            "Test3",
            "Test2",
            "Test1",
        ]
        # Restartable.
        assert len(list(network.get_status(uow, person))) == 3


def test_every_update_points_back_to_its_author() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "p")
        other = network.create_person(uow, "other")
        network.add_status(uow, other, "noise")
        updates = [network.add_status(uow, person, t) for t in ("Foo", "Bar", "Baz")]
        uow.commit()

    with network.unit_of_work() as uow:
        for status in network.get_status(uow, person):
            assert status.author == person
        for update in updates:
            loaded = network.statuses.get_status_by_id(uow, update.node_id)
            assert loaded.author == person
            assert loaded.text == update.text
            assert loaded.sequence == update.sequence


def test_get_status_by_unknown_id_fails() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        with pytest.raises(NotFoundError):
            network.statuses.get_status_by_id(uow, "missing")


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_status_is_rejected(text) -> None:
    network = _network()
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "p")
        with pytest.raises(InvalidArgumentError):
            network.add_status(uow, person, text)
        assert list(network.get_status(uow, person)) == []


def test_timestamps_never_go_backwards_per_author() -> None:
    network = _network(_Clock(_at(10), _at(5), _at(20)))
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "p")
        first = network.add_status(uow, person, "one")
        second = network.add_status(uow, person, "two")
        third = network.add_status(uow, person, "three")
    assert first.created_at == _at(10)
    assert second.created_at == _at(10)
    assert third.created_at == _at(20)
    assert first.sequence < second.sequence < third.sequence


def test_friend_statuses_merge_newest_first() -> None:
    network = _network(_Clock(_at(1), _at(2), _at(3), _at(4), _at(5)))
    with network.unit_of_work() as uow:
        a = network.create_person(uow, "a")
        b = network.create_person(uow, "b")
        c = network.create_person(uow, "c")
        network.add_friend(uow, a, b)
        network.add_friend(uow, c, a)
        network.add_status(uow, b, "b1")
        network.add_status(uow, c, "c2")
        network.add_status(uow, b, "b3")
        network.add_status(uow, c, "c4")
        network.add_status(uow, a, "own")
        uow.commit()

    with network.unit_of_work() as uow:
        feed = [s.text for s in network.friend_statuses(uow, a)]
    assert feed == ["c4", "b3", "c2", "b1"]


def test_timestamp_ties_break_by_insertion_order() -> None:
    network = _network(_Clock(T0))
    with network.unit_of_work() as uow:
        a = network.create_person(uow, "a")
        b = network.create_person(uow, "b")
        c = network.create_person(uow, "c")
        network.add_friend(uow, a, b)
        network.add_friend(uow, a, c)
        network.add_status(uow, c, "first")
        network.add_status(uow, b, "second")
        network.add_status(uow, c, "third")
        feed = list(network.friend_statuses(uow, a))
    assert [s.text for s in feed] == ["third", "second", "first"]


def test_retrieve_status_updates_in_date_order() -> None:
    network = _network(_Clock(*(_at(m) for m in (3, 1, 4, 1, 5, 9, 2, 6, 5, 3))))
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "p")
        friends = [network.create_person(uow, f"f{i}") for i in range(3)]
        for friend in friends:
            network.add_friend(uow, person, friend)
        for i in range(20):
            network.add_status(uow, friends[i % 3], "Dum-deli-dum...")
        uow.commit()

    with network.unit_of_work() as uow:
        updates = list(network.friend_statuses(uow, person))
    assert len(updates) == 20
    keys = [u.sort_key for u in updates]
    assert keys == sorted(keys, reverse=True)


def test_friend_statuses_without_friends_is_empty() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "loner")
        network.add_status(uow, person, "anyone?")
        assert list(network.friend_statuses(uow, person)) == []
