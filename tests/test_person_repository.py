"""Unit tests for PersonRepository on the in-memory store."""

import pytest

from socnet import (
    DuplicateNameError,
    InMemoryGraphStore,
    InvalidArgumentError,
    NotFoundError,
    SocialNetwork,
)
from socnet.domain.graph import FRIEND, STATUS_UPDATE, Direction


def _network() -> SocialNetwork:
    return SocialNetwork(InMemoryGraphStore())


def test_create_then_get_by_name_in_next_unit_of_work() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        created = network.create_person(uow, "Alice")
        uow.commit()

    with network.unit_of_work() as uow:
        found = network.get_person_by_name(uow, "Alice")
    assert found == created
    assert found.name == "Alice"


def test_create_strips_name() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        person = network.create_person(uow, "  Bob  ")
        assert person.name == "Bob"
        assert network.get_person_by_name(uow, "Bob") == person


def test_duplicate_name_fails() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        network.create_person(uow, "x")
        with pytest.raises(DuplicateNameError):
            network.create_person(uow, "x")
        uow.commit()

    with network.unit_of_work() as uow:
        with pytest.raises(DuplicateNameError):
            network.create_person(uow, "x")


def test_empty_name_is_rejected() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        with pytest.raises(InvalidArgumentError):
            network.create_person(uow, "   ")


def test_get_missing_person_fails() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        with pytest.raises(NotFoundError):
            network.get_person_by_name(uow, "nobody")
        with pytest.raises(NotFoundError):
            network.persons.get_person_by_id(uow, "no-such-id")


def test_get_person_by_id() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        carol = network.create_person(uow, "Carol")
        found = network.persons.get_person_by_id(uow, carol.node_id)
    assert found == carol
    assert found.name == "Carol"


def test_get_all_persons_in_creation_order_and_restartable() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        for name in ("a", "b", "c"):
            network.create_person(uow, name)
        first = [p.name for p in network.get_all_persons(uow)]
        second = [p.name for p in network.get_all_persons(uow)]
        assert network.persons.count_persons(uow) == 3
    assert first == ["a", "b", "c"]
    assert second == first


def test_uncommitted_person_is_rolled_back() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        network.create_person(uow, "ghost")

    with network.unit_of_work() as uow:
        with pytest.raises(NotFoundError):
            network.get_person_by_name(uow, "ghost")


def test_delete_person_cascades_to_friendships_and_statuses() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a = network.create_person(uow, "a")
        b = network.create_person(uow, "b")
        c = network.create_person(uow, "c")
        network.add_friend(uow, a, b)
        network.add_friend(uow, c, a)
        network.add_friend(uow, b, c)
        network.add_status(uow, a, "one")
        network.add_status(uow, a, "two")
        network.add_status(uow, b, "b's")
        uow.commit()

    with network.unit_of_work() as uow:
        network.delete_person(uow, a)
        uow.commit()

    with network.unit_of_work() as uow:
        with pytest.raises(NotFoundError):
            network.get_person_by_name(uow, "a")
        assert list(network.get_friends(uow, b)) == [c]
        assert list(network.get_friends(uow, c)) == [b]
        for person in (b, c):
            assert a.node_id not in uow.adjacency(person.node_id, FRIEND, Direction.BOTH)
        remaining = list(uow.nodes(STATUS_UPDATE))
        assert len(remaining) == 1
        assert [s.text for s in network.get_status(uow, b)] == ["b's"]


def test_delete_missing_person_fails() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a = network.create_person(uow, "a")
        network.delete_person(uow, a)
        with pytest.raises(NotFoundError):
            network.delete_person(uow, a)


def test_name_can_be_reused_after_delete() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        first = network.create_person(uow, "reuse")
        network.delete_person(uow, first)
        second = network.create_person(uow, "reuse")
        uow.commit()
    assert second != first


def test_deleting_while_iterating_without_snapshot_is_not_silent() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        for name in ("a", "b", "c"):
            network.create_person(uow, name)
        with pytest.raises(RuntimeError):
            for person in network.get_all_persons(uow):
                network.delete_person(uow, person)


def test_delete_all_persons_snapshots_first() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a = network.create_person(uow, "a")
        b = network.create_person(uow, "b")
        network.add_friend(uow, a, b)
        network.add_status(uow, b, "hello")
        assert network.persons.delete_all_persons(uow) == 2
        assert list(network.get_all_persons(uow)) == []
        assert list(uow.nodes(STATUS_UPDATE)) == []
