"""Unit tests for weighted friend recommendations."""

import pytest

from socnet import InMemoryGraphStore, InvalidArgumentError, SocialNetwork


def _network() -> SocialNetwork:
    return SocialNetwork(InMemoryGraphStore())


def _befriend(network, uow, person, *others):
    for other in others:
        network.add_friend(uow, person, other)


def test_single_friend_recommendation() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a, b, c, d, e = (network.create_person(uow, n) for n in "abcde")
        # a and e are both friends with b, c and d
        _befriend(network, uow, a, b, c, d)
        _befriend(network, uow, e, b, c, d)
        uow.commit()

    with network.unit_of_work() as uow:
        recommendations = network.recommend(uow, a, 1)
    assert [r.person for r in recommendations] == [e]
    assert recommendations[0].score == 3


def test_weighted_friend_recommendation() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a, b, c, d, e, f = (network.create_person(uow, n) for n in "abcdef")
        _befriend(network, uow, a, b, c, d)
        # e is only friends with b
        _befriend(network, uow, e, b)
        _befriend(network, uow, f, b, c, d)
        uow.commit()

    with network.unit_of_work() as uow:
        recommendations = network.recommend(uow, a, 2)
        persons = network.recommendations.recommend_persons(uow, a, 2)
    assert [(r.person.name, r.score) for r in recommendations] == [("f", 3), ("e", 1)]
    assert persons == [f, e]


def test_limit_larger_than_candidates_returns_all() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a, b, c = (network.create_person(uow, n) for n in "abc")
        _befriend(network, uow, a, b)
        _befriend(network, uow, b, c)
        assert [r.person for r in network.recommend(uow, a, 10)] == [c]


@pytest.mark.parametrize("limit", [0, -3])
def test_non_positive_limit_is_rejected(limit) -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a = network.create_person(uow, "a")
        with pytest.raises(InvalidArgumentError):
            network.recommend(uow, a, limit)


def test_direct_friends_and_self_are_never_recommended() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a, b, c = (network.create_person(uow, n) for n in "abc")
        _befriend(network, uow, a, b, c)
        _befriend(network, uow, b, c)
        assert network.recommend(uow, a, 5) == []


def test_equal_scores_are_ordered_by_name() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        a, b, z, y = (network.create_person(uow, n) for n in ("a", "b", "zed", "yan"))
        _befriend(network, uow, a, b)
        _befriend(network, uow, b, z, y)
        assert [r.person.name for r in network.recommend(uow, a, 5)] == ["yan", "zed"]


def test_score_counts_common_friends() -> None:
    network = _network()
    with network.unit_of_work() as uow:
        root, f1, f2, f3, x, y = (
            network.create_person(uow, n) for n in ("root", "f1", "f2", "f3", "x", "y")
        )
        _befriend(network, uow, root, f1, f2, f3)
        _befriend(network, uow, x, f1, f2)
        _befriend(network, uow, y, f3)
        scores = {r.person.name: r.score for r in network.recommend(uow, root, 10)}
        for rec in network.recommend(uow, root, 10):
            mine = set(network.get_friends(uow, root))
            theirs = set(network.get_friends(uow, rec.person))
            assert rec.score == len(mine & theirs)
    assert scores == {"x": 2, "y": 1}
