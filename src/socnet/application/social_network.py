"""Facade composing the person, friendship, status, path and recommendation use cases."""

from collections.abc import Iterator

from socnet.application.friendships import Friendships
from socnet.application.path_finder import PathFinder
from socnet.application.person_repository import PersonRepository
from socnet.application.ports import GraphStore, UnitOfWork
from socnet.application.recommendation import Recommendation, RecommendationEngine
from socnet.application.status_feed import StatusFeed
from socnet.domain import Person, StatusUpdate


class SocialNetwork:
    """Core operations over one GraphStore.

    Every operation takes the caller's unit-of-work; nothing is cached
    between calls besides the store reference.
    """

    def __init__(
        self,
        store: GraphStore,
        *,
        status_feed: StatusFeed | None = None,
    ) -> None:
        self._store = store
        self.statuses = status_feed or StatusFeed()
        self.persons = PersonRepository(self.statuses)
        self.friends = Friendships()
        self.paths = PathFinder()
        self.recommendations = RecommendationEngine()

    def unit_of_work(self) -> UnitOfWork:
        return self._store.begin_unit_of_work()

    # Persons

    def create_person(self, uow: UnitOfWork, name: str) -> Person:
        return self.persons.create_person(uow, name)

    def get_person_by_name(self, uow: UnitOfWork, name: str) -> Person:
        return self.persons.get_person_by_name(uow, name)

    def get_all_persons(self, uow: UnitOfWork) -> Iterator[Person]:
        return self.persons.get_all_persons(uow)

    def delete_person(self, uow: UnitOfWork, person: Person) -> None:
        self.persons.delete_person(uow, person)

    # Friends

    def add_friend(self, uow: UnitOfWork, person: Person, other: Person) -> None:
        self.friends.add_friend(uow, person, other)

    def remove_friend(self, uow: UnitOfWork, person: Person, other: Person) -> None:
        self.friends.remove_friend(uow, person, other)

    def get_friends(self, uow: UnitOfWork, person: Person) -> Iterator[Person]:
        return self.friends.get_friends(uow, person)

    def get_nr_of_friends(self, uow: UnitOfWork, person: Person) -> int:
        return self.friends.get_nr_of_friends(uow, person)

    def get_friends_of_friends(self, uow: UnitOfWork, person: Person) -> list[Person]:
        return self.friends.get_friends_of_friends(uow, person)

    # Statuses

    def add_status(self, uow: UnitOfWork, person: Person, text: str) -> StatusUpdate:
        return self.statuses.add_status(uow, person, text)

    def get_status(self, uow: UnitOfWork, person: Person) -> Iterator[StatusUpdate]:
        return self.statuses.get_status(uow, person)

    def friend_statuses(
        self, uow: UnitOfWork, person: Person
    ) -> Iterator[StatusUpdate]:
        return self.statuses.friend_statuses(uow, person)

    # Queries

    def shortest_path(
        self, uow: UnitOfWork, source: Person, target: Person, max_depth: int
    ) -> list[Person]:
        return self.paths.shortest_path(uow, source, target, max_depth)

    def recommend(
        self, uow: UnitOfWork, person: Person, limit: int
    ) -> list[Recommendation]:
        return self.recommendations.recommend(uow, person, limit)
