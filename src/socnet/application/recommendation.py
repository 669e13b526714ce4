"""Friend recommendations ranked by number of shared friends."""

import logging
from collections import Counter
from dataclasses import dataclass

from socnet.application.friendships import friend_ids, load_person
from socnet.application.ports import UnitOfWork
from socnet.domain import InvalidArgumentError, Person

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    person: Person
    score: int


class RecommendationEngine:
    """Scores friends-of-friends by |friends(person) & friends(candidate)|.

    Each direct friend adds one to the tally of every one of its friends
    that is neither the person nor already a friend; the tally is the
    shared-friend count. Ties are ordered by name, then node id.
    """

    def recommend(
        self, uow: UnitOfWork, person: Person, limit: int
    ) -> list[Recommendation]:
        if limit <= 0:
            raise InvalidArgumentError("limit must be a positive integer.")

        direct = friend_ids(uow, person.node_id)
        excluded = set(direct)
        excluded.add(person.node_id)

        tally: Counter[str] = Counter()
        for friend_id in direct:
            for candidate in friend_ids(uow, friend_id):
                if candidate not in excluded:
                    tally[candidate] += 1

        ranked = sorted(
            (Recommendation(person=load_person(uow, node_id), score=score)
             for node_id, score in tally.items()),
            key=lambda r: (-r.score, r.person.name, r.person.node_id),
        )
        logger.debug(
            "%d candidates for %s, returning up to %d", len(ranked), person, limit
        )
        return ranked[:limit]

    def recommend_persons(
        self, uow: UnitOfWork, person: Person, limit: int
    ) -> list[Person]:
        return [r.person for r in self.recommend(uow, person, limit)]
