#!/usr/bin/env python3
"""Seed a random social graph: N persons named person#0..person#N-1, each with
1..max-friends random friends and a few status updates.

Uses the store selected by SOCNET_STORE (memory or neo4j). Run from repo root
with .env (SOCNET_STORE, NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD). With --reset,
every existing person is deleted first.
"""
import argparse
import logging
import random
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from socnet import SocialNetwork, SocnetError  # noqa: E402
from socnet.infrastructure import create_store, load_settings  # noqa: E402

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--persons", type=int, default=20)
    parser.add_argument("--max-friends", type=int, default=10)
    parser.add_argument("--statuses", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--reset", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    rng = random.Random(args.seed)
    store = create_store(load_settings())
    network = SocialNetwork(store)
    try:
        with network.unit_of_work() as uow:
            if args.reset:
                deleted = network.persons.delete_all_persons(uow)
                logger.info("Deleted %d existing person(s)", deleted)
            persons = [
                network.create_person(uow, f"person#{i}") for i in range(args.persons)
            ]
            for person in persons:
                for _ in range(rng.randint(1, args.max_friends)):
                    other = rng.choice(persons)
                    if other != person:
                        network.add_friend(uow, person, other)
                for n in range(rng.randint(0, args.statuses)):
                    network.add_status(uow, person, f"Status {n + 1} from {person.name}")
            uow.commit()
        logger.info("Seeded %d person(s)", len(persons))
        return 0
    except SocnetError as e:
        print(f"Seeding failed: {e}", file=sys.stderr)
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
