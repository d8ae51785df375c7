"""Short shareable identifier generation."""

import logging
import random
import secrets
import string
from collections.abc import Callable

from slotshare.config import get_app_config
from slotshare.errors import IdentifierExhausted

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase + string.digits


class IdGenerator:
    """Generate short lowercase-alphanumeric IDs that are free in the store.

    Samples ``length`` symbols; after ``max_attempts`` collisions it keeps
    sampling with a random two-digit suffix for another ``max_attempts``
    rounds before giving up.
    """

    def __init__(
        self,
        length: int = 6,
        max_attempts: int = 8,
        rng: random.Random | None = None,
    ) -> None:
        self.length = length
        self.max_attempts = max_attempts
        self._rng = rng or secrets.SystemRandom()

    def _sample(self) -> str:
        return "".join(self._rng.choice(ALPHABET) for _ in range(self.length))

    def _candidates(self):
        for _ in range(self.max_attempts):
            yield self._sample()
        for _ in range(self.max_attempts):
            yield f"{self._sample()}{self._rng.randrange(100):02d}"

    def generate(self, exists: Callable[[str], bool]) -> str:
        """Return an identifier for which ``exists`` is false."""
        for candidate in self._candidates():
            if not exists(candidate):
                return candidate
            logger.warning(f"Availability ID collision on {candidate}, retrying")

        raise IdentifierExhausted("Could not allocate a unique availability ID")


def get_id_generator() -> IdGenerator:
    """Get an ID generator configured from config.yaml."""
    config = get_app_config().identifiers
    return IdGenerator(length=config["length"], max_attempts=config["max_attempts"])
