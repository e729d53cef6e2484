"""Random-animal providers.

ZooAnimalProvider is the first stage of the random-fact chain.  It can be
skipped entirely with ``RANDOM_SOURCE_BLOCKED=true`` on hosts where the API
is unreachable (e.g. blocked by cross-origin policy).
"""

from src.providers.animal.zoo_animal_provider import ZooAnimalProvider

__all__ = ["ZooAnimalProvider"]
