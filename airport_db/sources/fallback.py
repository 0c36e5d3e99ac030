import logging
from abc import ABC, abstractmethod
from typing import Generic, List, Sequence, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Strategy(ABC, Generic[T]):
    """One way of obtaining an asset, tried as part of a ``FallbackChain``."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def load(self) -> T:
        """
        Produce the asset.

        Raises:
            One of the chain's recoverable errors if the asset is unavailable
        """
        pass

    def __str__(self):
        return self.name


class FallbackChain(Generic[T]):
    """
    Ordered list of strategies tried until one succeeds.

    Only errors listed in ``recoverable`` move the chain on to the next
    strategy; anything else propagates immediately. When every strategy
    fails, the last error is raised unchanged.
    """

    def __init__(self, strategies: Sequence[Strategy[T]],
                 recoverable: Tuple[Type[BaseException], ...] = (Exception,)):
        if not strategies:
            raise ValueError("FallbackChain needs at least one strategy")
        self.strategies = list(strategies)
        self.recoverable = recoverable
        self.attempted: List[str] = []

    def resolve(self) -> T:
        last_error = None
        for index, strategy in enumerate(self.strategies):
            self.attempted.append(strategy.name)
            logger.debug(f"Trying {strategy.name}")
            try:
                return strategy.load()
            except self.recoverable as e:
                last_error = e
                if index + 1 < len(self.strategies):
                    logger.warning(f"{strategy.name} failed ({e}), falling back to {self.strategies[index + 1].name}")
        raise last_error
