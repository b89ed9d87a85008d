from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .core.generator import Generator
from .engines import BlumBlumShubGenerator, PCG64Generator, PyRandomGenerator

logger = logging.getLogger(__name__)

_ENGINES: Dict[str, Callable[[Optional[int]], Generator]] = {
    "py_random": PyRandomGenerator,
    "pcg64": PCG64Generator,
    "bbs": BlumBlumShubGenerator,
}

ENGINES = tuple(_ENGINES)


def create_generator(engine: str, seed: Optional[int] = None) -> Generator:
    engine = (engine or "py_random").strip().lower()
    factory = _ENGINES.get(engine)
    if factory is None:
        raise ValueError(f"Unsupported RNG engine: {engine}")
    logger.debug("Creating %s generator (seed=%s)", engine, seed)
    return factory(seed)
