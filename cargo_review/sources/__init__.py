import os
from typing import Optional

from .base import GraphSource
from .lockfile import LockfileSource
from .metadata import MetadataSource

SOURCES = [
    MetadataSource(),
    LockfileSource(),
]


def detect_source(path: str = ".") -> Optional[GraphSource]:
    """Checks files in the crate directory and returns the first usable source."""
    files = os.listdir(path)

    for source in SOURCES:
        if source.detect(files):
            return source

    return None
