"""Process-wide holder of the active authorization config."""

import logging
import threading
from pathlib import Path
from typing import Optional

from .matrix import AuthorizationConfig, load_config

logger = logging.getLogger(__name__)


class MatrixStore:
    """
    Holds the active ``AuthorizationConfig`` and swaps it atomically.

    A reload builds the complete replacement first and only then rebinds the
    reference, so readers see either the old config or the new one. A failed
    reload leaves the previous config in place.
    """

    def __init__(self, path: Path | str, config: Optional[AuthorizationConfig] = None):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._config = config if config is not None else load_config(self.path)

    @property
    def current(self) -> AuthorizationConfig:
        return self._config

    def reload(self, path: Optional[Path | str] = None) -> AuthorizationConfig:
        """Load ``path`` (or the current path) and make it the active config."""
        with self._lock:
            target = Path(path) if path is not None else self.path
            replacement = load_config(target)
            previous = self._config
            self._config = replacement
            self.path = target

        logger.info(
            "Authorization matrix reloaded",
            extra={
                "path": str(target),
                "previous_version": previous.version,
                "version": replacement.version,
                "changed": previous.fingerprint != replacement.fingerprint,
            },
        )
        return replacement

    def replace(self, config: AuthorizationConfig) -> None:
        """Install an already-built config."""
        with self._lock:
            self._config = config
