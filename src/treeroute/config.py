"""Application and mount configuration.

Both configs are frozen dataclasses: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass, field
from pathlib import Path

from treeroute.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class MountConfig:
    """How a routes directory is discovered and loaded.

    Override what you need::

        config = MountConfig(index_name="main", handler_name="app")
    """

    # Basename (extension stripped) that stands for its directory's route
    index_name: str = "index"

    # Module attribute holding the (request, response, next) callable
    handler_name: str = "handler"

    # Only files with these extensions are mounted
    suffixes: tuple[str, ...] = (".py",)

    # Files and directories whose names start with these are never mounted
    # (private helpers, __pycache__, dotfiles)
    ignore_prefixes: tuple[str, ...] = ("_", ".")

    def __post_init__(self) -> None:
        if not self.index_name:
            msg = "MountConfig.index_name must not be empty."
            raise ConfigurationError(msg)
        if not self.handler_name.isidentifier():
            msg = f"MountConfig.handler_name must be an identifier, got {self.handler_name!r}."
            raise ConfigurationError(msg)
        for suffix in self.suffixes:
            if not suffix.startswith("."):
                msg = f"MountConfig.suffixes entries must start with '.', got {suffix!r}."
                raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults::

        config = AppConfig(debug=True, port=3000, watch=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Routes directory mounted by App.mount() when no target is given
    routes_dir: str | Path = "routes"

    # Re-read each handler module on every request (deferred mode)
    watch: bool = False

    log_level: str = "info"

    mount: MountConfig = field(default_factory=MountConfig)
