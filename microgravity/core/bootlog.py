"""
Bootstrap logging side channel.

Every discovery, ordering and activation message goes through a BootLog.
Nothing is printed unless verbose is on.
"""

from collections.abc import Callable

PREFIX = "[MicroGravity]"


class BootLog:
    """
    Verbose-gated message sink.

    Example:
        log = BootLog(verbose=True, logger=print)
        log("Loading: core")           # [MicroGravity] Loading: core
        log.warning("DLL not found")   # [MicroGravity] Warning: DLL not found
    """

    def __init__(
        self, verbose: bool = False, logger: Callable[[str], None] | None = None
    ):
        self.verbose = verbose
        self.logger = logger or print

    def info(self, message: str) -> None:
        if self.verbose:
            self.logger(f"{PREFIX} {message}")

    def warning(self, message: str) -> None:
        self.info(f"Warning: {message}")

    __call__ = info

    @classmethod
    def silent(cls) -> "BootLog":
        return cls(verbose=False)
