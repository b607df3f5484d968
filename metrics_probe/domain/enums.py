"""Domain enums."""

from enum import Enum


class StandardUnit(str, Enum):
    """CloudWatch standard units used by generated samples."""

    COUNT = "Count"
    SECONDS = "Seconds"
    MILLISECONDS = "Milliseconds"
    PERCENT = "Percent"
    BYTES = "Bytes"
    NONE = "None"


class RunMode(str, Enum):
    """Which pipelines a single invocation runs."""

    WRITE = "write"
    READ = "read"
    BOTH = "both"

    @property
    def writes(self) -> bool:
        return self in (RunMode.WRITE, RunMode.BOTH)

    @property
    def reads(self) -> bool:
        return self in (RunMode.READ, RunMode.BOTH)


class WriteErrorPolicy(str, Enum):
    """What the write pipeline does with a backend failure."""

    SWALLOW = "swallow"
    PROPAGATE = "propagate"
