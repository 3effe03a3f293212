from __future__ import annotations


class StatRankError(Exception):
    pass


class SourceUnavailable(StatRankError):
    """An optional input file is missing or cannot be read."""


class MalformedPayload(SourceUnavailable):
    """A file was read but does not hold the structure we expect."""


class MissingField(MalformedPayload):
    def __init__(self, field: str, source: str | None = None) -> None:
        self.field = field
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Cannot find {field}{where}")


class ConfigurationFatal(StatRankError):
    """The world or its stats directory cannot be located; the run stops."""


class IncomparableValueError(ValueError, StatRankError):
    pass
