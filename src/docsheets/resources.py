from dataclasses import asdict, fields, is_dataclass
from typing import Self

class GoogleResourceBase():
    """
    Mixin for dataclasses standing in for Google API resources.
    The client deals in plain dicts, so the job here is getting between
    those dicts and the dataclass fields.
    """
    @classmethod
    def from_dict(cls, values: dict|None) -> Self:
        """
        Build from a response dict.  The API adds fields over time that we
        don't model, so anything that isn't a dataclass field is dropped
        rather than blowing up the constructor.
        """
        values = dict(values or {})
        if is_dataclass(cls):
            names = {f.name for f in fields(cls) if f.init}
            values = {k: v for k, v in values.items() if k in names}
        return cls(**values)

    def to_base(self) -> dict:
        """
        The dict the client wants.  Subclasses with nested resources
        override this, everything else gets asdict() after fixup().
        """
        self.fixup()
        return asdict(self)

    def fixup(self) -> None:
        """Hook for subclasses to normalize field values."""
        pass
