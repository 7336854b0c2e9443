"""
Header row handling shared by the xlsx and Google Sheets classes.

Both treat the first row of a range as column headings and let the caller
pick columns by heading instead of by letter.  HeaderRow is the explicit
heading -> position mapping built once per read from that literal first row.
"""
from collections.abc import Iterable, Sequence

class HeaderRow():
    """
    Mapping of header strings to zero-based column positions.
    Headers are assumed unique.  If one is repeated the last occurrence
    wins, which is not something to rely on.
    """
    def __init__(self, headers: Iterable[str]) -> None:
        self._headers = [str(h) for h in headers]
        self._positions = {h: i for i, h in enumerate(self._headers)}

    def __len__(self) -> int:
        return len(self._headers)

    def __contains__(self, header: str) -> bool:
        return header in self._positions

    def __getitem__(self, header: str) -> int:
        return self._positions[header]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._headers!r})"

    @property
    def headers(self) -> list[str]:
        return list(self._headers)

    def get(self, header: str, default: int|None = None) -> int|None:
        return self._positions.get(header, default)

    def project(self, row: Sequence[str], names: Iterable[str]) -> dict[str,str]:
        """
        Pick the requested headers out of a data row.
        Names that aren't headers are skipped, cells past the end of a
        short row read as empty.
        """
        record = {}
        for name in names:
            i = self._positions.get(name)
            if i is not None:
                record[name] = row[i] if i < len(row) else ""
        return record


def pad_rows(rows: Iterable[Sequence[str]]) -> list[list[str]]:
    """Right-pad every row with "" so they all have the length of the longest."""
    rows = [list(r) for r in rows]
    width = max((len(r) for r in rows), default=0)
    return [r + [""] * (width - len(r)) for r in rows]


def zip_columns(names: Sequence[str], columns: Sequence[Sequence[str]]) -> list[dict[str,str]]:
    """
    Turn one list per column into one record per row.
    Shorter columns are padded with "" up to the longest before zipping.
    """
    height = max((len(c) for c in columns), default=0)
    padded = [list(c) + [""] * (height - len(c)) for c in columns]
    return [dict(zip(names, row)) for row in zip(*padded)]
