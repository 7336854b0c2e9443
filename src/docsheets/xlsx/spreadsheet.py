import io
import logging

from pathlib import Path
from typing import BinaryIO, Self

from openpyxl import Workbook, load_workbook

from ..errors import SheetNotFoundError
from .sheet import XlsxSheet

logger = logging.getLogger(__name__)

class XlsxSpreadsheet():
    """
    Class representation of a .xlsx document held in memory.
    Changes only reach disk through save_to(), which always writes
    the whole document.  Use as a context manager, or call close().
    """
    DEFAULT_SHEET_NAME = "Лист 1"

    def __init__(self, workbook: Workbook) -> None:
        self._workbook = workbook

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __len__(self) -> int:
        """In this context length is the number of sheets."""
        return len(self._workbook.worksheets)

    def __contains__(self, name: str) -> bool:
        return name in self._workbook.sheetnames

    def __getitem__(self, name: str) -> XlsxSheet:
        return self.sheet(name)

    def __str__(self) -> str:
        return f"[{','.join(self.sheet_names)}]"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @classmethod
    def new(cls, sheet_name: str|None = None) -> Self:
        """
        Create an empty spreadsheet with one empty sheet.
        sheet_name: name for that sheet, "Лист 1" by default.
        """
        workbook = Workbook()
        workbook.active.title = sheet_name or cls.DEFAULT_SHEET_NAME
        return cls(workbook)

    @classmethod
    def from_file(cls, path: str|Path) -> Self:
        """Open a .xlsx spreadsheet from a file."""
        logger.debug("loading spreadsheet from %s", path)
        with open(path, "rb") as f:
            return cls(load_workbook(f))

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """Open a .xlsx spreadsheet from memory."""
        return cls(cls._read_workbook(data))

    @staticmethod
    def _read_workbook(data: bytes) -> Workbook:
        return load_workbook(io.BytesIO(data))

    @property
    def workbook(self) -> Workbook:
        return self._workbook

    @property
    def sheet_names(self) -> list[str]:
        return list(self._workbook.sheetnames)

    def sheets(self) -> list[XlsxSheet]:
        """All sheets in tab order."""
        return [XlsxSheet(ws) for ws in self._workbook.worksheets]

    def sheet(self, name: str) -> XlsxSheet:
        """Get a sheet (tab) by name."""
        if name not in self._workbook.sheetnames:
            raise SheetNotFoundError(name)
        return XlsxSheet(self._workbook[name])

    def save_to(self, target: str|Path|BinaryIO) -> None:
        """
        Save the entire spreadsheet to a file path or a writable binary stream.
        """
        if isinstance(target, (str, Path)):
            logger.debug("saving spreadsheet to %s", target)
            with open(target, "wb") as f:
                self._workbook.save(f)
        else:
            self._workbook.save(target)

    def to_bytes(self) -> bytes:
        """The whole document serialized as .xlsx bytes."""
        buffer = io.BytesIO()
        self._workbook.save(buffer)
        return buffer.getvalue()

    def close(self) -> None:
        self._workbook.close()
