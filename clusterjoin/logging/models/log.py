import datetime
import threading
from types import FrameType
from typing import Generic, TypeVar

import msgspec

from .entry import Entry


T = TypeVar('T', bound=Entry)


class Log(msgspec.Struct, Generic[T], kw_only=True):
    """An entry plus the call site and time it was logged from."""

    entry: T
    filename: str
    function_name: str
    line_number: int
    thread_id: int
    timestamp: str

    @classmethod
    def from_frame(cls, entry: T, frame: FrameType) -> "Log[T]":
        code = frame.f_code

        return cls(
            entry=entry,
            filename=code.co_filename,
            function_name=code.co_name,
            line_number=frame.f_lineno,
            thread_id=threading.get_native_id(),
            timestamp=datetime.datetime.now(datetime.UTC).isoformat(),
        )
