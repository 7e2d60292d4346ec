from __future__ import annotations

import asyncio
import pathlib
import sys
from typing import (
    Callable,
    Dict,
    TypeVar,
)

from clusterjoin.logging.config import LoggingConfig
from clusterjoin.logging.models import Entry, Log

from .logger_context import LoggerContext

T = TypeVar('T', bound=Entry)


class Logger:
    def __init__(self, config: LoggingConfig | None = None) -> None:
        if config is None:
            config = LoggingConfig()

        self._config = config
        self._contexts: Dict[str, LoggerContext] = {}

    def context(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        nested: bool = False,
    ):
        if name is None:
            name = 'default'

        filename, directory = self._parse_path(path)

        if self._contexts.get(name) is None:

            self._contexts[name] = LoggerContext(
                name=name,
                template=template,
                filename=filename,
                directory=directory,
                nested=nested,
                config=self._config,
            )

        else:
            context = self._contexts[name]
            context.template = template if template else context.template
            context.filename = filename if filename else context.filename
            context.directory = directory if directory else context.directory
            context.nested = nested

        return self._contexts[name]

    async def log(
        self,
        entry: T,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if name is None:
            name = 'default'

        frame = sys._getframe(1)

        async with self.context(
            name=name,
            nested=True,
        ) as ctx:
            await ctx.log(
                Log.from_frame(entry, frame),
                template=template,
                path=path,
                filter=filter,
            )

    async def close(self):
        if len(self._contexts) > 0:
            await asyncio.gather(*[
                context.stream.close() for context in self._contexts.values()
            ])

    def _parse_path(self, path: str | None):
        if path is None:
            return None, None

        logfile_path = pathlib.Path(path)
        is_logfile = len(logfile_path.suffix) > 0 

        filename = logfile_path.name if is_logfile else None
        directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        return filename, directory
