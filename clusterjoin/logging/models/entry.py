from typing import Any, Dict

import msgspec

from .log_level import LogLevel


BASE_FIELDS = ("message", "tags", "level")


class Entry(msgspec.Struct, kw_only=True):
    message: str | None = None
    tags: set[str] = msgspec.field(
        default_factory=set,
    )
    level: LogLevel

    def fields(self) -> Dict[str, Any]:
        """Fields added by entry subclasses, in declaration order."""
        return {
            field: getattr(self, field)
            for field in self.__struct_fields__
            if field not in BASE_FIELDS
        }

    def to_template(
        self,
        template: str,
        context: Dict[str, Any] | None = None,
    ):
        kwargs: Dict[str, Any] = {
            field: getattr(self, field) for field in self.__struct_fields__
        }
        kwargs["level"] = self.level.value
        kwargs["fields"] = " ".join(
            f"{name}={value}" for name, value in self.fields().items()
        )

        if context:
            kwargs.update(context)

        return template.format(**kwargs)
