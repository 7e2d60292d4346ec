from dataclasses import dataclass

from clusterjoin.discovery.errors import InvalidRecordFormat


@dataclass(slots=True, frozen=True)
class SRVName:
    """An SRV query name split into its service, protocol and domain parts."""

    service: str
    proto: str
    domain: str

    @property
    def query_name(self) -> str:
        return f"_{self.service}._{self.proto}.{self.domain}"

    @classmethod
    def parse(cls, raw: str) -> "SRVName":
        """
        Parse a name of the form _service._proto.domain.

        Examples:
            - _grpc._tcp.cockroachdb.default.svc.cluster.local
            - _http._tcp.example.com

        Raises:
            InvalidRecordFormat: If the name does not start with '_' or
                has fewer than three dot-separated segments.
        """
        if not raw.startswith("_"):
            raise InvalidRecordFormat(raw, "SRV record should start with _")

        segments = raw.split(".")
        if len(segments) < 3:
            raise InvalidRecordFormat(raw, "not a SRV record")

        service = segments[0].removeprefix("_")
        proto = segments[1].removeprefix("_")

        # Only the literal prefix is removed, so "_a.b.c" keeps its full name
        return cls(
            service=service,
            proto=proto,
            domain=raw.removeprefix(f"_{service}._{proto}."),
        )
