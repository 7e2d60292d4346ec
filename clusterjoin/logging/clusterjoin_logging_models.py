from .models import Entry, LogLevel


class DiscoveryDebug(Entry, kw_only=True):
    srv_names: list[str]
    max_nodes: int
    level: LogLevel = LogLevel.DEBUG

class DiscoveryInfo(Entry, kw_only=True):
    srv_names: list[str]
    max_nodes: int
    discovered: int
    level: LogLevel = LogLevel.INFO

class DiscoveryWarn(Entry, kw_only=True):
    srv_names: list[str]
    max_nodes: int
    level: LogLevel = LogLevel.WARN

class ResolutionDebug(Entry, kw_only=True):
    query_name: str
    records: int
    level: LogLevel = LogLevel.DEBUG

class ResolutionFailed(Entry, kw_only=True):
    query_name: str
    level: LogLevel = LogLevel.ERROR

class ProbeDebug(Entry, kw_only=True):
    endpoint: str
    priority: int
    weight: int
    level: LogLevel = LogLevel.DEBUG

class ProbeWarn(Entry, kw_only=True):
    endpoint: str
    priority: int
    weight: int
    reason: str
    level: LogLevel = LogLevel.WARN

class LocalityDebug(Entry, kw_only=True):
    cluster_name: str
    cluster_location: str
    zone: str
    level: LogLevel = LogLevel.DEBUG

class LocalityInfo(Entry, kw_only=True):
    locality: str
    level: LogLevel = LogLevel.INFO

class RunnerDebug(Entry, kw_only=True):
    output: str
    level: LogLevel = LogLevel.DEBUG

class RunnerInfo(Entry, kw_only=True):
    output: str
    level: LogLevel = LogLevel.INFO

class RunnerFatal(Entry, kw_only=True):
    output: str
    level: LogLevel = LogLevel.FATAL
