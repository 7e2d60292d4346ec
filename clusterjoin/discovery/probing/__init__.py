from .connect_probe import (
    ConnectProbe as ConnectProbe,
    TCPConnectProbe as TCPConnectProbe,
)
from .reachability_prober import ReachabilityProber as ReachabilityProber
