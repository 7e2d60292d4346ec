from .resolver import (
    SRVLookup as SRVLookup,
    SRVResolver as SRVResolver,
)
from .srv_name import SRVName as SRVName
