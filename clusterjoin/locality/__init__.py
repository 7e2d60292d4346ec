from .errors import LocalityError as LocalityError
from .locality import (
    GCPMetadataClient as GCPMetadataClient,
    Locality as Locality,
    MetadataSource as MetadataSource,
    from_metadata as from_metadata,
    locality_from_location as locality_from_location,
)
