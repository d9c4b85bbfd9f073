# Export all types
from .common import SDKOptionsType
from .links import LinkEntry
from .pagination import DEFAULT_LIMIT, NormalizedPage, PagingMeta, PaginationState, Phase
from .queries import FilterSetType
from .responses import (
    FlowType, ServiceInfoResponseType, SourceType,
    Transport, TransportResponse
)
from .timerange import NANOS_PER_SECOND, Timerange
