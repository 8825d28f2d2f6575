from .errors import (
    DuplicateVertexError,
    GraphError,
    GraphFormatError,
    InvalidEdgeError,
    MissingEndpointError,
    NotFoundError,
)
from .exact_coloring import ColoringResult, chromatic_number, colorize
from .graph_model import Graph, Vertex
from .session import GraphSession
