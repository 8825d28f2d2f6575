from __future__ import annotations


class GraphError(Exception):
    """Base class for every failure reported by the graph core."""


class DuplicateVertexError(GraphError, ValueError):
    def __init__(self, number: int):
        super().__init__(f"Vertex {{{number}}} already exists.")
        self.number = number


class NotFoundError(GraphError, KeyError):
    def __init__(self, number: int):
        super().__init__(number)
        self.number = number

    def __str__(self) -> str:
        return f"Vertex {{{self.number}}} does not exist."


class InvalidEdgeError(GraphError, ValueError):
    pass


class MissingEndpointError(InvalidEdgeError, NotFoundError):
    """An edge endpoint is not in the graph.

    同时属于 InvalidEdgeError 和 NotFoundError：调用方按任意一种捕获都可以。
    """

    def __init__(self, number: int):
        NotFoundError.__init__(self, number)


class GraphFormatError(GraphError, ValueError):
    def __init__(self, message: str, line_no: int | None = None):
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no
