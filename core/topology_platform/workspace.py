import logging
import threading
from typing import Optional, List, Callable
from api.topology_api.model import Graph, Node, Edge

logger = logging.getLogger(__name__)


class Workspace:
    """
    Central application state container.

    Responsibilities:
    - Hold the last good topology graph
    - Drop results of refreshes that finished after a newer one
    - Keep the latest refresh error without touching the graph
    - Maintain history (undo support)
    - Provide backend search/filter capabilities
    """

    def __init__(self, history_size: int = 20):
        self._current_graph: Optional[Graph] = None
        self._history: List[Graph] = []
        self._history_size = history_size
        self._committed_sequence = 0
        self._last_error: Optional[Exception] = None
        self._last_error_sequence = 0
        self._lock = threading.Lock()

    # ==========================================================
    # GRAPH STATE MANAGEMENT
    # ==========================================================

    def commit(self, graph: Graph, sequence: int) -> bool:
        """Keep `graph` only if no newer refresh has been committed yet."""
        with self._lock:
            if sequence <= self._committed_sequence:
                logger.info(
                    "Discarding stale topology #%d (already showing #%d)",
                    sequence, self._committed_sequence,
                )
                return False

            self._push_current()
            self._current_graph = graph
            self._committed_sequence = sequence
            if self._last_error_sequence < sequence:
                self._last_error = None
            return True

    def record_error(self, error: Exception, sequence: int) -> bool:
        with self._lock:
            if sequence <= self._committed_sequence or sequence < self._last_error_sequence:
                return False
            self._last_error = error
            self._last_error_sequence = sequence
            return True

    def get_graph(self) -> Optional[Graph]:
        return self._current_graph

    def has_graph(self) -> bool:
        return self._current_graph is not None

    @property
    def committed_sequence(self) -> int:
        return self._committed_sequence

    @property
    def last_error(self) -> Optional[Exception]:
        return self._last_error

    def clear(self) -> None:
        with self._lock:
            self._current_graph = None
            self._history.clear()
            self._last_error = None

    def undo(self) -> Optional[Graph]:
        with self._lock:
            if not self._history:
                return None
            self._current_graph = self._history.pop()
            return self._current_graph

    def history_size(self) -> int:
        return len(self._history)

    def _push_current(self) -> None:
        if self._current_graph is None or self._history_size == 0:
            return
        self._history.append(self._current_graph)
        del self._history[:-self._history_size]

    # ==========================================================
    # NODE OPERATIONS
    # ==========================================================

    def list_nodes(self) -> List[Node]:
        if not self._current_graph:
            return []
        return self._current_graph.nodes

    def find_node_by_id(self, node_id: str) -> Optional[Node]:
        if not self._current_graph:
            return None
        return self._current_graph.get_node(node_id)

    def filter_nodes(self, predicate: Callable[[Node], bool]) -> List[Node]:
        if not self._current_graph:
            return []
        return [node for node in self._current_graph.nodes if predicate(node)]

    # ==========================================================
    # EDGE OPERATIONS
    # ==========================================================

    def list_edges(self) -> List[Edge]:
        if not self._current_graph:
            return []
        return self._current_graph.edges

    def filter_edges(self, predicate: Callable[[Edge], bool]) -> List[Edge]:
        if not self._current_graph:
            return []
        return [edge for edge in self._current_graph.edges if predicate(edge)]

    # -----------------
    # PREDEFINED FILTERS / SEARCH
    # -----------------
    def find_nodes_by_host(self, host_substr: str) -> List[Node]:
        """Return nodes whose address contains the given substring."""
        return self.filter_nodes(lambda n: host_substr.lower() in n.node_id.lower())

    def find_edges_by_endpoint(self, node_id: str) -> List[Edge]:
        """Return edges that start or end at the given node."""
        return self.filter_edges(lambda e: node_id in (e.source, e.target))
