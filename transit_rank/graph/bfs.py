"""Breadth-first exploration of a transit graph.

The exploration is written as a resumable step machine. Each call to
``BreadthFirstSearch.step`` processes exactly one dequeued node, which
lets the traversal run either synchronously (``run``) or cooperatively
on an asyncio event loop (``run_async``), handing control back to the
loop after every processed node so that other tasks sharing the thread
keep being serviced. Once started, a traversal runs to completion:
there is no cancellation.

Note on the reported events: for every newly discovered neighbour the
traversal reports the discovery edge and then ``visit_node`` of the
node being *scanned*, not of the neighbour. Clients rendering the
traversal rely on this sequence, so it is kept as is. ``order`` holds
the true discovery order.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from ..ports.traverser import TraverserPort
from .transit_graph import Graph

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class BreadthFirstSearch:
    """Queue-based traversal from a single start node.

    Args:
        graph: Graph to explore.
        start: Index of the node to start from. It is marked visited and
            reported to the traverser immediately.
        traverser: Optional observer receiving the traversal events.
        callback: Optional completion notification, called after the
            summary event.

    Attributes:
        order: Node indices in discovery order, start node first.
    """

    def __init__(
        self,
        graph: Graph,
        start: int,
        traverser: Optional[TraverserPort] = None,
        callback: Optional[Callback] = None,
    ) -> None:
        graph.check_node(start)

        self._graph = graph
        self._traverser = traverser
        self._callback = callback
        self._queue: Deque[int] = deque([start])
        self._visited = [False] * graph.num_nodes
        self._completed = False

        self.start = start
        self.order: List[int] = [start]

        self._visited[start] = True
        if traverser is not None:
            traverser.visit_node(start)

    @property
    def pending(self) -> bool:
        """Check if nodes are still waiting to be processed."""
        return bool(self._queue)

    @property
    def completed(self) -> bool:
        """Check if the completion events have been emitted."""
        return self._completed

    def step(self) -> bool:
        """Process the next queued node.

        Returns:
            True if more nodes remain to be processed.
        """
        if not self._queue:
            return False

        node = self._queue.popleft()

        for i in self._graph.neighbors(node):
            if self._visited[i]:
                continue

            self._queue.append(i)
            self._visited[i] = True
            self.order.append(i)

            if self._traverser is not None:
                self._traverser.visit(self._graph.create_edge(node, i))
                self._traverser.visit_node(node)

        return bool(self._queue)

    def run(self) -> List[int]:
        """Run the traversal to completion on the calling thread."""
        while self.step():
            pass
        self._complete()
        return self.order

    async def run_async(self) -> List[int]:
        """Run the traversal, yielding to the event loop after each node."""
        while self._queue:
            self.step()
            await asyncio.sleep(0)
        self._complete()
        return self.order

    def _complete(self) -> None:
        if self._completed:
            return
        self._completed = True

        logger.info("bfs done", extra={"start": self.start, "visited": len(self.order)})

        if self._traverser is not None:
            self._traverser.summary(
                {"stations_visited": len(self._traverser.visited_nodes)}
            )
        if self._callback is not None:
            self._callback()


def bfs(
    graph: Graph,
    start: int,
    traverser: Optional[TraverserPort] = None,
    callback: Optional[Callback] = None,
) -> List[int]:
    """Breadth-first traversal, run synchronously.

    Returns:
        Node indices in discovery order.
    """
    return BreadthFirstSearch(graph, start, traverser, callback).run()


async def bfs_async(
    graph: Graph,
    start: int,
    traverser: Optional[TraverserPort] = None,
    callback: Optional[Callback] = None,
) -> List[int]:
    """Breadth-first traversal interleaved with other asyncio tasks."""
    return await BreadthFirstSearch(graph, start, traverser, callback).run_async()
