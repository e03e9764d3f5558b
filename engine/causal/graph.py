"""
Graph structure over discovered causal relationships: root-cause and terminal-effect derivation, plus breadth-first traversal downstream (with path strengths) and upstream over an index of variables, terminating on cyclic graphs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Sequence, Set, Tuple

from engine.causal.models import CausalGraph, CausalRelationship, CausalVariable


def _ordered_unique(names: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(names))


def build_graph(variables: Sequence[CausalVariable], relationships: Sequence[CausalRelationship]) -> CausalGraph:
    sources = _ordered_unique([r.source for r in relationships])
    targets = _ordered_unique([r.target for r in relationships])
    source_set, target_set = set(sources), set(targets)
    return CausalGraph(
        variables=list(variables),
        relationships=list(relationships),
        root_causes=[n for n in sources if n not in target_set],
        terminal_effects=[n for n in targets if n not in source_set],
    )


class GraphIndex:
    """Adjacency lists keyed by integer variable index."""

    def __init__(self, graph: CausalGraph) -> None:
        self._names: List[str] = []
        self._index: Dict[str, int] = {}
        self._forward: List[List[Tuple[int, CausalRelationship]]] = []
        self._reverse: List[List[int]] = []

        for variable in graph.variables:
            self._add(variable.name)
        for rel in graph.relationships:
            src, dst = self._add(rel.source), self._add(rel.target)
            self._forward[src].append((dst, rel))
            self._reverse[dst].append(src)

    def _add(self, name: str) -> int:
        idx = self._index.get(name)
        if idx is None:
            idx = len(self._names)
            self._index[name] = idx
            self._names.append(name)
            self._forward.append([])
            self._reverse.append([])
        return idx

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def direct(self, source: str, target: str) -> Optional[CausalRelationship]:
        src, dst = self._index.get(source), self._index.get(target)
        if src is None or dst is None:
            return None
        for nxt, rel in self._forward[src]:
            if nxt == dst:
                return rel
        return None

    def path_strengths(self, source: str) -> Dict[str, float]:
        """Signed path strength to every variable reachable from ``source``.

        One BFS with a visited set: each variable is expanded once, from the
        first path that reaches it, and keeps the product of largest magnitude
        seen on arrival. ``source`` itself is excluded. Keys follow BFS order.
        """
        start = self._index.get(source)
        if start is None:
            return {}

        best: Dict[int, float] = {}
        visited: Set[int] = {start}
        queue: deque[Tuple[int, float]] = deque([(start, 1.0)])
        while queue:
            node, strength = queue.popleft()
            for nxt, rel in self._forward[node]:
                if nxt == start:
                    continue
                product = strength * rel.strength
                if nxt not in best or abs(product) > abs(best[nxt]):
                    best[nxt] = product
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append((nxt, product))

        return {self._names[idx]: value for idx, value in best.items()}

    def upstream(self, target: str) -> List[str]:
        start = self._index.get(target)
        if start is None:
            return []

        found: List[int] = []
        visited: Set[int] = {start}
        queue: deque[int] = deque([start])
        while queue:
            node = queue.popleft()
            for prev in self._reverse[node]:
                if prev not in visited:
                    visited.add(prev)
                    found.append(prev)
                    queue.append(prev)
        return [self._names[idx] for idx in found]
