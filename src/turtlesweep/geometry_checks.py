"""Validation helpers for sweep meshes."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from .mesh import Mesh


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


def _edge_key(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a < b else (b, a)


def _edge_counts(mesh: Mesh) -> Counter:
    edges = Counter()
    for a, b, c in mesh.faces:
        edges[_edge_key(a, b)] += 1
        edges[_edge_key(b, c)] += 1
        edges[_edge_key(c, a)] += 1
    return edges


def faces_in_range(mesh: Mesh) -> CheckResult:
    n = len(mesh.vertices)
    bad = [i for i, face in enumerate(mesh.faces)
           if len(face) != 3 or any(not 0 <= idx < n for idx in face)]
    if bad:
        return CheckResult(False, [f'faces with out-of-range indices: {bad}'])
    return CheckResult(True, [])


def surface_watertight(mesh: Mesh) -> CheckResult:
    """Every edge shared by exactly two faces."""

    edges = _edge_counts(mesh)
    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = [edge for edge, count in edges.items() if count > 2]

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with multiplicity >2: {invalid}')

    return CheckResult(ok, warnings)


def boundary_edges(mesh: Mesh) -> List[Tuple[int, int]]:
    """Directed edges (as wound in their face) used by only one face."""

    counts = _edge_counts(mesh)
    out = []
    for a, b, c in mesh.faces:
        for u, v in ((a, b), (b, c), (c, a)):
            if counts[_edge_key(u, v)] == 1:
                out.append((u, v))
    return out


def boundary_loops(mesh: Mesh) -> List[List[int]]:
    """Chain boundary edges into closed vertex loops.

    An open sweep without caps has one loop per profile contour at each end;
    a capped open sweep and a closed sweep have none.
    """

    nxt: Dict[int, List[int]] = defaultdict(list)
    for u, v in boundary_edges(mesh):
        nxt[u].append(v)

    loops: List[List[int]] = []
    for start in sorted(nxt):
        while nxt[start]:
            loop = [start]
            cur = nxt[start].pop()
            while cur != start and nxt.get(cur):
                loop.append(cur)
                cur = nxt[cur].pop()
            loops.append(loop)
    return loops


def faces_oriented(mesh: Mesh) -> CheckResult:
    """Adjacent faces traverse their shared edge in opposite directions."""

    directed = Counter()
    for a, b, c in mesh.faces:
        directed[(a, b)] += 1
        directed[(b, c)] += 1
        directed[(c, a)] += 1
    repeated = [edge for edge, count in directed.items() if count > 1]
    if repeated:
        return CheckResult(False, [f'{len(repeated)} edges traversed twice in one direction'])
    return CheckResult(True, [])


def signed_volume(mesh: Mesh) -> float:
    """Divergence-theorem volume; positive when faces wind outward."""

    verts, faces = mesh.as_arrays()
    if len(faces) == 0:
        return 0.0
    v0 = verts[faces[:, 0]]
    v1 = verts[faces[:, 1]]
    v2 = verts[faces[:, 2]]
    return float(np.einsum('ij,ij->i', v0, np.cross(v1, v2)).sum() / 6.0)


def normals_outward(mesh: Mesh) -> CheckResult:
    """Consistent orientation with a positive enclosed volume."""

    oriented = faces_oriented(mesh)
    if not oriented:
        return oriented
    volume = signed_volume(mesh)
    if volume <= 0:
        return CheckResult(False, [f'enclosed volume is {volume:.6g}; normals point inward'])
    return CheckResult(True, [])


__all__ = [
    'CheckResult',
    'faces_in_range',
    'surface_watertight',
    'boundary_edges',
    'boundary_loops',
    'faces_oriented',
    'signed_volume',
    'normals_outward',
]
