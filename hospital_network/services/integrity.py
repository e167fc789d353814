"""Delete planning over the foreign-key graph.

Deleting a row is done in two steps. ``plan_delete`` walks every foreign key
that points at the row, following ``ON DELETE CASCADE`` edges transitively to
build the deletion closure, and records ``SET NULL`` and ``RESTRICT`` edges on
the way. ``apply_plan`` refuses the whole delete if any restrict edge blocks,
otherwise nulls the set-null references and deletes the closure children-first
so that the engine's own FK checks never trip half way through.

A row referencing a parent through a ``RESTRICT`` key blocks the delete unless
it is removed by a cascade path that does not go through that parent. Deleting
a service that appointments use is refused, but deleting the whole clinic
removes those appointments directly and goes through. Likewise a doctor's own
appointments never clear the prescriptions that name the doctor.

The rules are read from the table metadata (``ForeignKey.ondelete``), so the
models are the single source of truth for cascade behaviour.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import ForeignKey, MetaData, Table, and_, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hospital_network.core.db import Base
from hospital_network.core.errors import RecordNotFound, RestrictedDeletion, integrity_errors

logger = logging.getLogger(__name__)

CASCADE = "CASCADE"
SET_NULL = "SET NULL"
RESTRICT = "RESTRICT"

PrimaryKey = tuple[Any, ...]
Node = tuple[Table, PrimaryKey]


def _policy(fk: ForeignKey) -> str:
    # sin ON DELETE explícito el motor se comporta como RESTRICT (NO ACTION)
    rule = (fk.ondelete or "").upper()
    if rule in (CASCADE, SET_NULL):
        return rule
    return RESTRICT


def referencing_edges(metadata: MetaData) -> dict[Table, list[ForeignKey]]:
    """Parent table -> foreign keys (in child tables) that reference it."""
    edges: dict[Table, list[ForeignKey]] = defaultdict(list)
    for child in metadata.sorted_tables:
        for fk in child.foreign_keys:
            edges[fk.column.table].append(fk)
    return edges


def _pk_of(table: Table, row) -> PrimaryKey:
    return tuple(row[c.name] for c in table.primary_key.columns)


def _pk_clause(table: Table, keys):
    cols = list(table.primary_key.columns)
    keys = list(keys)
    if len(cols) == 1:
        return cols[0].in_([k[0] for k in keys])
    return or_(*(and_(*(c == v for c, v in zip(cols, k))) for k in keys))


def _display_key(key: PrimaryKey):
    return key[0] if len(key) == 1 else key


@dataclass
class DeletePlan:
    table: Table
    key: PrimaryKey
    # filas a borrar, por tabla (incluye la raíz)
    closure: dict[Table, dict[PrimaryKey, Any]] = field(default_factory=lambda: defaultdict(dict))
    # (tabla hija, columna FK) -> filas a las que se les pone NULL
    nullify: dict[tuple[Table, str], set[PrimaryKey]] = field(default_factory=lambda: defaultdict(set))
    # tabla hija -> filas que bloquean por RESTRICT
    blockers: dict[Table, set[PrimaryKey]] = field(default_factory=lambda: defaultdict(set))

    def contains(self, table: Table, key: PrimaryKey) -> bool:
        return key in self.closure.get(table, {})

    @property
    def blocking_counts(self) -> dict[str, int]:
        return {t.name: len(keys) for t, keys in self.blockers.items() if keys}

    @property
    def deleted_counts(self) -> dict[str, int]:
        return {t.name: len(rows) for t, rows in self.closure.items() if rows}

    @property
    def nulled_counts(self) -> dict[str, int]:
        counts: dict[str, int] = defaultdict(int)
        for (t, _), keys in self.nullify.items():
            counts[t.name] += len(keys)
        return dict(counts)


def _reachable_without(graph: dict[Node, set[Node]], root: Node, avoid: Node) -> set[Node]:
    """Nodes reachable from ``root`` through cascade edges that never enter ``avoid``."""
    if root == avoid:
        return set()
    seen = {root}
    stack = [root]
    while stack:
        node = stack.pop()
        for nxt in graph.get(node, ()):
            if nxt != avoid and nxt not in seen:
                seen.add(nxt)
                stack.append(nxt)
    return seen


async def plan_delete(session: AsyncSession, table: Table, key: PrimaryKey,
                      metadata: MetaData | None = None) -> DeletePlan:
    """Read-only pass: build the closure and classify every referencing row."""
    metadata = metadata if metadata is not None else Base.metadata
    edges = referencing_edges(metadata)

    root = (await session.execute(select(table).where(_pk_clause(table, [key])))).mappings().first()
    if root is None:
        raise RecordNotFound(table.name, _display_key(key))

    plan = DeletePlan(table=table, key=key)
    plan.closure[table][key] = root
    root_node: Node = (table, key)

    # aristas CASCADE fila -> fila, para decidir los RESTRICT al final
    graph: dict[Node, set[Node]] = defaultdict(set)
    restrict_candidates: list[tuple[Node, Node]] = []
    null_candidates: list[tuple[Node, str]] = []

    pending: list[tuple[Table, list]] = [(table, [root])]
    while pending:
        parent, rows = pending.pop()
        for fk in edges.get(parent, []):
            by_value: dict[Any, list[Node]] = defaultdict(list)
            for row in rows:
                if row[fk.column.name] is not None:
                    by_value[row[fk.column.name]].append((parent, _pk_of(parent, row)))
            if not by_value:
                continue

            child = fk.parent.table
            children = (
                await session.execute(select(child).where(fk.parent.in_(list(by_value))))
            ).mappings().all()
            if not children:
                continue

            policy = _policy(fk)
            fresh = []
            for row in children:
                node: Node = (child, _pk_of(child, row))
                parents = by_value[row[fk.parent.name]]
                if policy == CASCADE:
                    for p in parents:
                        graph[p].add(node)
                    if not plan.contains(*node):
                        plan.closure[child][node[1]] = row
                        fresh.append(row)
                elif policy == SET_NULL:
                    null_candidates.append((node, fk.parent.name))
                else:
                    restrict_candidates.extend((node, p) for p in parents)
            if fresh:
                pending.append((child, fresh))

    # un recorrido por cada padre RESTRICT distinto, no por cada fila hija
    reach: dict[Node, set[Node]] = {}
    for node, parent_node in restrict_candidates:
        if parent_node not in reach:
            reach[parent_node] = _reachable_without(graph, root_node, parent_node)
        if not (plan.contains(*node) and node in reach[parent_node]):
            plan.blockers[node[0]].add(node[1])
    for node, column in null_candidates:
        if not plan.contains(*node):
            plan.nullify[(node[0], column)].add(node[1])

    return plan


async def apply_plan(session: AsyncSession, plan: DeletePlan, metadata: MetaData | None = None) -> DeletePlan:
    """Check restrict edges, then null and delete in one go (all or nothing)."""
    metadata = metadata if metadata is not None else Base.metadata
    key = _display_key(plan.key)

    if plan.blocking_counts:
        logger.warning("Delete of %s %r blocked by %s", plan.table.name, key, plan.blocking_counts)
        raise RestrictedDeletion(plan.table.name, key, plan.blocking_counts)

    with integrity_errors("delete"):
        for (child, column), keys in plan.nullify.items():
            await session.execute(
                update(child).where(_pk_clause(child, keys)).values({column: None})
            )
        # hijos primero
        for t in reversed(metadata.sorted_tables):
            rows = plan.closure.get(t)
            if rows:
                await session.execute(delete(t).where(_pk_clause(t, rows.keys())))

    # el identity map quedó desactualizado
    session.expire_all()
    logger.info("Deleted %s %r: removed=%s nulled=%s", plan.table.name, key,
                plan.deleted_counts, plan.nulled_counts)
    return plan
