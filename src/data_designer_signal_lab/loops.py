# Loop structure analysis over raw code text.
#
# Shallow pattern matching only: loop headers are found with regexes, bodies by
# brace matching, and nesting by span containment. Nothing here parses a real
# grammar, so every helper degrades to a conservative default instead of raising.

from __future__ import annotations

import re
from dataclasses import dataclass, replace

LINEAR = "linear"
LOG = "log"
UNKNOWN = "unknown"

BOUND_CONSTANT = "constant"
BOUND_N = "n"
BOUND_DEPENDENT = "dependent"
BOUND_FREE = "free"
BOUND_NONE = "none"

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_WHITESPACE_RE = re.compile(r"\s+")
_FOR_HEADER_RE = re.compile(r"\bfor\s*\(([^;)]*);([^;]*);([^)]*)\)")
_WHILE_HEADER_RE = re.compile(r"\bwhile\s*\(([^)]*)\)")
_COLLECTION_FOR_RE = re.compile(r"\bfor\s*\(([^;()]*)\)")
_PY_FOR_RE = re.compile(r"\bfor\s+[a-z_]\w*(?:\s*,\s*[a-z_]\w*)*\s+in\s+([^:]+):")
_PY_WHILE_RE = re.compile(r"\bwhile\s+(?!\()([^:]+):")
_DEPTH_TOKEN_RE = re.compile(r"\b(?:for|while)\s*\(|\{|\}")

_ASSIGN_TARGET_RE = re.compile(r"\b([a-z_]\w*)\s*=(?!=)")
_COMPARED_VAR_RE = re.compile(r"\b([a-z_]\w*)\s*(?:<=|>=|!=|==|<|>)")
_LINEAR_UPDATE_RE = re.compile(r"\+\+|--|\+=|-=|=\s*[a-z_]\w*\s*[+-]\s*(?:[a-z_]\w*|\d+)")
_LOG_UPDATE_RE = re.compile(r"\*=|/=|>>=|<<=|=\s*[a-z_]\w*\s*(?:\*|/{1,2}|>>|<<)\s*(?:[a-z_]\w*|\d+)")
_DECREASING_UPDATE_RE = re.compile(r"--|-=|/=|>>=|=\s*[a-z_]\w*\s*(?:-|/{1,2}|>>)\s*(?:[a-z_]\w*|\d+)")
_DIVIDE_BY_ONE_RE = re.compile(r"/\s*=?\s*1\b")
_ONE_LITERAL_RE = re.compile(r"\b1\b")

_OPERAND = r"(?:[a-z_]\w*|\d+)"
_COMPARISON = r"(?:<=|>=|!=|<|>)"

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoopNode:
    id: int
    keyword: str
    kind: str
    iterator: str | None
    condition: str
    update: str
    bound: str | None
    start: int
    end: int
    parent_id: int | None = None
    bound_kind: str = BOUND_NONE
    depends_on: int | None = None


@dataclass(frozen=True)
class LoopForest:
    """Loop nodes stored by index; ``parent_id`` points back into ``nodes``."""

    nodes: tuple[LoopNode, ...] = ()

    def roots(self) -> list[LoopNode]:
        return [node for node in self.nodes if node.parent_id is None]

    def children(self, node_id: int) -> list[LoopNode]:
        return [node for node in self.nodes if node.parent_id == node_id]

    def ancestors(self, node: LoopNode) -> list[LoopNode]:
        chain: list[LoopNode] = []
        parent_id = node.parent_id
        while parent_id is not None:
            parent = self.nodes[parent_id]
            chain.append(parent)
            parent_id = parent.parent_id
        return chain

    def depth(self) -> int:
        return max((len(self.ancestors(node)) + 1 for node in self.nodes), default=0)


@dataclass(frozen=True)
class LoopProfile:
    linear: int = 0
    log: int = 0
    unknown: int = 0
    total: int = 0
    nonterminating_risk: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_code(code: str) -> str:
    return _WHITESPACE_RE.sub(" ", code).lower()


def find_body_end(clean: str, header_end: int) -> int:
    """Index where the body starting at ``header_end`` closes.

    A braced body ends at its matching ``}``; a braceless one at the next ``;``
    after any directly nested loop header. Unbalanced text runs to the end.
    """
    i = header_end
    while i < len(clean) and clean[i].isspace():
        i += 1
    if i >= len(clean) or clean[i] != "{":
        nested = _FOR_HEADER_RE.match(clean, i) or _WHILE_HEADER_RE.match(clean, i)
        if nested:
            return find_body_end(clean, nested.end())
        semi = clean.find(";", i)
        return len(clean) if semi == -1 else semi

    depth = 0
    for idx in range(i, len(clean)):
        if clean[idx] == "{":
            depth += 1
        elif clean[idx] == "}":
            depth -= 1
            if depth == 0:
                return idx
    return len(clean)


def classify_loop_kind(update: str) -> str:
    if _LINEAR_UPDATE_RE.search(update):
        return LINEAR
    if _LOG_UPDATE_RE.search(update):
        return LOG
    return UNKNOWN


def extract_iterator(init: str, condition: str = "") -> str | None:
    match = _ASSIGN_TARGET_RE.search(init) or _COMPARED_VAR_RE.search(condition)
    return match.group(1) if match else None


def extract_bound_token(condition: str, iterator: str | None) -> str | None:
    if not iterator:
        return None
    var = re.escape(iterator)
    lhs = re.search(rf"\b{var}\b\s*{_COMPARISON}\s*({_OPERAND})", condition)
    if lhs:
        return lhs.group(1)
    rhs = re.search(rf"({_OPERAND})\s*{_COMPARISON}\s*\b{var}\b", condition)
    return rhs.group(1) if rhs else None


def _update_pattern(iterator: str) -> re.Pattern[str]:
    var = re.escape(iterator)
    return re.compile(
        rf"\b{var}\s*=\s*{var}\s*(?:[+\-*]|/{{1,2}}|>>|<<)\s*{_OPERAND}"
        rf"|\b{var}\s*(?:\+\+|--|\+=|-=|\*=|//=|/=|>>=|<<=)\s*{_OPERAND}?"
        rf"|(?:\+\+|--){var}\b"
    )


def infer_update(clean: str, iterator: str | None, start: int = 0, end: int | None = None) -> str:
    """Find the statement that advances ``iterator``, preferring the loop body."""
    if not iterator:
        return ""
    pattern = _update_pattern(iterator)
    body = clean[start:end] if end is not None else ""
    match = pattern.search(body) or pattern.search(clean)
    return match.group(0).strip() if match else ""


def _while_bound(clean: str, header_start: int, iterator: str | None, bound: str | None, update: str) -> str | None:
    # A while loop shrinking its iterator towards a literal runs as long as the
    # iterator's prior value; with no prior assignment the iterator is the input.
    if not iterator or not _DECREASING_UPDATE_RE.search(update):
        return bound
    if bound is not None and not bound.isdigit():
        return bound
    var = re.escape(iterator)
    prior = list(re.finditer(rf"\b{var}\s*=(?!=)\s*({_OPERAND})", clean[:header_start]))
    if not prior:
        return iterator
    start_token = prior[-1].group(1)
    if start_token.isdigit() or start_token == iterator:
        return bound
    return start_token


def _parse_headers(clean: str) -> list[LoopNode]:
    found: list[tuple[int, int, str, str, str, str]] = []
    for m in _FOR_HEADER_RE.finditer(clean):
        found.append((m.start(), m.end(), "for", m.group(1), m.group(2).strip(), m.group(3).strip()))
    for m in _WHILE_HEADER_RE.finditer(clean):
        found.append((m.start(), m.end(), "while", "", m.group(1).strip(), ""))
    found.sort(key=lambda item: item[0])

    nodes: list[LoopNode] = []
    for node_id, (start, header_end, keyword, init, condition, update) in enumerate(found):
        end = find_body_end(clean, header_end)
        iterator = extract_iterator(init, condition)
        bound = extract_bound_token(condition, iterator)
        if keyword == "while":
            update = infer_update(clean, iterator, header_end, end + 1)
            bound = _while_bound(clean, start, iterator, bound, update)
        nodes.append(LoopNode(
            id=node_id,
            keyword=keyword,
            kind=classify_loop_kind(update),
            iterator=iterator,
            condition=condition,
            update=update,
            bound=bound,
            start=start,
            end=end,
        ))
    return nodes


def _innermost_parent(node: LoopNode, nodes: list[LoopNode]) -> int | None:
    parent: LoopNode | None = None
    for candidate in nodes:
        if candidate.id == node.id:
            continue
        if candidate.start < node.start and candidate.end >= node.end:
            if parent is None or candidate.end < parent.end or (candidate.end == parent.end and candidate.start > parent.start):
                parent = candidate
    return parent.id if parent else None


def _classify_bound(node: LoopNode, forest: LoopForest) -> tuple[str, int | None]:
    bound = node.bound
    if bound is None:
        return BOUND_NONE, None
    if bound.isdigit():
        return BOUND_CONSTANT, None
    if bound == "n":
        return BOUND_N, None
    for ancestor in forest.ancestors(node):
        if ancestor.iterator == bound:
            return BOUND_DEPENDENT, ancestor.id
    return BOUND_FREE, None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_loop_forest(clean: str) -> LoopForest:
    """Parse C-style ``for``/``while`` loops in normalized code into a nesting forest."""
    nodes = _parse_headers(clean)
    linked = LoopForest(tuple(replace(node, parent_id=_innermost_parent(node, nodes)) for node in nodes))
    classified = []
    for node in linked.nodes:
        bound_kind, depends_on = _classify_bound(node, linked)
        classified.append(replace(node, bound_kind=bound_kind, depends_on=depends_on))
    return LoopForest(tuple(classified))


def _for_loop_risk(clean: str, node: LoopNode, init: str) -> str | None:
    if not node.iterator or not _ONE_LITERAL_RE.search(init) or "++" not in node.update:
        return None
    divisor = re.compile(rf"\b[a-z_]\w*\s*=\s*[a-z_]\w*\s*/\s*{re.escape(node.iterator)}\b")
    if divisor.search(clean):
        return f"{node.iterator} starts at 1 and is used as a divisor; termination may fail."
    return None


def _while_loop_risk(iterator: str | None, update: str) -> str | None:
    if iterator and _DIVIDE_BY_ONE_RE.search(update):
        return f"{iterator} is divided by 1 in while-loop update; loop may never terminate."
    return None


def profile_loops(clean: str, forest: LoopForest) -> LoopProfile:
    """Flat growth counts over every detected loop, plus the termination check.

    Python-style headers (``for x in xs:``, ``while cond:``) have no braces to
    nest by, so they only show up here. Collection loops such as
    ``for (x of xs)`` count towards the total but carry no growth kind.
    """
    counts = {LINEAR: 0, LOG: 0, UNKNOWN: 0}
    risk: str | None = None
    for_inits = [m.group(1) for m in _FOR_HEADER_RE.finditer(clean)]
    for_nodes = [node for node in forest.nodes if node.keyword == "for"]

    for node in forest.nodes:
        counts[node.kind] += 1
        if node.keyword == "while":
            risk = _while_loop_risk(node.iterator, node.update) or risk
    for node, init in zip(for_nodes, for_inits):
        risk = _for_loop_risk(clean, node, init) or risk

    header_only = 0
    for _ in _PY_FOR_RE.finditer(clean):
        counts[LINEAR] += 1
        header_only += 1
    for m in _PY_WHILE_RE.finditer(clean):
        header_only += 1
        condition = m.group(1)
        iterator = extract_iterator("", condition)
        update = infer_update(clean, iterator)
        counts[classify_loop_kind(update)] += 1
        risk = _while_loop_risk(iterator, update) or risk

    collection = len(_COLLECTION_FOR_RE.findall(clean))
    return LoopProfile(
        linear=counts[LINEAR],
        log=counts[LOG],
        unknown=counts[UNKNOWN],
        total=len(forest.nodes) + header_only + collection,
        nonterminating_risk=risk,
    )


def max_loop_depth(clean: str) -> int:
    """Deepest brace-delimited loop nesting; braceless loops fall back to the header count."""
    block_stack: list[bool] = []
    pending = 0
    depth = 0
    max_depth = 0
    for token in _DEPTH_TOKEN_RE.findall(clean):
        if token[0] in "fw":
            pending += 1
        elif token == "{":
            if pending > 0:
                pending -= 1
                depth += 1
                block_stack.append(True)
                max_depth = max(max_depth, depth)
            else:
                block_stack.append(False)
        elif block_stack and block_stack.pop():
            depth = max(0, depth - 1)

    if max_depth == 0 and pending > 0:
        return pending
    return max_depth
