# Big-O estimation from loop structure and recursion patterns.
#
# Composition rules are heuristics, not a recurrence solver; their outcomes are
# pinned by tests and should not be tightened without updating those.

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from data_designer_signal_lab.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_signal_lab.loops import (
    BOUND_CONSTANT,
    BOUND_DEPENDENT,
    BOUND_N,
    LINEAR,
    LOG,
    LoopForest,
    LoopNode,
    LoopProfile,
    build_loop_forest,
    find_body_end,
    max_loop_depth,
    normalize_code,
    profile_loops,
)

logger = logging.getLogger(__name__)

NONTERMINATING = "Potentially non-terminating loop"
DEFAULT_ESTIMATE = "O(1) to O(log n)"

GEOMETRIC_FLAG = "Geometric summation detected for dependent linear bound."
TRIANGULAR_FLAG = "Dependent linear bound detected (triangular-style growth)."
DEPENDENT_LOG_FLAG = "Dependent logarithmic bound detected."

DIVISIVE = "divisive"
DECREMENTAL = "decremental"
UNKNOWN_SHRINK = "unknown"

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_SORT_RE = re.compile(r"\.sort\(|\bsorted\(|quicksort|mergesort|heapsort")
_FUNCTION_DECL_RES = [
    re.compile(r"\bfunction\s+([a-z_]\w*)\s*\("),
    re.compile(r"\b(?:int|long|float|double|char|bool|boolean|void|string|auto)\s+([a-z_]\w*)\s*\([^)]*\)\s*\{"),
    re.compile(r"\bdef\s+([a-z_]\w*)\s*\("),
    re.compile(r"\b(?:const|let|var)\s+([a-z_]\w*)\s*=\s*(?:async\s+)?(?:\([^)]*\)|[a-z_]\w*)\s*=>"),
]
_PY_DEF_RE = re.compile(r"\bdef\s")
_DIVIDE_ARG_RE = re.compile(r"/(\d+)")
_DECREMENT_ARG_RE = re.compile(r"-\d+")

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StructuralComplexity:
    n_exp: int = 0
    log_exp: int = 0
    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecursionProfile:
    is_recursive: bool = False
    call_branch_count: int = 0
    shrink_pattern: str = UNKNOWN_SHRINK
    derived_recurrence: str | None = None
    function_name: str | None = None
    reason: str | None = None
    time_complexity: str | None = None
    space_complexity: str | None = None


@dataclass(frozen=True)
class ComplexityResult:
    time_complexity: str
    space_complexity: str
    reasoning: tuple[str, ...]
    derivation: tuple[str, ...]
    confidence: int

    def to_payload(self) -> dict[str, object]:
        return {
            "time_complexity": self.time_complexity,
            "space_complexity": self.space_complexity,
            "reasoning": list(self.reasoning),
            "derivation": list(self.derivation),
            "confidence": self.confidence,
        }


# ---------------------------------------------------------------------------
# Loop composition
# ---------------------------------------------------------------------------


def format_complexity(n_exp: int, log_exp: int) -> str:
    n_part = "" if n_exp <= 0 else "n" if n_exp == 1 else f"n^{n_exp}"
    log_part = "" if log_exp <= 0 else "log n" if log_exp == 1 else f"(log n)^{log_exp}"
    if not n_part and not log_part:
        return "O(1)"
    if n_part and log_part:
        return f"O({n_part} * {log_part})"
    return f"O({n_part or log_part})"


def apply_loop_rule(node: LoopNode, state: StructuralComplexity, forest: LoopForest) -> StructuralComplexity:
    n_exp, log_exp = state.n_exp, state.log_exp
    flags = list(state.flags)
    dependency = forest.nodes[node.depends_on] if node.depends_on is not None else None

    if node.kind == LINEAR:
        if node.bound_kind == BOUND_CONSTANT:
            pass
        elif node.bound_kind == BOUND_N:
            n_exp += 1
        elif node.bound_kind == BOUND_DEPENDENT and dependency is not None and dependency.kind == LOG:
            # sum of i over i = 1, 2, 4, ..., n is O(n): one log factor becomes linear
            log_exp = max(0, log_exp - 1)
            n_exp += 1
            flags.append(GEOMETRIC_FLAG)
        elif node.bound_kind == BOUND_DEPENDENT:
            n_exp += 1
            flags.append(TRIANGULAR_FLAG)
        else:
            n_exp += 1
    elif node.kind == LOG:
        if node.bound_kind != BOUND_CONSTANT:
            log_exp += 1
            if node.bound_kind == BOUND_DEPENDENT:
                flags.append(DEPENDENT_LOG_FLAG)
    else:
        n_exp += 1

    return StructuralComplexity(n_exp=n_exp, log_exp=log_exp, flags=tuple(flags))


def synthesize_structure(forest: LoopForest) -> StructuralComplexity | None:
    """Dominant ``(n_exp, log_exp)`` over every root-to-leaf path of the forest."""
    if not forest.nodes:
        return None

    leaves: list[StructuralComplexity] = []
    stack = [(root, StructuralComplexity()) for root in reversed(forest.roots())]
    while stack:
        node, state = stack.pop()
        nxt = apply_loop_rule(node, state, forest)
        children = forest.children(node.id)
        if not children:
            leaves.append(nxt)
            continue
        stack.extend((child, nxt) for child in reversed(children))

    return max(leaves, key=lambda s: (s.n_exp, s.log_exp))


def _power_term(count: int, base: str) -> str:
    if count == 1:
        return base
    return f"n^{count}" if base == "n" else f"({base})^{count}"


def _flat_estimate(profile: LoopProfile) -> str | None:
    if profile.linear > 0 and profile.log > 0:
        return f"O({_power_term(profile.linear, 'n')} * {_power_term(profile.log, 'log n')})"
    if profile.linear > 0:
        return f"O({_power_term(profile.linear, 'n')})"
    if profile.log > 0:
        return f"O({_power_term(profile.log, 'log n')})"
    return None


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------


def _function_names(clean: str) -> list[str]:
    found: list[tuple[int, str]] = []
    for pattern in _FUNCTION_DECL_RES:
        found.extend((m.start(1), m.group(1)) for m in pattern.finditer(clean))
    return list(dict.fromkeys(name for _, name in sorted(found)))


def _function_body(clean: str, name: str) -> tuple[int, int] | None:
    var = re.escape(name)
    signature = re.search(
        rf"\b(?:function\s+|def\s+)?{var}\s*\([^)]*\)\s*(?:(?::|->)\s*[\w\[\]<>|.]+)?\s*([{{:])", clean
    )
    if signature:
        opener = signature.start(1)
        if clean[opener] == "{":
            return signature.end(), find_body_end(clean, opener)
        next_def = _PY_DEF_RE.search(clean, signature.end())
        return signature.end(), next_def.start() if next_def else len(clean)

    arrow = re.search(rf"\b{var}\s*=\s*(?:async\s+)?(?:\([^)]*\)|[a-z_]\w*)\s*=>\s*", clean)
    if arrow:
        return arrow.end(), find_body_end(clean, arrow.end())
    return None


def _self_call_args(clean: str, name: str) -> list[str] | None:
    span = _function_body(clean, name)
    if span is None:
        return None
    start, end = span
    calls = re.finditer(rf"\b{re.escape(name)}\s*\(([^)]*)\)", clean)
    return [m.group(1).replace(" ", "") for m in calls if start <= m.start() < end]


def _exponent_label(a: int, b: int) -> str:
    exponent = math.log(a) / math.log(max(2, b))
    rounded = round(exponent)
    if abs(exponent - rounded) < 0.05 and rounded > 0:
        return str(rounded)
    return f"{exponent:.2f}"


def analyze_recursion(clean: str) -> RecursionProfile:
    """Find the most self-referential function and classify its shrink pattern."""
    best: tuple[str, list[str]] | None = None
    for name in _function_names(clean):
        args = _self_call_args(clean, name)
        if not args:
            continue
        if best is None or len(args) > len(best[1]):
            best = (name, args)

    if best is None:
        return RecursionProfile()

    name, args = best
    calls = len(args)
    logger.debug(f"Recursive function {name!r} with {calls} self-call site(s)")
    divisor = next((m for m in (_DIVIDE_ARG_RE.search(arg) for arg in args) if m), None)
    decrements = any(_DECREMENT_ARG_RE.search(arg) for arg in args)

    if calls >= 2 and divisor:
        b = int(divisor.group(1))
        exponent = _exponent_label(calls, b)
        recurrence = f"T(n) = {calls}T(n/{b}) + O(1)"
        return RecursionProfile(
            is_recursive=True, call_branch_count=calls, shrink_pattern=DIVISIVE,
            derived_recurrence=recurrence, function_name=name, reason=recurrence,
            time_complexity="O(n)" if exponent == "1" else f"O(n^{exponent})",
            space_complexity="O(log n) stack depth likely",
        )
    if calls == 1 and divisor:
        return RecursionProfile(
            is_recursive=True, call_branch_count=1, shrink_pattern=DIVISIVE,
            derived_recurrence=f"T(n) = T(n/{divisor.group(1)}) + O(1)", function_name=name,
            reason="Single recursive branch with divisive shrink",
            time_complexity="O(log n)", space_complexity="O(log n) stack depth likely",
        )
    if calls >= 2 and decrements:
        return RecursionProfile(
            is_recursive=True, call_branch_count=calls, shrink_pattern=DECREMENTAL,
            derived_recurrence=f"T(n) = {calls}T(n-1) + O(1)", function_name=name,
            reason=f"Branching recursion with decremental shrink ({calls} branches)",
            time_complexity=f"O({calls}^n)", space_complexity="O(n) stack depth likely",
        )
    if calls == 1 and decrements:
        return RecursionProfile(
            is_recursive=True, call_branch_count=1, shrink_pattern=DECREMENTAL,
            derived_recurrence="T(n) = T(n-1) + O(1)", function_name=name,
            reason="Single recursive branch with decremental shrink",
            time_complexity="O(n)", space_complexity="O(n) stack depth likely",
        )
    return RecursionProfile(
        is_recursive=True, call_branch_count=calls, shrink_pattern=UNKNOWN_SHRINK,
        function_name=name, reason=f"Recursive calls detected for function {name}",
        time_complexity="O(n) to O(2^n) depending on branching and shrink rate",
        space_complexity="O(n) stack depth likely",
    )


# ---------------------------------------------------------------------------
# Report assembly
# ---------------------------------------------------------------------------


def _time_estimate(
    profile: LoopProfile,
    recursion: RecursionProfile,
    structural: StructuralComplexity | None,
    depth: int,
    has_sort: bool,
) -> str:
    if profile.nonterminating_risk:
        return NONTERMINATING
    if recursion.time_complexity:
        return recursion.time_complexity
    if structural is not None:
        return format_complexity(structural.n_exp, structural.log_exp)
    flat = _flat_estimate(profile)
    if flat:
        return flat
    if depth >= 2:
        return f"O(n^{depth})"
    if has_sort and depth >= 1:
        return "O(n log n) to O(n^2 log n)"
    if has_sort:
        return "O(n log n)"
    if depth == 1:
        return "O(n)"
    return DEFAULT_ESTIMATE


def _reasoning(
    profile: LoopProfile,
    recursion: RecursionProfile,
    structural: StructuralComplexity | None,
    depth: int,
    has_sort: bool,
) -> list[str]:
    lines = [
        f"{profile.total} loop structure(s) detected",
        f"Max loop nesting depth: {depth}",
        f"Loop growth profile: {profile.linear} linear, {profile.log} logarithmic",
    ]
    if structural is not None:
        lines.append(f"Dependent-bound analysis: n^{structural.n_exp}, (log n)^{structural.log_exp}")
        lines.extend(structural.flags)
    lines.append("Nested iteration present" if depth >= 2 else "No nested iteration found")
    if profile.nonterminating_risk:
        lines.append(profile.nonterminating_risk)
    if recursion.reason:
        lines.append(recursion.reason)
    lines.append("Recursion detected" if recursion.is_recursive else "No recursion pattern detected")
    lines.append("Sort operation detected" if has_sort else "No sort primitive detected")
    return lines


def _derivation(
    profile: LoopProfile,
    recursion: RecursionProfile,
    structural: StructuralComplexity | None,
    depth: int,
    has_sort: bool,
    time_complexity: str,
) -> list[str]:
    if profile.nonterminating_risk:
        return [
            f"Termination check: {profile.nonterminating_risk}",
            "Asymptotic class is undefined unless loop progress is guaranteed.",
        ]

    steps: list[str] = []
    if recursion.is_recursive and recursion.reason:
        steps.append(f"Recurrence model: {recursion.reason}")
        if recursion.time_complexity:
            steps.append(f"Recurrence estimate: {recursion.time_complexity}.")
        if recursion.space_complexity:
            steps.append(f"Stack estimate: {recursion.space_complexity}.")

    steps.append(
        f"Loop decomposition: {profile.linear} linear term(s), {profile.log} logarithmic term(s), depth {depth}."
    )

    if structural is not None:
        formatted = format_complexity(structural.n_exp, structural.log_exp)
        steps.append(f"Composition model: dominant nesting path gives T(n) ~= {formatted[2:-1]}.")
        steps.extend(f"Composition rule: {flag}" for flag in structural.flags)
    elif profile.linear > 0 and profile.log > 0:
        steps.append(f"Product model: T(n) ~= {_power_term(profile.linear, 'n')} * {_power_term(profile.log, 'log n')}.")
    elif profile.linear > 0:
        steps.append(f"Linear nesting model: T(n) ~= {_power_term(profile.linear, 'n')}.")
    elif profile.log > 0:
        steps.append(f"Logarithmic nesting model: T(n) ~= {_power_term(profile.log, 'log n')}.")
    elif depth > 1:
        steps.append(f"Fallback depth model: T(n) ~= n^{depth}.")
    else:
        steps.append("No dominant iterative growth found.")

    if has_sort:
        steps.append("Sorting primitive contributes an n log n factor where applicable.")
    if recursion.is_recursive:
        steps.append("Recursion can change complexity depending on branching and overlap.")
    if profile.unknown > 0:
        steps.append(f"Uncertain loop(s): {profile.unknown}. Estimate confidence is reduced.")

    steps.append(f"Final estimate: {time_complexity}.")
    return steps


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def explain_complexity(code: str, hyperparameters: Hyperparameters | None = None) -> ComplexityResult:
    """Estimate time and space complexity of a code snippet from its text.

    Args:
        code: Source text in any C-like language or Python. It does not need
            to be syntactically valid.
        hyperparameters: Optional tuning overrides for the confidence score.

    Returns:
        ComplexityResult with the Big-O estimate (or the non-terminating-loop
        diagnostic), a space estimate, diagnostic reasoning lines, a step-by-step
        derivation, and a confidence between 45 and 98.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    clean = normalize_code(code)
    forest = build_loop_forest(clean)
    profile = profile_loops(clean, forest)
    structural = synthesize_structure(forest)
    recursion = analyze_recursion(clean)
    depth = max(max_loop_depth(clean), forest.depth())
    has_sort = _SORT_RE.search(clean) is not None

    time_complexity = _time_estimate(profile, recursion, structural, depth, has_sort)
    if profile.nonterminating_risk:
        logger.debug(f"Termination risk: {profile.nonterminating_risk}")

    space_complexity = recursion.space_complexity or "O(1) auxiliary space likely"
    confidence = hp.complexity_confidence_base
    if profile.total > 0:
        confidence += hp.complexity_loop_bonus
    if has_sort:
        confidence += hp.complexity_sort_bonus
    if recursion.is_recursive:
        confidence += hp.complexity_recursion_bonus
    confidence -= profile.unknown * hp.complexity_unknown_loop_penalty

    return ComplexityResult(
        time_complexity=time_complexity,
        space_complexity=space_complexity,
        reasoning=tuple(_reasoning(profile, recursion, structural, depth, has_sort)),
        derivation=tuple(_derivation(profile, recursion, structural, depth, has_sort, time_complexity)),
        confidence=max(hp.complexity_confidence_min, min(hp.complexity_confidence_max, confidence)),
    )


def estimate_complexity(code: str) -> str:
    """One-line summary such as ``"O(n^2) likely (2 loop structure(s) detected)"``."""
    analysis = explain_complexity(code)
    reason = analysis.reasoning[0] if analysis.reasoning else "pattern detected"
    return f"{analysis.time_complexity} likely ({reason})"
