from __future__ import annotations  # keep type hints lightweight

import logging  # per-run summary
from typing import Iterable, Sequence, Union  # words or decoded instructions

from .decode import decode_program  # words -> Instruction list
from .relink import relink  # address/field fix-up
from .rewriter import rewrite_stream  # no-op insertion
from .types import VARIANTS, Instruction, Resolution, ResolutionPolicy  # containers + named policies

logger = logging.getLogger(__name__)

Program = Union[Sequence[int], Sequence[Instruction]]

def _as_instructions(program: Program) -> list[Instruction]:  # accept raw words or decoded instructions
    items = list(program)
    if all(isinstance(x, Instruction) for x in items):
        return [x if x.origin is not None else x.copy(origin=x.address) for x in items]
    return decode_program(int(x) for x in items)

def resolve_hazards(program: Program, policy: ResolutionPolicy) -> Resolution:  # one independent run
    original = _as_instructions(program)
    expanded, counts = rewrite_stream(original, policy)
    unresolved = relink(expanded)
    res = Resolution(
        policy=policy,
        instructions=expanded,
        original_count=len(original),
        data_hazards=counts.data,
        control_hazards=counts.control,
        unresolved=unresolved,
    )
    logger.debug(
        "%s: %d -> %d instructions (+%d), data=%d control=%d unresolved=%d",
        policy.name, res.original_count, res.corrected_count, res.inserted,
        res.data_hazards, res.control_hazards, len(res.unresolved),
    )
    return res

def resolve_variants(program: Program, names: Iterable[str] | None = None) -> dict[str, Resolution]:  # named report variants
    original = _as_instructions(program)
    selected = list(VARIANTS) if names is None else list(names)
    out = {}
    for name in selected:
        policy = VARIANTS.get(name)
        if policy is None:
            raise ValueError(f"unknown variant {name!r}; expected one of {sorted(VARIANTS)}")
        out[name] = resolve_hazards(original, policy)
    return out
