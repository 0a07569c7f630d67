from __future__ import annotations  # keep type hints lightweight

from dataclasses import dataclass  # small immutable containers
from typing import Sequence  # emitted-stream view

from .constants import (  # pipeline thresholds
    ALU_FORWARD_MIN_DISTANCE,
    BRANCH_PENALTY_SLOTS,
    LOAD_USE_MIN_DISTANCE,
    LOOKBACK_WINDOW,
    NO_FORWARDING_MIN_DISTANCE,
    ZERO_REGISTER,
)
from .types import Instruction, ResolutionPolicy  # instruction + policy containers

@dataclass(frozen=True)
class Emission:  # an emitted instruction and its slot in the output stream
    instruction: Instruction
    position: int

@dataclass(frozen=True)
class StallDecision:  # per-class stall requirements for one candidate (5-stage IF/ID/EX/MEM/WB)
    data: int = 0
    control: int = 0

    @property
    def stalls(self) -> int:  # no-ops satisfy both classes at once
        return max(self.data, self.control)

def min_distance(producer: Instruction, forwarding: bool) -> int:  # slots needed between producer and consumer
    if not forwarding:
        return NO_FORWARDING_MIN_DISTANCE
    if producer.is_load():
        return LOAD_USE_MIN_DISTANCE
    return ALU_FORWARD_MIN_DISTANCE

def data_stall(emitted: Sequence[Emission], candidate: Instruction, forwarding: bool) -> int:  # RAW stalls; adjacent pair = distance 1
    sources = set(candidate.source_registers())
    sources.discard(ZERO_REGISTER)
    if not sources:
        return 0
    n = len(emitted)
    need = 0
    for e in reversed(emitted[max(0, n - LOOKBACK_WINDOW):]):
        dest = e.instruction.dest_register()
        if dest is None or dest == ZERO_REGISTER or dest not in sources:
            continue
        distance = n - e.position
        need = max(need, min_distance(e.instruction, forwarding) - distance)
    return need

def control_stall(emitted: Sequence[Emission]) -> int:  # bubble after an unresolved branch
    if not emitted:
        return 0
    prev = emitted[-1]
    if not prev.instruction.is_branch():
        return 0
    distance = len(emitted) - prev.position
    return max(0, BRANCH_PENALTY_SLOTS + 1 - distance)

def required_stalls(emitted: Sequence[Emission], candidate: Instruction, policy: ResolutionPolicy) -> StallDecision:  # detector entrypoint
    data = data_stall(emitted, candidate, policy.forwarding) if policy.resolve_data else 0
    control = control_stall(emitted) if policy.resolve_control else 0
    return StallDecision(data=data, control=control)
