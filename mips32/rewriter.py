from __future__ import annotations  # keep type hints lightweight

import logging  # per-stall debug trace
from dataclasses import dataclass  # hazard counters
from typing import Sequence  # original program view

from .constants import NOP_WORD, WORD_BYTES  # synthesized bubble word + address stride
from .hazards import Emission, required_stalls  # stall detector
from .isa import disassemble  # debug output
from .types import Instruction, ResolutionPolicy  # instruction + policy containers

logger = logging.getLogger(__name__)

@dataclass
class HazardCounts:  # instructions that had to be delayed, per hazard class
    data: int = 0
    control: int = 0

def _nop(position: int) -> Instruction:  # synthesized bubble (no origin)
    return Instruction(address=position * WORD_BYTES, word=NOP_WORD, origin=None)

def rewrite_stream(program: Sequence[Instruction], policy: ResolutionPolicy) -> tuple[list[Instruction], HazardCounts]:  # insert no-ops in front of stalled instructions
    out: list[Instruction] = []
    emitted: list[Emission] = []
    counts = HazardCounts()

    def emit(inst: Instruction):
        emitted.append(Emission(inst, len(out)))
        out.append(inst)

    for inst in program:
        if inst.is_nop:  # source bubbles pass through untouched
            emit(inst.copy())
            continue
        decision = required_stalls(emitted, inst, policy)
        if decision.data:
            counts.data += 1
        if decision.control:
            counts.control += 1
        if decision.stalls:
            logger.debug(
                "0x%04X %s: %d stall(s) (data=%d, control=%d)",
                inst.address, disassemble(inst), decision.stalls, decision.data, decision.control,
            )
        for _ in range(decision.stalls):
            emit(_nop(len(out)))
        emit(inst.copy())
    return out, counts
