from __future__ import annotations  # keep type hints lightweight

import logging  # unresolved-target warnings
from typing import Optional  # lookup misses

from .constants import TARGET26_MASK, WORD_BYTES  # field width + address stride
from .isa import disassemble  # warning text
from .types import Instruction  # instruction container

logger = logging.getLogger(__name__)

IMM16_MIN = -0x8000  # signed branch offset range (in words)
IMM16_MAX = 0x7FFF

def label_table(instructions: list[Instruction]) -> dict[int, int]:  # original address (origin) -> new position
    labels = {inst.origin: i for i, inst in enumerate(instructions) if inst.origin is not None}
    if labels:  # end-of-program exit label follows the last original instruction
        labels[max(labels) + WORD_BYTES] = len(instructions)
    return labels

def branch_target(inst: Instruction) -> Optional[int]:  # original byte address a branch reaches
    if inst.origin is None:
        return None
    return inst.origin + WORD_BYTES + (inst.imm << 2)

def jump_target(inst: Instruction) -> int:  # byte address a j reaches (low 28 bits)
    return inst.target << 2

def _lookup(labels: dict[int, int], address: Optional[int]) -> Optional[int]:  # aligned, known targets only
    if address is None or address % WORD_BYTES != 0:
        return None
    return labels.get(address)

def relink(instructions: list[Instruction]) -> list[int]:  # mutate in place; returns unresolved (left unchanged) addresses
    labels = label_table(instructions)
    for i, inst in enumerate(instructions):
        inst.address = i * WORD_BYTES

    unresolved: list[int] = []
    for i, inst in enumerate(instructions):
        if inst.is_branch():
            pos = _lookup(labels, branch_target(inst))
            new_imm = None if pos is None else pos - (i + 1)
            if new_imm is not None and IMM16_MIN <= new_imm <= IMM16_MAX:
                inst.patch_immediate(new_imm)
                continue
        elif inst.is_jump():
            pos = _lookup(labels, jump_target(inst))
            if pos is not None and pos <= TARGET26_MASK:
                inst.patch_jump_target(pos)
                continue
        else:
            continue
        logger.warning("0x%04X %s: target cannot be relinked; field left unchanged", inst.address, disassemble(inst))
        unresolved.append(inst.address)
    return unresolved
