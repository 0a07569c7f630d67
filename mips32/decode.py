from __future__ import annotations  # keep type hints lightweight

from typing import Iterable, Optional  # word streams + optional origin

from .constants import IMM16_MASK, TARGET26_MASK, WORD_BYTES, WORD_MASK  # field masks
from .types import Instruction  # decoded instruction container

def encode_r(opcode: int, rs: int, rt: int, rd: int, shamt: int, funct: int) -> int:  # R-type u32
    return ((opcode & 0x3F) << 26) | ((rs & 0x1F) << 21) | ((rt & 0x1F) << 16) | ((rd & 0x1F) << 11) | ((shamt & 0x1F) << 6) | (funct & 0x3F)

def encode_i(opcode: int, rs: int, rt: int, imm: int) -> int:  # I-type u32 (imm may be negative)
    return ((opcode & 0x3F) << 26) | ((rs & 0x1F) << 21) | ((rt & 0x1F) << 16) | (imm & IMM16_MASK)

def encode_j(opcode: int, target: int) -> int:  # J-type u32
    return ((opcode & 0x3F) << 26) | (target & TARGET26_MASK)

def encode(inst: Instruction) -> int:  # re-encode from decoded fields
    # imm16/target overlap the register fields, so the R layout already covers every bit.
    return encode_r(inst.opcode, inst.rs, inst.rt, inst.rd, inst.shamt, inst.funct)

def decode_instruction(word: int, address: int, origin: Optional[int] = None) -> Instruction:  # total: never raises
    return Instruction(address=address, word=word & WORD_MASK, origin=origin)

def decode_program(words: Iterable[int]) -> list[Instruction]:  # words -> sequential program from 0
    out = []
    for i, word in enumerate(words):
        address = i * WORD_BYTES
        out.append(decode_instruction(word, address, origin=address))
    return out
