from __future__ import annotations  # allow forward refs + keep type hints lightweight

from dataclasses import dataclass, field, replace  # small containers
from typing import Optional  # Optional origin

from .constants import (  # field masks + opcode classes
    BRANCH_OPCODES,
    IMM16_MASK,
    IMM_WRITER_OPCODES,
    JUMP_OPCODES,
    NOP_WORD,
    OPCODE_LW,
    OPCODE_RTYPE,
    OPCODE_SW,
    TARGET26_MASK,
    WORD_MASK,
)

@dataclass
class Instruction:  # one 32-bit word; decoded fields are views of `word`
    address: int
    word: int
    origin: Optional[int] = None  # byte address in the original program (None: synthesized no-op)

    def __post_init__(self):  # keep word in u32 range
        self.word &= WORD_MASK

    @property
    def opcode(self) -> int:
        return (self.word >> 26) & 0x3F

    @property
    def rs(self) -> int:
        return (self.word >> 21) & 0x1F

    @property
    def rt(self) -> int:
        return (self.word >> 16) & 0x1F

    @property
    def rd(self) -> int:
        return (self.word >> 11) & 0x1F

    @property
    def shamt(self) -> int:
        return (self.word >> 6) & 0x1F

    @property
    def funct(self) -> int:
        return self.word & 0x3F

    @property
    def imm16(self) -> int:  # raw immediate bits
        return self.word & IMM16_MASK

    @property
    def imm(self) -> int:  # sign-extended immediate
        return self.imm16 - 0x1_0000 if (self.imm16 & 0x8000) else self.imm16

    @property
    def target(self) -> int:  # J-type word target
        return self.word & TARGET26_MASK

    @property
    def is_nop(self) -> bool:
        return self.word == NOP_WORD

    def is_branch(self) -> bool:
        return self.opcode in BRANCH_OPCODES

    def is_jump(self) -> bool:
        return self.opcode in JUMP_OPCODES

    def is_load(self) -> bool:
        return self.opcode == OPCODE_LW

    def is_store(self) -> bool:
        return self.opcode == OPCODE_SW

    def writes_register(self) -> bool:  # modeled register writers only
        if self.is_nop:
            return False
        return self.opcode == OPCODE_RTYPE or self.opcode in IMM_WRITER_OPCODES

    def dest_register(self) -> Optional[int]:  # None when nothing is written
        if not self.writes_register():
            return None
        return self.rd if self.opcode == OPCODE_RTYPE else self.rt

    def source_registers(self) -> tuple[int, ...]:  # ordered, de-duplicated read set
        if self.is_nop:
            return ()
        op = self.opcode
        if op == OPCODE_RTYPE or op == OPCODE_SW or op in BRANCH_OPCODES:
            regs = (self.rs, self.rt)
        elif op in IMM_WRITER_OPCODES:
            regs = (self.rs,)
        else:
            regs = ()
        return tuple(dict.fromkeys(regs))

    def patch_immediate(self, new_imm16: int) -> None:  # replace bits 15..0
        self.word = (self.word & ~IMM16_MASK & WORD_MASK) | (new_imm16 & IMM16_MASK)

    def patch_jump_target(self, new_target26: int) -> None:  # replace bits 25..0
        self.word = (self.word & ~TARGET26_MASK & WORD_MASK) | (new_target26 & TARGET26_MASK)

    def copy(self, **changes) -> "Instruction":  # independent copy for a new run
        return replace(self, **changes)

@dataclass(frozen=True)
class ResolutionPolicy:  # which hazards to resolve, and whether forwarding is available
    forwarding: bool = False
    resolve_data: bool = True
    resolve_control: bool = True

    @property
    def name(self) -> str:  # report name, e.g. integrated_forwarding
        if self.resolve_data and self.resolve_control:
            kind = "integrated"
        elif self.resolve_data:
            kind = "data"
        elif self.resolve_control:
            kind = "control"
        else:
            kind = "passthrough"
        return f"{kind}_{'forwarding' if self.forwarding else 'no_forwarding'}"

VARIANTS = {  # the six reports produced for every ROM
    p.name: p
    for p in (
        ResolutionPolicy(forwarding=False, resolve_data=True, resolve_control=False),
        ResolutionPolicy(forwarding=True, resolve_data=True, resolve_control=False),
        ResolutionPolicy(forwarding=False, resolve_data=False, resolve_control=True),
        ResolutionPolicy(forwarding=True, resolve_data=False, resolve_control=True),
        ResolutionPolicy(forwarding=False, resolve_data=True, resolve_control=True),
        ResolutionPolicy(forwarding=True, resolve_data=True, resolve_control=True),
    )
}

@dataclass
class Resolution:  # result of one resolution run
    policy: ResolutionPolicy
    instructions: list[Instruction]
    original_count: int
    data_hazards: int = 0
    control_hazards: int = 0
    unresolved: list[int] = field(default_factory=list)  # addresses of unrelinkable branches/jumps

    @property
    def corrected_count(self) -> int:
        return len(self.instructions)

    @property
    def inserted(self) -> int:  # overhead in instruction slots
        return self.corrected_count - self.original_count

    @property
    def words(self) -> list[int]:
        return [inst.word for inst in self.instructions]
