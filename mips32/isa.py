from __future__ import annotations  # keep type hints lightweight

from .constants import OPCODE_ADDI, OPCODE_BEQ, OPCODE_BNE, OPCODE_J, OPCODE_LW, OPCODE_RTYPE, OPCODE_SW  # modeled opcodes
from .types import Instruction  # decoded instruction container

RTYPE_FUNCT_KIND = {  # funct -> kind for opcode 0
    0x00: "SLL", 0x02: "SRL", 0x03: "SRA",
    0x20: "ADD", 0x21: "ADDU", 0x22: "SUB", 0x23: "SUBU",
    0x24: "AND", 0x25: "OR", 0x26: "XOR", 0x27: "NOR",
    0x2A: "SLT", 0x2B: "SLTU",
}

OPCODE_KIND = {  # opcode -> kind for I/J-type
    OPCODE_J: "J", OPCODE_BEQ: "BEQ", OPCODE_BNE: "BNE",
    OPCODE_ADDI: "ADDI", OPCODE_LW: "LW", OPCODE_SW: "SW",
}

_SHIFT_KINDS = {"SLL", "SRL", "SRA"}  # rd <- rt shifted by shamt

def instruction_kind(inst: Instruction) -> str:  # mnemonic name, "NoOp" or "UNKNOWN"
    if inst.is_nop:
        return "NoOp"
    if inst.opcode == OPCODE_RTYPE:
        return RTYPE_FUNCT_KIND.get(inst.funct, "UNKNOWN")
    return OPCODE_KIND.get(inst.opcode, "UNKNOWN")

def disassemble(inst: Instruction) -> str:  # human-readable form for listings and logs
    kind = instruction_kind(inst)
    if kind == "NoOp":
        return "NOP"
    if inst.opcode == OPCODE_RTYPE:
        if kind == "UNKNOWN":
            return f"Rtype funct=0x{inst.funct:02X}"
        if kind in _SHIFT_KINDS:
            return f"{kind} ${inst.rd}, ${inst.rt}, {inst.shamt}"
        return f"{kind} ${inst.rd}, ${inst.rs}, ${inst.rt}"
    if kind in ("LW", "SW"):
        return f"{kind} ${inst.rt}, {inst.imm}(${inst.rs})"
    if kind in ("BEQ", "BNE"):
        return f"{kind} ${inst.rs}, ${inst.rt}, offset {inst.imm}"
    if kind == "ADDI":
        return f"ADDI ${inst.rt}, ${inst.rs}, {inst.imm}"
    if kind == "J":
        return f"J target=0x{inst.target:07X}"
    return f"OPCODE 0x{inst.opcode:02X}"
