WORD_BYTES = 4  # byte stride between consecutive instructions
WORD_MASK = 0xFFFF_FFFF  # 32-bit instruction word
IMM16_MASK = 0xFFFF  # I-type immediate field
TARGET26_MASK = 0x03FF_FFFF  # J-type target field
NOP_WORD = 0x0000_0000  # sll $0, $0, 0

REGISTER_COUNT = 32  # architectural registers $0..$31
ZERO_REGISTER = 0  # hard-wired $zero, never a real hazard source/dest

OPCODE_RTYPE = 0x00
OPCODE_J = 0x02
OPCODE_BEQ = 0x04
OPCODE_BNE = 0x05
OPCODE_ADDI = 0x08
OPCODE_LW = 0x23
OPCODE_SW = 0x2B

BRANCH_OPCODES = frozenset({OPCODE_BEQ, OPCODE_BNE})
JUMP_OPCODES = frozenset({OPCODE_J})
IMM_WRITER_OPCODES = frozenset({OPCODE_LW, OPCODE_ADDI})  # write rt

NO_FORWARDING_MIN_DISTANCE = 3  # producer must reach WB
LOAD_USE_MIN_DISTANCE = 2  # load result forwarded from MEM/WB
ALU_FORWARD_MIN_DISTANCE = 1  # ALU result forwarded from EX/MEM
BRANCH_PENALTY_SLOTS = 2  # branch resolved in EX, no prediction
LOOKBACK_WINDOW = NO_FORWARDING_MIN_DISTANCE - 1  # producers further back never stall
