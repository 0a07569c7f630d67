import pathlib  # locate repo root
import sys  # adjust import path for local modules
import unittest  # unit test framework

ROOT = pathlib.Path(__file__).resolve().parents[1]  # repo root
sys.path.insert(0, str(ROOT))  # allow `import mips32.*`

from mips32.decode import decode_instruction, decode_program, encode, encode_i, encode_j, encode_r  # word <-> Instruction
from mips32.isa import disassemble, instruction_kind  # mnemonic text


def _add(rd: int, rs: int, rt: int) -> int:  # add rd, rs, rt
    return encode_r(0x00, rs, rt, rd, 0, 0x20)


class DecodeTests(unittest.TestCase):  # field extraction + classification
    def test_rtype_fields(self):
        inst = decode_instruction(0x00221820, 0)  # add $3, $1, $2
        self.assertEqual((inst.opcode, inst.rs, inst.rt, inst.rd, inst.shamt, inst.funct), (0, 1, 2, 3, 0, 0x20))
        self.assertTrue(inst.writes_register())
        self.assertEqual(inst.dest_register(), 3)
        self.assertEqual(inst.source_registers(), (1, 2))
        self.assertEqual(disassemble(inst), "ADD $3, $1, $2")
        self.assertEqual(_add(3, 1, 2), 0x00221820)

    def test_load_sign_extends_immediate(self):
        inst = decode_instruction(0x8C25FFFC, 4)  # lw $5, -4($1)
        self.assertTrue(inst.is_load())
        self.assertEqual(inst.imm16, 0xFFFC)
        self.assertEqual(inst.imm, -4)
        self.assertEqual(inst.dest_register(), 5)
        self.assertEqual(inst.source_registers(), (1,))
        self.assertEqual(disassemble(inst), "LW $5, -4($1)")

    def test_store_reads_base_and_data(self):
        inst = decode_instruction(encode_i(0x2B, 1, 5, 8), 0)  # sw $5, 8($1)
        self.assertTrue(inst.is_store())
        self.assertFalse(inst.writes_register())
        self.assertIsNone(inst.dest_register())
        self.assertEqual(inst.source_registers(), (1, 5))
        self.assertEqual(disassemble(inst), "SW $5, 8($1)")

    def test_addi_and_branches(self):
        addi = decode_instruction(encode_i(0x08, 2, 7, -1), 0)
        self.assertEqual((addi.dest_register(), addi.source_registers(), addi.imm), (7, (2,), -1))
        beq = decode_instruction(encode_i(0x04, 1, 1, 3), 0)
        self.assertTrue(beq.is_branch())
        self.assertFalse(beq.writes_register())
        self.assertEqual(beq.source_registers(), (1,))  # duplicates collapse
        bne = decode_instruction(encode_i(0x05, 4, 0, -2), 0)
        self.assertTrue(bne.is_branch())
        self.assertEqual(disassemble(bne), "BNE $4, $0, offset -2")

    def test_jump(self):
        j = decode_instruction(encode_j(0x02, 0x40), 0)
        self.assertTrue(j.is_jump())
        self.assertFalse(j.is_branch())
        self.assertEqual(j.target, 0x40)
        self.assertEqual(j.source_registers(), ())
        self.assertIsNone(j.dest_register())
        self.assertEqual(disassemble(j), "J target=0x0000040")

    def test_nop_and_unknown_opcodes_are_inert(self):
        nop = decode_instruction(0, 0)
        self.assertTrue(nop.is_nop)
        self.assertEqual(instruction_kind(nop), "NoOp")
        self.assertEqual(disassemble(nop), "NOP")
        self.assertFalse(nop.writes_register())
        self.assertEqual(nop.source_registers(), ())
        odd = decode_instruction(0xFFFF_FFFF, 0)  # opcode 0x3F
        self.assertEqual(instruction_kind(odd), "UNKNOWN")
        self.assertFalse(odd.writes_register() or odd.is_branch() or odd.is_jump() or odd.is_load() or odd.is_store())
        self.assertEqual(odd.source_registers(), ())
        self.assertEqual(disassemble(odd), "OPCODE 0x3F")

    def test_shift_disassembly(self):
        sll = decode_instruction(encode_r(0, 0, 4, 2, 3, 0x00), 0)  # sll $2, $4, 3
        self.assertEqual(disassemble(sll), "SLL $2, $4, 3")

    def test_decode_masks_to_32_bits(self):
        self.assertEqual(decode_instruction(0x1_0000_0020, 0).word, 0x20)

    def test_encode_is_identity_after_decode(self):  # decode -> encode yields the same word
        for word in (0x00221820, 0x8C25FFFC, 0x1022FFFF, 0x08000040, 0xDEADBEEF, 0):
            self.assertEqual(encode(decode_instruction(word, 0)), word)

    def test_decode_program_assigns_sequential_addresses(self):
        prog = decode_program([_add(3, 1, 2), 0, _add(4, 3, 3)])
        self.assertEqual([i.address for i in prog], [0, 4, 8])
        self.assertEqual([i.origin for i in prog], [0, 4, 8])


class PatchTests(unittest.TestCase):  # field patches keep the other bits
    def test_patch_immediate_preserves_opcode_and_registers(self):
        inst = decode_instruction(encode_i(0x04, 1, 2, 5), 0)
        inst.patch_immediate(-3)
        self.assertEqual((inst.opcode, inst.rs, inst.rt), (0x04, 1, 2))
        self.assertEqual(inst.imm, -3)
        self.assertEqual(inst.word, encode_i(0x04, 1, 2, -3))
        inst.patch_immediate(0x1_1234)  # extra bits dropped
        self.assertEqual(inst.imm16, 0x1234)

    def test_patch_jump_target_preserves_opcode(self):
        inst = decode_instruction(encode_j(0x02, 0x10), 0)
        inst.patch_jump_target(0x0400_0007)
        self.assertEqual(inst.opcode, 0x02)
        self.assertEqual(inst.target, 0x7)
        self.assertEqual(inst.word, encode_j(0x02, 0x7))


if __name__ == "__main__":
    unittest.main()
