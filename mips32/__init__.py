from .decode import decode_instruction, decode_program, encode  # word <-> Instruction
from .isa import disassemble  # mnemonic text
from .program import resolve_hazards, resolve_variants  # policy runs
from .rom import RomFormatError, read_rom, write_listing, write_rom  # ROM text files
from .types import VARIANTS, Instruction, Resolution, ResolutionPolicy  # containers + named policies

__all__ = [  # public API
    "VARIANTS",
    "Instruction",
    "Resolution",
    "ResolutionPolicy",
    "RomFormatError",
    "decode_instruction",
    "decode_program",
    "disassemble",
    "encode",
    "read_rom",
    "resolve_hazards",
    "resolve_variants",
    "write_listing",
    "write_rom",
]
