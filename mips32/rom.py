from __future__ import annotations  # keep type hints lightweight

import pathlib  # file paths
import re  # line formats
from typing import Iterable, Union  # line streams + path-likes

from .constants import WORD_BYTES  # listing addresses
from .isa import disassemble  # listing text
from .types import Instruction  # instruction container

class RomFormatError(ValueError):  # malformed ROM line
    pass

PathLike = Union[str, pathlib.Path]

_BINARY = re.compile(r"[01]{32}")  # 32-char binary word
_HEX = re.compile(r"[0-9A-Fa-f]{1,8}")  # up to 8 hex digits

def parse_word(text: str) -> int:  # one ROM token -> u32
    s = text.strip()
    if _BINARY.fullmatch(s):
        return int(s, 2)
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    if not _HEX.fullmatch(s):
        raise RomFormatError(f"not a 32-bit hex or binary word: {text.strip()!r}")
    return int(s, 16)

def parse_rom(lines: Iterable[str], source: str = "<rom>") -> list[int]:  # text lines -> words, fail fast
    words = []
    for lineno, raw in enumerate(lines, start=1):
        s = raw.strip()
        if not s or s.startswith("#"):
            continue
        try:
            words.append(parse_word(s))
        except RomFormatError as e:
            raise RomFormatError(f"{source}:{lineno}: {e}") from None
    return words

def read_rom(path: PathLike) -> list[int]:  # load a ROM dump
    p = pathlib.Path(path)
    try:
        with open(p, "r", encoding="utf-8") as f:
            return parse_rom(f, source=str(p))
    except UnicodeDecodeError as e:
        raise RomFormatError(f"{p}: not a text ROM: {e}") from None

def format_rom(words: Iterable[int]) -> str:  # one upper-case 8-digit hex word per line
    return "".join(f"{w & 0xFFFF_FFFF:08X}\n" for w in words)

def write_rom(path: PathLike, words: Iterable[int]) -> None:
    pathlib.Path(path).write_text(format_rom(words), encoding="utf-8")

def format_listing(instructions: Iterable[Instruction]) -> str:  # address, word, disassembly
    lines = []
    for i, inst in enumerate(instructions):
        lines.append(f"0x{i * WORD_BYTES:04X}  {inst.word:08X}  {disassemble(inst)}\n")
    return "".join(lines)

def write_listing(path: PathLike, instructions: Iterable[Instruction]) -> None:
    pathlib.Path(path).write_text(format_listing(instructions), encoding="utf-8")
