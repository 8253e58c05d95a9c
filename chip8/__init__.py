from chip8.engine import Engine, StepEffect
from chip8.errors import Chip8Error, InvalidOpcodeError, RomTooLargeError, StackFault
from chip8.quirks import Mode, QuirkSet
