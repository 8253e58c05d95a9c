import random
from enum import Enum

from chip8.display import FrameBuffer
from chip8.errors import InvalidOpcodeError, RomTooLargeError, StackFault
from chip8.instructions import FONT_ADDR, decode, disassemble, execute
from chip8.quirks import Mode, QuirkSet

# ----------------------------------------------------------------------------------------------------------------------
# Constants
# ----------------------------------------------------------------------------------------------------------------------

MEMORY_SIZE = 4096
NUM_KEYS    = 16
SPRITES     = [
	[0xF0, 0x90, 0x90, 0x90, 0xF0], # 0
	[0x20, 0x60, 0x20, 0x20, 0x70], # 1
	[0xF0, 0x10, 0xF0, 0x80, 0xF0], # 2
	[0xF0, 0x10, 0xF0, 0x10, 0xF0], # 3
	[0x90, 0x90, 0xF0, 0x10, 0x10], # 4
	[0xF0, 0x80, 0xF0, 0x10, 0xF0], # 5
	[0xF0, 0x80, 0xF0, 0x90, 0xF0], # 6
	[0xF0, 0x10, 0x20, 0x40, 0x40], # 7
	[0xF0, 0x90, 0xF0, 0x90, 0xF0], # 8
	[0xF0, 0x90, 0xF0, 0x10, 0xF0], # 9
	[0xF0, 0x90, 0xF0, 0x90, 0x90], # A
	[0xE0, 0x90, 0xE0, 0x90, 0xE0], # B
	[0xF0, 0x80, 0x80, 0x80, 0xF0], # C
	[0xE0, 0x90, 0x90, 0x90, 0xE0], # D
	[0xF0, 0x80, 0xF0, 0x80, 0xF0], # E
	[0xF0, 0x80, 0xF0, 0x80, 0x80], # F
]

# What a call to step() did
class StepEffect(Enum):
	EXECUTED     = "executed"
	AWAITING_KEY = "awaiting key"

# ----------------------------------------------------------------------------------------------------------------------
# Engine
# ----------------------------------------------------------------------------------------------------------------------

# Registers
#     Each register is 8-bit
#     Register I is 16-bit (usually holds mem addresses, which are 12-bit, right-aligned)
#     V[15] or V[F] is a flag used by instructions
# Timers
#     DT and ST count down once per tick_timers() call, the host calls it at 60 Hz
#     The tone plays while ST is nonzero
class Engine:
	def __init__(self, mode: Mode = Mode.STANDARD, quirks: QuirkSet = None, debug: bool = False, rng: random.Random = None):
		self.mode    = mode
		self.quirks  = quirks if quirks is not None else QuirkSet()
		self.debug   = debug
		self.rng     = rng if rng is not None else random.Random()
		self.display = FrameBuffer()
		self.keys    = [False] * NUM_KEYS
		self.reset()

	@property
	def origin(self):
		return self.mode.origin

	# Zero all state and write the font into the interpreter area
	def reset(self):
		self.RAM   = bytearray(MEMORY_SIZE)  # RAM, 4 KiB, indexed by bytes
		self.V     = bytearray(16)           # General-purpose registers, 8-bit
		self.I     = 0                       # Index register, 16-bit
		self.pc    = self.origin             # Program counter
		self.stack = []                      # Return addresses, at most 16 deep
		self.DT    = 0                       # Delay timer, 8-bit
		self.ST    = 0                       # Sound timer, 8-bit
		self.display.clear()

		self.fetch_pc     = self.pc  # Address of the instruction being executed
		self.awaiting_key = None     # Register waiting on Fx0A, if any
		self.key_edge     = None     # Key that went down while waiting
		self.trace        = None     # Disassembly of the last instruction (debug only)

		idx = FONT_ADDR
		for sprite in SPRITES:
			for byte in sprite:
				self.RAM[idx] = byte
				idx += 1

	# Moves a ROM image into RAM at the program origin
	def load(self, rom: bytes):
		rom = bytes(rom)
		available = MEMORY_SIZE - self.origin
		if len(rom) > available:
			raise RomTooLargeError(len(rom), available)

		self.reset()
		self.RAM[self.origin:self.origin + len(rom)] = rom
		self.pc = self.origin

	# Executes exactly one instruction, or re-checks the keypad while Fx0A is pending
	def step(self):
		if self.awaiting_key is not None:
			if self.key_edge is None:
				return StepEffect.AWAITING_KEY
			self.V[self.awaiting_key] = self.key_edge
			if self.debug:
				self.trace = "[{:#06x}] F{:X}0A - LD V{:X}, K (key {:X})".format(
					self.pc, self.awaiting_key, self.awaiting_key, self.key_edge)
			self.awaiting_key = None
			self.key_edge = None
			self.skip()
			return StepEffect.EXECUTED

		pc = self.pc
		opcode = (self.RAM[pc] << 8) | self.RAM[(pc + 1) & 0xFFF]
		ins = decode(opcode)
		if ins is None:
			raise InvalidOpcodeError(opcode, pc)

		fetch_pc = self.fetch_pc
		self.fetch_pc = pc
		self.pc = (pc + 2) & 0xFFF
		try:
			execute(self, ins)
		except StackFault:
			self.pc = pc
			self.fetch_pc = fetch_pc
			raise

		if self.debug:
			self.trace = "[{:#06x}] {:04X} - {}".format(pc, opcode, disassemble(ins))

		if self.awaiting_key is not None:
			return StepEffect.AWAITING_KEY
		return StepEffect.EXECUTED

	# Decrement both timers once, stopping at zero
	def tick_timers(self):
		if self.DT > 0: self.DT -= 1
		if self.ST > 0: self.ST -= 1

	# Advance PC past the next instruction
	def skip(self):
		self.pc = (self.pc + 2) & 0xFFF

	def wait_for_key(self, x: int):
		self.awaiting_key = x
		self.key_edge = None

	def set_key(self, index: int, pressed: bool):
		if not 0 <= index < NUM_KEYS:
			raise ValueError("No such key {}".format(index))

		# Only a fresh press completes Fx0A, keys already held down do not
		if pressed and not self.keys[index] and self.awaiting_key is not None and self.key_edge is None:
			self.key_edge = index
		self.keys[index] = bool(pressed)

	def frame_buffer(self):
		return self.display

	def snapshot(self):
		return self.display.snapshot()

	def is_tone_active(self):
		return self.ST > 0

	def is_awaiting_key(self):
		return self.awaiting_key is not None

	# Memory, registers, CPU state and screen as text
	def dump(self):
		lines = ["=== MEMORY ==="]
		for row in range(0, MEMORY_SIZE, 64):
			words = self.RAM[row:row + 64]
			lines.append(" ".join("{:02X}{:02X}".format(words[i], words[i + 1]) for i in range(0, 64, 2)))

		lines += ["", "=== REGISTERS ==="]
		lines.append(" ".join("V{:X}: {:02X}".format(i, v) for i, v in enumerate(self.V)))
		lines.append("I: {:04X}".format(self.I))

		lines += ["", "=== CPU STATE ==="]
		lines.append("pc: {:04X}".format(self.pc))
		lines.append("sp: {:02X}".format(len(self.stack)))
		lines.append("stack: [{}]".format(", ".join("{:04X}".format(addr) for addr in self.stack)))
		lines.append("dt: {:02X} st: {:02X}".format(self.DT, self.ST))

		lines += ["", "=== SCREEN ===", self.display.dump()]
		return "\n".join(lines)
