from dataclasses import dataclass
from enum import Enum

# Memory
#     0 - 511 - Originally hold the interpreter, will only store sprites here
#     512     - Start of most Chip-8 programs
#     1536    - Start of ETI 660 Chip-8 programs
class Mode(Enum):
	STANDARD = 0x200
	ETI_660  = 0x600

	@property
	def origin(self):
		return self.value

# Behaviours that differ between interpreters. Defaults follow Cowgod's reference
#     shift_uses_vy           - 8xy6/8xyE: Vx = Vy >> 1 / Vy << 1 (COSMAC VIP)
#     jump_uses_vx            - Bnnn: jump to nnn + Vx, x being the high nibble of nnn (CHIP-48)
#     load_store_increments_i - Fx55/Fx65: I is left at I + x + 1 (COSMAC VIP)
@dataclass(frozen=True)
class QuirkSet:
	shift_uses_vy:           bool = False
	jump_uses_vx:            bool = False
	load_store_increments_i: bool = False

	# Quirks matching the original COSMAC VIP interpreter
	@classmethod
	def cosmac_vip(cls):
		return cls(shift_uses_vy=True, load_store_increments_i=True)
