# Errors raised by the interpreter engine
# After any of these the engine is left exactly as it was before the failing call

class Chip8Error(Exception):
	pass

# ROM does not fit between the program origin and the end of memory
class RomTooLargeError(Chip8Error):
	def __init__(self, size: int, available: int):
		super().__init__("ROM is {} bytes, only {} bytes available".format(size, available))
		self.size = size
		self.available = available

# Opcode with no defined decode path
class InvalidOpcodeError(Chip8Error):
	def __init__(self, opcode: int, pc: int):
		super().__init__("Unrecognized instruction {:04X} at {:#05x}".format(opcode, pc))
		self.opcode = opcode
		self.pc = pc

# CALL past 16 levels of nesting, or RET with nothing on the stack
class StackFault(Chip8Error):
	def __init__(self, message: str, opcode: int, pc: int):
		super().__init__("{} ({:04X} at {:#05x})".format(message, opcode, pc))
		self.opcode = opcode
		self.pc = pc
