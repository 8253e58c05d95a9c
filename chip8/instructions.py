# Reference:
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

from collections import namedtuple

from chip8.errors import StackFault

STACK_SIZE = 16
FONT_ADDR  = 0x000
FONT_BYTES = 5

# A decoded opcode. Every field is filled in, handlers read the ones their form uses
#     op  - instruction shape, one of the keys of HANDLERS
#     x   - lower 4 bits of the high byte
#     y   - upper 4 bits of the low byte
#     n   - lowest 4 bits
#     kk  - lowest 8 bits
#     nnn - lowest 12 bits (address)
Instruction = namedtuple("Instruction", ["op", "opcode", "x", "y", "n", "kk", "nnn"])

# ----------------------------------------------------------------------------------------------------------------------
# Instruction Parser
# ----------------------------------------------------------------------------------------------------------------------

# Each instruction is 2 bytes, most significant byte first
# Returns None if the opcode has no meaning
def decode(opcode: int):
	# Hex symbols (nibbles/4 bits each)
	n1 = (opcode & 0xF000) >> 12
	n2 = (opcode & 0x0F00) >> 8
	n3 = (opcode & 0x00F0) >> 4
	n4 = (opcode & 0x000F)
	# Groups of nibbles
	n34  = opcode & 0x00FF
	n234 = opcode & 0x0FFF

	if   opcode == 0x00E0                        : op = "CLS"
	elif opcode == 0x00EE                        : op = "RET"
	elif n1==0x0                                 : op = "SYS"
	elif n1==0x1                                 : op = "JP"
	elif n1==0x2                                 : op = "CALL"
	elif n1==0x3                                 : op = "SE_BYTE"
	elif n1==0x4                                 : op = "SNE_BYTE"
	elif n1==0x5                     and n4==0x0 : op = "SE_REG"
	elif n1==0x6                                 : op = "LD_BYTE"
	elif n1==0x7                                 : op = "ADD_BYTE"
	elif n1==0x8                     and n4==0x0 : op = "LD_REG"
	elif n1==0x8                     and n4==0x1 : op = "OR"
	elif n1==0x8                     and n4==0x2 : op = "AND"
	elif n1==0x8                     and n4==0x3 : op = "XOR"
	elif n1==0x8                     and n4==0x4 : op = "ADD_REG"
	elif n1==0x8                     and n4==0x5 : op = "SUB"
	elif n1==0x8                     and n4==0x6 : op = "SHR"
	elif n1==0x8                     and n4==0x7 : op = "SUBN"
	elif n1==0x8                     and n4==0xE : op = "SHL"
	elif n1==0x9                     and n4==0x0 : op = "SNE_REG"
	elif n1==0xA                                 : op = "LD_I"
	elif n1==0xB                                 : op = "JP_OFFSET"
	elif n1==0xC                                 : op = "RND"
	elif n1==0xD                                 : op = "DRW"
	elif n1==0xE             and n34==0x9E       : op = "SKP"
	elif n1==0xE             and n34==0xA1       : op = "SKNP"
	elif n1==0xF             and n34==0x07       : op = "LD_VX_DT"
	elif n1==0xF             and n34==0x0A       : op = "LD_VX_K"
	elif n1==0xF             and n34==0x15       : op = "LD_DT_VX"
	elif n1==0xF             and n34==0x18       : op = "LD_ST_VX"
	elif n1==0xF             and n34==0x1E       : op = "ADD_I"
	elif n1==0xF             and n34==0x29       : op = "LD_F"
	elif n1==0xF             and n34==0x33       : op = "LD_B"
	elif n1==0xF             and n34==0x55       : op = "LD_MEM_VX"
	elif n1==0xF             and n34==0x65       : op = "LD_VX_MEM"
	else: return None

	return Instruction(op, opcode, n2, n3, n4, n34, n234)

# ----------------------------------------------------------------------------------------------------------------------
# Instructions
# ----------------------------------------------------------------------------------------------------------------------
# Every handler takes the engine and the decoded instruction. PC already points past the instruction,
# so jumps and calls simply overwrite it. A handler that can fail checks before it mutates anything

# Code Navigation ------------------------------------------------------------------------------------------------------

# Jump to a machine code routine. Ignored by modern interpreters
def i_sys(cpu, ins: Instruction):
	pass

# Return from a subroutine
def i_ret(cpu, ins: Instruction):
	if not cpu.stack:
		raise StackFault("Return with an empty stack", ins.opcode, cpu.fetch_pc)
	cpu.pc = cpu.stack.pop()

# Jump to address
def i_jp(cpu, ins: Instruction):
	cpu.pc = ins.nnn

# Call subroutine at address
def i_call(cpu, ins: Instruction):
	if len(cpu.stack) >= STACK_SIZE:
		raise StackFault("Stack overflow, more than {} nested calls".format(STACK_SIZE), ins.opcode, cpu.fetch_pc)
	cpu.stack.append(cpu.pc)
	cpu.pc = ins.nnn

# Jump to address plus V0 (or Vx, where x is the high nibble of the address)
def i_jp_offset(cpu, ins: Instruction):
	offset = cpu.V[ins.x] if cpu.quirks.jump_uses_vx else cpu.V[0]
	cpu.pc = (ins.nnn + offset) & 0xFFF

# Skip next instruction if Vx == byte
def i_se_byte(cpu, ins: Instruction):
	if cpu.V[ins.x] == ins.kk: cpu.skip()

# Skip next instruction if Vx != byte
def i_sne_byte(cpu, ins: Instruction):
	if cpu.V[ins.x] != ins.kk: cpu.skip()

# Skip next instruction if Vx == Vy
def i_se_reg(cpu, ins: Instruction):
	if cpu.V[ins.x] == cpu.V[ins.y]: cpu.skip()

# Skip next instruction if Vx != Vy
def i_sne_reg(cpu, ins: Instruction):
	if cpu.V[ins.x] != cpu.V[ins.y]: cpu.skip()

# Skip next instruction if key with value V[x] is pressed
def i_skp(cpu, ins: Instruction):
	if cpu.keys[cpu.V[ins.x] & 0xF]: cpu.skip()

# Skip next instruction if key with value V[x] is NOT pressed
def i_sknp(cpu, ins: Instruction):
	if not cpu.keys[cpu.V[ins.x] & 0xF]: cpu.skip()

# Graphics -------------------------------------------------------------------------------------------------------------

# Clear the display
def i_cls(cpu, ins: Instruction):
	cpu.display.clear()

# Display n-byte sprite starting at memory location I at (V[x], V[y]). V[F] = collision
def i_drw(cpu, ins: Instruction):
	rows = [cpu.RAM[(cpu.I + i) & 0xFFF] for i in range(ins.n)]
	collision = cpu.display.draw_sprite(rows, cpu.V[ins.x], cpu.V[ins.y])
	cpu.V[15] = int(collision)

# I = location of the font sprite for digit V[x]
def i_ld_f(cpu, ins: Instruction):
	cpu.I = FONT_ADDR + (cpu.V[ins.x] & 0xF) * FONT_BYTES

# Operations -----------------------------------------------------------------------------------------------------------

def i_ld_byte(cpu, ins: Instruction): cpu.V[ins.x] = ins.kk
def i_ld_reg (cpu, ins: Instruction): cpu.V[ins.x] = cpu.V[ins.y]
def i_or     (cpu, ins: Instruction): cpu.V[ins.x] |= cpu.V[ins.y]
def i_and    (cpu, ins: Instruction): cpu.V[ins.x] &= cpu.V[ins.y]
def i_xor    (cpu, ins: Instruction): cpu.V[ins.x] ^= cpu.V[ins.y]
def i_ld_i   (cpu, ins: Instruction): cpu.I = ins.nnn

# Vx += byte. No carry
def i_add_byte(cpu, ins: Instruction):
	cpu.V[ins.x] = (cpu.V[ins.x] + ins.kk) & 0xFF

# Vx += Vy. VF = carry
def i_add_reg(cpu, ins: Instruction):
	val = cpu.V[ins.x] + cpu.V[ins.y]
	cpu.V[ins.x] = val & 0xFF
	cpu.V[15] = int(val > 0xFF)

# Vx -= Vy. VF = NOT borrow
def i_sub(cpu, ins: Instruction):
	no_borrow = cpu.V[ins.x] >= cpu.V[ins.y]
	cpu.V[ins.x] = (cpu.V[ins.x] - cpu.V[ins.y]) & 0xFF
	cpu.V[15] = int(no_borrow)

# Vx = Vy - Vx. VF = NOT borrow
def i_subn(cpu, ins: Instruction):
	no_borrow = cpu.V[ins.y] >= cpu.V[ins.x]
	cpu.V[ins.x] = (cpu.V[ins.y] - cpu.V[ins.x]) & 0xFF
	cpu.V[15] = int(no_borrow)

# Vx = src / 2. VF = previous LSB of src
def i_shr(cpu, ins: Instruction):
	src = cpu.V[ins.y] if cpu.quirks.shift_uses_vy else cpu.V[ins.x]
	cpu.V[ins.x] = src >> 1
	cpu.V[15] = src & 0b00000001

# Vx = src * 2. VF = previous MSB of src
def i_shl(cpu, ins: Instruction):
	src = cpu.V[ins.y] if cpu.quirks.shift_uses_vy else cpu.V[ins.x]
	cpu.V[ins.x] = (src << 1) & 0xFF
	cpu.V[15] = (src & 0b10000000) >> 7

# Vx = (random byte) & byte
def i_rnd(cpu, ins: Instruction):
	cpu.V[ins.x] = cpu.rng.randint(0x00, 0xFF) & ins.kk

# I += Vx. VF is untouched
def i_add_i(cpu, ins: Instruction):
	cpu.I = (cpu.I + cpu.V[ins.x]) & 0xFFFF

# Timers ---------------------------------------------------------------------------------------------------------------

def i_ld_vx_dt(cpu, ins: Instruction): cpu.V[ins.x] = cpu.DT
def i_ld_dt_vx(cpu, ins: Instruction): cpu.DT = cpu.V[ins.x]
def i_ld_st_vx(cpu, ins: Instruction): cpu.ST = cpu.V[ins.x]

# Memory ---------------------------------------------------------------------------------------------------------------

# I, I+1, I+2 = BCD representation of V[x]
def i_ld_b(cpu, ins: Instruction):
	val = cpu.V[ins.x]
	cpu.RAM[ cpu.I      & 0xFFF] = val // 100
	cpu.RAM[(cpu.I + 1) & 0xFFF] = (val % 100) // 10
	cpu.RAM[(cpu.I + 2) & 0xFFF] = val % 10

# Store registers V[0] ... V[x] in memory starting at I
def i_ld_mem_vx(cpu, ins: Instruction):
	for i in range(ins.x + 1):
		cpu.RAM[(cpu.I + i) & 0xFFF] = cpu.V[i]
	if cpu.quirks.load_store_increments_i:
		cpu.I = (cpu.I + ins.x + 1) & 0xFFFF

# Read registers V[0] ... V[x] from memory starting at I
def i_ld_vx_mem(cpu, ins: Instruction):
	for i in range(ins.x + 1):
		cpu.V[i] = cpu.RAM[(cpu.I + i) & 0xFFF]
	if cpu.quirks.load_store_increments_i:
		cpu.I = (cpu.I + ins.x + 1) & 0xFFFF

# Input ----------------------------------------------------------------------------------------------------------------

# V[x] = Key. Arms the wait and puts PC back on this instruction, the engine finishes it
# once a key goes down
def i_ld_vx_k(cpu, ins: Instruction):
	cpu.pc = cpu.fetch_pc
	cpu.wait_for_key(ins.x)

# ----------------------------------------------------------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------------------------------------------------------

HANDLERS = {
	"SYS":       i_sys,
	"CLS":       i_cls,
	"RET":       i_ret,
	"JP":        i_jp,
	"CALL":      i_call,
	"SE_BYTE":   i_se_byte,
	"SNE_BYTE":  i_sne_byte,
	"SE_REG":    i_se_reg,
	"LD_BYTE":   i_ld_byte,
	"ADD_BYTE":  i_add_byte,
	"LD_REG":    i_ld_reg,
	"OR":        i_or,
	"AND":       i_and,
	"XOR":       i_xor,
	"ADD_REG":   i_add_reg,
	"SUB":       i_sub,
	"SHR":       i_shr,
	"SUBN":      i_subn,
	"SHL":       i_shl,
	"SNE_REG":   i_sne_reg,
	"LD_I":      i_ld_i,
	"JP_OFFSET": i_jp_offset,
	"RND":       i_rnd,
	"DRW":       i_drw,
	"SKP":       i_skp,
	"SKNP":      i_sknp,
	"LD_VX_DT":  i_ld_vx_dt,
	"LD_VX_K":   i_ld_vx_k,
	"LD_DT_VX":  i_ld_dt_vx,
	"LD_ST_VX":  i_ld_st_vx,
	"ADD_I":     i_add_i,
	"LD_F":      i_ld_f,
	"LD_B":      i_ld_b,
	"LD_MEM_VX": i_ld_mem_vx,
	"LD_VX_MEM": i_ld_vx_mem,
}

# Assembly text, filled in from the Instruction fields
MNEMONICS = {
	"SYS":       "SYS {nnn:#05x}",
	"CLS":       "CLS",
	"RET":       "RET",
	"JP":        "JP {nnn:#05x}",
	"CALL":      "CALL {nnn:#05x}",
	"SE_BYTE":   "SE V{x:X}, {kk:#04x}",
	"SNE_BYTE":  "SNE V{x:X}, {kk:#04x}",
	"SE_REG":    "SE V{x:X}, V{y:X}",
	"LD_BYTE":   "LD V{x:X}, {kk:#04x}",
	"ADD_BYTE":  "ADD V{x:X}, {kk:#04x}",
	"LD_REG":    "LD V{x:X}, V{y:X}",
	"OR":        "OR V{x:X}, V{y:X}",
	"AND":       "AND V{x:X}, V{y:X}",
	"XOR":       "XOR V{x:X}, V{y:X}",
	"ADD_REG":   "ADD V{x:X}, V{y:X}",
	"SUB":       "SUB V{x:X}, V{y:X}",
	"SHR":       "SHR V{x:X}, V{y:X}",
	"SUBN":      "SUBN V{x:X}, V{y:X}",
	"SHL":       "SHL V{x:X}, V{y:X}",
	"SNE_REG":   "SNE V{x:X}, V{y:X}",
	"LD_I":      "LD I, {nnn:#05x}",
	"JP_OFFSET": "JP V0, {nnn:#05x}",
	"RND":       "RND V{x:X}, {kk:#04x}",
	"DRW":       "DRW V{x:X}, V{y:X}, {n}",
	"SKP":       "SKP V{x:X}",
	"SKNP":      "SKNP V{x:X}",
	"LD_VX_DT":  "LD V{x:X}, DT",
	"LD_VX_K":   "LD V{x:X}, K",
	"LD_DT_VX":  "LD DT, V{x:X}",
	"LD_ST_VX":  "LD ST, V{x:X}",
	"ADD_I":     "ADD I, V{x:X}",
	"LD_F":      "LD F, V{x:X}",
	"LD_B":      "LD B, V{x:X}",
	"LD_MEM_VX": "LD [I], V{x:X}",
	"LD_VX_MEM": "LD V{x:X}, [I]",
}

def disassemble(ins: Instruction):
	return MNEMONICS[ins.op].format(**ins._asdict())

def execute(cpu, ins: Instruction):
	HANDLERS[ins.op](cpu, ins)
