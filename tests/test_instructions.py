import pytest

from chip8.engine import StepEffect
from chip8.errors import InvalidOpcodeError
from chip8.instructions import decode, disassemble
from chip8.quirks import QuirkSet


def run(engine, steps):
	for _ in range(steps):
		assert engine.step() is StepEffect.EXECUTED


def test_decode_covers_35_shapes():
	opcodes = [
		0x0123, 0x00E0, 0x00EE, 0x1234, 0x2345, 0x3A12, 0x4A12, 0x5AB0,
		0x6A12, 0x7A12, 0x8AB0, 0x8AB1, 0x8AB2, 0x8AB3, 0x8AB4, 0x8AB5,
		0x8AB6, 0x8AB7, 0x8ABE, 0x9AB0, 0xA123, 0xB123, 0xCA12, 0xDAB5,
		0xEA9E, 0xEAA1, 0xFA07, 0xFA0A, 0xFA15, 0xFA18, 0xFA1E, 0xFA29,
		0xFA33, 0xFA55, 0xFA65,
	]
	ops = {decode(op).op for op in opcodes}
	assert len(ops) == 35


@pytest.mark.parametrize("opcode", [0x5AB1, 0x8AB8, 0x8ABF, 0x9AB1, 0xEA00, 0xFA00, 0xFAFF])
def test_decode_rejects(opcode):
	assert decode(opcode) is None


def test_decode_fields():
	ins = decode(0xDAB5)
	assert (ins.op, ins.x, ins.y, ins.n, ins.kk, ins.nnn) == ("DRW", 0xA, 0xB, 5, 0xB5, 0xAB5)
	assert disassemble(ins) == "DRW VA, VB, 5"
	assert disassemble(decode(0x1228)) == "JP 0x228"
	assert disassemble(decode(0x6A0C)) == "LD VA, 0x0c"


def test_invalid_opcode_leaves_state(make_engine):
	engine = make_engine(0x6A05, 0x8AB8)
	engine.step()
	with pytest.raises(InvalidOpcodeError) as excinfo:
		engine.step()
	assert excinfo.value.opcode == 0x8AB8
	assert excinfo.value.pc == 0x202
	assert engine.pc == 0x202
	assert engine.V[0xA] == 5


# Code Navigation ------------------------------------------------------------------------------------------------------

def test_sys_is_ignored(make_engine):
	engine = make_engine(0x0123)
	run(engine, 1)
	assert engine.pc == 0x202


def test_jump(make_engine):
	engine = make_engine(0x1345)
	run(engine, 1)
	assert engine.pc == 0x345


def test_call_and_return(make_engine):
	# 0x200 CALL 0x206, 0x202 LD V1, 1, 0x204 JP 0x204, 0x206 RET
	engine = make_engine(0x2206, 0x6101, 0x1204, 0x00EE)
	run(engine, 1)
	assert engine.pc == 0x206
	assert engine.stack == [0x202]
	run(engine, 1)
	assert engine.pc == 0x202
	assert engine.stack == []
	run(engine, 1)
	assert engine.V[1] == 1


def test_jump_with_v0_offset(make_engine):
	engine = make_engine(0x6010, 0x6302, 0xB300)
	run(engine, 3)
	assert engine.pc == 0x310


def test_jump_with_vx_offset(make_engine):
	engine = make_engine(0x6010, 0x6302, 0xB300, quirks=QuirkSet(jump_uses_vx=True))
	run(engine, 3)
	assert engine.pc == 0x302


@pytest.mark.parametrize("opcodes,skipped", [
	((0x6A12, 0x3A12), True),
	((0x6A12, 0x3A13), False),
	((0x6A12, 0x4A13), True),
	((0x6A12, 0x4A12), False),
	((0x6A12, 0x6B12, 0x5AB0), True),
	((0x6A12, 0x6B13, 0x5AB0), False),
	((0x6A12, 0x6B13, 0x9AB0), True),
	((0x6A12, 0x6B12, 0x9AB0), False),
])
def test_skips(make_engine, opcodes, skipped):
	engine = make_engine(*opcodes)
	run(engine, len(opcodes))
	after = 0x200 + 2 * len(opcodes)
	assert engine.pc == (after + 2 if skipped else after)


def test_key_skips(make_engine):
	engine = make_engine(0x6A07, 0xEA9E, 0x0000, 0xEAA1)
	engine.set_key(7, True)
	run(engine, 2)
	assert engine.pc == 0x206
	run(engine, 1)
	assert engine.pc == 0x208

	engine = make_engine(0x6A07, 0xEA9E, 0xEAA1)
	run(engine, 3)
	assert engine.pc == 0x208


# Operations -----------------------------------------------------------------------------------------------------------

def test_loads(make_engine):
	engine = make_engine(0x6A12, 0x8BA0, 0xA123)
	run(engine, 3)
	assert engine.V[0xA] == 0x12
	assert engine.V[0xB] == 0x12
	assert engine.I == 0x123


def test_add_byte_wraps_without_carry(make_engine):
	engine = make_engine(0x6AFF, 0x6F07, 0x7A02)
	run(engine, 3)
	assert engine.V[0xA] == 0x01
	assert engine.V[0xF] == 0x07


@pytest.mark.parametrize("opcode,expected", [
	(0x8AB1, 0b1110),
	(0x8AB2, 0b1000),
	(0x8AB3, 0b0110),
])
def test_logic(make_engine, opcode, expected):
	engine = make_engine(0x6A0C, 0x6B0A, opcode)
	run(engine, 3)
	assert engine.V[0xA] == expected


@pytest.mark.parametrize("a,b,result,carry", [
	(0x10, 0x20, 0x30, 0),
	(0xFF, 0x01, 0x00, 1),
	(0xF0, 0xF0, 0xE0, 1),
])
def test_add_carry(make_engine, a, b, result, carry):
	engine = make_engine(0x6A00 | a, 0x6B00 | b, 0x8AB4)
	run(engine, 3)
	assert engine.V[0xA] == result
	assert engine.V[0xF] == carry


@pytest.mark.parametrize("a,b,result,flag", [
	(0x30, 0x10, 0x20, 1),
	(0x10, 0x10, 0x00, 1),
	(0x10, 0x30, 0xE0, 0),
])
def test_sub_not_borrow(make_engine, a, b, result, flag):
	engine = make_engine(0x6A00 | a, 0x6B00 | b, 0x8AB5)
	run(engine, 3)
	assert engine.V[0xA] == result
	assert engine.V[0xF] == flag


@pytest.mark.parametrize("a,b,result,flag", [
	(0x10, 0x30, 0x20, 1),
	(0x10, 0x10, 0x00, 1),
	(0x30, 0x10, 0xE0, 0),
])
def test_subn_not_borrow(make_engine, a, b, result, flag):
	engine = make_engine(0x6A00 | a, 0x6B00 | b, 0x8AB7)
	run(engine, 3)
	assert engine.V[0xA] == result
	assert engine.V[0xF] == flag


def test_flag_wins_when_vf_is_target(make_engine):
	engine = make_engine(0x6FFF, 0x6102, 0x8F14)
	run(engine, 3)
	assert engine.V[0xF] == 1


def test_shifts_use_vx_by_default(make_engine):
	engine = make_engine(0x6A05, 0x6B80, 0x8AB6)
	run(engine, 3)
	assert engine.V[0xA] == 0x02
	assert engine.V[0xF] == 1

	engine = make_engine(0x6A81, 0x6B01, 0x8ABE)
	run(engine, 3)
	assert engine.V[0xA] == 0x02
	assert engine.V[0xF] == 1


def test_shifts_use_vy_with_quirk(make_engine):
	quirks = QuirkSet(shift_uses_vy=True)
	engine = make_engine(0x6A05, 0x6B80, 0x8AB6, quirks=quirks)
	run(engine, 3)
	assert engine.V[0xA] == 0x40
	assert engine.V[0xB] == 0x80
	assert engine.V[0xF] == 0

	engine = make_engine(0x6A01, 0x6BC0, 0x8ABE, quirks=quirks)
	run(engine, 3)
	assert engine.V[0xA] == 0x80
	assert engine.V[0xF] == 1


def test_random_is_masked(make_engine):
	engine = make_engine(*[0xCA0F] * 20)
	for _ in range(20):
		run(engine, 1)
		assert engine.V[0xA] & 0xF0 == 0


def test_add_i(make_engine):
	engine = make_engine(0xAFFF, 0x6A02, 0x6F09, 0xFA1E)
	run(engine, 4)
	assert engine.I == 0x1001
	assert engine.V[0xF] == 9


def test_font_address(make_engine):
	engine = make_engine(0x6A0B, 0xFA29)
	run(engine, 2)
	assert engine.I == 0x0B * 5
	assert engine.RAM[engine.I] == 0xE0


# Timers ---------------------------------------------------------------------------------------------------------------

def test_timer_registers(make_engine):
	engine = make_engine(0x6A09, 0xFA15, 0xFA18, 0xFB07)
	run(engine, 4)
	assert engine.DT == 9
	assert engine.ST == 9
	assert engine.V[0xB] == 9
	assert engine.is_tone_active()


# Memory ---------------------------------------------------------------------------------------------------------------

def test_bcd(make_engine):
	engine = make_engine(0x6AFE, 0xA300, 0xFA33)
	run(engine, 3)
	assert list(engine.RAM[0x300:0x303]) == [2, 5, 4]


def test_bcd_small_value(make_engine):
	engine = make_engine(0x6A07, 0xA300, 0xFA33)
	run(engine, 3)
	assert list(engine.RAM[0x300:0x303]) == [0, 0, 7]


def test_store_and_load_registers(make_engine):
	engine = make_engine(0x6011, 0x6122, 0x6233, 0x6344, 0xA300, 0xF255)
	run(engine, 6)
	assert list(engine.RAM[0x300:0x304]) == [0x11, 0x22, 0x33, 0x00]
	assert engine.I == 0x300

	engine = make_engine(0xA208, 0xF265, 0x0000, 0x0000, 0xAABB, 0xCC00)
	run(engine, 2)
	assert list(engine.V[:4]) == [0xAA, 0xBB, 0xCC, 0x00]
	assert engine.I == 0x208


def test_store_and_load_increment_i_with_quirk(make_engine):
	quirks = QuirkSet(load_store_increments_i=True)
	engine = make_engine(0x6011, 0x6122, 0xA300, 0xF155, 0xF165, quirks=quirks)
	run(engine, 4)
	assert engine.I == 0x302
	run(engine, 1)
	assert engine.I == 0x304


def test_cosmac_vip_quirks():
	quirks = QuirkSet.cosmac_vip()
	assert quirks.shift_uses_vy
	assert quirks.load_store_increments_i
	assert not quirks.jump_uses_vx
