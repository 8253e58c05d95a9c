import random

import pytest

from chip8.engine import Engine


# Opcodes -> big-endian ROM bytes
def assemble(*opcodes):
	return b"".join(op.to_bytes(2, "big") for op in opcodes)


@pytest.fixture
def make_engine():
	def factory(*opcodes, **kwargs):
		kwargs.setdefault("rng", random.Random(1234))
		engine = Engine(**kwargs)
		engine.load(assemble(*opcodes))
		return engine
	return factory


# Steps until the program parks on a jump to itself
def run_until_halt(engine, max_steps=10000):
	for _ in range(max_steps):
		pc = engine.pc
		engine.step()
		if engine.pc == pc:
			return
	raise AssertionError("program did not halt")
