import pytest

from chip8 import config
from chip8.engine import Engine


def test_trace_only_in_debug(make_engine):
	engine = make_engine(0x6A0C, 0x00E0)
	engine.step()
	assert engine.trace is None

	engine = make_engine(0x6A0C, 0x00E0, debug=True)
	engine.step()
	assert engine.trace == "[0x0200] 6A0C - LD VA, 0x0c"
	engine.step()
	assert engine.trace == "[0x0202] 00E0 - CLS"


def test_dump_sections(make_engine):
	engine = make_engine(0x6A0C, 0x2206, 0x0000, 0xA123)
	engine.step()
	engine.step()
	text = engine.dump()

	for header in ("=== MEMORY ===", "=== REGISTERS ===", "=== CPU STATE ===", "=== SCREEN ==="):
		assert header in text
	assert "VA: 0C" in text
	assert "pc: 0206" in text
	assert "stack: [0204]" in text
	assert text.split("\n")[1].startswith("F090 9090 F020")


def test_dump_screen_size():
	screen = Engine().dump().split("=== SCREEN ===\n")[1]
	lines = screen.split("\n")
	assert len(lines) == 32
	assert all(len(line) == 64 for line in lines)


@pytest.mark.parametrize("text,rgb", [
	("#FF0000", (255, 0, 0)),
	("00ff00", (0, 255, 0)),
	("#123456", (0x12, 0x34, 0x56)),
])
def test_parse_color(text, rgb):
	assert config.parse_color(text) == rgb


@pytest.mark.parametrize("text", ["#FFF", "#GGGGGG", ""])
def test_parse_color_rejects(text):
	with pytest.raises(ValueError):
		config.parse_color(text)


def test_trace_names_key_when_wait_completes(make_engine):
	engine = make_engine(0xF50A, debug=True)
	engine.step()
	assert engine.trace == "[0x0200] F50A - LD V5, K"

	engine.set_key(0xC, True)
	engine.step()
	assert engine.trace == "[0x0200] F50A - LD V5, K (key C)"
