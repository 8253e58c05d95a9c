# Author: Tyler Landowski
# Reference:
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

import argparse
import os
import sys
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"
import pygame
from pygame.time import Clock

from chip8 import config
from chip8.engine import Engine, StepEffect
from chip8.errors import Chip8Error
from chip8.keymap import to_chip8_key
from chip8.quirks import Mode, QuirkSet
from chip8.render import Renderer

# ----------------------------------------------------------------------------------------------------------------------
# Globals
# ----------------------------------------------------------------------------------------------------------------------

DEBUG = False

# ----------------------------------------------------------------------------------------------------------------------
# Command Line
# ----------------------------------------------------------------------------------------------------------------------

def parse_args(argv=None):
	parser = argparse.ArgumentParser(description="Chip-8 Emulator")
	parser.add_argument("rom", help="Path to the chip-8 rom that you want to run")
	parser.add_argument("-d", "--debug", action="store_true",
	                    help="Display debug output when running a chip-8 rom")
	parser.add_argument("-f", "--fg", type=config.parse_color, default=config.ON_COLOR,
	                    help="Set the color in hex (e.g #FF0000) for pixels that are on")
	parser.add_argument("-b", "--bg", type=config.parse_color, default=config.OFF_COLOR,
	                    help="Set the color in hex (e.g #00FF00) for pixels that are off")
	parser.add_argument("-e", "--eti-mode", action="store_true",
	                    help="Start the emulator in ETI 660 mode (programs load at 0x600)")
	parser.add_argument("--speed", type=int, default=config.SPEED,
	                    help="Instructions per second (default {})".format(config.SPEED))
	parser.add_argument("--scale", type=int, default=config.SCALE,
	                    help="Pixel scale factor (default {})".format(config.SCALE))
	parser.add_argument("--shift-vy", action="store_true",
	                    help="8xy6/8xyE shift Vy into Vx")
	parser.add_argument("--jump-vx", action="store_true",
	                    help="Bnnn jumps to nnn + Vx instead of nnn + V0")
	parser.add_argument("--load-store-inc", action="store_true",
	                    help="Fx55/Fx65 advance I past the registers")
	parser.add_argument("--mute", action="store_true", help="Disable the tone")
	return parser.parse_args(argv)

# ----------------------------------------------------------------------------------------------------------------------
# Main Loop
# ----------------------------------------------------------------------------------------------------------------------

# Starting point of the emulator
def run_program(args):
	global DEBUG
	DEBUG = args.debug

	mode = Mode.ETI_660 if args.eti_mode else Mode.STANDARD
	quirks = QuirkSet(shift_uses_vy=args.shift_vy, jump_uses_vx=args.jump_vx,
	                  load_store_increments_i=args.load_store_inc)
	engine = Engine(mode, quirks, debug=DEBUG)

	# Gather source code
	try:
		engine.load(read_file(args.rom, mode.origin))
	except Chip8Error as e:
		print("Error: {}".format(e))
		sys.exit(1)

	# Start GUI
	pygame.init()
	romname = os.path.basename(args.rom)
	renderer = Renderer("{} - Chip8 Emulator".format(romname), args.scale, args.fg, args.bg)
	tone = make_tone(args.mute)

	# One frame per timer tick, the CPU runs speed / 60 instructions in between
	clock = Clock()
	steps_per_tick = max(1, args.speed // config.TIMER_HZ)

	log("\n=======\nRUNNING\n=======\n")

	while True:
		# Listen for pygame events (to avoid freezing + allow exiting)
		for event in pygame.event.get():
			if event.type == pygame.QUIT:
				if tone: tone.stop()
				pygame.quit()
				sys.exit()
			elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
				key = to_chip8_key(event.key)
				if key is not None: engine.set_key(key, event.type == pygame.KEYDOWN)

		try:
			for _ in range(steps_per_tick):
				if engine.step() is StepEffect.AWAITING_KEY: break
				log(engine.trace)
		except Chip8Error as e:
			print("Error: {}".format(e))
			log(engine.dump())
			if tone: tone.stop()
			pygame.quit()
			sys.exit(1)

		# Update timers + play sound if needed
		engine.tick_timers()
		if tone: tone.update(engine.is_tone_active())

		renderer.update_display(engine.snapshot())
		clock.tick(config.TIMER_HZ)

# Tone player, or None when muted or when simpleaudio is not installed
def make_tone(mute: bool):
	if mute: return None
	try:
		from chip8.audio import Tone
	except ImportError:
		print("Sound disabled: install chip8-emulator[audio] for the tone, or pass --mute")
		return None
	return Tone(config.SOUND_FREQUENCY)

# Reads a ROM image from disk
def read_file(path: str, origin: int):
	with open(path, "rb") as file:
		source = file.read()

	log("\n======\nSOURCE\n======\n")
	for i in range(0, len(source) - 1, 2):
		log("{}: {:02X}{:02X}".format(hex(i + origin), source[i], source[i + 1]))

	return source

# ----------------------------------------------------------------------------------------------------------------------
# Misc Functions
# ----------------------------------------------------------------------------------------------------------------------

# Prints message if debug mode enabled
def log(msg):
	if DEBUG: print(msg)

# ----------------------------------------------------------------------------------------------------------------------
# Main
# ----------------------------------------------------------------------------------------------------------------------

def main():
	run_program(parse_args())

if __name__ == "__main__":
	main()
