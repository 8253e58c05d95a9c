# ----------------------------------------------------------------------------------------------------------------------
# Parameters
# ----------------------------------------------------------------------------------------------------------------------

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
# Display
SCALE     = 20
ON_COLOR  = WHITE
OFF_COLOR = BLACK
# Sound
SOUND_FREQUENCY = 400
# Speed
SPEED    = 700  # Instructions per second
TIMER_HZ = 60   # Delay/sound timer frequency, also the frame rate

# "#RRGGBB" (or "RRGGBB") -> (r, g, b)
def parse_color(text: str):
	hex_str = text[1:] if text.startswith("#") else text
	if len(hex_str) != 6:
		raise ValueError("Expected a color like #FF0000, got {!r}".format(text))
	val = int(hex_str, 16)

	return ((val >> 16) & 0xFF, (val >> 8) & 0xFF, val & 0xFF)
