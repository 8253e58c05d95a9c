import numpy as np

SCREEN_WIDTH  = 64
SCREEN_HEIGHT = 32

# 64x32 monochrome display, indexed [x, y]
#     (0,  0)    (63,  0)
#     (0, 31)    (63, 31)
class FrameBuffer:
	def __init__(self):
		self.pixels = np.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=bool)

	def __getitem__(self, xy):
		return bool(self.pixels[xy])

	def clear(self):
		self.pixels[:, :] = False

	# Copy for the renderer, taken once per frame
	def snapshot(self):
		return self.pixels.copy()

	# Flips the pixel at the given location. x wraps around the screen
	# Returns whether or not the pixel was erased
	def draw_pixel(self, x: int, y: int):
		xw = x % SCREEN_WIDTH

		collision = bool(self.pixels[xw, y])
		self.pixels[xw, y] = not collision

		return collision

	# XORs a byte onto row y, most significant bit leftmost
	# Returns whether or not a pixel was erased
	def draw_byte(self, byte: int, x: int, y: int):
		collision = False

		for i in range(8):
			if byte & (0x80 >> i):
				if self.draw_pixel(x + i, y): collision = True

		return collision

	# Draws sprite rows starting at (x, y). The start point wraps onto the screen,
	# rows wrap horizontally and rows falling off the bottom are clipped
	def draw_sprite(self, rows, x: int, y: int):
		x %= SCREEN_WIDTH
		y %= SCREEN_HEIGHT
		collision = False

		for i, byte in enumerate(rows):
			if y + i >= SCREEN_HEIGHT: break
			if self.draw_byte(byte, x, y + i): collision = True

		return collision

	# One text line per row, '#' for lit pixels
	def dump(self):
		lines = []
		for y in range(SCREEN_HEIGHT):
			lines.append("".join("#" if on else " " for on in self.pixels[:, y]))
		return "\n".join(lines)
