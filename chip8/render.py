import numpy as np
import pygame

from chip8 import config
from chip8.display import SCREEN_HEIGHT, SCREEN_WIDTH

# Draws frame buffer snapshots to a pygame window
class Renderer:
	def __init__(self, title: str, scale: int = config.SCALE, fg=config.ON_COLOR, bg=config.OFF_COLOR):
		self.scale = scale
		self.fg = np.array(fg, dtype=np.uint8)
		self.bg = np.array(bg, dtype=np.uint8)

		pygame.display.set_caption(title)
		self.window = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
		self.window.fill(bg)
		pygame.display.update()

	# pixels is a (64, 32) boolean array, indexed [x, y] like pygame surfaces
	def update_display(self, pixels):
		rgb = np.where(pixels[:, :, np.newaxis], self.fg, self.bg)
		surface = pygame.surfarray.make_surface(rgb)
		pygame.transform.scale(surface, self.window.get_size(), self.window)
		pygame.display.update()
