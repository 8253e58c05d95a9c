# The original 16-key hexadecimal keypad
#     1 2 3 C
#     4 5 6 D
#     7 8 9 E
#     A 0 B F
# is mapped onto the left of a QWERTY keyboard
#     1 2 3 4
#     Q W E R
#     A S D F
#     Z X C V

from pygame.locals import *

KEY = [-1] * 16
KEY[0x1], KEY[0x2], KEY[0x3], KEY[0xC] = K_1, K_2, K_3, K_4
KEY[0x4], KEY[0x5], KEY[0x6], KEY[0xD] = K_q, K_w, K_e, K_r
KEY[0x7], KEY[0x8], KEY[0x9], KEY[0xE] = K_a, K_s, K_d, K_f
KEY[0xA], KEY[0x0], KEY[0xB], KEY[0xF] = K_z, K_x, K_c, K_v

# pygame key -> Chip-8 key, or None for keys outside the keypad
def to_chip8_key(key: int):
	try:
		return KEY.index(key)
	except ValueError:
		return None
