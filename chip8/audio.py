import numpy as np
import simpleaudio as sa

from chip8 import config

# Beep played while the sound timer runs
class Tone:
	def __init__(self, freq: int = config.SOUND_FREQUENCY, duration: float = 1.0):
		self.audio = make_wave(freq, duration)
		self.sound = None

	# Keep the tone going, restarting the buffer when it runs out
	def play(self):
		if self.sound is None or not self.sound.is_playing():
			self.sound = sa.play_buffer(self.audio, 1, 2, FS)

	def stop(self):
		if self.sound is not None:
			self.sound.stop()
			self.sound = None

	def update(self, active: bool):
		if active: self.play()
		else     : self.stop()

FS = 44100

# 16-bit mono sine wave (frequency in Hz, duration in seconds)
def make_wave(freq: int, duration: float):
	t = np.linspace(0, duration, int(duration * FS), False)
	note = np.sin(freq * t * 2 * np.pi)
	return (note * (2**15 - 1) / np.max(np.abs(note))).astype(np.int16)
