import unittest
from chip8_tracer.arch.chip8.timer import Timer, TimerTick


class TestTimer(unittest.TestCase):
    def test_initial_values(self):
        timer = Timer()
        self.assertEqual(timer.delay, 0)
        self.assertEqual(timer.sound, 0)

    def test_sound_zero_transition(self):
        timer = Timer()
        timer.sound = 2
        self.assertEqual(timer.tick(), TimerTick.NORMAL)
        self.assertEqual(timer.tick(), TimerTick.SOUND_ZERO)
        self.assertEqual(timer.tick(), TimerTick.NORMAL) # already zero
        self.assertEqual(timer.sound, 0)

    def test_delay_saturates_at_zero(self):
        timer = Timer()
        timer.delay = 1
        timer.tick()
        timer.tick()
        self.assertEqual(timer.delay, 0)

    def test_delay_does_not_report_sound_zero(self):
        timer = Timer()
        timer.delay = 1
        self.assertEqual(timer.tick(), TimerTick.NORMAL)

    def test_timers_are_independent(self):
        timer = Timer()
        timer.delay = 5
        timer.sound = 1
        self.assertEqual(timer.tick(), TimerTick.SOUND_ZERO)
        self.assertEqual(timer.delay, 4)

    def test_values_are_masked_to_8bit(self):
        timer = Timer()
        timer.delay = 0x1FF
        self.assertEqual(timer.delay, 0xFF)

if __name__ == '__main__':
    unittest.main()
