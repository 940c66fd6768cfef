from qc_runner.test_case import TestCase

COLORS = ("red", "green", "blue")


class Rgb(TestCase):
    def test(self):
        leds = self.execute("ls /sys/class/leds").split()
        colors = sorted(color for color in COLORS if any(color in led for led in leds))
        self.new_measurement("colors", colors)
