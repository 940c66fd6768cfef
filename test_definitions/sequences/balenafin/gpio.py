from qc_runner.test_case import TestCase


class Gpio(TestCase):
    def test(self):
        entries = self.execute("ls /sys/class/gpio").split()
        self.new_measurement("gpiochips", sorted(e for e in entries if e.startswith("gpiochip")))
