from qc_runner.test_case import TestCase


class Spi(TestCase):
    def test(self):
        devices = self.execute("ls /dev").split()
        self.new_measurement("devices", sorted(d for d in devices if d.startswith("spidev")))
