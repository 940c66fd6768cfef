from qc_runner.test_case import TestCase


class I2c(TestCase):
    def test(self):
        devices = self.execute("ls /dev").split()
        self.new_measurement("buses", sorted(d for d in devices if d.startswith("i2c-")))
