from qc_runner.test_case import TestCase

HAT_PATH = '/proc/device-tree/hat'


class Eeprom(TestCase):
    """Reads the board identity written to the ID EEPROM"""

    def read_hat_field(self, field):
        # Device tree strings are NUL terminated
        return self.execute(f"tr -d '\\0' < {HAT_PATH}/{field}")

    def test(self):
        self.new_measurement("vendor", self.read_hat_field('vendor'))
        self.new_measurement("product", self.read_hat_field('product'))
