import re

from qc_runner.test_case import TestCase


class Power(TestCase):
    def test(self):
        # throttled=0x50000
        throttled = self.execute("vcgencmd get_throttled")
        self.new_measurement("throttled", int(throttled.split('=')[1], 16))

        # volt=1.2000V
        volts = self.execute("vcgencmd measure_volts core")
        self.new_measurement("core_voltage", float(re.search(r"([\d.]+)V", volts).group(1)))
