from qc_runner.test_case import TestCase


class Hdmi(TestCase):
    def test(self):
        # e.g. state 0x12000a [HDMI DMT (82) RGB full 16:9], 1920x1080 @ 60.00Hz, progressive
        output = self.execute("tvservice -s")
        self.new_measurement("hdmi_active", "[HDMI" in output)
