from qc_runner.test_case import TestCase


class Display(TestCase):
    """DSI display of the fixture must be listed as attached LCD"""

    def test(self):
        output = self.execute("tvservice -l")
        self.new_measurement("lcd_attached", "LCD" in output)
