from qc_runner.test_case import TestCase


class Bluetooth(TestCase):
    def test(self):
        output = self.execute("hciconfig hci0")
        self.new_measurement("hci0_running", "UP RUNNING" in output)
