from qc_runner.test_case import TestCase


class Coprocessor(TestCase):
    """The coprocessor is reached through its serial device"""

    def test(self):
        device = self.parameters["coprocessor_device"]
        self.new_measurement(
            "serial_device", self.execute(f"test -c {device} && echo present || echo missing")
        )
