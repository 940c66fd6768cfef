from qc_runner.test_case import TestCase


class Usb(TestCase):
    def test(self):
        entries = self.execute("ls /sys/bus/usb/devices").split()
        # Entries with ':' are interfaces of a device
        self.new_measurement("devices", len([e for e in entries if ':' not in e]))
