from qc_runner.test_case import TestCase


class Ethernet(TestCase):
    """Checks that the wired link is up and negotiated at least 100 Mbit/s"""

    def test(self):
        interface = self.parameters["ethernet_interface"]

        self.new_measurement("operstate", self.execute(f"cat /sys/class/net/{interface}/operstate"))
        self.new_measurement("speed", int(self.execute(f"cat /sys/class/net/{interface}/speed")))
