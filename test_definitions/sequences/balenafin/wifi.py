import re

from qc_runner.test_case import TestCase


class Wifi(TestCase):
    def pre_test(self):
        self.interface = self.parameters["wifi_interface"]

    def test(self):
        interfaces = self.execute("ls /sys/class/net").split()
        self.new_measurement("interface_present", self.interface in interfaces)

        scan = self.execute(f"iw dev {self.interface} scan || true")
        self.new_measurement("networks_found", len(re.findall(r"^\s*SSID:", scan, re.MULTILINE)))

        # Testbot AP exists only when the suite runs over wireless
        wireless = self.context['os'].network.get('wireless')
        if wireless:
            link = self.execute(f"iw dev {self.interface} link || true")
            match = re.search(r"SSID:\s*(\S+)", link)
            self.new_measurement(
                "connected_to_testbot", match is not None and match.group(1) == wireless['ssid']
            )
