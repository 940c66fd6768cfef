from qc_runner import exceptions
from qc_runner.test_case import TestCase


class Rtc(TestCase):
    """Checks the on-board RV-3028 real time clock"""

    def test(self):
        self.new_measurement("name", self.execute("cat /sys/class/rtc/rtc0/name"))

        try:
            self.execute("hwclock -r -f /dev/rtc0")
        except exceptions.CommandError as err:
            self.logger.warning("Cannot read RTC: %s", err)
            self.new_measurement("readable", False)
        else:
            self.new_measurement("readable", True)
