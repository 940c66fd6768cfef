from qc_runner.test_case import TestCase


def parse_camera_status(output):
    """Parses 'supported=1 detected=1' to a dict of ints"""

    status = {}
    for field in output.split():
        key, _, value = field.partition('=')
        status[key] = int(value)
    return status


class Camera(TestCase):
    """Camera must be attached to the CSI connector of the fixture"""

    def test(self):
        status = parse_camera_status(self.execute("vcgencmd get_camera"))
        self.new_measurement("supported", status.get("supported"))
        self.new_measurement("detected", status.get("detected"))
