import copy
import logging
import pathlib
import sys

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parent.parent
DEFINITIONS_PATH = REPO_ROOT / 'test_definitions'

for _path in (str(REPO_ROOT), str(DEFINITIONS_PATH)):
    if _path not in sys.path:
        sys.path.insert(0, _path)

from qc_runner import exceptions  # noqa: E402
from qc_runner import helpers  # noqa: E402
from qc_runner import settings as station_settings  # noqa: E402

UUID = '1234567890abcdef1234567890abcdef'
LINK = '1234567.local'

# Host OS command outputs of a healthy balenaFin
PASSING_OUTPUTS = {
    "tr -d '\\0' < /proc/device-tree/hat/vendor": 'balena',
    "tr -d '\\0' < /proc/device-tree/hat/product": 'balenaFin v1.1',
    'ls /sys/class/net': 'eth0\nlo\nwlan0',
    'iw dev wlan0 scan || true': (
        'BSS 00:11:22:33:44:55(on wlan0)\n\tSSID: testbot\nBSS 66:77:88:99:aa:bb(on wlan0)\n'
        '\tSSID: office'
    ),
    'iw dev wlan0 link || true': 'Connected to 00:11:22:33:44:55 (on wlan0)\n\tSSID: testbot',
    'hciconfig hci0': 'hci0:\tType: Primary  Bus: UART\n\tUP RUNNING \n\tRX bytes:0 acl:0',
    'cat /sys/class/net/eth0/operstate': 'up',
    'cat /sys/class/net/eth0/speed': '100',
    'ls /dev': 'i2c-1\ni2c-0\nmmcblk0\nspidev0.0\nspidev0.1\nttyS0',
    'vcgencmd get_camera': 'supported=1 detected=1',
    'tvservice -l': "2 attached device(s), display ID's are :\n"
    'Display Number 0, type Main LCD\nDisplay Number 2, type HDMI 0',
    'ls /sys/bus/usb/devices': '1-0:1.0 1-1 1-1.1 1-1:1.0 usb1',
    'ls /sys/class/gpio': 'export gpiochip0 gpiochip504 unexport',
    'tvservice -s': 'state 0x12000a [HDMI DMT (82) RGB full 16:9], 1920x1080 @ 60.00Hz, progressive',
    'cat /sys/class/rtc/rtc0/name': 'rtc-rv3028 1-0052',
    'hwclock -r -f /dev/rtc0': '2026-10-19 09:00:00.000000+00:00',
    'ls /sys/class/leds': 'led0 led1 pca963x:blue pca963x:green pca963x:red',
    'test -c /dev/ttyS0 && echo present || echo missing': 'present',
    'vcgencmd get_throttled': 'throttled=0x0',
    'vcgencmd measure_volts core': 'volt=1.2000V',
    'cat /etc/hostname': '1234567',
}


class FakeWorker:
    """Answers host OS commands from a dictionary"""

    def __init__(self, outputs=None):
        self.outputs = dict(PASSING_OUTPUTS if outputs is None else outputs)
        self.commands = []

    def execute_command_in_host_os(self, command, target, tries=None, interval=None):
        self.commands.append((command, target))
        if command not in self.outputs:
            raise exceptions.CommandError(command, 127, 'command not found')
        output = self.outputs[command]
        if isinstance(output, Exception):
            raise output
        return output


@pytest.fixture
def fake_worker():
    return FakeWorker()


@pytest.fixture
def logger():
    return logging.getLogger('tests')


@pytest.fixture
def common_definitions(logger):
    return helpers.get_common_definitions(logger, DEFINITIONS_PATH)


@pytest.fixture
def balenafin(logger):
    return helpers.get_test_definitions('balenafin', logger, DEFINITIONS_PATH)


@pytest.fixture
def settings(tmp_path):
    options = copy.deepcopy(station_settings.DEFAULT_SETTINGS)
    options['id'] = 'abcd1234'
    options['tmpdir'] = str(tmp_path / 'tmp')
    options['balenaOS']['image'] = str(tmp_path / 'balena.img.gz')
    options['balenaOS']['config']['uuid'] = UUID
    return options
