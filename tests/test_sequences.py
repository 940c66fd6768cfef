from types import SimpleNamespace

import pytest

from conftest import LINK, FakeWorker
from qc_runner import exceptions
from qc_runner import runner
from qc_runner.context import Context
from qc_runner.dut import Dut


@pytest.fixture
def context(fake_worker):
    context = Context()
    context.set(
        {
            'worker': fake_worker,
            'link': LINK,
            'os': SimpleNamespace(network={'wired': {'nat': True}}),
        }
    )
    return context


def run_case(name, balenafin, common_definitions, context):
    dut = Dut('1234', link=LINK)
    instance = getattr(balenafin, name)(
        balenafin.LIMITS, None, dut, balenafin.PARAMETERS, context, common_definitions
    )
    runner.run_test_case(instance)
    return dut.test_cases[name]


def test_sequence_definition(balenafin):
    assert balenafin.TITLE == 'balenaFin QC test suite'
    assert balenafin.TESTS == [
        'Eeprom', 'Wifi', 'Bluetooth', 'Ethernet', 'I2c', 'Spi', 'Camera', 'Display',
        'Usb', 'Gpio', 'Hdmi', 'Rtc', 'Rgb', 'Coprocessor', 'Power',
    ]
    for name in balenafin.TESTS:
        assert hasattr(balenafin, name)
        assert name in balenafin.LIMITS


def test_healthy_board_passes_all(balenafin, common_definitions, context, fake_worker):
    for name in balenafin.TESTS:
        case = run_case(name, balenafin, common_definitions, context)
        assert case['result'] == 'pass', (name, case)

    assert all(target == LINK for _, target in fake_worker.commands)


def test_measurements_are_parsed(balenafin, common_definitions, context):
    power = run_case('Power', balenafin, common_definitions, context)['measurements']
    assert power['throttled']['measurement'] == 0
    assert power['core_voltage']['measurement'] == 1.2
    assert power['core_voltage']['unit'] == 'V'

    usb = run_case('Usb', balenafin, common_definitions, context)['measurements']
    assert usb['devices']['measurement'] == 3

    rgb = run_case('Rgb', balenafin, common_definitions, context)['measurements']
    assert rgb['colors']['measurement'] == ['blue', 'green', 'red']

    wifi = run_case('Wifi', balenafin, common_definitions, context)['measurements']
    assert wifi['networks_found']['measurement'] == 2
    assert 'connected_to_testbot' not in wifi


def test_wifi_checks_testbot_access_point(balenafin, common_definitions, context):
    context.set({'os': SimpleNamespace(network={'wireless': {'ssid': 'testbot'}})})
    case = run_case('Wifi', balenafin, common_definitions, context)
    assert case['measurements']['connected_to_testbot']['measurement'] is True
    assert case['result'] == 'pass'

    context.set({'os': SimpleNamespace(network={'wireless': {'ssid': 'other'}})})
    case = run_case('Wifi', balenafin, common_definitions, context)
    assert case['measurements']['connected_to_testbot']['result'] == 'fail'
    assert case['result'] == 'fail'


@pytest.mark.parametrize('name, command, output, measurement', [
    ('Power', 'vcgencmd get_throttled', 'throttled=0x50005', 'throttled'),
    ('Eeprom', "tr -d '\\0' < /proc/device-tree/hat/product", 'Compute Module', 'product'),
    ('Ethernet', 'cat /sys/class/net/eth0/speed', '10', 'speed'),
    ('Camera', 'vcgencmd get_camera', 'supported=1 detected=0', 'detected'),
    ('Spi', 'ls /dev', 'i2c-1 spidev0.0', 'devices'),
    ('Coprocessor', 'test -c /dev/ttyS0 && echo present || echo missing', 'missing', 'serial_device'),
    ('Hdmi', 'tvservice -s', 'state 0x120001 [TV is off]', 'hdmi_active'),
])
def test_faulty_board_fails(balenafin, common_definitions, context, name, command, output, measurement):
    context['worker'].outputs[command] = output

    case = run_case(name, balenafin, common_definitions, context)

    assert case['result'] == 'fail'
    assert case['measurements'][measurement]['result'] == 'fail'


def test_unreadable_rtc_fails(balenafin, common_definitions, context):
    context['worker'].outputs['hwclock -r -f /dev/rtc0'] = exceptions.CommandError(
        'hwclock -r -f /dev/rtc0', 1, 'ioctl failed'
    )

    case = run_case('Rtc', balenafin, common_definitions, context)

    assert case['measurements']['readable']['measurement'] is False
    assert case['result'] == 'fail'


def test_failing_command_is_error(balenafin, common_definitions, context):
    context.set({'worker': FakeWorker(outputs={})})

    case = run_case('Bluetooth', balenafin, common_definitions, context)

    assert case['result'] == 'error'
    assert case['error']['type'] == 'CommandError'
