from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from qc_runner import runner
from qc_runner import test_case
from qc_runner.context import Context
from qc_runner.dut import Dut

LIMITS = {
    "Measure": {
        "voltage": {"limit": lambda measurement: 4.75 < measurement < 5.25, "unit": "V"},
        "label": {
            "limit": lambda measurement: measurement.startswith("fin"),
            "report_limit": "starts with fin",
        },
        "spare": {"limit": lambda measurement: measurement == 1, "optional": True},
    },
}


class Measure(test_case.TestCase):
    values = {"voltage": 5.0, "label": "fin"}

    def test(self):
        for name, value in self.values.items():
            self.new_measurement(name, value)


class NoLimits(test_case.TestCase):
    def test(self):
        pass


class Broken(test_case.TestCase):
    def test(self):
        raise RuntimeError("probe disconnected")


def make_case(cls, dut, flow_control=test_case.FlowControl.CONTINUE, values=None):
    common = SimpleNamespace(FLOW_CONTROL=flow_control)
    instance = cls(LIMITS, MagicMock(), dut, {}, Context(), common)
    if values is not None:
        instance.values = values
    return instance


@pytest.fixture
def dut():
    return Dut('1234', link='1234567.local')


def test_passing_measurements(dut):
    runner.run_test_case(make_case(Measure, dut))

    case = dut.test_cases['Measure']
    assert case['result'] == 'pass'
    voltage = case['measurements']['voltage']
    assert voltage['measurement'] == 5.0
    assert voltage['unit'] == 'V'
    assert voltage['result'] == 'pass'
    assert voltage['error'] is None
    assert '4.75 < measurement < 5.25' in voltage['limit']
    assert case['measurements']['label']['limit'] == 'starts with fin'
    assert dut.pass_fail_result == 'pass'
    assert case['duration_s'] >= 0


def test_failing_measurement(dut):
    runner.run_test_case(make_case(Measure, dut, values={"voltage": 3.3, "label": "fin"}))

    assert dut.test_cases['Measure']['result'] == 'fail'
    assert dut.test_cases['Measure']['measurements']['voltage']['result'] == 'fail'
    assert dut.pass_fail_result == 'fail'
    assert dut.failed_steps == ['Measure']


def test_limit_raising_is_error(dut):
    runner.run_test_case(make_case(Measure, dut, values={"voltage": 5.0, "label": None}))

    measurement = dut.test_cases['Measure']['measurements']['label']
    assert measurement['result'] == 'ErrorOnLimits'
    assert 'AttributeError' in measurement['error']
    assert dut.test_cases['Measure']['result'] == 'error'
    assert dut.error_steps == ['Measure']


def test_missing_measurement_is_error(dut):
    runner.run_test_case(make_case(Measure, dut, values={"voltage": 5.0}))

    assert dut.test_cases['Measure']['result'] == 'error'
    assert dut.test_cases['Measure']['error'] == 'Measurement "label" missing'


def test_case_without_measurements_passes(dut):
    runner.run_test_case(make_case(NoLimits, dut))

    assert dut.test_cases['NoLimits']['result'] == 'pass'
    assert dut.pass_fail_result == 'pass'


def test_exception_is_stored_as_error(dut):
    runner.run_test_case(make_case(Broken, dut))

    case = dut.test_cases['Broken']
    assert case['result'] == 'error'
    assert case['error']['type'] == 'RuntimeError'
    assert case['error']['message'] == 'probe disconnected'
    assert case['error']['trace'][-1]['name'] == 'test'
    assert 'duration_s' in case


def test_error_is_not_overwritten_by_later_pass(dut):
    runner.run_test_case(make_case(Broken, dut))
    runner.run_test_case(make_case(Measure, dut))

    assert dut.test_cases['Measure']['result'] == 'pass'
    assert dut.pass_fail_result == 'error'


def test_fail_is_not_overwritten_by_later_pass(dut):
    runner.run_test_case(make_case(Measure, dut, values={"voltage": 0, "label": "fin"}))
    runner.run_test_case(make_case(NoLimits, dut))

    assert dut.pass_fail_result == 'fail'


def test_stop_on_fail(dut):
    instance = make_case(
        Measure, dut, test_case.FlowControl.STOP_ON_FAIL, values={"voltage": 0, "label": "fin"}
    )

    runner.run_test_case(instance)

    assert instance.stop_testing is True


def test_continue_on_fail(dut):
    instance = make_case(Measure, dut, values={"voltage": 0, "label": "fin"})

    runner.run_test_case(instance)

    assert instance.stop_testing is False


def test_execute_uses_context_worker(dut):
    instance = make_case(NoLimits, dut)
    instance.parameters = {'command_tries': 2, 'command_interval': 1}
    worker = MagicMock()
    worker.execute_command_in_host_os.return_value = 'out'
    instance.context.set({'worker': worker, 'link': '1234567.local'})

    assert instance.execute('uptime') == 'out'
    worker.execute_command_in_host_os.assert_called_once_with(
        'uptime', '1234567.local', tries=2, interval=1
    )
