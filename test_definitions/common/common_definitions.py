"""Common definitions for all test sequences"""
import os
import socket

from qc_runner.dut import Dut
from qc_runner.test_case import FlowControl

# FlowControl.CONTINUE keeps testing even some test fails
# FlowControl.STOP_ON_FAIL stops on first fail

FLOW_CONTROL = FlowControl.CONTINUE

# List of test sequences' directory names. The first one is run by default.
TEST_SEQUENCES = sorted(
    name
    for name in os.listdir(os.path.join(os.path.dirname(os.path.dirname(__file__)), 'sequences'))
    if not name.startswith(('_', '.'))
)

# Show operator introductions
OPERATOR_INTRODUCTIONS = False

# Endpoint used by balenaOS for HTTPS time sync
API_ENDPOINT = 'https://api.balena-cloud.com'


def link_from_uuid(uuid):
    """mDNS hostname the DUT announces itself with"""
    return f'{uuid[:7]}.local'


def parse_dut_info(options):
    uuid = options['balenaOS']['config']['uuid']
    return Dut(
        serial_number=uuid,
        link=link_from_uuid(uuid),
        device_type=options['device_type']['slug'],
        additional_info={'suite_id': options['id']},
    )


def get_tester_info(settings):
    return {
        "name": socket.gethostname(),
        "worker": settings['worker']['url'],
        "device_type": settings['device_type']['slug'],
    }
