"""Common definitions for all test sequences"""
from common.common_definitions import *  # noqa: F401,F403
from common.init_deinit import *  # noqa: F401,F403
from common.test_report_writer import create_report  # noqa: F401
