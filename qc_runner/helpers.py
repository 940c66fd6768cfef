import sys
import os
import importlib
from qc_runner import exceptions

DEFAULT_DEFINITIONS_PATH = os.path.join(os.getcwd(), 'test_definitions')


def import_by_name(name, error_message, logger, definitions_path=None):
    definitions_path = os.path.abspath(definitions_path or DEFAULT_DEFINITIONS_PATH)

    if definitions_path not in sys.path:
        sys.path.append(definitions_path)

    try:
        imp = importlib.import_module(name)

        # TODO: This hides also errors on nested imports
    except ImportError as err:
        logger.warning(err)
        logger.warning(error_message)
        raise exceptions.TestDefinitionsNotFound(error_message) from err

    return imp


def get_common_definitions(logger, definitions_path=None):
    """Returns common definitions shared by all sequences"""

    return import_by_name(
        'common',
        "No common definitions found at " + str(definitions_path or DEFAULT_DEFINITIONS_PATH),
        logger,
        definitions_path,
    )


def get_test_definitions(sequence_name, logger, definitions_path=None):
    """Returns test definitions"""

    err = "Error loading sequence " + str(sequence_name) + "."

    return import_by_name("sequences." + str(sequence_name), err, logger, definitions_path)


def get_test_cases(sequence_names, logger, definitions_path=None):
    """Returns non-skipped test case names per sequence"""

    test_cases = {}
    for sequence in sequence_names:
        test_definitions = get_test_definitions(sequence, logger, definitions_path)
        test_cases[sequence] = [
            {'name': t} for t in test_definitions.TESTS if t not in test_definitions.SKIP
        ]
    return test_cases
