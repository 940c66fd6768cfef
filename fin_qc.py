#! /usr/bin/python
"""
QC test station for balenaFin boards
"""

import argparse
import sys
import threading
from queue import Queue
import logging
import logging.config
import pathlib

import coloredlogs
import tornado.ioloop
import yaml

from qc_runner import exceptions
from qc_runner import helpers
from qc_runner import runner
from qc_runner import settings as station_settings

PORT = 4321

PARSER = argparse.ArgumentParser(description="balenaFin QC test station.")
PARSER.add_argument("--single_run", "-s", help="Run only once", action="store_true")
PARSER.add_argument("--report_off", "-r", help="Don't create test report", action="store_true")
PARSER.add_argument(
    "--listener",
    "-l",
    help="Creates HTTP listener. Testing is then started through REST API.",
    action="store_true",
)
PARSER.add_argument('-p', '--port', help="Set port to listen", type=int)
PARSER.add_argument(
    "-v",
    "--verbose",
    help="Increase output verbosity. Sets colored console logging to debug level.",
    action="store_true",
)
PARSER.add_argument(
    '--no_colored_logs', '-n', help='Disables colored logs on console.', action="store_true"
)
PARSER.add_argument(
    "--settings",
    help="Station settings file",
    type=pathlib.Path,
    default=pathlib.Path('suite_settings.yaml'),
)
PARSER.add_argument(
    "--definitions",
    help="Directory of test definitions",
    type=pathlib.Path,
    default=pathlib.Path('test_definitions'),
)
PARSER.add_argument("--sequence", help="Test sequence to run. Defaults to the first one.")

ARGS = PARSER.parse_args()


LOG_SETTINGS_FILE = ARGS.definitions / 'common' / 'logging.yaml'


if LOG_SETTINGS_FILE.is_file():
    with LOG_SETTINGS_FILE.open() as _f:
        LOG_CONF = yaml.safe_load(_f.read())
    pathlib.Path(LOG_CONF.pop('log_file_path', 'logs')).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(LOG_CONF)
    logging.info('Logging with configuration from %s', LOG_SETTINGS_FILE)
else:
    logging.basicConfig(level=logging.INFO)
    logging.warning('Cannot find logging settings. Logging with basicConfig.')

if not ARGS.no_colored_logs:
    HANDLERS = logging.getLogger().handlers
    CONSOLE_LOG_LEVEL = list(
        filter(lambda x: x and x.name and x.name.lower() == 'console', HANDLERS)
    )

    CONSOLE_LOG_LEVEL = CONSOLE_LOG_LEVEL[0].level if CONSOLE_LOG_LEVEL else logging.INFO
    if ARGS.verbose:
        CONSOLE_LOG_LEVEL = logging.DEBUG

    coloredlogs.install(level=CONSOLE_LOG_LEVEL, milliseconds=True)
elif ARGS.verbose:
    logging.getLogger().setLevel(logging.DEBUG)

LOGGER = logging.getLogger(__name__)

LOGGER.debug("Logging initialized")

try:
    SETTINGS = station_settings.load_settings(ARGS.settings)
    COMMON_DEFINITIONS = helpers.get_common_definitions(LOGGER, ARGS.definitions)
    CONTROL = runner.get_test_control(COMMON_DEFINITIONS, LOGGER, ARGS.definitions)
except exceptions.QcError as err:
    LOGGER.error(err)
    sys.exit(-1)

if ARGS.sequence:
    if ARGS.sequence not in CONTROL['test_sequences']:
        LOGGER.error("Unknown sequence %s. Available: %s", ARGS.sequence, CONTROL['test_sequences'])
        sys.exit(-1)
    CONTROL['sequence'] = ARGS.sequence

# Without listener there is nobody to start the next run
if ARGS.single_run or not ARGS.listener:
    CONTROL['single_run'] = True

if ARGS.report_off:
    CONTROL['report_off'] = True

if not ARGS.listener:
    CONTROL['run'].set()

MESSAGE_QUEUE = Queue()
PROGRESS_QUEUE = Queue()

RUNNER_THREAD = threading.Thread(
    target=runner.run_test_runner,
    args=(CONTROL, MESSAGE_QUEUE, PROGRESS_QUEUE, SETTINGS),
    name='test_runner_thread',
)
RUNNER_THREAD.daemon = True
RUNNER_THREAD.start()


class MessageHandler:
    def __init__(self, message_queue, message_handler):
        while True:
            msg = message_queue.get()
            for handler in list(message_handler):
                handler(msg)


MESSAGE_HANDLER = [] if ARGS.listener else [print]

MESSAGE_THREAD = threading.Thread(
    target=MessageHandler, args=(MESSAGE_QUEUE, MESSAGE_HANDLER), name='message_thread'
)

# If you want to also print progress, add print handler like this:
# PROGRESS_HANDLER = [print]
PROGRESS_HANDLER = []

PROGRESS_THREAD = threading.Thread(
    target=MessageHandler, args=(PROGRESS_QUEUE, PROGRESS_HANDLER), name='progress_thread'
)

PROGRESS_THREAD.daemon = True
MESSAGE_THREAD.daemon = True

PROGRESS_THREAD.start()
MESSAGE_THREAD.start()

if ARGS.listener:
    from listener import listener

    if ARGS.port:
        PORT = ARGS.port

    listener.create_listener(PORT, CONTROL, MESSAGE_HANDLER, PROGRESS_HANDLER)
    tornado.ioloop.IOLoop.current().start()

RUNNER_THREAD.join()
