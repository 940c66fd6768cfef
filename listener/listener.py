"""HTTP listener to enable REST API for controlling the station"""

import time
import shutil
import logging
import json
import os
import asyncio
import tornado.escape
import tornado.web
import tornado.websocket
from listener.logs_web_socket import LogsWebSocketHandler

RESP_CONTENT_TYPE = 'application/json; charset=UTF-8'

# Keys of test control that can be written through the API
WRITABLE_CONTROLS = ('abort', 'single_run', 'report_off')


# disable pylint warning for not overriding 'data_received' from RequestHandler
# pylint: disable=W0223
class QcRequestHandler(tornado.web.RequestHandler):
    """Base class for REST API calls"""

    def initialize(self, test_control, **kwargs):
        """Initialize is called when tornado.web.Application is created"""
        self.logger = logging.getLogger(self.__class__.__name__)  # pylint: disable=W0201
        # Disable tornado access logging by default
        logging.getLogger('tornado.access').disabled = True
        self.test_control = test_control  # pylint: disable=W0201
        self.set_header("Access-Control-Allow-Origin", "*")
        self.set_header("Access-Control-Allow-Headers", "x-requested-with, Content-Type")
        self.set_header('Access-Control-Allow-Methods', 'POST, GET, OPTIONS')

    def json_args(self):
        """Get json args (fields) from request body"""
        try:
            return tornado.escape.json_decode(self.request.body)
        except ValueError as err:
            raise tornado.web.HTTPError(400, "Request body must be JSON") from err

    def json_response(self, resp):
        """Write response and set content type"""
        if resp is not None:
            self.write(resp)
        self.set_header('Content-Type', RESP_CONTENT_TYPE)

    def get(self, *args):
        """Handles get requests by calling handle_get() on child class"""
        self.json_response(self.handle_get(*args))

    def post(self, *args):
        """Handles post requests by calling handle_post() on child class"""
        self.logger.debug("Handling post")
        self.json_response(self.handle_post(self.json_args(), *args))

    def handle_get(self, *args):
        raise tornado.web.HTTPError(405)

    def handle_post(self, json_args, *args):
        raise tornado.web.HTTPError(405)

    def options(self, *args):
        """Handle preflight request"""

        self.set_status(204)
        self.finish()


class TestControlHandler(QcRequestHandler):
    """Handles starting, aborting and terminating of testing"""

    def handle_get(self, *args):
        return json.dumps(
            {
                'running': self.test_control['run'].is_set(),
                'sequence': self.test_control['sequence'],
                **{key: self.test_control[key] for key in WRITABLE_CONTROLS + ('terminate',)},
            }
        )

    def handle_post(self, json_args, *args):  # pylint: disable=W0613
        """Handles post to /api/testcontrol"""

        if not isinstance(json_args, dict):
            raise tornado.web.HTTPError(422, "Request body must be an object")

        if 'sequence' in json_args:
            if json_args['sequence'] not in self.test_control['test_sequences']:
                raise tornado.web.HTTPError(422, "Invalid sequence name")
            self.test_control['sequence'] = json_args['sequence']

        for key, value in json_args.items():
            if key in WRITABLE_CONTROLS:
                self.test_control[key] = bool(value)

        if json_args.get('terminate'):
            self.test_control['terminate'] = True
            # Wake up the runner so that it can exit
            self.test_control['run'].set()
        elif 'run' in json_args:
            if json_args['run']:
                self.logger.info("Start testing requested")
                self.test_control['run'].set()
            else:
                self.test_control['run'].clear()

        return self.handle_get()


class ProgressHandler(QcRequestHandler):
    """Handles calls to /api/progress"""

    def handle_get(self, *args):
        """Returns current progress as json"""

        return json.dumps({'progress': self.test_control['progress']}, default=str)


class ReportPathsHandler(QcRequestHandler):
    """Handles calls to /api/report_paths"""

    def handle_get(self, *args):
        """Returns report paths as json"""

        progress = self.test_control['progress'] or {}
        return json.dumps(progress.get('report_paths', {}), default=str)


class CurrentTestHandler(QcRequestHandler):
    """Handles returning current test case to /api/current_test"""

    def handle_get(self, *args):
        progress = self.test_control['progress'] or {}
        return json.dumps({'step': progress.get('step')}, default=str)


class TestTimeHandler(QcRequestHandler):
    """Handles returning current test time to /api/test_time"""

    def handle_get(self, *args):
        """Returns current test time as json"""

        if self.test_control['start_time_monotonic'] == 0:
            current_time = 0
        elif self.test_control['stop_time_monotonic'] == 0:
            current_time = time.monotonic() - self.test_control['start_time_monotonic']
        else:
            current_time = (
                self.test_control['stop_time_monotonic'] -
                self.test_control['start_time_monotonic']
            )

        return json.dumps(
            {
                'current': f"{current_time:.3f}",
                'end_time': f"{self.test_control['stop_time_timestamp']}",
            }
        )


class MessageWebsocketHandler(tornado.websocket.WebSocketHandler):
    """
    Note that Tornado uses asyncio. Since we are using threads on our backend
    we need to use call_soon_threadsafe to get messages through.
    """

    def initialize(self, message_handlers=None, **kwargs):
        """Initialize is called when tornado.web.Application is created"""

        self.loop = asyncio.get_event_loop()  # pylint: disable=W0201
        self.logger = logging.getLogger("MessageWebsocketHandler")  # pylint: disable=W0201
        self.message_handlers = message_handlers  # pylint: disable=W0201

    def websocket_signal_handler(self, message):
        """Sends application state changes through websocket"""

        def send_a_message(msg):
            try:
                self.write_message(msg)
            except tornado.websocket.WebSocketClosedError:
                pass

        self.loop.call_soon_threadsafe(send_a_message, message)

    def open(self, *args, **kwargs):
        """Called when websocket is opened"""
        if self.message_handlers is not None:
            self.message_handlers.append(self.websocket_signal_handler)

    def on_close(self):
        """Called when websocket is closed"""
        if self.message_handlers is not None and self.websocket_signal_handler in self.message_handlers:
            self.message_handlers.remove(self.websocket_signal_handler)

    def on_message(self, message):
        """Messages from clients are not used"""

    def check_origin(self, origin):  # pylint: disable=R0201, W0613
        """Checks whether websocket connection from origin is allowed.

        We will allow all connection which is actually potential safety risk. See:
        https://www.tornadoweb.org/en/stable/websocket.html#tornado.websocket.WebSocketHandler.check_origin
        """
        return True


class ResultsHandler(QcRequestHandler):
    """Returns results directory as zip file"""

    _filename = ''

    def get(self, *args):
        if not os.path.isdir('results'):
            raise tornado.web.HTTPError(404, "Results files not found")

        self._filename = 'results_' + time.strftime("%Y%m%d-%H%M%S")
        self.set_header('Content-Type', 'application/force-download')
        self.set_header('Content-Disposition', 'attachment; filename=%s' % self._filename + '.zip')
        shutil.make_archive(self._filename, 'zip', 'results/')
        with open(self._filename + '.zip', "rb") as _f:
            while True:
                _buffer = _f.read(4096)
                if not _buffer:
                    break
                self.write(_buffer)
        self.finish()

    def on_finish(self):
        if os.path.exists(self._filename + '.zip'):
            os.remove(self._filename + '.zip')


def make_app(test_control, message_handlers, progress_handlers):
    init = {'test_control': test_control}

    return tornado.web.Application(
        [
            (
                r'/api/websocket/messagequeue',
                MessageWebsocketHandler,
                {'message_handlers': message_handlers},
            ),
            (
                r'/api/websocket/progress',
                MessageWebsocketHandler,
                {'message_handlers': progress_handlers},
            ),
            (r"/api/websocket/log", LogsWebSocketHandler),
            (r"/api/progress", ProgressHandler, init),
            (r"/api/report_paths", ReportPathsHandler, init),
            (r"/api/testcontrol", TestControlHandler, init),
            (r"/api/test_time", TestTimeHandler, init),
            (r"/api/current_test", CurrentTestHandler, init),
            (r"/results", ResultsHandler, init),
        ]
    )


def create_listener(port, test_control, message_handlers, progress_handlers):
    """Setup and create listener"""

    app = make_app(test_control, message_handlers, progress_handlers)
    app.listen(port)
    logging.getLogger('listener').info("Listening on port %s", port)
    return app
