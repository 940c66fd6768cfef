import logging
import asyncio
import tornado
import tornado.websocket

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'


class WebsocketStreamHandler(logging.Handler):
    """Writes formatted log records to a websocket from any thread"""

    def __init__(self, websocket):
        super().__init__()
        self.websocket = websocket
        self.loop = websocket.loop

    def emit(self, record):
        message = self.format(record).rstrip()
        if message:
            self.loop.call_soon_threadsafe(self._write, message)

    def _write(self, message):
        try:
            self.websocket.write_message(message)
        except tornado.websocket.WebSocketClosedError:
            pass


class LogsWebSocketHandler(tornado.websocket.WebSocketHandler):
    """
    Note that Tornado uses asyncio. Since we are using threads on our backend
    we need to use call_soon_threadsafe to get messages through.
    """

    def __init__(self, application, request, **kwargs):

        self._root_logger = logging.getLogger()
        self._stream_handler = None
        super().__init__(application, request, **kwargs)
        self.loop = asyncio.get_event_loop()  # pylint: disable=W0201

    def open(self, *args, **kwargs):
        """Called when websocket is opened"""

        self._stream_handler = WebsocketStreamHandler(self)
        self._stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self._stream_handler.setLevel(logging.INFO)

        self._root_logger.addHandler(self._stream_handler)

        self._root_logger.info('Websocket logger connected')

    def on_close(self):
        """Called when websocket is closed"""
        if self._stream_handler is not None:
            self._root_logger.removeHandler(self._stream_handler)

    def on_message(self, message):
        """Called when message comes from client through websocket"""

    def check_origin(self, origin):  # pylint: disable=R0201, W0613
        """Checks whether websocket connection from origin is allowed.

        We will allow all connection which is actually potential safety risk. See:
        https://www.tornadoweb.org/en/stable/websocket.html#tornado.websocket.WebSocketHandler.check_origin
        """
        return True

    def data_received(self, chunk):
        pass
