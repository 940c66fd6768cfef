import logging

from qc_runner import exceptions


class Teardown:
    """Cleanup callbacks run at the end of a suite run, pass or fail.

    Callbacks run in reverse registration order so that the last resource
    set up is the first one released.
    """

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._callbacks = []

    def register(self, callback, name=None):
        name = name or getattr(callback, '__name__', repr(callback))
        self.logger.debug("Register teardown %s", name)
        self._callbacks.append((name, callback))

    def __len__(self):
        return len(self._callbacks)

    def run_all(self):
        failed = []

        while self._callbacks:
            name, callback = self._callbacks.pop()
            self.logger.debug("Running teardown %s", name)
            try:
                callback()
            except Exception:
                self.logger.exception("Teardown %s failed", name)
                failed.append(name)

        if failed:
            raise exceptions.TeardownError(failed)
