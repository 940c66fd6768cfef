import logging

from qc_runner.context import Context
from qc_runner.teardown import Teardown


class Suite:
    """State of one suite run, handed to the provisioning routine and test cases"""

    def __init__(self, title, options, logger=None):
        self.title = title
        self.options = options
        self.id = options['id']
        self.device_type = options['device_type']
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.context = Context()
        self.teardown = Teardown(self.logger)

    def log(self, message):
        self.logger.info(message)

    def get_logger(self):
        return self.logger
