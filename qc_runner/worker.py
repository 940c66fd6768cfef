"""Client for the testbot worker that powers, flashes and networks the DUT"""
import json
import logging
import socket
import zlib
from pathlib import Path

import requests
from fabric import Connection
from invoke.exceptions import CommandTimedOut, ThreadException, UnexpectedExit
from paramiko.ssh_exception import NoValidConnectionsError, SSHException

from qc_runner import exceptions
from qc_runner import utils

HOST_OS_SSH_PORT = 22222
HOST_OS_USER = 'root'
FLASH_CHUNK_SIZE = 1024 * 1024
JOURNAL_COMMAND = 'journalctl --no-pager --no-hostname -a -b all'


def gzip_chunks(path, chunk_size=FLASH_CHUNK_SIZE):
    """Yields gzip compressed content of file in chunks"""

    compressor = zlib.compressobj(wbits=31)
    with open(path, 'rb') as source:
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            compressed = compressor.compress(chunk)
            if compressed:
                yield compressed
    yield compressor.flush()


class Worker:
    """Methods to interact with the DUT: flashing, power, network and host OS commands"""

    def __init__(
        self,
        device_type,
        logger=None,
        url='http://localhost',
        ssh_key_path=None,
        archive_path='.',
        ssh_tries=30,
        ssh_interval=10,
        timeout=60,
    ):
        self.device_type = device_type
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.url = url.rstrip('/')
        self.ssh_key_path = ssh_key_path
        self.archive_path = Path(archive_path)
        self.ssh_tries = ssh_tries
        self.ssh_interval = ssh_interval
        self.timeout = timeout
        self.session = requests.Session()

    def _post(self, endpoint, **kwargs):
        kwargs.setdefault('timeout', self.timeout)
        try:
            response = self.session.post(self.url + endpoint, **kwargs)
            response.raise_for_status()
        except requests.exceptions.RequestException as err:
            raise exceptions.WorkerError(f"Worker request {endpoint} failed: {err}") from err
        return response

    def network(self, network):
        """Creates network (AP / NAT) for the DUT on the testbot"""
        self.logger.info("Configuring worker network: %s", ', '.join(network) or 'none')
        self._post('/dut/network', json=network)

    def on(self):
        self.logger.info("Powering on DUT")
        self._post('/dut/on')

    def off(self):
        self.logger.info("Powering off DUT")
        self._post('/dut/off')

    def flash(self, image_path):
        self.logger.info("Flashing %s to %s", image_path, self.device_type)

        response = self._post(
            '/dut/flash',
            data=gzip_chunks(image_path),
            headers={'Content-Encoding': 'gzip', 'Content-Type': 'application/octet-stream'},
            stream=True,
            timeout=None,
        )

        with response:
            for line in response.iter_lines(decode_unicode=True):
                if not line:
                    continue
                self.logger.debug("Flash: %s", line)
                try:
                    status = json.loads(line)
                except json.decoder.JSONDecodeError:
                    continue
                if isinstance(status, dict) and status.get('error'):
                    raise exceptions.WorkerError(f"Flashing failed: {status['error']}")

        self.logger.info("Flashing completed")

    def teardown(self):
        self.logger.info("Worker teardown")
        self._post('/teardown')

    def _connect(self, target):
        connect_kwargs = {}
        if self.ssh_key_path:
            connect_kwargs['key_filename'] = str(self.ssh_key_path)

        return Connection(
            target,
            user=HOST_OS_USER,
            port=HOST_OS_SSH_PORT,
            connect_kwargs=connect_kwargs,
            connect_timeout=self.timeout,
        )

    def _run_in_host_os(self, command, target):
        try:
            with self._connect(target) as connection:
                result = connection.run(command, hide=True, warn=True, timeout=self.timeout)
        except CommandTimedOut as err:
            raise exceptions.CommandError(
                command, None, f"Timed out after {err.timeout} seconds"
            ) from err
        except (UnexpectedExit, ThreadException) as err:
            raise exceptions.CommandError(command, None, f"Session died: {type(err).__name__}") from err
        except (NoValidConnectionsError, SSHException, socket.error) as err:
            raise exceptions.CommandError(command, None, str(err)) from err

        if result.return_code != 0:
            raise exceptions.CommandError(command, result.return_code, result.stderr.strip())

        return result.stdout.strip()

    def execute_command_in_host_os(self, command, target, tries=None, interval=None):
        """Runs command on the DUT host OS and returns its stripped output.

        Connection errors and non-zero exit codes are retried.
        """
        self.logger.debug("%s: %s", target, command)

        return utils.retry(
            lambda: self._run_in_host_os(command, target),
            tries or self.ssh_tries,
            self.ssh_interval if interval is None else interval,
            exceptions=(exceptions.CommandError,),
            logger=self.logger,
        )

    def archive_logs(self, title, target):
        """Stores DUT journal to archive path"""

        self.logger.info("Archiving journal of %s", target)
        journal = self.execute_command_in_host_os(JOURNAL_COMMAND, target)

        self.archive_path.mkdir(parents=True, exist_ok=True)
        log_path = self.archive_path / f'{title}-journal.log'
        log_path.write_text(journal)

        return log_path
