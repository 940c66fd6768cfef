"""Helpers shared by the suite and its tests"""
import logging
import time
from pathlib import Path

import paramiko

SSH_KEY_BITS = 2048


def create_ssh_key(key_path):
    """Creates RSA key pair to key_path and key_path.pub.

    An existing private key is reused so that a DUT flashed earlier stays
    reachable. Returns the public key line to be added to config.json.
    """
    logger = logging.getLogger('utils')
    key_path = Path(key_path)
    key_path.parent.mkdir(parents=True, exist_ok=True)

    if key_path.is_file():
        logger.debug("Reusing SSH key %s", key_path)
        key = paramiko.RSAKey.from_private_key_file(str(key_path))
    else:
        logger.info("Creating SSH key %s", key_path)
        key = paramiko.RSAKey.generate(SSH_KEY_BITS)
        key.write_private_key_file(str(key_path))
        key_path.chmod(0o600)

    public_key = f'{key.get_name()} {key.get_base64()}'
    Path(str(key_path) + '.pub').write_text(public_key + '\n')

    return public_key


def retry(func, tries, interval, exceptions=(Exception,), logger=None):
    """Calls func until it returns without raising one of exceptions.

    The last exception is raised if all tries fail.
    """
    logger = logger or logging.getLogger('utils')

    for attempt in range(1, tries + 1):
        try:
            return func()
        except exceptions as err:
            if attempt == tries:
                raise
            logger.debug("Attempt %s/%s failed: %s", attempt, tries, err)
            time.sleep(interval)
