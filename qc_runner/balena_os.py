"""balenaOS image component: unpacks and configures the image to be flashed"""
import gzip
import json
import logging
import shutil
import uuid
from pathlib import Path

from qc_runner import exceptions
from qc_runner import image_fs

BOOT_PARTITION = 1
CHUNK_SIZE = 1024 * 1024


class Image:
    def __init__(self, input_path, path):
        self.input = Path(input_path)
        self.path = Path(path)

    def __str__(self):
        return str(self.path)


def wifi_configuration(wireless):
    """Returns NetworkManager connection profile for the wireless settings"""

    if wireless.get('ssid') is None:
        raise exceptions.ImageError(f"Invalid wireless configuration: {wireless}")

    lines = [
        '[connection]',
        'id=balena-wifi',
        'type=wifi',
        '[wifi]',
        'hidden=true',
        'mode=infrastructure',
        f"ssid={wireless['ssid']}",
        '[ipv4]',
        'method=auto',
        '[ipv6]',
        'addr-gen-mode=stable-privacy',
        'method=auto',
    ]

    if wireless.get('psk'):
        lines += [
            '[wifi-security]',
            'auth-alg=open',
            'key-mgmt=wpa-psk',
            f"psk={wireless['psk']}",
        ]

    return '\n'.join(lines)


class BalenaOS:
    """Information on the OS image to be flashed and methods to configure it"""

    def __init__(self, options, logger=None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.device_type = options['device_type']
        self.network = options.get('network', {})
        self.config_json = options.get('config_json', {})

        download_path = Path(options.get('download_path', '.'))
        self.image = Image(options['image'], download_path / f'image-{uuid.uuid4().hex[:8]}')

    def fetch(self):
        """Unpacks the input image to image.path"""

        source = self.image.input
        self.logger.info("Unpacking balenaOS image %s", source)

        if not source.is_file():
            raise exceptions.ImageError(f"Image {source} does not exist")

        self.image.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            if source.suffix == '.gz':
                with gzip.open(source, 'rb') as src, self.image.path.open('wb') as dst:
                    shutil.copyfileobj(src, dst, CHUNK_SIZE)
            else:
                shutil.copyfile(source, self.image.path)
        except (OSError, EOFError) as err:
            raise exceptions.ImageError(f"Cannot unpack {source}: {err}") from err

        self.logger.debug("Image unpacked to %s", self.image.path)

    def configure(self):
        self.logger.info("Configuring balenaOS image: %s", self.image.input)

        if self.config_json:
            image_fs.write_file(
                self.image.path, BOOT_PARTITION, '/config.json', json.dumps(self.config_json)
            )

        wireless = self.network.get('wireless')
        if wireless is not None:
            image_fs.write_file(
                self.image.path,
                BOOT_PARTITION,
                '/system-connections/balena-wifi',
                wifi_configuration(wireless),
            )

    def cleanup(self):
        """Removes the unpacked image"""

        if self.image.path.exists():
            self.logger.debug("Removing %s", self.image.path)
            self.image.path.unlink()
