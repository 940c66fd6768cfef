"""Station settings loaded from suite_settings.yaml"""
import copy
import logging
import pathlib
import secrets

import yaml

from qc_runner import exceptions

DEFAULT_SETTINGS = {
    'id': None,
    'tmpdir': '/tmp/fin-qc',
    'device_type': {'slug': 'fincm3'},
    'worker': {
        'url': 'http://localhost',
        'ssh_tries': 30,
        'ssh_interval': 10,
        'timeout': 60,
    },
    'balenaOS': {
        'image': None,
        'network': {'wired': True, 'wireless': False},
        'config': {'uuid': None},
    },
}


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_settings(path=None):
    """Returns settings merged over defaults"""
    logger = logging.getLogger('settings')
    settings = copy.deepcopy(DEFAULT_SETTINGS)

    if path is not None:
        path = pathlib.Path(path)
        if not path.is_file():
            raise exceptions.SettingsError(f"Settings file {path} not found")
        with path.open() as _f:
            loaded = yaml.safe_load(_f.read()) or {}
        if not isinstance(loaded, dict):
            raise exceptions.SettingsError(f"Settings file {path} must contain a mapping")
        _merge(settings, loaded)
        logger.info('Settings loaded from %s', path)

    if not settings['balenaOS']['image']:
        raise exceptions.SettingsError("balenaOS.image must point to the OS image to flash")

    return settings


def run_options(settings):
    """Returns a copy of the settings for one DUT.

    Run id and device uuid not given in the settings are generated anew
    for every run.
    """
    options = copy.deepcopy(settings)

    if not options['id']:
        options['id'] = secrets.token_hex(4)

    if not options['balenaOS']['config'].get('uuid'):
        options['balenaOS']['config']['uuid'] = secrets.token_hex(16)

    return options
