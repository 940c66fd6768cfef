"""Initializations and deinitializations"""
import pathlib

from qc_runner import exceptions
from qc_runner import utils
from qc_runner.balena_os import BalenaOS
from qc_runner.test_report_writer import report_directory
from qc_runner.worker import Worker

from common.common_definitions import API_ENDPOINT, link_from_uuid


def boot_up(settings, logger):
    logger.info("Executing initialization")
    logger.info("Testbot worker at %s", settings['worker']['url'])


def configure_network(options):
    """Expands network selection of the suite to worker network configuration.

    Modifies options in place and returns the network configuration.
    """
    network = options['balenaOS']['network']

    if network.get('wired') is True:
        network['wired'] = {
            'nat': True,
        }
    else:
        network.pop('wired', None)

    if network.get('wireless') is True:
        network['wireless'] = {
            'ssid': options['id'],
            'psk': f"{options['id']}_psk",
            'nat': True,
        }
    else:
        network.pop('wireless', None)

    return network


def prepare_test(suite, logger):
    """Provisions the DUT: configures and flashes balenaOS and waits until the DUT is reachable"""

    options = suite.options
    worker_settings = options['worker']

    pathlib.Path(options['tmpdir']).mkdir(parents=True, exist_ok=True)

    # The suite context is shared across all tests
    suite.context.set(
        {
            'utils': utils,
            'ssh_key_path': pathlib.Path.home() / 'id',
            'link': link_from_uuid(options['balenaOS']['config']['uuid']),
        }
    )
    suite.context.set(
        {
            'worker': Worker(
                suite.device_type['slug'],
                suite.get_logger(),
                url=worker_settings['url'],
                ssh_key_path=suite.context['ssh_key_path'],
                archive_path=report_directory() / 'journals',
                ssh_tries=worker_settings['ssh_tries'],
                ssh_interval=worker_settings['ssh_interval'],
                timeout=worker_settings['timeout'],
            ),
        }
    )

    network = configure_network(options)

    context = suite.context.get()
    suite.context.set(
        {
            'os': BalenaOS(
                {
                    'device_type': suite.device_type['slug'],
                    'network': network,
                    'image': options['balenaOS']['image'],
                    'download_path': options['tmpdir'],
                    'config_json': {
                        'uuid': options['balenaOS']['config']['uuid'],
                        'os': {
                            'sshKeys': [context['utils'].create_ssh_key(context['ssh_key_path'])],
                        },
                        'apiEndpoint': API_ENDPOINT,
                        # Read by the supervisor at first boot only
                        'persistentLogging': True,
                        # Allows local pushes of containers to the DUT
                        'localMode': True,
                        'developmentMode': True,
                    },
                },
                suite.get_logger(),
            ),
        }
    )

    worker = context['worker']
    balena_os = context['os']
    link = context['link']

    # Run at the end regardless of pass or fail
    suite.teardown.register(worker.teardown, 'Worker teardown')

    suite.log('Setting up worker')

    worker.network(network)

    suite.teardown.register(balena_os.cleanup, 'Remove OS image')
    balena_os.fetch()
    balena_os.configure()

    # DUT must be off before flashing
    worker.off()
    worker.flash(balena_os.image.path)
    worker.on()

    suite.log('Waiting for device to be reachable')
    hostname = worker.execute_command_in_host_os('cat /etc/hostname', link)
    if hostname != link.split('.')[0]:
        raise exceptions.ProvisioningError(
            f"Device should be reachable: expected hostname {link.split('.')[0]}, got {hostname}"
        )

    # Journal can be fetched only from a reachable device
    suite.teardown.register(
        lambda: worker.archive_logs(suite.id, link), 'Archive DUT journal'
    )


def finalize_test(suite, dut, logger):
    logger.info("Testing ready for %s: %s", dut.serial_number, dut.pass_fail_result)
    suite.teardown.run_all()


def shutdown(logger):
    logger.info("Shutdown")
