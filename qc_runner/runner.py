"""Runs the test cases"""
import datetime
import time
import threading
import logging
from qc_runner import progress_reporter
from qc_runner import helpers
from qc_runner import exceptions
from qc_runner import settings as station_settings
from qc_runner.suite import Suite


def get_test_control(common_definitions, logger, definitions_path=None):
    """Returns default test control dictionary"""
    return {
        'single_run': False,
        'terminate': False,
        'abort': False,
        'report_off': False,
        'run': threading.Event(),
        'sequence': None,
        'definitions_path': definitions_path,
        'test_sequences': common_definitions.TEST_SEQUENCES,
        'test_cases': helpers.get_test_cases(
            common_definitions.TEST_SEQUENCES, logger, definitions_path
        ),
        'start_time_monotonic': 0,
        'stop_time_monotonic': 0,
        'stop_time_timestamp': '',
        'progress': None,
    }


def get_error_dict(err):
    """Returns exception as a dictionary that can be written to the report"""

    trace = []
    trace_back = err.__traceback__
    while trace_back is not None:
        trace.append(
            {
                "filename": trace_back.tb_frame.f_code.co_filename,
                "name": trace_back.tb_frame.f_code.co_name,
                "line": trace_back.tb_lineno,
            }
        )
        trace_back = trace_back.tb_next

    return {
        'type': type(err).__name__,
        'message': str(err),
        'trace': trace,
    }


def new_test_instance(test_case_name, test_definitions, progress, dut, suite, common_definitions):
    if not hasattr(test_definitions, test_case_name):
        raise exceptions.TestCaseNotFound("Cannot find specified test case: " + test_case_name)

    return getattr(test_definitions, test_case_name)(
        test_definitions.LIMITS,
        progress,
        dut,
        test_definitions.PARAMETERS,
        suite.context,
        common_definitions,
    )


def run_test_case(test_instance):
    """Runs all steps of one test case. Errors are stored to the DUT results."""

    try:
        test_instance.run_pre_test()
        test_instance.run_test()
        test_instance.run_post_test()
    except Exception as err:
        test_instance.handle_error(error=get_error_dict(err))


def report_dut_result(dut, send_message):
    if dut.pass_fail_result == 'error':
        errors = [
            f"{case_name}: {case['error']}"
            for case_name, case in dut.test_cases.items()
            if case['result'] == 'error' and 'error' in case
        ]
        if dut.provisioning_error:
            errors.insert(0, f"provisioning: {dut.provisioning_error['message']}")

        send_message(f"{dut.serial_number}: ERROR: " + ', '.join(errors))
    elif dut.pass_fail_result == 'pass':
        send_message(f"{dut.serial_number}: PASSED")
    elif dut.pass_fail_result == 'abort':
        send_message(f"{dut.serial_number}: ABORTED")
    else:
        send_message(f"{dut.serial_number}: FAILED: {', '.join(dut.failed_steps)}")


def run_test_runner(test_control, message_queue, progess_queue, settings):
    """Starts the testing"""

    logger = logging.getLogger('test_runner')

    def send_message(message):
        if message:
            message_queue.put(message)

    common_definitions = helpers.get_common_definitions(logger, test_control['definitions_path'])

    progress = progress_reporter.ProgressReporter(test_control, progess_queue)

    progress.set_progress(general_state="Boot")

    # Execute boot_up defined for the station
    common_definitions.boot_up(settings, logger)

    fail_reason_history = []
    fail_reason_count = 0
    pass_count = 0

    progress.set_progress(general_state="Initialized")

    # Start the actual test loop
    while not test_control['terminate']:
        # Wait until you are allowed to run again i.e. pause
        test_control['run'].wait()

        if test_control['terminate']:
            break

        logger.info("Start new test run")

        try:
            test_control['abort'] = False

            sequence_name = test_control['sequence'] or common_definitions.TEST_SEQUENCES[0]

            # Fetch test definitions i.e. import module
            test_definitions = helpers.get_test_definitions(
                sequence_name, logger, test_control['definitions_path']
            )

            # Provisioning modifies the options, keep the settings intact for the next run
            suite = Suite(test_definitions.TITLE, station_settings.run_options(settings))
            dut = common_definitions.parse_dut_info(suite.options)

            progress.set_progress(
                general_state="Prepare",
                dut=dut,
                step=None,
                overall_result=None,
                sequence_name=sequence_name,
            )

            # Remove skipped test_case_names from test list
            test_case_names = [t for t in test_definitions.TESTS if t not in test_definitions.SKIP]

            start_time_epoch = time.time()
            start_time = datetime.datetime.now()
            start_time_monotonic = time.monotonic()
            test_run_id = str(start_time_epoch).replace('.', '_')
            test_control['start_time_monotonic'] = start_time_monotonic
            test_control['stop_time_monotonic'] = 0
            test_control['stop_time_timestamp'] = ''

            results = {
                "sequence": sequence_name,
                "title": suite.title,
                "suite_id": suite.id,
                "tester": common_definitions.get_tester_info(settings),
            }

            try:
                progress.set_progress(general_state="Provisioning")
                common_definitions.prepare_test(suite, logger)

            except Exception as err:
                logger.exception("Provisioning of %s failed", dut.serial_number)
                dut.provisioning_error = get_error_dict(err)
                dut.pass_fail_result = 'error'

            else:
                for test_case_name in test_case_names:
                    if test_control['abort']:
                        send_message("Test aborted")
                        logger.warning("Test aborted")
                        break

                    test_instance = new_test_instance(
                        test_case_name,
                        test_definitions,
                        progress,
                        dut,
                        suite,
                        common_definitions,
                    )

                    progress.set_progress(general_state='testing', step=test_case_name)
                    run_test_case(test_instance)
                    progress.set_progress(general_state='testing', step=None)

                    if test_instance.stop_testing:
                        logger.info("Stop testing after %s", test_case_name)
                        break

            finally:
                # Teardown must run whatever happened above
                progress.set_progress(general_state="Teardown")
                try:
                    common_definitions.finalize_test(suite, dut, logger)
                except exceptions.TeardownError as err:
                    logger.error(str(err))
                    results["teardown_error"] = err.failed

            if test_control['abort']:
                dut.pass_fail_result = 'abort'

            report_dut_result(dut, send_message)

            if dut.pass_fail_result == 'pass':
                pass_count = pass_count + 1
            elif dut.pass_fail_result == 'fail':
                if fail_reason_history == dut.failed_steps:
                    fail_reason_count = fail_reason_count + 1
                else:
                    fail_reason_count = 0
                    fail_reason_history = dut.failed_steps
                pass_count = 0

            if fail_reason_count > 4 and pass_count < 5:
                send_message(f"WARNING: 5 or more consecutive fails on {fail_reason_history}")

            test_control['stop_time_monotonic'] = time.monotonic()
            test_control['stop_time_timestamp'] = datetime.datetime.now().strftime(
                "%Y-%m-%d %H:%M:%S"
            )

            results[dut.serial_number] = dut.get_dut_dict()
            results["start_time"] = start_time
            results["start_time_epoch"] = start_time_epoch
            results["end_time"] = datetime.datetime.now()
            results["test_run_id"] = test_run_id
            results["duration_s"] = round(time.monotonic() - start_time_monotonic, 2)

            progress.set_progress(
                general_state="Create test report",
                overall_result=dut.pass_fail_result,
            )

            if not test_control['report_off']:
                try:
                    common_definitions.create_report(results, dut, progress)
                except Exception as e:
                    progress.set_progress(general_state="Error")
                    send_message("Error while generating a test report")
                    send_message(str(e))
                    logger.exception("Error while generating a test report")

            progress.set_progress(general_state="Done", dut=None)

        except exceptions.QcError as ex:
            logger.error("Error on test sequence: %s", ex)
            send_message(str(ex))
            progress.set_progress(general_state="Error")
        except Exception:
            logger.exception("Error on test sequence")
            progress.set_progress(general_state="Error")

        if test_control['single_run']:
            test_control['terminate'] = True
        else:
            # Wait for the operator to start the next DUT
            test_control['run'].clear()

    progress.set_progress(general_state="Shutdown")

    common_definitions.shutdown(logger)
