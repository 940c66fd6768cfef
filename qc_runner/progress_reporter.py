import json
from threading import Lock


class ProgressReporter:
    def __init__(self, test_control, progess_queue):
        self.test_control = test_control
        self.general_state = None
        self.dut = None
        self.previous_dut = None
        self.step = None
        self.overall_result = None
        self.sequence_name = None
        self.operator_instructions = None
        self.progess_queue = progess_queue
        self.report_paths = {}
        self.lock = Lock()

    def set_progress(self, **kwargs):
        with self.lock:
            # Keep last DUT visible until the next one is being tested
            if 'dut' in kwargs and kwargs['dut'] is None and self.dut is not None:
                self.previous_dut = self.dut.get_dut_dict()
            # Store variable
            self.__dict__.update(kwargs)
            # Send new progress json
            self._report_progress()

    def show_operator_instructions(self, message, append=False):
        if append and self.operator_instructions:
            self.operator_instructions = self.operator_instructions + '\r\n' + message
        else:
            self.operator_instructions = message

        self._report_progress()

    def set_report_paths(self, paths):
        self.report_paths = paths
        self._report_progress()

    def _report_progress(self):

        progress_json = {
            "general_state": self.general_state,
            "step": self.step,
            "dut": self.dut.get_dut_dict() if self.dut is not None else self.previous_dut,
            "sequence_name": self.sequence_name,
            "test_sequences": self.test_control['test_sequences'],
            "test_cases": self.test_control['test_cases'],
        }

        if self.overall_result:
            progress_json['overall_result'] = self.overall_result

        progress_json['operator_instructions'] = self.operator_instructions
        progress_json['report_paths'] = self.report_paths

        self.test_control['progress'] = progress_json
        self.progess_queue.put(json.dumps(progress_json, default=str))
