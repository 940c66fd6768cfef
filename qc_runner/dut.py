class Dut:
    def __init__(self, serial_number, link=None, device_type=None, additional_info=None):
        self.serial_number = serial_number
        self.link = link
        self.device_type = device_type
        self.additional_info = additional_info
        self.test_cases = {}
        self.pass_fail_result = 'testing'
        self.failed_steps = []
        self.error_steps = []
        self.provisioning_error = None

    def get_dut_dict(self):

        return {
            'serial_number': self.serial_number,
            'link': self.link,
            'device_type': self.device_type,
            'additional_info': self.additional_info,
            'test_cases': self.test_cases,
            'result': self.pass_fail_result,
            'failed_steps': self.failed_steps,
            'error_steps': self.error_steps,
            'provisioning_error': self.provisioning_error,
        }
